"""
Payroll Statutory Calculator
Combines EPF, SOCSO, EIS and PCB for one payslip.

Payslip types:
  - Employee Salary: all four contributions; PCB uses the EPF employee amount
    as the EPF relief input
  - Director Fee: PCB only, with no EPF relief
  - Intern Wages: no statutory deductions
"""

import logging

from gajicore.core.money import ZERO
from gajicore.core.rate_tables import RateTables
from gajicore.core.statutory.eis import EISCalculator
from gajicore.core.statutory.epf import EPFCalculator
from gajicore.core.statutory.pcb import PCBCalculator
from gajicore.core.statutory.socso import SOCSOCalculator
from gajicore.core.statutory.types import EmployeeContext, PayslipType, StatutoryResult

logger = logging.getLogger(__name__)


class PayrollCalculator:
    """
    Runs the statutory calculators for a payslip.
    All calculators share one immutable set of rate tables.
    """

    def __init__(self, tables: RateTables | None = None):
        self.tables = tables or RateTables.empty()
        self.epf_calc = EPFCalculator(self.tables.epf)
        self.socso_calc = SOCSOCalculator(self.tables.socso)
        self.eis_calc = EISCalculator(self.tables.eis)
        self.pcb_calc = PCBCalculator(self.tables.pcb)

    def calculate(self, context: EmployeeContext) -> StatutoryResult:
        logger.debug("Calculating statutory deductions for %s payslip", context.payslip_type.value)

        if context.payslip_type == PayslipType.INTERN_WAGES:
            return StatutoryResult()

        if context.payslip_type == PayslipType.DIRECTOR_FEE:
            pcb = self.pcb_calc.calculate(
                context.gross_salary,
                context.tax_resident,
                context.tax_category,
                context.nationality,
                epf_contribution=ZERO,
            )
            return StatutoryResult(pcb=pcb)

        epf = self.epf_calc.calculate(context.gross_salary, context.nationality, context.age)
        socso = self.socso_calc.calculate(context.gross_salary, context.age, context.socso_category)
        eis = self.eis_calc.calculate(context.gross_salary, context.age, context.nationality)
        pcb = self.pcb_calc.calculate(
            context.gross_salary,
            context.tax_resident,
            context.tax_category,
            context.nationality,
            epf_contribution=epf.employee_amount,
        )

        return StatutoryResult(epf=epf, socso=socso, eis=eis, pcb=pcb)
