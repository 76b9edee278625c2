from gajicore.core.statutory.epf import EPFCalculator
from gajicore.core.statutory.socso import SOCSOCalculator
from gajicore.core.statutory.eis import EISCalculator
from gajicore.core.statutory.pcb import PCBCalculator
from gajicore.core.statutory.payroll import PayrollCalculator

__all__ = ["EPFCalculator", "SOCSOCalculator", "EISCalculator", "PCBCalculator", "PayrollCalculator"]
