"""Shared types for the statutory calculation pipeline."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from gajicore.core.money import ZERO


class Nationality(str, Enum):
    MALAYSIAN = "Malaysian"
    NON_MALAYSIAN = "Non-Malaysian"


class TaxResidency(str, Enum):
    YES = "Yes"
    NO = "No"


class SOCSOCategory(str, Enum):
    CATEGORY_1 = "Category 1 (Injury + Invalidity)"
    CATEGORY_2 = "Category 2 (Injury Only)"
    NO_CONTRIBUTION = "No Contribution"

    @classmethod
    def _missing_(cls, value):
        # Older payslip forms send the short labels
        aliases = {"Category 1": cls.CATEGORY_1, "Category 2": cls.CATEGORY_2}
        return aliases.get(value)


class PayslipType(str, Enum):
    EMPLOYEE_SALARY = "Employee Salary"
    DIRECTOR_FEE = "Director Fee"
    INTERN_WAGES = "Intern Wages"


@dataclass(frozen=True)
class EmployeeContext:
    gross_salary: Decimal
    nationality: Nationality = Nationality.MALAYSIAN
    age: int = 0
    tax_resident: TaxResidency = TaxResidency.YES
    tax_category: int = 0
    socso_category: SOCSOCategory = SOCSOCategory.CATEGORY_1
    payslip_type: PayslipType = PayslipType.EMPLOYEE_SALARY


@dataclass(frozen=True)
class EPFContribution:
    employee_rate: Decimal = ZERO
    employee_amount: Decimal = ZERO
    employer_rate: Decimal = ZERO
    employer_amount: Decimal = ZERO


@dataclass(frozen=True)
class Contribution:
    employee: Decimal = ZERO
    employer: Decimal = ZERO


@dataclass(frozen=True)
class StatutoryResult:
    epf: EPFContribution = field(default_factory=EPFContribution)
    socso: Contribution = field(default_factory=Contribution)
    eis: Contribution = field(default_factory=Contribution)
    pcb: Decimal = ZERO
