"""
Pydantic schemas for API request/response validation.
"""

from pydantic import BaseModel, Field

from gajicore.core.statutory.types import (
    Nationality,
    PayslipType,
    SOCSOCategory,
    TaxResidency,
)


# ── Statutory Schemas ──

class StatutoryPreviewRequest(BaseModel):
    gross_salary: float = Field(..., le=10_000_000, description="Monthly gross salary in RM")
    nationality: Nationality = Nationality.MALAYSIAN
    age: int = Field(default=0, ge=0, le=150)
    socso_category: SOCSOCategory = SOCSOCategory.CATEGORY_1
    tax_resident: TaxResidency = TaxResidency.YES
    tax_category: int = Field(default=0, ge=0, le=22, description="0 single, 1-11 spouse not working, 12-22 spouse working")
    payslip_type: PayslipType = PayslipType.EMPLOYEE_SALARY


class EPFResponse(BaseModel):
    employee_rate: float
    employee_amount: float
    employer_rate: float
    employer_amount: float


class ContributionResponse(BaseModel):
    employee: float
    employer: float


class StatutoryPreviewResponse(BaseModel):
    epf: EPFResponse
    socso: ContributionResponse
    eis: ContributionResponse
    pcb: float


class TaxCategoryOption(BaseModel):
    code: int
    label: str
