"""
Payroll statutory API routes.
Exposes the EPF/SOCSO/EIS/PCB calculators for payslip previews.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from gajicore.api.deps import get_payroll_calculator
from gajicore.core.money import to_money
from gajicore.core.statutory.payroll import PayrollCalculator
from gajicore.core.statutory.tax_category import TAX_CATEGORIES
from gajicore.core.statutory.types import EmployeeContext
from gajicore.schemas.schemas import (
    StatutoryPreviewRequest,
    StatutoryPreviewResponse,
    TaxCategoryOption,
)

router = APIRouter()


@router.post("/statutory/preview", response_model=StatutoryPreviewResponse)
async def preview_statutory(
    data: StatutoryPreviewRequest,
    calculator: PayrollCalculator = Depends(get_payroll_calculator),
):
    """Calculate EPF, SOCSO, EIS and PCB for a single payslip."""
    context = EmployeeContext(
        gross_salary=to_money(data.gross_salary),
        nationality=data.nationality,
        age=data.age,
        tax_resident=data.tax_resident,
        tax_category=data.tax_category,
        socso_category=data.socso_category,
        payslip_type=data.payslip_type,
    )
    result = calculator.calculate(context)
    return asdict(result)


@router.get("/statutory/tax-categories", response_model=list[TaxCategoryOption])
async def list_tax_categories():
    """List PCB tax categories with their payslip labels."""
    return [{"code": code, "label": label} for code, label in TAX_CATEGORIES.items()]
