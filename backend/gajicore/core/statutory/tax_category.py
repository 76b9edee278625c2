"""
PCB Tax Categories
Integer codes 0-22 describing family composition for monthly tax relief.

  0      Single
  1-11   Spouse not working, 0-10 children
  12-22  Spouse working, 0-10 children
"""

from dataclasses import dataclass

SPOUSE_NOT_WORKING = range(1, 12)
SPOUSE_WORKING = range(12, 23)


@dataclass(frozen=True)
class TaxCategoryProfile:
    has_spouse_relief: bool
    num_children: int


def decode_tax_category(category: int) -> TaxCategoryProfile:
    if category in SPOUSE_NOT_WORKING:
        return TaxCategoryProfile(has_spouse_relief=True, num_children=category - SPOUSE_NOT_WORKING.start)
    if category in SPOUSE_WORKING:
        return TaxCategoryProfile(has_spouse_relief=False, num_children=category - SPOUSE_WORKING.start)
    return TaxCategoryProfile(has_spouse_relief=False, num_children=0)


def _children_label(count: int) -> str:
    if count == 0:
        return "No child"
    return f"{count} child" if count == 1 else f"{count} children"


def describe_tax_category(category: int) -> str:
    """Human-readable label for a tax category, as shown on the payslip form."""
    if category in SPOUSE_NOT_WORKING:
        return f"Spouse not working, {_children_label(category - SPOUSE_NOT_WORKING.start)}"
    if category in SPOUSE_WORKING:
        return f"Spouse working, {_children_label(category - SPOUSE_WORKING.start)}"
    return "Single"


TAX_CATEGORIES: dict[int, str] = {code: describe_tax_category(code) for code in range(0, 23)}
