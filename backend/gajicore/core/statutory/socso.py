"""
SOCSO (PERKESO) Contribution Calculator
Employees' Social Security Act 1969, Third Schedule

Categories:
  - Category 1 (Injury + Invalidity): employer and employee contribute
  - Category 2 (Injury Only): employer only; mandatory for employees aged 60+

Contributions are looked up on wages capped at the insured wage ceiling
(RM6,000 from October 2024).
"""

from decimal import Decimal

from gajicore.core.money import ZERO, to_money
from gajicore.core.rate_tables import SOCSOTable
from gajicore.core.statutory.types import Contribution, SOCSOCategory

INJURY_ONLY_AGE = 60

FALLBACK_CONTRIBUTIONS: dict[SOCSOCategory, Contribution] = {
    SOCSOCategory.CATEGORY_1: Contribution(employee=Decimal("29.75"), employer=Decimal("104.15")),
    SOCSOCategory.CATEGORY_2: Contribution(employee=ZERO, employer=Decimal("74.40")),
}


class SOCSOCalculator:
    def __init__(self, table: SOCSOTable | None = None):
        self.table = table

    @staticmethod
    def effective_category(age: int, category: SOCSOCategory) -> SOCSOCategory:
        if category == SOCSOCategory.NO_CONTRIBUTION:
            return category
        if age >= INJURY_ONLY_AGE:
            return SOCSOCategory.CATEGORY_2
        return category

    def calculate(self, gross_salary, age: int, category: SOCSOCategory) -> Contribution:
        salary = to_money(gross_salary)
        category = self.effective_category(age, category)
        if salary <= 0 or category == SOCSOCategory.NO_CONTRIBUTION:
            return Contribution()

        is_category_1 = category == SOCSOCategory.CATEGORY_1
        part = None
        if self.table is not None:
            part = self.table.category_1 if is_category_1 else self.table.category_2
        if part is None:
            return FALLBACK_CONTRIBUTIONS[category]

        capped = min(salary, part.max_wage)
        index = part.brackets.find(capped)
        if index is not None:
            bracket = part.brackets[index]
            return Contribution(
                employee=bracket.employee if is_category_1 else ZERO,
                employer=bracket.employer,
            )

        if part.above_max is not None:
            return Contribution(
                employee=part.above_max.employee if is_category_1 else ZERO,
                employer=part.above_max.employer,
            )

        return FALLBACK_CONTRIBUTIONS[category]
