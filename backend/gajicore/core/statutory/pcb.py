"""
PCB (Monthly Tax Deduction) Calculator
Income Tax Act 1967, Income Tax (Deduction from Remuneration) Rules 1994

Residents are taxed progressively on annualised chargeable income:
  Chargeable income       Rate   Tax on lower limit
  0 - 5,000               0%     0
  5,001 - 20,000          1%     0
  20,001 - 35,000         3%     150
  35,001 - 50,000         6%     600
  50,001 - 70,000         11%    1,500
  70,001 - 100,000        19%    3,700
  100,001 - 400,000       25%    9,400
  400,001 - 600,000       26%    84,400
  600,001 - 2,000,000     28%    136,400
  Above 2,000,000         30%    528,400

Reliefs: individual, spouse not working, children under 18, EPF (capped).
Rebate of RM400 (RM800 with a non-working spouse) for chargeable income up to
RM35,000.

Non-residents pay a flat 30% on gross remuneration.

Rounding differs by residency: non-resident PCB rounds to the nearest 5 sen,
resident PCB rounds up to the next 5 sen.
"""

from dataclasses import dataclass, replace
from decimal import Decimal

from gajicore.core.money import (
    ZERO,
    ceil_to_five_sen,
    percent_of,
    round_to_nearest_five_sen,
    to_money,
)
from gajicore.core.rate_tables import BracketLadder, PCBTable, TaxBracket
from gajicore.core.statutory.tax_category import decode_tax_category
from gajicore.core.statutory.types import Nationality, TaxResidency

MONTHS = 12
TAX_FREE_THRESHOLD = Decimal("5000")
REBATE_THRESHOLD = Decimal("35000")
REBATE_INDIVIDUAL = Decimal("400")
REBATE_WITH_SPOUSE = Decimal("800")

ESTIMATED_EPF_RATE_LOCAL = Decimal("0.11")
ESTIMATED_EPF_RATE_FOREIGN = Decimal("0.02")


def _ladder(rows: list[tuple[str | None, str, str]]) -> BracketLadder:
    brackets = []
    lower = ZERO
    for upper, rate, cumulative in rows:
        upper_amount = None if upper is None else Decimal(upper)
        brackets.append(TaxBracket(min=lower, max=upper_amount, rate=Decimal(rate), cumulative_tax=Decimal(cumulative)))
        lower = upper_amount
    return BracketLadder(brackets)


FALLBACK_TAX_BRACKETS = _ladder([
    ("5000", "0", "0"),
    ("20000", "1", "0"),
    ("35000", "3", "150"),
    ("50000", "6", "600"),
    ("70000", "11", "1500"),
    ("100000", "19", "3700"),
    ("400000", "25", "9400"),
    ("600000", "26", "84400"),
    ("2000000", "28", "136400"),
    (None, "30", "528400"),
])

DEFAULT_TABLE = PCBTable()


@dataclass(frozen=True)
class PCBBreakdown:
    tax_resident: bool
    gross_salary: Decimal
    annual_income: Decimal = ZERO
    epf_relief: Decimal = ZERO
    individual_relief: Decimal = ZERO
    spouse_relief: Decimal = ZERO
    children_relief: Decimal = ZERO
    chargeable_income: Decimal = ZERO
    annual_tax: Decimal = ZERO
    rebate: Decimal = ZERO
    monthly_tax: Decimal = ZERO

    @property
    def total_relief(self) -> Decimal:
        return self.epf_relief + self.individual_relief + self.spouse_relief + self.children_relief


class PCBCalculator:
    """
    Monthly tax deduction calculator.
    The EPF employee contribution for the same month feeds the EPF relief, so
    PCB is always computed after EPF.
    """

    def __init__(self, table: PCBTable | None = None):
        self.table = table

    def calculate(
        self,
        gross_salary,
        tax_resident: TaxResidency,
        tax_category: int,
        nationality: Nationality = Nationality.MALAYSIAN,
        epf_contribution: Decimal | None = None,
    ) -> Decimal:
        return self.breakdown(gross_salary, tax_resident, tax_category, nationality, epf_contribution).monthly_tax

    def breakdown(
        self,
        gross_salary,
        tax_resident: TaxResidency,
        tax_category: int,
        nationality: Nationality = Nationality.MALAYSIAN,
        epf_contribution: Decimal | None = None,
    ) -> PCBBreakdown:
        table = self.table or DEFAULT_TABLE
        salary = to_money(gross_salary)
        is_resident = tax_resident != TaxResidency.NO

        if salary <= 0:
            return PCBBreakdown(tax_resident=is_resident, gross_salary=salary)

        if not is_resident:
            monthly = round_to_nearest_five_sen(percent_of(salary, table.non_resident_rate))
            return PCBBreakdown(
                tax_resident=False,
                gross_salary=salary,
                annual_income=salary * MONTHS,
                monthly_tax=self._apply_minimum(monthly, table),
            )

        annual = salary * MONTHS
        epf_relief = self._epf_relief(annual, nationality, epf_contribution, table)

        profile = decode_tax_category(tax_category)
        reliefs = table.reliefs
        individual_relief = reliefs.individual
        spouse_relief = reliefs.spouse_not_working if profile.has_spouse_relief else ZERO
        children_relief = profile.num_children * reliefs.child_under_18

        chargeable = annual - (epf_relief + individual_relief + spouse_relief + children_relief)
        result = PCBBreakdown(
            tax_resident=True,
            gross_salary=salary,
            annual_income=annual,
            epf_relief=epf_relief,
            individual_relief=individual_relief,
            spouse_relief=spouse_relief,
            children_relief=children_relief,
            chargeable_income=chargeable,
        )
        if chargeable <= TAX_FREE_THRESHOLD:
            return result

        tax = self.progressive_tax(chargeable)

        rebate = ZERO
        if chargeable <= REBATE_THRESHOLD:
            rebate = REBATE_WITH_SPOUSE if profile.has_spouse_relief else REBATE_INDIVIDUAL
        tax = max(ZERO, tax - rebate)

        monthly = ceil_to_five_sen(tax / MONTHS)
        return replace(result, annual_tax=tax, rebate=rebate, monthly_tax=self._apply_minimum(monthly, table))

    def progressive_tax(self, chargeable: Decimal) -> Decimal:
        """Annual tax on chargeable income using the table ladder or the fallback ladder."""
        table = self.table or DEFAULT_TABLE
        ladder = table.tax_brackets or FALLBACK_TAX_BRACKETS

        index = ladder.find(chargeable)
        if index is None:
            # Ladder capped below the income: tax the excess at the top rate
            index = len(ladder) - 1
        bracket = ladder[index]
        return bracket.cumulative_tax + percent_of(chargeable - ladder.previous_max(index), bracket.rate)

    @staticmethod
    def _epf_relief(
        annual: Decimal,
        nationality: Nationality,
        epf_contribution: Decimal | None,
        table: PCBTable,
    ) -> Decimal:
        if epf_contribution is not None:
            return min(to_money(epf_contribution) * MONTHS, table.epf_max_relief)

        rate = ESTIMATED_EPF_RATE_FOREIGN if nationality == Nationality.NON_MALAYSIAN else ESTIMATED_EPF_RATE_LOCAL
        return min(annual * rate, table.epf_max_relief)

    @staticmethod
    def _apply_minimum(monthly: Decimal, table: PCBTable) -> Decimal:
        if ZERO < monthly < table.minimum_pcb:
            return ZERO
        return monthly
