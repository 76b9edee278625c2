"""
EPF (KWSP) Contribution Calculator
Employees Provident Fund Act 1991, Third Schedule

Contribution parts:
  - Part A: Malaysians below 60: employee 11%, employer 13% (wages <= RM5,000)
    or 12% (wages above RM5,000)
  - Part E: Malaysians 60 and above: employee 0%, employer 4%
  - Foreign workers: 2% employee + 2% employer (by age band)

Wages up to RM20,000 use the published bracket amounts, which are rounded per
band and must take precedence over rate x salary. Above RM20,000 the part's
flat rates apply and amounts are rounded up to the next ringgit.
"""

from decimal import Decimal

from gajicore.core.money import ZERO, ceil_to, percent_of, round_half_up, to_money
from gajicore.core.rate_tables import EPFPart, EPFTable, FOREIGN_DEFAULT_RATE
from gajicore.core.statutory.types import EPFContribution, Nationality

WAGE_CEILING = Decimal("20000")
LOWER_WAGE_THRESHOLD = Decimal("5000")
FALLBACK_WAGE_STEP = Decimal("20")

EMPLOYEE_RATE = Decimal("11")
EMPLOYER_RATE_LOWER = Decimal("13")
EMPLOYER_RATE_UPPER = Decimal("12")
SENIOR_EMPLOYER_RATE = Decimal("4")
SENIOR_AGE = 60


class EPFCalculator:
    """
    EPF contribution calculator driven by the EPF rate table.
    Without a table no contribution is computed at all.
    """

    def __init__(self, table: EPFTable | None = None):
        self.table = table

    def calculate(self, gross_salary, nationality: Nationality, age: int) -> EPFContribution:
        salary = to_money(gross_salary)
        if salary <= 0 or self.table is None:
            return EPFContribution()

        if nationality == Nationality.NON_MALAYSIAN:
            return self._foreign_worker(salary, age)
        if age >= SENIOR_AGE:
            return self._senior(salary)
        return self._standard(salary)

    def _foreign_worker(self, salary: Decimal, age: int) -> EPFContribution:
        rates = self.table.foreign_worker.rates_for(age) if self.table.foreign_worker else None
        employee_rate = rates.employee_rate if rates else FOREIGN_DEFAULT_RATE
        employer_rate = rates.employer_rate if rates else FOREIGN_DEFAULT_RATE

        return EPFContribution(
            employee_rate=employee_rate,
            employee_amount=round_half_up(percent_of(salary, employee_rate), 0),
            employer_rate=employer_rate,
            employer_amount=round_half_up(percent_of(salary, employer_rate), 0),
        )

    @staticmethod
    def _above_ceiling(salary: Decimal, part: EPFPart) -> EPFContribution:
        rates = part.above_ceiling
        return EPFContribution(
            employee_rate=rates.employee_rate,
            employee_amount=ceil_to(percent_of(salary, rates.employee_rate)),
            employer_rate=rates.employer_rate,
            employer_amount=ceil_to(percent_of(salary, rates.employer_rate)),
        )

    def _senior(self, salary: Decimal) -> EPFContribution:
        part = self.table.part_e
        if part is not None:
            if salary > WAGE_CEILING:
                if part.above_ceiling is not None:
                    return self._above_ceiling(salary, part)
            else:
                index = part.brackets.find(salary)
                if index is not None:
                    return EPFContribution(
                        employee_rate=ZERO,
                        employee_amount=ZERO,
                        employer_rate=SENIOR_EMPLOYER_RATE,
                        employer_amount=part.brackets[index].employer,
                    )

        return EPFContribution(
            employee_rate=ZERO,
            employee_amount=ZERO,
            employer_rate=SENIOR_EMPLOYER_RATE,
            employer_amount=ceil_to(percent_of(salary, SENIOR_EMPLOYER_RATE)),
        )

    def _standard(self, salary: Decimal) -> EPFContribution:
        part = self.table.part_a
        if part is not None:
            if salary > WAGE_CEILING:
                if part.above_ceiling is not None:
                    return self._above_ceiling(salary, part)
            else:
                index = part.brackets.find(salary)
                if index is not None:
                    bracket = part.brackets[index]
                    return EPFContribution(
                        employee_rate=EMPLOYEE_RATE,
                        employee_amount=bracket.employee,
                        employer_rate=EMPLOYER_RATE_LOWER if salary <= LOWER_WAGE_THRESHOLD else EMPLOYER_RATE_UPPER,
                        employer_amount=bracket.employer,
                    )

        return self._standard_formula(salary)

    @staticmethod
    def _standard_formula(salary: Decimal) -> EPFContribution:
        if salary <= LOWER_WAGE_THRESHOLD:
            # Wages are taken at the upper limit of their RM20 band
            upper = ceil_to(salary / FALLBACK_WAGE_STEP) * FALLBACK_WAGE_STEP
            return EPFContribution(
                employee_rate=EMPLOYEE_RATE,
                employee_amount=ceil_to(percent_of(upper, EMPLOYEE_RATE)),
                employer_rate=EMPLOYER_RATE_LOWER,
                employer_amount=ceil_to(percent_of(upper, EMPLOYER_RATE_LOWER)),
            )

        return EPFContribution(
            employee_rate=EMPLOYEE_RATE,
            employee_amount=round_half_up(percent_of(salary, EMPLOYEE_RATE), 2),
            employer_rate=EMPLOYER_RATE_UPPER,
            employer_amount=round_half_up(percent_of(salary, EMPLOYER_RATE_UPPER), 2),
        )
