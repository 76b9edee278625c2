"""
EIS (SIP) Contribution Calculator
Employment Insurance System Act 2017, Second Schedule

Employer and employee pay the same flat bracket amount on wages up to the
insured ceiling. Employees at or above the maximum age, and foreign workers
while the exemption holds, do not contribute.
"""

from gajicore.core.money import to_money
from gajicore.core.rate_tables import EISTable
from gajicore.core.statutory.types import Contribution, Nationality

DEFAULT_TABLE = EISTable()


class EISCalculator:
    def __init__(self, table: EISTable | None = None):
        self.table = table

    def calculate(self, gross_salary, age: int, nationality: Nationality = Nationality.MALAYSIAN) -> Contribution:
        table = self.table or DEFAULT_TABLE
        salary = to_money(gross_salary)

        if nationality == Nationality.NON_MALAYSIAN and table.foreign_worker_exempt:
            return Contribution()
        if age >= table.max_age or salary <= 0:
            return Contribution()

        if table.brackets is None or salary > table.max_wage:
            return Contribution(employee=table.above_max, employer=table.above_max)

        index = table.brackets.find(salary)
        contribution = table.brackets[index].contribution if index is not None else table.above_max
        return Contribution(employee=contribution, employer=contribution)
