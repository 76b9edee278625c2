"""
Tests for SOCSO and EIS Calculators.
SOCSO: Category 1 (both legs) / Category 2 (employer only), capped at RM6,000.
EIS: equal employer/employee flat contribution, capped at RM6,000.
"""

from decimal import Decimal

import pytest

from gajicore.core.rate_tables import EISTable, SOCSOTable
from gajicore.core.statutory.eis import EISCalculator
from gajicore.core.statutory.socso import SOCSOCalculator
from gajicore.core.statutory.types import Nationality, SOCSOCategory

CAT_1 = SOCSOCategory.CATEGORY_1
CAT_2 = SOCSOCategory.CATEGORY_2


@pytest.fixture
def socso_calc(rate_tables):
    return SOCSOCalculator(rate_tables.socso)


@pytest.fixture
def eis_calc(rate_tables):
    return EISCalculator(rate_tables.eis)


class TestSOCSO:
    def test_category_1_bracket(self, socso_calc):
        result = socso_calc.calculate(3000, 30, CAT_1)
        assert result.employee == Decimal("14.75")
        assert result.employer == Decimal("51.65")

    def test_category_2_bracket(self, socso_calc):
        result = socso_calc.calculate(3000, 30, CAT_2)
        assert result.employee == 0
        assert result.employer == Decimal("36.90")

    @pytest.mark.parametrize("salary", [6000, 6000.01, 7000, 50_000])
    def test_capped_wage(self, socso_calc, salary):
        result = socso_calc.calculate(salary, 30, CAT_1)
        assert result.employee == Decimal("29.75")
        assert result.employer == Decimal("104.15")

    @pytest.mark.parametrize("salary", [10, 1500, 3000, 5999, 6000, 20_000])
    def test_category_2_never_has_employee_leg(self, socso_calc, salary):
        assert socso_calc.calculate(salary, 30, CAT_2).employee == 0

    def test_age_60_forces_category_2(self, socso_calc):
        result = socso_calc.calculate(3000, 60, CAT_1)
        assert result.employee == 0
        assert result.employer == Decimal("36.90")

    def test_no_contribution(self, socso_calc):
        result = socso_calc.calculate(3000, 30, SOCSOCategory.NO_CONTRIBUTION)
        assert result.employee == 0
        assert result.employer == 0

    def test_no_contribution_stays_for_age_60(self, socso_calc):
        result = socso_calc.calculate(3000, 65, SOCSOCategory.NO_CONTRIBUTION)
        assert result.employer == 0

    @pytest.mark.parametrize("salary", [0, -1])
    def test_non_positive_salary(self, socso_calc, salary):
        result = socso_calc.calculate(salary, 30, CAT_1)
        assert result.employee == 0
        assert result.employer == 0

    def test_fallback_without_table(self):
        calc = SOCSOCalculator(None)
        cat_1 = calc.calculate(1000, 30, CAT_1)
        cat_2 = calc.calculate(1000, 30, CAT_2)
        assert (cat_1.employer, cat_1.employee) == (Decimal("104.15"), Decimal("29.75"))
        assert (cat_2.employer, cat_2.employee) == (Decimal("74.40"), 0)

    def test_fallback_for_missing_category_section(self, rate_documents):
        table = SOCSOTable.from_dict({"category_1": rate_documents["socso"]["category_1"]})
        result = SOCSOCalculator(table).calculate(3000, 30, CAT_2)
        assert result.employer == Decimal("74.40")

    def test_above_max_beyond_brackets(self):
        table = SOCSOTable.from_dict({
            "category_1": {
                "max_wage": 8000,
                "brackets": [{"max": 6000, "employee": 29.75, "employer": 104.15}],
                "above_max": {"employee": 39.75, "employer": 139.15},
            },
        })
        result = SOCSOCalculator(table).calculate(7000, 30, CAT_1)
        assert result.employee == Decimal("39.75")
        assert result.employer == Decimal("139.15")

    def test_no_bracket_and_no_above_max(self):
        table = SOCSOTable.from_dict({"category_1": {"brackets": [{"max": 100, "employee": 1, "employer": 2}]}})
        result = SOCSOCalculator(table).calculate(3000, 30, CAT_1)
        assert result.employer == Decimal("104.15")

    def test_legacy_category_labels(self):
        assert SOCSOCategory("Category 1") is CAT_1
        assert SOCSOCategory("Category 2") is CAT_2


class TestEIS:
    def test_bracket_contribution(self, eis_calc):
        result = eis_calc.calculate(3000, 30, Nationality.MALAYSIAN)
        assert result.employee == Decimal("5.90")
        assert result.employer == Decimal("5.90")

    @pytest.mark.parametrize("salary", [6000.01, 9000, 100_000])
    def test_above_max_wage(self, eis_calc, salary):
        result = eis_calc.calculate(salary, 30, Nationality.MALAYSIAN)
        assert result.employee == Decimal("11.90")
        assert result.employer == Decimal("11.90")

    @pytest.mark.parametrize("nationality", list(Nationality))
    @pytest.mark.parametrize("salary", [100, 3000, 20_000])
    @pytest.mark.parametrize("age", [60, 61, 75])
    def test_age_exemption(self, eis_calc, age, salary, nationality):
        result = eis_calc.calculate(salary, age, nationality)
        assert result.employee == 0
        assert result.employer == 0

    def test_foreign_worker_exempt(self, eis_calc):
        result = eis_calc.calculate(3000, 30, Nationality.NON_MALAYSIAN)
        assert result.employee == 0

    def test_foreign_worker_not_exempt(self, rate_documents):
        table = EISTable.from_dict({**rate_documents["eis"], "foreign_worker_exempt": False})
        result = EISCalculator(table).calculate(3000, 30, Nationality.NON_MALAYSIAN)
        assert result.employee == Decimal("5.90")

    def test_configured_max_age(self, rate_documents):
        table = EISTable.from_dict({**rate_documents["eis"], "max_age": 57})
        assert EISCalculator(table).calculate(3000, 57, Nationality.MALAYSIAN).employee == 0
        assert EISCalculator(table).calculate(3000, 56, Nationality.MALAYSIAN).employee == Decimal("5.90")

    def test_zero_salary(self, eis_calc):
        assert eis_calc.calculate(0, 30).employer == 0

    def test_flat_fallback_without_table(self):
        calc = EISCalculator(None)
        for salary in (100, 3000, 9000):
            result = calc.calculate(salary, 30, Nationality.MALAYSIAN)
            assert result.employee == Decimal("11.90")
            assert result.employer == Decimal("11.90")

    def test_fallback_without_table_still_exempts_foreign_workers(self):
        assert EISCalculator(None).calculate(3000, 30, Nationality.NON_MALAYSIAN).employee == 0
