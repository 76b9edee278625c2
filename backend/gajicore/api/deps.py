"""
Shared API dependencies.
Provides the process-wide rate tables and the calculators built on them.
"""

from functools import lru_cache

from fastapi import Depends

from gajicore.config import get_settings
from gajicore.core.rate_tables import RateTableProvider, RateTables
from gajicore.core.statutory.payroll import PayrollCalculator


@lru_cache()
def get_rate_tables() -> RateTables:
    """
    Load the statutory rate tables once per process.
    Tables are immutable after load and shared by every request.
    """
    settings = get_settings()
    return RateTableProvider(settings.RATE_TABLE_DIR).load()


def get_payroll_calculator(tables: RateTables = Depends(get_rate_tables)) -> PayrollCalculator:
    return PayrollCalculator(tables)
