"""
Money helpers for statutory calculations.

All amounts are Decimal. The rounding helpers mirror the rules used by the
statutory tables:
  - round_half_up: half away from zero (EPF foreign worker amounts)
  - ceil_to: round toward +inf (EPF above-ceiling amounts, EPF fallback)
  - round_to_nearest_five_sen: non-resident PCB
  - ceil_to_five_sen: resident PCB
"""

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TWENTY = Decimal("20")

# Monthly salaries above this are treated as invalid input
MAX_SALARY = Decimal("1000000000")


def to_money(value) -> Decimal:
    """
    Coerce a salary-like input to Decimal.
    Non-numeric, non-finite, negative and implausibly large (above MAX_SALARY)
    values are clamped to zero.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            # str() keeps 3000.1 as 3000.1 instead of its binary expansion
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not amount.is_finite() or amount < 0 or amount > MAX_SALARY:
        return ZERO
    return amount


def _quantum(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)


def _quantize(value: Decimal, places: int, rounding: str) -> Decimal:
    with localcontext() as ctx:
        # quantize fails when the result needs more digits than the context precision
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(_quantum(places), rounding=rounding)


def round_half_up(value: Decimal, places: int = 2) -> Decimal:
    return _quantize(value, places, ROUND_HALF_UP)


def ceil_to(value: Decimal, places: int = 0) -> Decimal:
    return _quantize(value, places, ROUND_CEILING)


def percent_of(amount: Decimal, rate: Decimal) -> Decimal:
    return amount * rate / HUNDRED


def round_to_nearest_five_sen(value: Decimal) -> Decimal:
    units = round_half_up(value * TWENTY, 0)
    return round_half_up(units / TWENTY, 2)


def ceil_to_five_sen(value: Decimal) -> Decimal:
    units = ceil_to(value * TWENTY, 0)
    return round_half_up(units / TWENTY, 2)
