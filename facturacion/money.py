from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    """Coerce ``value`` to ``Decimal``. Floats go through ``str`` so 0.1 stays 0.1."""
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Expected a numeric value, got {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            raise TypeError(f"Not a numeric string: {value!r}") from None
    raise TypeError(f"Expected a numeric value, got {type(value).__name__}")


def money_round(value: Number) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def apply_percentage(amount: Number, percentage: Number) -> Decimal:
    return money_round(to_decimal(amount) * (to_decimal(percentage) / HUNDRED))


def percentage_of(value: Number, base: Number) -> Decimal:
    base = to_decimal(base)
    if base == 0:
        return ZERO
    return money_round(to_decimal(value) * HUNDRED / base)


def within_tolerance(left: Number, right: Number, tolerance: Number = CENT) -> bool:
    return abs(to_decimal(left) - to_decimal(right)) <= to_decimal(tolerance)
