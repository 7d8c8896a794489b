import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

_MONEY_NOISE = re.compile(r"[৳$€£,\s]")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    # floats go through str() so 0.1 stays 0.1
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Quantize an amount to two decimal places, rounding half up."""
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def sum_money(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def parse_money(value: str) -> Decimal:
    """
    Parse a user-entered amount such as "1,234.56", "$1,234.56" or "৳ 1,234.56".
    """
    return to_money(_MONEY_NOISE.sub("", value))


def percentage_of(part: Decimal, whole: Decimal) -> float:
    if whole == 0:
        return 0.0
    return float(part / whole * 100)
