"""Money and percentage primitives

All monetary values are exact decimals. Percentages shown on dashboards are
computed as ``round(numerator / denominator, 4) * 100`` using half-up rounding.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")
RATIO_PLACES = Decimal("0.0001")


def to_decimal(value: Optional[Number]) -> Decimal:
    """Convert a raw value to Decimal; None becomes zero.

    Floats go through ``str`` so that 0.1 stays 0.1 instead of its binary
    expansion.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(value: Optional[Number]) -> Decimal:
    """Round to 2 decimal places, half-up"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage(numerator: Optional[Number], denominator: Optional[Number]) -> Decimal:
    """
    Ratio of numerator to denominator expressed as a percentage

    The ratio is rounded to 4 fractional digits (half-up) before scaling, so
    350000 / 400000 gives Decimal("87.5000").

    A zero or missing denominator yields 0 rather than an error.
    """
    denominator = to_decimal(denominator)
    if denominator <= ZERO:
        return ZERO
    ratio = (to_decimal(numerator) / denominator).quantize(RATIO_PLACES, rounding=ROUND_HALF_UP)
    return ratio * HUNDRED
