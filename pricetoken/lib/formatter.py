"""
Numeric formatting for price tokens.

Rounds computed prices to a display increment and renders them as whole
dollar USD strings, e.g. ``~$132,500``.
"""

from typing import Final
import math

CURRENCY_SYMBOL: Final[str] = "$"
APPROXIMATE: Final[str] = "~"


def price_round(value: float, increment: float) -> float:
    """Round ``value`` to the nearest multiple of ``increment``.

    Halves round up, toward positive infinity. ``increment`` must be
    positive.

    Args:
        value: Price to round
        increment: Rounding granularity in dollars

    Returns:
        The nearest multiple of increment

    Raises:
        OverflowError: If value is infinite
        ValueError: If value is NaN
    """
    return math.floor(value / increment + 0.5) * increment


def price_format(value: float, prefix: str = APPROXIMATE) -> str:
    """Render ``value`` as whole dollars with grouping, e.g. ``~$30,000``.

    No increment rounding happens here; callers round first. Any fraction
    left over is dropped to whole dollars, half away from zero. Negative
    values read ``-$1,000``.

    Args:
        value: Price in dollars
        prefix: Decoration placed before the currency string

    Returns:
        Formatted currency string

    Raises:
        ValueError: If value is not finite
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite price: {value}")

    dollars: int = math.floor(abs(value) + 0.5)
    sign: str = "-" if value < 0 and dollars else ""
    return f"{prefix}{sign}{CURRENCY_SYMBOL}{dollars:,}"
