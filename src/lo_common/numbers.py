"""Guarded float arithmetic and display helpers.

Every division in the draft and position code goes through safe_div so a zero
or missing price turns into None instead of NaN / Infinity.
"""

import math
import re

_NON_NUMERIC = re.compile(r"[^0-9.]")


def finite_or_none(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


def safe_div(numerator: float | None, denominator: float | None) -> float | None:
    """numerator / denominator, or None for a zero, missing or non-finite operand."""
    if numerator is None or denominator is None or denominator == 0:
        return None
    return finite_or_none(numerator / denominator)


def positive_or_none(value: float | None) -> float | None:
    value = finite_or_none(value)
    if value is None or value <= 0:
        return None
    return value


def to_significant(value: float | None, figures: int = 4) -> float | None:
    """Round to a number of significant figures: 1234.567 -> 1235.0, 0.00012345 -> 0.0001235."""
    value = finite_or_none(value)
    if value is None:
        return None
    if value == 0:
        return 0.0
    return float(f"{value:.{figures}g}")


def parse_amount(text: str | float | int | None) -> float:
    """Parse user-typed amount text: commas and stray characters dropped, extra dots collapsed.

    '1,234.5' -> 1234.5, '1.2.3' -> 1.23, '' -> 0.0
    """
    if text is None:
        return 0.0
    if isinstance(text, (int, float)):
        return max(0.0, finite_or_none(float(text)) or 0.0)
    cleaned = _NON_NUMERIC.sub("", text)
    head, dot, tail = cleaned.partition(".")
    cleaned = head + dot + tail.replace(".", "")
    if cleaned in ("", "."):
        return 0.0
    return float(cleaned)


def format_percentage(percentage: float) -> str:
    """Whole numbers without decimals, everything else to one decimal: 60 -> '60%', 12.34 -> '12.3%'."""
    if percentage == int(percentage):
        return f"{int(percentage)}%"
    return f"{percentage:.1f}%"
