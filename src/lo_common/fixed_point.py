"""Fixed-point conversions matching the order contract's conventions.

Token amounts are integers scaled by 10**decimals.
Fill / redeem ratios are integers scaled by 10**18 (10**18 == 100%).
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation

ONE_E18 = 10**18


def to_raw_amount(amount: float | str | Decimal, decimals: int) -> int:
    """Scale a human amount to the contract integer, truncating (never rounding up).

    Floats go through repr() so 0.1 scales as typed, not as its binary expansion.
    Non-finite or negative input scales to 0.
    """
    if isinstance(amount, float):
        amount = repr(amount)
    try:
        value = Decimal(amount)
    except InvalidOperation:
        return 0
    if not value.is_finite() or value <= 0:
        return 0
    scaled = value.scaleb(decimals).quantize(Decimal(1), rounding=ROUND_DOWN)
    return int(scaled)


def from_raw_amount(raw: int, decimals: int) -> float:
    """Convert a contract integer back to a human amount."""
    if raw == 0:
        return 0.0
    return float(Decimal(raw).scaleb(-decimals))


def format_raw_amount(raw: int, decimals: int) -> str:
    """Render a contract integer without trailing zeros: 150000000, 8 -> '1.5'."""
    digits = str(raw)
    if decimals == 0:
        return digits
    if len(digits) <= decimals:
        fraction = digits.rjust(decimals, "0").rstrip("0")
        return f"0.{fraction}" if fraction else "0"
    whole, fraction = digits[:-decimals], digits[-decimals:].rstrip("0")
    return f"{whole}.{fraction}" if fraction else whole


def clamp_fraction(scaled: int) -> int:
    """Clamp a 1e18-scaled fraction into [0, 1e18]."""
    return max(0, min(ONE_E18, scaled))


def scale_by_fraction(raw: int, scaled_fraction: int) -> int:
    """raw * fraction with the fraction given in 1e18 units, floor division."""
    return (raw * clamp_fraction(scaled_fraction)) // ONE_E18
