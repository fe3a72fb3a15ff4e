"""Displayed-space price math.

The displayed price is the canonical price, or its reciprocal when the draft
is inverted. Percent-from-market is always measured in displayed space, so
+10% means "the number on screen is 10% above the market number on screen".
"""
from src.lo_common.numbers import positive_or_none, safe_div


def to_displayed(price: float | None, invert: bool) -> float | None:
    price = positive_or_none(price)
    if price is None:
        return None
    return safe_div(1.0, price) if invert else price


def from_displayed(displayed: float | None, invert: bool) -> float | None:
    # The mapping is its own inverse.
    return to_displayed(displayed, invert)


def percent_from_market(
    limit_price: float | None, market_price: float | None, invert: bool
) -> float | None:
    displayed_limit = to_displayed(limit_price, invert)
    displayed_market = to_displayed(market_price, invert)
    if displayed_limit is None or displayed_market is None:
        return None
    ratio = safe_div(displayed_limit - displayed_market, displayed_market)
    return None if ratio is None else ratio * 100


def price_from_percent(
    market_price: float | None, percent: float | None, invert: bool
) -> float | None:
    """Canonical limit price sitting `percent` away from market in displayed space."""
    displayed_market = to_displayed(market_price, invert)
    if displayed_market is None or percent is None:
        return None
    displayed_limit = positive_or_none(displayed_market * (1 + percent / 100))
    return from_displayed(displayed_limit, invert)


def display_percent(percent: float | None, epsilon: float = 0.01) -> float | None:
    """Percent as shown next to the price; hidden inside ±epsilon."""
    if percent is None or abs(percent) <= epsilon:
        return None
    return percent
