"""OrderLifecycleEvaluator: derived state of a submitted order.

Pure function of (OnChainOrder, MarketContext, now); nothing here is stored.
EXPIRED is never an on-chain status: it is ACTIVE past its expiration time,
recomputed on every read.
"""
from src.lo_common.enums import EffectiveStatus, OnChainStatus
from src.lo_common.fixed_point import ONE_E18, clamp_fraction, from_raw_amount, scale_by_fraction
from src.lo_common.numbers import safe_div
from src.lo_market.domain.pricing import MarketContext
from src.lo_position.domain.models import DerivedOrderView, OnChainOrder

_FINAL_STATUS = {
    OnChainStatus.CANCELLED: EffectiveStatus.CANCELLED,
    OnChainStatus.COMPLETED: EffectiveStatus.COMPLETED,
}


def effective_status(order: OnChainOrder, now: int) -> EffectiveStatus:
    if order.status in _FINAL_STATUS:
        return _FINAL_STATUS[order.status]
    if order.expiration_time < now:
        return EffectiveStatus.EXPIRED
    return EffectiveStatus.ACTIVE


def remaining_fraction(order: OnChainOrder) -> int:
    """Unfilled share of the order, 1e18-scaled."""
    if order.remaining_fill_percentage is not None:
        return clamp_fraction(order.remaining_fill_percentage)
    if order.original_sell_amount <= 0:
        return 0
    return clamp_fraction(order.remaining_sell_amount * ONE_E18 // order.original_sell_amount)


def fill_percent(order: OnChainOrder) -> float:
    filled = (ONE_E18 - remaining_fraction(order)) * 100 / ONE_E18
    return min(100.0, max(0.0, filled))


def proceeds_available(order: OnChainOrder) -> bool:
    """Filled sell amount not yet redeemed by the owner."""
    filled = order.original_sell_amount - order.remaining_sell_amount
    return filled > order.redeemed_sell_amount


def basis_amounts(order: OnChainOrder) -> tuple[int, list[int]]:
    """(sell, buys) the order currently stands for: remaining while open, original once final."""
    if order.is_final:
        return order.original_sell_amount, list(order.buy_amounts)
    fraction = remaining_fraction(order)
    return order.remaining_sell_amount, [scale_by_fraction(a, fraction) for a in order.buy_amounts]


def buy_address(order: OnChainOrder, market: MarketContext, position: int = 0) -> str | None:
    if position >= len(order.buy_token_indices):
        return None
    return market.registry.address_at(order.buy_token_indices[position])


def sell_usd_value(order: OnChainOrder, market: MarketContext) -> float | None:
    sell_raw, _ = basis_amounts(order)
    amount = from_raw_amount(sell_raw, market.registry.decimals_of(order.sell_token))
    if amount <= 0:
        return None
    return market.usd_value(order.sell_token, amount)


def asking_usd_value(order: OnChainOrder, market: MarketContext) -> float | None:
    """USD value of every ask; None when no ask can be priced."""
    _, buys = basis_amounts(order)
    total = None
    for position, raw in enumerate(buys):
        address = buy_address(order, market, position)
        if address is None:
            continue
        value = market.usd_value(address, from_raw_amount(raw, market.registry.decimals_of(address)))
        if value is not None:
            total = (total or 0.0) + value
    return total


def limit_vs_market_percent(order: OnChainOrder, market: MarketContext) -> float | None:
    """How far the order's implied USD price for its primary buy token sits from market."""
    address = buy_address(order, market)
    if address is None or not order.buy_amounts:
        return None
    _, buys = basis_amounts(order)
    buy_amount = from_raw_amount(buys[0], market.registry.decimals_of(address))
    implied = safe_div(sell_usd_value(order, market), buy_amount)
    live = market.usd_price(address)
    if implied is None or live is None:
        return None
    ratio = safe_div(implied - live, live)
    return None if ratio is None else ratio * 100


def evaluate(order: OnChainOrder, market: MarketContext, now: int) -> DerivedOrderView:
    return DerivedOrderView(
        order_id=order.order_id,
        effective_status=effective_status(order, now),
        fill_percent=fill_percent(order),
        proceeds_available=proceeds_available(order),
        limit_vs_market_percent=limit_vs_market_percent(order, market),
    )
