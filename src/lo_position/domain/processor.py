"""PositionSetProcessor: filtering, sorting and bucket counts over order collections.

Filter cascade: ownership -> status -> token category -> ticker search.
Sorting is stable and deterministic: ties break on order_id, and rows whose
sort value cannot be resolved go last whichever the direction.
"""
from collections import Counter
from collections.abc import Callable, Iterable
from typing import Any

from src.lo_common.enums import (
    CategoryFilter,
    EffectiveStatus,
    OwnershipFilter,
    SortDirection,
    SortField,
    StatusFilter,
    TokenCategory,
)
from src.lo_market.domain.pricing import MarketContext
from src.lo_market.domain.registry import TokenRegistry, display_ticker
from src.lo_position.domain.evaluator import (
    asking_usd_value,
    effective_status,
    fill_percent,
    limit_vs_market_percent,
    sell_usd_value,
)
from src.lo_position.domain.models import OnChainOrder, PositionFilter


def _same_owner(order: OnChainOrder, viewer: str) -> bool:
    return order.owner.lower() == viewer.lower()


def _matches_ownership(order: OnChainOrder, ownership: OwnershipFilter, viewer: str | None) -> bool:
    if ownership == OwnershipFilter.ALL:
        return True
    if viewer is None:
        # No wallet: nothing is "mine", everything is "not mine".
        return ownership == OwnershipFilter.NON_MINE
    mine = _same_owner(order, viewer)
    return mine if ownership == OwnershipFilter.MINE else not mine


def _order_addresses(order: OnChainOrder, registry: TokenRegistry) -> list[str]:
    addresses = [order.sell_token]
    for index in order.buy_token_indices:
        address = registry.address_at(index)
        if address is not None:
            addresses.append(address)
    return addresses


def order_category(order: OnChainOrder, registry: TokenRegistry) -> TokenCategory:
    if any(registry.category_of(a) == TokenCategory.MAXI for a in _order_addresses(order, registry)):
        return TokenCategory.MAXI
    return TokenCategory.NON_MAXI


def _matches_category(order: OnChainOrder, category: CategoryFilter, registry: TokenRegistry) -> bool:
    if category == CategoryFilter.ALL:
        return True
    return order_category(order, registry).value == category.value


def _matches_search(order: OnChainOrder, search: str, registry: TokenRegistry) -> bool:
    needle = search.strip().casefold()
    if not needle:
        return True
    for address in _order_addresses(order, registry):
        ticker = registry.ticker_of(address)
        if needle in ticker.casefold() or needle in display_ticker(ticker).casefold():
            return True
    return False


def _prefiltered(
    orders: Iterable[OnChainOrder],
    criteria: PositionFilter,
    viewer: str | None,
    registry: TokenRegistry,
) -> list[OnChainOrder]:
    return [
        o for o in orders
        if _matches_ownership(o, criteria.ownership, viewer)
        and _matches_category(o, criteria.category, registry)
    ]


def filter_orders(
    orders: Iterable[OnChainOrder],
    criteria: PositionFilter,
    *,
    viewer: str | None,
    now: int,
    registry: TokenRegistry,
) -> list[OnChainOrder]:
    result = []
    for order in orders:
        if not _matches_ownership(order, criteria.ownership, viewer):
            continue
        if criteria.status != StatusFilter.ALL and (
            effective_status(order, now).value != criteria.status.value
        ):
            continue
        if not _matches_category(order, criteria.category, registry):
            continue
        if not _matches_search(order, criteria.search, registry):
            continue
        result.append(order)
    return result


def _sort_value(field: SortField, market: MarketContext) -> Callable[[OnChainOrder], Any]:
    extractors: dict[SortField, Callable[[OnChainOrder], Any]] = {
        SortField.SELL_USD: lambda o: sell_usd_value(o, market),
        SortField.ASKING_FOR: lambda o: asking_usd_value(o, market),
        SortField.PROGRESS: fill_percent,
        SortField.OWNER: lambda o: o.owner.casefold(),
        SortField.STATUS: lambda o: int(o.status),
        SortField.EXPIRATION: lambda o: o.expiration_time,
        SortField.LIMIT_VS_MARKET: lambda o: limit_vs_market_percent(o, market),
    }
    return extractors[field]


def sort_orders(
    orders: Iterable[OnChainOrder],
    field: SortField,
    direction: SortDirection,
    *,
    market: MarketContext,
) -> list[OnChainOrder]:
    value_of = _sort_value(field, market)
    resolved: list[tuple[Any, int, OnChainOrder]] = []
    unresolved: list[OnChainOrder] = []
    for order in orders:
        value = value_of(order)
        if value is None:
            unresolved.append(order)
        else:
            resolved.append((value, order.order_id, order))
    resolved.sort(key=lambda row: (row[0], row[1]), reverse=direction == SortDirection.DESC)
    unresolved.sort(key=lambda o: o.order_id)
    return [row[2] for row in resolved] + unresolved


def bucket_counts(
    orders: Iterable[OnChainOrder],
    criteria: PositionFilter,
    *,
    viewer: str | None,
    now: int,
    registry: TokenRegistry,
) -> dict[str, int]:
    """Per-status tab counts under the ownership and category filters; search is ignored."""
    candidates = _prefiltered(orders, criteria, viewer, registry)
    counts = Counter(effective_status(o, now).value for o in candidates)
    result = {status.value: counts.get(status.value, 0) for status in EffectiveStatus}
    result[StatusFilter.ALL.value] = len(candidates)
    return result


def expired_order_ids(orders: Iterable[OnChainOrder], viewer: str | None, now: int) -> list[int]:
    """The viewer's expired orders, ascending, for batch cancellation."""
    if viewer is None:
        return []
    return sorted(
        o.order_id for o in orders
        if _same_owner(o, viewer) and effective_status(o, now) == EffectiveStatus.EXPIRED
    )
