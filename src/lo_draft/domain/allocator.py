"""MultiTokenAllocator: buy-line management, token selection, bound/unbound pricing.

Bound: lines 1..n follow line 0's percent-from-market, each against its own
token's market price. Unbound: every line keeps its own price override.
"""
from dataclasses import replace

from src.lo_common.enums import EditField
from src.lo_common.errors import (
    BoundLineEditError,
    DuplicateTokenError,
    SwapUnavailableError,
    TokenLimitReachedError,
)
from src.lo_common.numbers import positive_or_none, safe_div
from src.lo_draft.domain.models import BuyLine, LastEdited, OrderDraft
from src.lo_draft.domain.pricing import price_from_percent
from src.lo_draft.domain.synchronizer import (
    check_line_index,
    line_market_price,
    on_price_edited,
    resync,
)
from src.lo_market.domain.models import TokenMetadata, TokenRef
from src.lo_market.domain.pricing import MarketContext
from src.lo_market.domain.registry import TokenRegistry


def _retarget_line(
    draft: OrderDraft, index: int, fallback_percent: float | None, market: MarketContext
) -> BuyLine:
    """Re-price an unbound line after a token change, keeping its percent."""
    line = draft.buy_lines[index]
    percent = line.price_percent if line.price_percent is not None else fallback_percent
    limit = price_from_percent(line_market_price(draft, index, market), percent, draft.invert)
    if limit is None:
        return replace(line, price_percent=None)
    return replace(line, limit_price=limit, price_percent=percent)


def _retarget_primary(draft: OrderDraft, market: MarketContext) -> OrderDraft:
    """Keep the primary percent when the pair's market is known, else keep the price."""
    limit = price_from_percent(line_market_price(draft, 0, market), draft.price_percent, draft.invert)
    if limit is None:
        return draft.evolve(price_percent=None)
    return draft.evolve(limit_price=limit)


def add_buy_line(draft: OrderDraft, market: MarketContext, max_lines: int = 10) -> OrderDraft:
    if len(draft.buy_lines) >= max_lines:
        raise TokenLimitReachedError(max_lines)
    updated = draft.evolve(
        buy_lines=draft.buy_lines + (BuyLine(),),
        last_edited=LastEdited(EditField.TOKEN, len(draft.buy_lines)),
    )
    return resync(updated, market)


def remove_buy_line(draft: OrderDraft, index: int, market: MarketContext) -> OrderDraft:
    """Drop a line; removing line 0 promotes line 1. The last line cannot go."""
    check_line_index(draft, index)
    if len(draft.buy_lines) == 1:
        return draft
    lines = draft.buy_lines[:index] + draft.buy_lines[index + 1:]
    if index == 0:
        promoted = draft.buy_lines[1]
        updated = draft.evolve(
            buy_lines=(replace(promoted, limit_price=None, price_percent=None),) + lines[1:],
            limit_price=promoted.limit_price,
            price_percent=promoted.price_percent,
            last_edited=LastEdited(EditField.TOKEN, 0),
        )
    else:
        updated = draft.evolve(buy_lines=lines, last_edited=LastEdited(EditField.TOKEN, index))
    return resync(updated, market)


def select_buy_token(
    draft: OrderDraft, index: int, token: TokenRef, market: MarketContext
) -> OrderDraft:
    check_line_index(draft, index)
    line = draft.buy_lines[index]
    if line.token is not None and line.token.address == token.address:
        return draft
    others = [t for i, t in enumerate(_line_tokens(draft)) if i != index]
    if token.address in others or (
        draft.sell_token is not None and draft.sell_token.address == token.address
    ):
        raise DuplicateTokenError(token.ticker)

    updated = draft.with_line(index, replace(line, token=token)).evolve(
        last_edited=LastEdited(EditField.TOKEN, index),
    )
    if index == 0:
        updated = _retarget_primary(updated, market)
    elif not updated.bound:
        updated = updated.with_line(
            index, _retarget_line(updated, index, updated.price_percent, market)
        )
    return resync(updated, market)


def select_sell_token(draft: OrderDraft, token: TokenRef, market: MarketContext) -> OrderDraft:
    if draft.sell_token is not None and draft.sell_token.address == token.address:
        return draft
    if token.address in _line_tokens(draft):
        raise DuplicateTokenError(token.ticker)

    updated = draft.evolve(sell_token=token, last_edited=LastEdited(EditField.TOKEN, 0))
    updated = _retarget_primary(updated, market)
    if not updated.bound:
        for i in range(1, len(updated.buy_lines)):
            updated = updated.with_line(i, _retarget_line(updated, i, updated.price_percent, market))
    return resync(updated, market)


def _line_tokens(draft: OrderDraft) -> list[str | None]:
    return [line.token.address if line.token else None for line in draft.buy_lines]


def selectable_tokens(
    draft: OrderDraft, registry: TokenRegistry, query: str = ""
) -> list[TokenMetadata]:
    """Tokens offered by the picker: unused tokens matching `query` by ticker or name."""
    used = set(draft.used_addresses())
    return [meta for meta in registry.search(query) if meta.address not in used]


def set_bound(draft: OrderDraft, bound: bool, market: MarketContext) -> OrderDraft:
    """Unbinding freezes the current line prices as overrides; binding re-derives them."""
    if draft.bound == bound:
        return draft
    return resync(draft.evolve(bound=bound), market)


def on_line_price_edited(
    draft: OrderDraft, index: int, price: float | None, market: MarketContext
) -> OrderDraft:
    check_line_index(draft, index)
    if index == 0:
        return on_price_edited(draft, price, market)
    if draft.bound:
        raise BoundLineEditError(index)
    line = draft.buy_lines[index]
    tag = LastEdited(EditField.LINE_PRICE, index)
    canonical = positive_or_none(price)
    if canonical is None:
        return draft.with_line(index, replace(line, limit_price=None, price_percent=None)).evolve(
            last_edited=tag,
        )
    updated = draft.with_line(index, replace(line, limit_price=canonical)).evolve(last_edited=tag)
    return resync(updated, market)


def swap_sides(draft: OrderDraft, market: MarketContext) -> OrderDraft:
    """Exchange sell and the single buy token; the canonical price flips to its reciprocal."""
    if len(draft.buy_lines) != 1 or draft.sell_token is None or draft.primary.token is None:
        raise SwapUnavailableError()
    primary = draft.primary
    limit = positive_or_none(draft.limit_price)
    updated = draft.evolve(
        sell_token=primary.token,
        sell_amount=primary.amount,
        buy_lines=(BuyLine(token=draft.sell_token, amount=draft.sell_amount),),
        limit_price=safe_div(1.0, limit) if limit is not None else None,
        last_edited=LastEdited(EditField.TOKEN, 0),
    )
    return resync(updated, market)
