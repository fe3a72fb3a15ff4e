"""AmountSynchronizer: keeps sell amount, buy amounts and limit prices consistent.

Invariant after every call: buy_lines[0].amount == sell_amount * limit_price
whenever a limit price exists. The draft's LastEdited tag decides the
direction of derivation: a BUY edit on line 0 derives the sell amount, every
other edit derives the buy amounts from the sell amount.
"""
from dataclasses import replace

from src.lo_common.enums import EditField, PresetDirection
from src.lo_common.errors import BuyLineNotFoundError, BoundLineEditError, DataUnavailableError
from src.lo_common.numbers import parse_amount, positive_or_none, safe_div
from src.lo_draft.domain.models import BuyLine, LastEdited, OrderDraft
from src.lo_draft.domain.pricing import from_displayed, percent_from_market, price_from_percent
from src.lo_market.domain.pricing import MarketContext


def line_market_price(draft: OrderDraft, index: int, market: MarketContext) -> float | None:
    """Canonical market price of buy line `index` against the sell token."""
    token = draft.buy_lines[index].token
    if draft.sell_token is None or token is None:
        return None
    return market.market_price(draft.sell_token.address, token.address)


def missing_price_address(draft: OrderDraft, market: MarketContext) -> str | None:
    """First token of the primary pair without a usable USD price."""
    for token in (draft.sell_token, draft.primary.token):
        if token is not None and market.usd_price(token.address) is None:
            return token.address
    return None


def check_line_index(draft: OrderDraft, index: int) -> None:
    if not 0 <= index < len(draft.buy_lines):
        raise BuyLineNotFoundError(index)


def _resync_line(
    draft: OrderDraft,
    index: int,
    sell_amount: float,
    primary_percent: float | None,
    market: MarketContext,
) -> BuyLine:
    line = draft.buy_lines[index]
    market_i = line_market_price(draft, index, market)
    if draft.bound:
        limit_i = price_from_percent(market_i, primary_percent, draft.invert)
        if limit_i is None:
            return replace(line, amount=0.0, limit_price=None, price_percent=None)
        return replace(
            line,
            amount=sell_amount * limit_i,
            limit_price=limit_i,
            price_percent=primary_percent,
        )

    limit_i = positive_or_none(line.limit_price)
    if limit_i is None:
        return replace(line, limit_price=None, price_percent=None)
    typed = draft.last_edited is not None and draft.last_edited.is_(EditField.BUY, index)
    return replace(
        line,
        amount=line.amount if typed else sell_amount * limit_i,
        limit_price=limit_i,
        price_percent=percent_from_market(limit_i, market_i, draft.invert),
    )


def resync(draft: OrderDraft, market: MarketContext, *, keep_percent: bool = False) -> OrderDraft:
    """Re-derive every dependent field from the draft's inputs and the market."""
    limit = positive_or_none(draft.limit_price)
    sell = draft.sell_amount
    buy0 = draft.primary.amount
    if limit is not None:
        if draft.last_edited is not None and draft.last_edited.is_(EditField.BUY, 0):
            sell = safe_div(buy0, limit) or 0.0
        else:
            buy0 = sell * limit

    if keep_percent:
        percent = draft.price_percent
    else:
        percent = percent_from_market(limit, line_market_price(draft, 0, market), draft.invert)

    lines = [replace(draft.primary, amount=buy0, limit_price=None, price_percent=None)]
    lines.extend(
        _resync_line(draft, i, sell, percent, market)
        for i in range(1, len(draft.buy_lines))
    )
    return draft.evolve(
        sell_amount=sell,
        limit_price=limit,
        price_percent=percent,
        buy_lines=tuple(lines),
    )


def on_sell_amount_edited(
    draft: OrderDraft, amount: float | str, market: MarketContext
) -> OrderDraft:
    amount = parse_amount(amount)
    limit = draft.limit_price
    if positive_or_none(limit) is None and amount > 0 and draft.primary.amount > 0:
        limit = draft.primary.amount / amount
    updated = draft.evolve(
        sell_amount=amount,
        limit_price=limit,
        last_edited=LastEdited(EditField.SELL),
    )
    return resync(updated, market)


def on_buy_amount_edited(
    draft: OrderDraft, index: int, amount: float | str, market: MarketContext
) -> OrderDraft:
    check_line_index(draft, index)
    amount = parse_amount(amount)
    line = draft.buy_lines[index]

    if index == 0:
        limit = draft.limit_price
        if positive_or_none(limit) is None and amount > 0 and draft.sell_amount > 0:
            limit = amount / draft.sell_amount
        updated = draft.with_line(0, replace(line, amount=amount)).evolve(
            limit_price=limit,
            last_edited=LastEdited(EditField.BUY, 0),
        )
        return resync(updated, market)

    if draft.bound:
        raise BoundLineEditError(index)
    limit_i = line.limit_price
    if draft.sell_amount > 0:
        limit_i = positive_or_none(safe_div(amount, draft.sell_amount))
    updated = draft.with_line(index, replace(line, amount=amount, limit_price=limit_i)).evolve(
        last_edited=LastEdited(EditField.BUY, index),
    )
    return resync(updated, market)


def on_price_edited(
    draft: OrderDraft, price: float | None, market: MarketContext, *, displayed: bool = False
) -> OrderDraft:
    """Set the primary limit price. `displayed=True` takes the on-screen number.

    An unusable price clears the primary price and percent; the typed amounts
    stay, bound lines lose their price with it.
    """
    canonical = from_displayed(price, draft.invert) if displayed else positive_or_none(price)
    tag = LastEdited(EditField.PRICE)
    return resync(draft.evolve(limit_price=canonical, price_percent=None, last_edited=tag), market)


def on_percent_preset(
    draft: OrderDraft,
    percent: float,
    direction: PresetDirection,
    market: MarketContext,
) -> OrderDraft:
    """Place the limit `percent` above or below market (displayed space)."""
    market0 = line_market_price(draft, 0, market)
    if market0 is None:
        raise DataUnavailableError(missing_price_address(draft, market) or "unselected")
    signed = abs(percent) if direction == PresetDirection.ABOVE else -abs(percent)
    limit = price_from_percent(market0, signed, draft.invert)
    if limit is None:
        return draft
    updated = draft.evolve(
        sell_amount=draft.sell_amount if draft.sell_amount > 0 else 1.0,
        limit_price=limit,
        price_percent=signed,
        last_edited=LastEdited(EditField.PERCENT),
    )
    return resync(updated, market, keep_percent=True)


def on_market_refreshed(draft: OrderDraft, market: MarketContext) -> OrderDraft:
    """Limit prices hold; percents and bound lines follow the new snapshot."""
    return resync(draft, market)


def toggle_invert(draft: OrderDraft, market: MarketContext) -> OrderDraft:
    return resync(draft.evolve(invert=not draft.invert), market)
