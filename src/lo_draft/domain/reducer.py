"""Pure draft reducer: the single dispatch point for every draft edit.

reduce(draft, action, market) -> DraftResult

An InputError (or DataUnavailableError) raised by an operation leaves the
draft as it was and is returned next to it. State errors (duplicate tokens,
short expiration, missing prices) are recomputed from the resulting draft.
"""
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from src.lo_common.enums import PresetDirection
from src.lo_common.errors import AppError, DataUnavailableError, InputError
from src.lo_draft.domain import allocator, synchronizer
from src.lo_draft.domain.models import DraftResult, DraftRules, OrderDraft
from src.lo_draft.domain.validation import set_expiration, state_errors
from src.lo_market.domain.models import TokenRef
from src.lo_market.domain.pricing import MarketContext


@dataclass(frozen=True)
class EditSellAmount:
    amount: float | str


@dataclass(frozen=True)
class EditBuyAmount:
    index: int
    amount: float | str


@dataclass(frozen=True)
class EditPrice:
    price: float | None
    displayed: bool = False


@dataclass(frozen=True)
class EditLinePrice:
    index: int
    price: float | None


@dataclass(frozen=True)
class ApplyPercentPreset:
    percent: float
    direction: PresetDirection = PresetDirection.ABOVE


@dataclass(frozen=True)
class ToggleInvert:
    pass


@dataclass(frozen=True)
class SetBound:
    bound: bool


@dataclass(frozen=True)
class SwapSides:
    pass


@dataclass(frozen=True)
class AddBuyLine:
    pass


@dataclass(frozen=True)
class RemoveBuyLine:
    index: int


@dataclass(frozen=True)
class SelectSellToken:
    token: TokenRef


@dataclass(frozen=True)
class SelectBuyToken:
    index: int
    token: TokenRef


@dataclass(frozen=True)
class SetExpiration:
    seconds: int


@dataclass(frozen=True)
class RefreshMarket:
    pass


DraftAction = (
    EditSellAmount | EditBuyAmount | EditPrice | EditLinePrice | ApplyPercentPreset
    | ToggleInvert | SetBound | SwapSides | AddBuyLine | RemoveBuyLine
    | SelectSellToken | SelectBuyToken | SetExpiration | RefreshMarket
)

_Handler = Callable[[OrderDraft, Any, MarketContext, DraftRules], OrderDraft]

_HANDLERS: dict[type, _Handler] = {
    EditSellAmount: lambda d, a, m, r: synchronizer.on_sell_amount_edited(d, a.amount, m),
    EditBuyAmount: lambda d, a, m, r: synchronizer.on_buy_amount_edited(d, a.index, a.amount, m),
    EditPrice: lambda d, a, m, r: synchronizer.on_price_edited(d, a.price, m, displayed=a.displayed),
    EditLinePrice: lambda d, a, m, r: allocator.on_line_price_edited(d, a.index, a.price, m),
    ApplyPercentPreset: lambda d, a, m, r: synchronizer.on_percent_preset(d, a.percent, a.direction, m),
    ToggleInvert: lambda d, a, m, r: synchronizer.toggle_invert(d, m),
    SetBound: lambda d, a, m, r: allocator.set_bound(d, a.bound, m),
    SwapSides: lambda d, a, m, r: allocator.swap_sides(d, m),
    AddBuyLine: lambda d, a, m, r: allocator.add_buy_line(d, m, r.max_buy_lines),
    RemoveBuyLine: lambda d, a, m, r: allocator.remove_buy_line(d, a.index, m),
    SelectSellToken: lambda d, a, m, r: allocator.select_sell_token(d, a.token, m),
    SelectBuyToken: lambda d, a, m, r: allocator.select_buy_token(d, a.index, a.token, m),
    SetExpiration: lambda d, a, m, r: set_expiration(d, a.seconds),
    RefreshMarket: lambda d, a, m, r: synchronizer.on_market_refreshed(d, m),
}


def reduce(
    draft: OrderDraft,
    action: DraftAction,
    market: MarketContext,
    rules: DraftRules | None = None,
) -> DraftResult:
    rules = rules or DraftRules()
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unsupported draft action: {type(action).__name__}")

    raised: list[AppError] = []
    try:
        updated = handler(draft, action, market, rules)
    except (InputError, DataUnavailableError) as exc:
        updated = draft
        raised.append(exc)

    errors = raised + [
        e for e in state_errors(updated, market, rules.min_expiration_seconds)
        if not any(type(e) is type(r) and e.message == r.message for r in raised)
    ]
    return DraftResult(draft=updated, errors=tuple(errors))
