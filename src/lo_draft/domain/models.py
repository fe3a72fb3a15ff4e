"""Order draft domain models — frozen dataclasses, every edit returns a new value.

Prices are canonical: buy-token units received per sell-token unit, whatever
the `invert` display flag says. Line 0's price and percent live on the draft
itself; lines 1..n carry their own (derived when bound, overridden when not).
"""
from dataclasses import dataclass, field, replace

from src.lo_common.enums import EditField
from src.lo_common.errors import AppError
from src.lo_market.domain.models import TokenRef

SECONDS_PER_DAY = 86_400


@dataclass(frozen=True)
class DraftRules:
    max_buy_lines: int = 10
    min_expiration_seconds: int = SECONDS_PER_DAY
    default_expiration_seconds: int = 7 * SECONDS_PER_DAY
    protocol_fee_bps: int = 20
    significant_figures: int = 4
    percent_display_epsilon: float = 0.01


@dataclass(frozen=True)
class LastEdited:
    field: EditField
    index: int = 0

    def is_(self, edit_field: EditField, index: int = 0) -> bool:
        return self.field == edit_field and self.index == index


@dataclass(frozen=True)
class BuyLine:
    token: TokenRef | None = None
    amount: float = 0.0
    limit_price: float | None = None  # lines i>0 only
    price_percent: float | None = None  # lines i>0 only


@dataclass(frozen=True)
class OrderDraft:
    sell_token: TokenRef | None
    sell_amount: float = 0.0
    buy_lines: tuple[BuyLine, ...] = (BuyLine(),)
    limit_price: float | None = None
    invert: bool = True
    bound: bool = True
    price_percent: float | None = None
    expiration_seconds: int = 7 * SECONDS_PER_DAY
    last_edited: LastEdited | None = None

    @property
    def primary(self) -> BuyLine:
        return self.buy_lines[0]

    def evolve(self, **changes) -> "OrderDraft":
        return replace(self, **changes)

    def with_line(self, index: int, line: BuyLine) -> "OrderDraft":
        lines = list(self.buy_lines)
        lines[index] = line
        return replace(self, buy_lines=tuple(lines))

    def effective_price(self, index: int) -> float | None:
        if index == 0:
            return self.limit_price
        return self.buy_lines[index].limit_price

    def effective_percent(self, index: int) -> float | None:
        if index == 0:
            return self.price_percent
        return self.buy_lines[index].price_percent

    def used_addresses(self) -> list[str]:
        addresses = [self.sell_token.address] if self.sell_token else []
        addresses.extend(line.token.address for line in self.buy_lines if line.token)
        return addresses


def new_draft(
    sell_token: TokenRef | None,
    buy_token: TokenRef | None,
    expiration_seconds: int = 7 * SECONDS_PER_DAY,
) -> OrderDraft:
    return OrderDraft(
        sell_token=sell_token,
        buy_lines=(BuyLine(token=buy_token),),
        expiration_seconds=expiration_seconds,
    )


@dataclass(frozen=True)
class DraftResult:
    """Outcome of one reduction: the (possibly unchanged) draft plus every
    outstanding error. Errors never discard the draft."""
    draft: OrderDraft
    errors: tuple[AppError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors
