"""Pydantic schemas for lo_position API requests and responses.

Raw amounts travel as decimal strings on the way out; inbound they accept
ints or numeric strings.
"""

from pydantic import BaseModel, Field

from src.lo_common.datetime_utils import format_expiration
from src.lo_common.enums import OnChainStatus
from src.lo_common.fixed_point import format_raw_amount
from src.lo_common.numbers import format_percentage
from src.lo_market.domain.pricing import MarketContext
from src.lo_market.domain.registry import canonical_address, display_ticker
from src.lo_position.domain.evaluator import buy_address, evaluate
from src.lo_position.domain.models import OnChainOrder


class OnChainOrderIn(BaseModel):
    order_id: int = Field(..., ge=0)
    owner: str
    sell_token: str
    original_sell_amount: int = Field(..., ge=0)
    remaining_sell_amount: int = Field(..., ge=0)
    redeemed_sell_amount: int = Field(0, ge=0)
    status: OnChainStatus
    expiration_time: int
    buy_token_indices: list[int]
    buy_amounts: list[int]
    remaining_fill_percentage: int | None = None
    last_update_time: int = 0

    def to_domain(self) -> OnChainOrder:
        return OnChainOrder(
            order_id=self.order_id,
            owner=self.owner,
            sell_token=canonical_address(self.sell_token),
            original_sell_amount=self.original_sell_amount,
            remaining_sell_amount=self.remaining_sell_amount,
            redeemed_sell_amount=self.redeemed_sell_amount,
            status=self.status,
            expiration_time=self.expiration_time,
            buy_token_indices=tuple(self.buy_token_indices),
            buy_amounts=tuple(self.buy_amounts),
            remaining_fill_percentage=self.remaining_fill_percentage,
            last_update_time=self.last_update_time,
        )


class OrdersIngestRequest(BaseModel):
    orders: list[OnChainOrderIn]


class IngestResponse(BaseModel):
    ingested: int


class AskOut(BaseModel):
    token_index: int
    address: str | None
    ticker: str
    amount: str


class PositionOut(BaseModel):
    order_id: int
    owner: str
    sell_token: str
    sell_ticker: str
    original_sell_amount: str
    remaining_sell_amount: str
    asks: list[AskOut]
    on_chain_status: int
    effective_status: str
    fill_percent: float
    fill_display: str
    proceeds_available: bool
    limit_vs_market_percent: float | None
    expiration_time: int
    expiration_display: str

    @classmethod
    def from_domain(cls, order: OnChainOrder, market: MarketContext, now: int) -> "PositionOut":
        registry = market.registry
        view = evaluate(order, market, now)
        sell_decimals = registry.decimals_of(order.sell_token)
        asks = []
        for position, (index, raw) in enumerate(zip(order.buy_token_indices, order.buy_amounts)):
            address = buy_address(order, market, position)
            token = registry.token_ref(address) if address else None
            asks.append(
                AskOut(
                    token_index=index,
                    address=address,
                    ticker=display_ticker(token.ticker) if token else f"#{index}",
                    amount=format_raw_amount(raw, token.decimals if token else 18),
                )
            )
        return cls(
            order_id=order.order_id,
            owner=order.owner,
            sell_token=order.sell_token,
            sell_ticker=display_ticker(registry.ticker_of(order.sell_token)),
            original_sell_amount=format_raw_amount(order.original_sell_amount, sell_decimals),
            remaining_sell_amount=format_raw_amount(order.remaining_sell_amount, sell_decimals),
            asks=asks,
            on_chain_status=int(order.status),
            effective_status=view.effective_status.value,
            fill_percent=view.fill_percent,
            fill_display=format_percentage(view.fill_percent),
            proceeds_available=view.proceeds_available,
            limit_vs_market_percent=view.limit_vs_market_percent,
            expiration_time=order.expiration_time,
            expiration_display=format_expiration(order.expiration_time),
        )


class PositionListResponse(BaseModel):
    items: list[PositionOut]
    counts: dict[str, int]
    total: int


class ExpiredOrdersResponse(BaseModel):
    order_ids: list[int]
