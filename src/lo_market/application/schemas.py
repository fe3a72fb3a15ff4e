"""Pydantic schemas for lo_market API requests and responses."""

from pydantic import BaseModel, Field

from src.lo_market.domain.models import MarketSnapshot, TokenMetadata
from src.lo_market.domain.pricing import MarketContext
from src.lo_market.domain.registry import display_ticker


class PricesUpdateRequest(BaseModel):
    prices: dict[str, float] = Field(..., description="USD price keyed by token address")


class TokenOut(BaseModel):
    address: str
    ticker: str
    display_ticker: str
    name: str
    decimals: int
    base_asset: str
    variant: str
    category: str
    whitelist_index: int | None
    usd_price: float | None

    @classmethod
    def from_domain(cls, meta: TokenMetadata, market: MarketContext) -> "TokenOut":
        return cls(
            address=meta.address,
            ticker=meta.ticker,
            display_ticker=display_ticker(meta.ticker),
            name=meta.name,
            decimals=meta.token.decimals,
            base_asset=meta.family.base_asset,
            variant=meta.family.variant.value,
            category=meta.category.value,
            whitelist_index=market.registry.whitelist_index(meta.address),
            usd_price=market.usd_price(meta.address),
        )


class TokenListResponse(BaseModel):
    items: list[TokenOut]


class SnapshotOut(BaseModel):
    prices: dict[str, float]
    fetched_at: str | None
    resolved: dict[str, float | None]  # table tokens after peg / proxy resolution

    @classmethod
    def from_domain(cls, snapshot: MarketSnapshot, market: MarketContext) -> "SnapshotOut":
        return cls(
            prices=dict(snapshot.prices),
            fetched_at=snapshot.fetched_at.isoformat() if snapshot.fetched_at else None,
            resolved={m.address: market.usd_price(m.address) for m in market.registry.all()},
        )
