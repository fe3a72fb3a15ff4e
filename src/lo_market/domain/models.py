"""Token and market-data domain models — pure dataclasses, no framework dependency."""
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from src.lo_common.enums import TokenCategory, TokenVariant
from src.lo_common.numbers import positive_or_none

# Base assets whose whole family (native, pulsechain and bridged copies) counts as MAXI.
MAXI_BASE_ASSETS = frozenset({"MAXI", "DECI", "LUCKY", "TRIO", "BASE"})


@dataclass(frozen=True)
class TokenRef:
    address: str  # canonical lower-case
    ticker: str
    decimals: int


@dataclass(frozen=True)
class TokenFamily:
    base_asset: str
    variant: TokenVariant


@dataclass(frozen=True)
class TokenMetadata:
    token: TokenRef
    name: str
    family: TokenFamily
    pegged_usd_price: float | None = None
    price_proxy: str | None = None  # canonical address whose price this token borrows
    fallback_usd_price: float | None = None

    @property
    def address(self) -> str:
        return self.token.address

    @property
    def ticker(self) -> str:
        return self.token.ticker

    @property
    def category(self) -> TokenCategory:
        if self.family.base_asset in MAXI_BASE_ASSETS:
            return TokenCategory.MAXI
        return TokenCategory.NON_MAXI


@dataclass(frozen=True)
class MarketSnapshot:
    """USD prices keyed by canonical address. Never mutated; replaced whole."""
    prices: Mapping[str, float] = field(default_factory=dict)
    fetched_at: datetime | None = None

    def raw_price(self, address: str) -> float | None:
        return positive_or_none(self.prices.get(address))
