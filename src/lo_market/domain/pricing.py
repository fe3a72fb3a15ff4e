"""MarketContext: per-token USD resolution over one MarketSnapshot.

Resolution order for a token:
  1. pegged price from the metadata table (weDAI = $1)
  2. price proxy (native PLS reads WPLS), then the table fallback
  3. the snapshot price
Missing, zero, negative and non-finite prices all resolve to None.
"""
from dataclasses import dataclass

from src.lo_common.numbers import positive_or_none, safe_div
from src.lo_market.domain.models import MarketSnapshot
from src.lo_market.domain.registry import TokenRegistry, canonical_address


@dataclass(frozen=True)
class MarketContext:
    snapshot: MarketSnapshot
    registry: TokenRegistry

    def usd_price(self, address: str | None) -> float | None:
        if address is None:
            return None
        address = canonical_address(address)
        meta = self.registry.get(address)
        if meta is not None:
            if meta.pegged_usd_price is not None:
                return meta.pegged_usd_price
            if meta.price_proxy is not None:
                proxied = self.snapshot.raw_price(meta.price_proxy)
                if proxied is not None:
                    return proxied
                own = self.snapshot.raw_price(address)
                return own if own is not None else positive_or_none(meta.fallback_usd_price)
        return self.snapshot.raw_price(address)

    def market_price(self, sell_address: str | None, buy_address: str | None) -> float | None:
        """Canonical market ratio: buy tokens received per sell token."""
        return safe_div(self.usd_price(sell_address), self.usd_price(buy_address))

    def usd_value(self, address: str | None, amount: float) -> float | None:
        price = self.usd_price(address)
        if price is None:
            return None
        return amount * price
