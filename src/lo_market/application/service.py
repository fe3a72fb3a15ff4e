"""MarketApplicationService — thin composition layer over the snapshot store.

`current_market()` is the single place the other contexts obtain a
MarketContext; each call captures the snapshot current at that moment.
"""
import logging
from collections.abc import Mapping

from config.settings import settings
from src.lo_market.application.schemas import SnapshotOut, TokenListResponse, TokenOut
from src.lo_market.domain.pricing import MarketContext
from src.lo_market.domain.registry import TokenRegistry
from src.lo_market.domain.token_table import build_token_table
from src.lo_market.infrastructure.price_feed import InMemoryPriceSource, PriceRefresher
from src.lo_market.infrastructure.snapshot_store import MarketSnapshotStore, market_snapshot_store

logger = logging.getLogger(__name__)

_registry = TokenRegistry(build_token_table(settings.NATIVE_FALLBACK_USD_PRICE))
price_source = InMemoryPriceSource()


def current_market() -> MarketContext:
    return MarketContext(snapshot=market_snapshot_store.current(), registry=_registry)


def build_price_refresher() -> PriceRefresher:
    return PriceRefresher(
        source=price_source,
        store=market_snapshot_store,
        addresses=[m.address for m in _registry.all()],
        interval_seconds=settings.PRICE_REFRESH_SECONDS,
    )


class MarketApplicationService:
    def __init__(
        self,
        store: MarketSnapshotStore | None = None,
        source: InMemoryPriceSource | None = None,
        registry: TokenRegistry | None = None,
    ) -> None:
        self._store = store or market_snapshot_store
        self._source = source or price_source
        self._registry = registry or _registry

    def _market(self) -> MarketContext:
        return MarketContext(snapshot=self._store.current(), registry=self._registry)

    def get_prices(self) -> SnapshotOut:
        market = self._market()
        return SnapshotOut.from_domain(market.snapshot, market)

    def replace_prices(self, prices: Mapping[str, float]) -> SnapshotOut:
        # Publish immediately instead of waiting for the next refresher tick.
        self._source.update(prices)
        self._store.replace(prices)
        return self.get_prices()

    def list_tokens(self, query: str = "") -> TokenListResponse:
        market = self._market()
        return TokenListResponse(
            items=[TokenOut.from_domain(m, market) for m in self._registry.search(query)]
        )
