"""Price feed adapters.

InMemoryPriceSource holds the latest prices pushed through the market API.
PriceRefresher polls a PriceSourceProtocol and swaps the snapshot store.
"""
import asyncio
import logging
from collections.abc import Iterable, Mapping

from src.lo_market.domain.registry import canonical_address
from src.lo_market.domain.repository import PriceSourceProtocol
from src.lo_market.infrastructure.snapshot_store import MarketSnapshotStore

logger = logging.getLogger(__name__)


class InMemoryPriceSource:
    def __init__(self, prices: Mapping[str, float] | None = None) -> None:
        self._prices: dict[str, float] = {}
        if prices:
            self.update(prices)

    def update(self, prices: Mapping[str, float]) -> None:
        self._prices = {canonical_address(a): float(p) for a, p in prices.items()}

    async def fetch_usd_prices(self, addresses: Iterable[str]) -> dict[str, float]:
        wanted = {canonical_address(a) for a in addresses}
        return {a: p for a, p in self._prices.items() if a in wanted}


class PriceRefresher:
    """Background task: fetch prices every `interval_seconds` and replace the snapshot."""

    def __init__(
        self,
        source: PriceSourceProtocol,
        store: MarketSnapshotStore,
        addresses: Iterable[str],
        interval_seconds: float,
    ) -> None:
        self._source = source
        self._store = store
        self._addresses = list(addresses)
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh_once(self) -> int:
        prices = await self._source.fetch_usd_prices(self._addresses)
        self._store.replace(prices)
        return len(prices)

    async def _run(self) -> None:
        while True:
            try:
                await self.refresh_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                # Keep the previous snapshot; the next tick retries.
                logger.exception("Price refresh failed")
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Price refresher started: interval=%.1fs", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Price refresher stopped")
