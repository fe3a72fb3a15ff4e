"""Tests for lo_market.infrastructure — snapshot store, price source, refresher."""

import asyncio

import pytest

from src.lo_market.infrastructure.price_feed import InMemoryPriceSource, PriceRefresher
from src.lo_market.infrastructure.snapshot_store import MarketSnapshotStore
from src.lo_market.domain.token_table import HEX_ADDRESS, NATIVE_ADDRESS

HEX_UPPER = HEX_ADDRESS.upper().replace("0X", "0x")


class TestMarketSnapshotStore:
    def test_starts_empty(self) -> None:
        store = MarketSnapshotStore()
        assert dict(store.current().prices) == {}
        assert store.current().fetched_at is None

    def test_replace_swaps_whole_snapshot(self) -> None:
        store = MarketSnapshotStore()
        before = store.current()
        after = store.replace({HEX_UPPER: 0.005})
        assert store.current() is after
        assert after is not before
        assert after.prices == {HEX_ADDRESS: 0.005}
        assert after.fetched_at is not None

    def test_captured_snapshot_is_unaffected(self) -> None:
        store = MarketSnapshotStore()
        store.replace({HEX_ADDRESS: 0.005})
        captured = store.current()
        store.replace({HEX_ADDRESS: 0.006})
        assert captured.raw_price(HEX_ADDRESS) == 0.005


class TestInMemoryPriceSource:
    async def test_fetch_filters_requested(self) -> None:
        source = InMemoryPriceSource({HEX_ADDRESS: 0.005, "0x0": 1.0})
        prices = await source.fetch_usd_prices([HEX_UPPER])
        assert prices == {HEX_ADDRESS: 0.005}

    async def test_native_alias_canonicalized(self) -> None:
        source = InMemoryPriceSource({"0x0": 1.0})
        assert await source.fetch_usd_prices([NATIVE_ADDRESS]) == {NATIVE_ADDRESS: 1.0}


class _FailingSource:
    async def fetch_usd_prices(self, addresses):
        raise RuntimeError("feed down")


class TestPriceRefresher:
    async def test_refresh_once_replaces_snapshot(self) -> None:
        store = MarketSnapshotStore()
        source = InMemoryPriceSource({HEX_ADDRESS: 0.005})
        refresher = PriceRefresher(source, store, [HEX_ADDRESS], interval_seconds=10)
        assert await refresher.refresh_once() == 1
        assert store.current().raw_price(HEX_ADDRESS) == 0.005

    async def test_start_and_stop(self) -> None:
        store = MarketSnapshotStore()
        source = InMemoryPriceSource({HEX_ADDRESS: 0.005})
        refresher = PriceRefresher(source, store, [HEX_ADDRESS], interval_seconds=0.01)
        refresher.start()
        assert refresher.running
        await asyncio.sleep(0.05)
        await refresher.stop()
        assert not refresher.running
        assert store.current().raw_price(HEX_ADDRESS) == 0.005

    async def test_failure_keeps_previous_snapshot(self) -> None:
        store = MarketSnapshotStore()
        store.replace({HEX_ADDRESS: 0.005})
        refresher = PriceRefresher(_FailingSource(), store, [HEX_ADDRESS], interval_seconds=0.01)
        refresher.start()
        await asyncio.sleep(0.03)
        await refresher.stop()
        assert store.current().raw_price(HEX_ADDRESS) == 0.005

    async def test_refresh_once_propagates_errors(self) -> None:
        refresher = PriceRefresher(_FailingSource(), MarketSnapshotStore(), [], interval_seconds=1)
        with pytest.raises(RuntimeError):
            await refresher.refresh_once()
