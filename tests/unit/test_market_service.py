# tests/unit/test_market_service.py
"""Unit tests for MarketApplicationService with isolated store and source."""
from unittest.mock import MagicMock

import pytest

from src.lo_market.application.service import MarketApplicationService
from src.lo_market.domain.registry import default_registry
from src.lo_market.domain.token_table import (
    HEX_ADDRESS,
    NATIVE_ADDRESS,
    WEDAI_ADDRESS,
    WPLS_ADDRESS,
)
from src.lo_market.infrastructure.price_feed import InMemoryPriceSource
from src.lo_market.infrastructure.snapshot_store import MarketSnapshotStore


@pytest.fixture
def store() -> MarketSnapshotStore:
    return MarketSnapshotStore()


@pytest.fixture
def svc(store: MarketSnapshotStore) -> MarketApplicationService:
    return MarketApplicationService(
        store=store, source=InMemoryPriceSource(), registry=default_registry()
    )


class TestPrices:
    def test_empty_snapshot_resolves_pegs_and_fallback(self, svc: MarketApplicationService) -> None:
        out = svc.get_prices()
        assert out.prices == {}
        assert out.fetched_at is None
        assert out.resolved[WEDAI_ADDRESS] == 1.0
        assert out.resolved[NATIVE_ADDRESS] == pytest.approx(0.000034)
        assert out.resolved[HEX_ADDRESS] is None

    def test_replace_publishes_immediately(
        self, svc: MarketApplicationService, store: MarketSnapshotStore
    ) -> None:
        out = svc.replace_prices({WPLS_ADDRESS.upper(): 0.0001, HEX_ADDRESS: 0.005})
        assert out.fetched_at is not None
        assert out.prices[WPLS_ADDRESS] == 0.0001
        assert out.resolved[NATIVE_ADDRESS] == 0.0001
        assert store.current().raw_price(HEX_ADDRESS) == 0.005

    def test_replace_drops_previous_prices(self, svc: MarketApplicationService) -> None:
        svc.replace_prices({HEX_ADDRESS: 0.005})
        out = svc.replace_prices({WPLS_ADDRESS: 0.0001})
        assert HEX_ADDRESS not in out.prices

    def test_replace_feeds_source(self, store: MarketSnapshotStore) -> None:
        source = MagicMock()
        svc = MarketApplicationService(store=store, source=source, registry=default_registry())
        svc.replace_prices({HEX_ADDRESS: 0.005})
        source.update.assert_called_once_with({HEX_ADDRESS: 0.005})


class TestTokens:
    def test_lists_whole_table(self, svc: MarketApplicationService) -> None:
        items = svc.list_tokens().items
        assert len(items) == len(default_registry().all())
        assert items[0].ticker == "HEX"
        assert items[0].whitelist_index == 0

    def test_search_and_display_ticker(self, svc: MarketApplicationService) -> None:
        items = svc.list_tokens("maximus").items
        assert len(items) == 10
        assert all(t.category == "MAXI" for t in items)
        bridged = svc.list_tokens("wemaxi").items
        assert [t.display_ticker for t in bridged] == ["eMAXI"]
