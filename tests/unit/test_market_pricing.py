"""Tests for lo_market.domain.pricing — USD resolution and market ratios."""

import math

import pytest

from src.lo_market.domain.models import MarketSnapshot
from src.lo_market.domain.pricing import MarketContext
from src.lo_market.domain.registry import default_registry
from src.lo_market.domain.token_table import HEX_ADDRESS, NATIVE_ADDRESS, WEDAI_ADDRESS, WPLS_ADDRESS

UNKNOWN = "0x1111111111111111111111111111111111111111"


def _market(**prices: float) -> MarketContext:
    return MarketContext(snapshot=MarketSnapshot(prices=prices), registry=default_registry())


class TestUsdPrice:
    def test_snapshot_price(self) -> None:
        assert _market(**{HEX_ADDRESS: 0.005}).usd_price(HEX_ADDRESS) == 0.005

    def test_wedai_pegged(self) -> None:
        assert _market(**{WEDAI_ADDRESS: 0.97}).usd_price(WEDAI_ADDRESS) == 1.0

    def test_native_reads_wpls(self) -> None:
        market = _market(**{WPLS_ADDRESS: 0.0001, NATIVE_ADDRESS: 0.5})
        assert market.usd_price(NATIVE_ADDRESS) == 0.0001
        assert market.usd_price("0x0") == 0.0001

    def test_native_fallback(self) -> None:
        assert _market().usd_price(NATIVE_ADDRESS) == pytest.approx(0.000034)

    @pytest.mark.parametrize("bad", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_prices_are_none(self, bad: float) -> None:
        assert _market(**{HEX_ADDRESS: bad}).usd_price(HEX_ADDRESS) is None

    def test_missing_is_none(self) -> None:
        assert _market().usd_price(HEX_ADDRESS) is None
        assert _market().usd_price(None) is None

    def test_unknown_token_uses_snapshot(self) -> None:
        assert _market(**{UNKNOWN: 2.0}).usd_price(UNKNOWN) == 2.0


class TestMarketPrice:
    def test_buy_per_sell(self) -> None:
        market = _market(**{WPLS_ADDRESS: 0.0001, HEX_ADDRESS: 0.005})
        assert market.market_price(NATIVE_ADDRESS, HEX_ADDRESS) == pytest.approx(0.02)

    def test_missing_side_is_none(self) -> None:
        market = _market(**{WPLS_ADDRESS: 0.0001})
        assert market.market_price(NATIVE_ADDRESS, HEX_ADDRESS) is None
        assert market.market_price(None, HEX_ADDRESS) is None

    def test_usd_value(self) -> None:
        market = _market(**{HEX_ADDRESS: 0.005})
        assert market.usd_value(HEX_ADDRESS, 200.0) == pytest.approx(1.0)
        assert market.usd_value(UNKNOWN, 1.0) is None
