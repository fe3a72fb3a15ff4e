"""Tests for lo_draft.domain.pricing and validation."""

import math

import pytest

from src.lo_draft.domain.models import BuyLine, new_draft
from src.lo_draft.domain.pricing import (
    display_percent,
    from_displayed,
    percent_from_market,
    price_from_percent,
    to_displayed,
)
from src.lo_draft.domain.validation import duplicate_token_errors, expiration_errors
from src.lo_market.domain.registry import default_registry
from src.lo_market.domain.token_table import HEX_ADDRESS, NATIVE_ADDRESS


class TestDisplayedSpace:
    def test_inverted_is_reciprocal(self) -> None:
        assert to_displayed(0.02, invert=True) == pytest.approx(50.0)
        assert to_displayed(0.02, invert=False) == 0.02

    def test_round_trip(self) -> None:
        for price in (0.02, 3.5, 1e-9):
            assert from_displayed(to_displayed(price, True), True) == pytest.approx(price)

    @pytest.mark.parametrize("bad", [0.0, -2.0, math.nan, None])
    def test_invalid(self, bad) -> None:
        assert to_displayed(bad, True) is None


class TestPercent:
    def test_percent_from_market(self) -> None:
        assert percent_from_market(2.2, 2.0, invert=False) == pytest.approx(10.0)
        # displayed 1/2.5 vs 1/2 -> -20%
        assert percent_from_market(2.5, 2.0, invert=True) == pytest.approx(-20.0)

    def test_price_from_percent(self) -> None:
        assert price_from_percent(2.0, 10, invert=False) == pytest.approx(2.2)
        assert price_from_percent(2.0, -20, invert=True) == pytest.approx(2.5)

    def test_price_from_percent_round_trip(self) -> None:
        for invert in (True, False):
            for percent in (-50.0, -1.0, 0.0, 7.5, 250.0):
                price = price_from_percent(0.37, percent, invert)
                assert percent_from_market(price, 0.37, invert) == pytest.approx(percent, abs=1e-9)

    def test_missing_inputs(self) -> None:
        assert percent_from_market(None, 2.0, False) is None
        assert percent_from_market(2.0, 0.0, False) is None
        assert price_from_percent(None, 5, False) is None
        assert price_from_percent(2.0, None, False) is None
        assert price_from_percent(2.0, -100, False) is None

    @pytest.mark.parametrize(
        "percent,expected",
        [(0.0, None), (0.01, None), (-0.005, None), (0.02, 0.02), (-12.5, -12.5), (None, None)],
    )
    def test_display_percent(self, percent, expected) -> None:
        assert display_percent(percent) == expected


class TestValidation:
    def test_duplicate_reported_once_per_address(self) -> None:
        registry = default_registry()
        hex_ref = registry.token_ref(HEX_ADDRESS)
        draft = new_draft(registry.token_ref(NATIVE_ADDRESS), hex_ref).evolve(
            buy_lines=(BuyLine(token=hex_ref), BuyLine(token=hex_ref), BuyLine(token=hex_ref)),
        )
        errors = duplicate_token_errors(draft)
        assert len(errors) == 1
        assert errors[0].ticker == "HEX"

    def test_expiration_boundary(self) -> None:
        draft = new_draft(None, None)
        assert expiration_errors(draft.evolve(expiration_seconds=86_400), 86_400) == []
        assert len(expiration_errors(draft.evolve(expiration_seconds=86_399), 86_400)) == 1
