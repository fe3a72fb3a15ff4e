"""Tests for lo_draft.domain.submission — contract call arguments."""

import pytest

from src.lo_common.errors import (
    BelowMinimumExpirationError,
    DuplicateTokenError,
    IncompleteDraftError,
    TokenNotWhitelistedError,
)
from src.lo_draft.domain.models import BuyLine, OrderDraft, new_draft
from src.lo_draft.domain.submission import build_submission
from src.lo_draft.domain.summary import net_of_fee, order_summary
from src.lo_market.domain.registry import default_registry
from src.lo_market.domain.token_table import HEX_ADDRESS, NATIVE_ADDRESS, WPLS_ADDRESS

NOW = 1_800_000_000
REGISTRY = default_registry()


def _make_draft(**kwargs) -> OrderDraft:
    draft = new_draft(REGISTRY.token_ref(NATIVE_ADDRESS), REGISTRY.token_ref(HEX_ADDRESS))
    draft = draft.evolve(
        sell_amount=1000.5,
        buy_lines=(BuyLine(token=REGISTRY.token_ref(HEX_ADDRESS), amount=20.123456789),),
        limit_price=0.02,
    )
    return draft.evolve(**kwargs) if kwargs else draft


class TestBuildSubmission:
    def test_scales_and_truncates(self) -> None:
        sub = build_submission(_make_draft(), REGISTRY, now=NOW)
        assert sub.sell_token_address == NATIVE_ADDRESS
        assert sub.sell_amount_raw == 1000_500000000000000000
        assert sub.buy_token_indices == (0,)
        assert sub.buy_amounts_raw == (2_012_345_678,)

    def test_expiration_is_absolute(self) -> None:
        sub = build_submission(_make_draft(), REGISTRY, now=NOW)
        assert sub.expiration_unix_seconds == NOW + 7 * 86_400

    def test_below_minimum_expiration(self) -> None:
        with pytest.raises(BelowMinimumExpirationError):
            build_submission(_make_draft(expiration_seconds=60), REGISTRY, now=NOW)

    def test_missing_sell_token(self) -> None:
        with pytest.raises(IncompleteDraftError):
            build_submission(_make_draft(sell_token=None), REGISTRY, now=NOW)

    def test_zero_sell_amount(self) -> None:
        with pytest.raises(IncompleteDraftError):
            build_submission(_make_draft(sell_amount=0.0), REGISTRY, now=NOW)

    def test_buy_line_without_token(self) -> None:
        draft = _make_draft()
        draft = draft.evolve(buy_lines=draft.buy_lines + (BuyLine(amount=5.0),))
        with pytest.raises(IncompleteDraftError, match="buy line 1"):
            build_submission(draft, REGISTRY, now=NOW)

    def test_dust_amount_rejected(self) -> None:
        draft = _make_draft(buy_lines=(BuyLine(token=REGISTRY.token_ref(HEX_ADDRESS), amount=1e-9),))
        with pytest.raises(IncompleteDraftError):
            build_submission(draft, REGISTRY, now=NOW)

    def test_not_whitelisted(self) -> None:
        registry = REGISTRY.with_whitelist([WPLS_ADDRESS])
        with pytest.raises(TokenNotWhitelistedError):
            build_submission(_make_draft(), registry, now=NOW)

    def test_duplicate_blocks_submission(self) -> None:
        draft = _make_draft(sell_token=REGISTRY.token_ref(HEX_ADDRESS))
        with pytest.raises(DuplicateTokenError):
            build_submission(draft, REGISTRY, now=NOW)


class TestOrderSummary:
    def test_fee_deducted(self) -> None:
        assert net_of_fee(1000.0, 20) == pytest.approx(998.0)

    def test_summary_lines(self) -> None:
        hex_line = BuyLine(token=REGISTRY.token_ref(HEX_ADDRESS), amount=500.0)
        lines = order_summary(_make_draft(buy_lines=(hex_line,)), 20)
        assert len(lines) == 1
        assert lines[0].ticker == "HEX"
        assert lines[0].fee == pytest.approx(1.0)
        assert lines[0].receive == pytest.approx(499.0)
