"""Tests for lo_common.datetime_utils."""

from datetime import timezone

from src.lo_common.datetime_utils import format_expiration, unix_now, utc_now


class TestFormatExpiration:
    def test_short_date(self) -> None:
        assert format_expiration(1767225600) == "1 Jan 26"

    def test_two_digit_day(self) -> None:
        # 2026-10-19 00:00:00 UTC
        assert format_expiration(1792368000) == "19 Oct 26"

    def test_out_of_range_falls_back_to_number(self) -> None:
        assert format_expiration(10**20) == str(10**20)


class TestClocks:
    def test_utc_now_is_aware(self) -> None:
        assert utc_now().tzinfo == timezone.utc

    def test_unix_now_is_int(self) -> None:
        assert isinstance(unix_now(), int)
