"""Tests for lo_common.errors and lo_common.response."""

from src.lo_common.errors import (
    AppError,
    BelowMinimumExpirationError,
    BoundLineEditError,
    DataUnavailableError,
    DraftSessionNotFoundError,
    DuplicateTokenError,
    InputError,
    OrderNotFoundError,
    TokenLimitReachedError,
    UnknownTokenError,
)
from src.lo_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1, message="x"), Exception)


class TestInputErrors:
    def test_input_errors_are_422(self) -> None:
        for err in (
            DuplicateTokenError("HEX"),
            BelowMinimumExpirationError(60, 86_400),
            TokenLimitReachedError(10),
            BoundLineEditError(2),
        ):
            assert isinstance(err, InputError)
            assert err.http_status == 422

    def test_duplicate_token(self) -> None:
        err = DuplicateTokenError("HEX")
        assert err.code == 1001
        assert "HEX" in err.message

    def test_expiration_message(self) -> None:
        err = BelowMinimumExpirationError(60, 86_400)
        assert err.code == 1002
        assert "60" in err.message
        assert "86400" in err.message

    def test_data_unavailable_is_not_input_error(self) -> None:
        err = DataUnavailableError("0xabc")
        assert err.code == 2001
        assert not isinstance(err, InputError)


class TestLookupErrors:
    def test_not_found_is_404(self) -> None:
        for err in (
            DraftSessionNotFoundError("DRF1"),
            OrderNotFoundError(7),
            UnknownTokenError("0xabc"),
        ):
            assert err.http_status == 404


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"a": 1})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"a": 1}
        assert resp.request_id.startswith("req_")

    def test_error(self) -> None:
        resp = error_response(3001, "Draft session not found: x")
        assert resp.code == 3001
        assert resp.data is None

    def test_defaults(self) -> None:
        resp = ApiResponse()
        assert resp.code == 0
        assert resp.timestamp
