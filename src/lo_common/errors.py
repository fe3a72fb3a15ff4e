"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Draft input (blocks submission, draft stays editable)
  2xxx: Market data availability (non-fatal)
  3xxx: Lookup
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Draft input ---

class InputError(AppError):
    """Raised synchronously by a mutating draft call.

    Returned next to the unchanged draft; never discards it.
    """

    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 422)


class DuplicateTokenError(InputError):
    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(1001, f"You cannot select {ticker} multiple times")


class BelowMinimumExpirationError(InputError):
    def __init__(self, seconds: int, minimum: int) -> None:
        super().__init__(
            1002,
            f"Expiration {seconds}s is below the minimum of {minimum}s",
        )


class TokenLimitReachedError(InputError):
    def __init__(self, limit: int) -> None:
        super().__init__(1003, f"An order can ask for at most {limit} tokens")


class BoundLineEditError(InputError):
    def __init__(self, index: int) -> None:
        super().__init__(
            1004,
            f"Buy line {index} is bound to the primary price; unbind prices to edit it",
        )


class SwapUnavailableError(InputError):
    def __init__(self) -> None:
        super().__init__(1005, "Swap needs exactly one buy token and a selected sell token")


class BuyLineNotFoundError(InputError):
    def __init__(self, index: int) -> None:
        super().__init__(1006, f"Buy line {index} does not exist")


class IncompleteDraftError(InputError):
    def __init__(self, detail: str) -> None:
        super().__init__(1007, f"Order is incomplete: {detail}")


class TokenNotWhitelistedError(InputError):
    def __init__(self, ticker: str) -> None:
        super().__init__(1008, f"Token {ticker} is not accepted by the contract")


# --- 2xxx: Market data ---

class DataUnavailableError(AppError):
    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(2001, f"No market price for token {address}", 422)


# --- 3xxx: Lookup ---

class DraftSessionNotFoundError(AppError):
    def __init__(self, session_id: str) -> None:
        super().__init__(3001, f"Draft session not found: {session_id}", 404)


class OrderNotFoundError(AppError):
    def __init__(self, order_id: int) -> None:
        super().__init__(3002, f"Order not found: {order_id}", 404)


class UnknownTokenError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(3003, f"Unknown token: {address}", 404)
