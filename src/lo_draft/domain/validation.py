"""Draft state checks recomputed on every reduction.

Errors derived from state clear themselves as soon as the state that caused
them is gone.
"""
from collections import Counter

from src.lo_common.errors import AppError, BelowMinimumExpirationError, DataUnavailableError, DuplicateTokenError
from src.lo_draft.domain.models import OrderDraft
from src.lo_draft.domain.synchronizer import missing_price_address
from src.lo_market.domain.pricing import MarketContext


def set_expiration(draft: OrderDraft, seconds: int) -> OrderDraft:
    """Store the expiration as entered; a too-short value is reported, not rejected."""
    return draft.evolve(expiration_seconds=int(seconds))


def duplicate_token_errors(draft: OrderDraft) -> list[DuplicateTokenError]:
    tokens = ([draft.sell_token] if draft.sell_token else []) + [
        line.token for line in draft.buy_lines if line.token
    ]
    counts = Counter(t.address for t in tokens)
    reported: set[str] = set()
    errors = []
    for token in tokens:
        if counts[token.address] > 1 and token.address not in reported:
            reported.add(token.address)
            errors.append(DuplicateTokenError(token.ticker))
    return errors


def expiration_errors(draft: OrderDraft, minimum_seconds: int) -> list[BelowMinimumExpirationError]:
    if draft.expiration_seconds < minimum_seconds:
        return [BelowMinimumExpirationError(draft.expiration_seconds, minimum_seconds)]
    return []


def state_errors(
    draft: OrderDraft, market: MarketContext, minimum_expiration_seconds: int
) -> list[AppError]:
    errors: list[AppError] = []
    errors.extend(duplicate_token_errors(draft))
    errors.extend(expiration_errors(draft, minimum_expiration_seconds))
    missing = missing_price_address(draft, market)
    if missing is not None:
        errors.append(DataUnavailableError(missing))
    return errors
