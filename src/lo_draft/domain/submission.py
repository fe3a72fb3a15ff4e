"""Submission builder: OrderDraft -> contract call arguments.

Amounts are scaled to token integers with truncation, never rounded up.
"""
from dataclasses import dataclass

from src.lo_common.errors import IncompleteDraftError, InputError, TokenNotWhitelistedError
from src.lo_common.fixed_point import to_raw_amount
from src.lo_draft.domain.models import OrderDraft
from src.lo_draft.domain.validation import duplicate_token_errors, expiration_errors
from src.lo_market.domain.registry import TokenRegistry


@dataclass(frozen=True)
class SubmissionDraft:
    sell_token_address: str
    sell_amount_raw: int
    buy_token_indices: tuple[int, ...]
    buy_amounts_raw: tuple[int, ...]
    expiration_unix_seconds: int


def _whitelist_index(registry: TokenRegistry, address: str, ticker: str) -> int:
    index = registry.whitelist_index(address)
    if index is None:
        raise TokenNotWhitelistedError(ticker)
    return index


def build_submission(
    draft: OrderDraft,
    registry: TokenRegistry,
    now: int,
    min_expiration_seconds: int = 86_400,
) -> SubmissionDraft:
    """Raises the first outstanding InputError; nothing is built while one remains."""
    outstanding: list[InputError] = [
        *duplicate_token_errors(draft),
        *expiration_errors(draft, min_expiration_seconds),
    ]
    if outstanding:
        raise outstanding[0]

    if draft.sell_token is None:
        raise IncompleteDraftError("no sell token selected")
    sell_raw = to_raw_amount(draft.sell_amount, draft.sell_token.decimals)
    if sell_raw <= 0:
        raise IncompleteDraftError("sell amount must be greater than zero")

    indices: list[int] = []
    amounts: list[int] = []
    for i, line in enumerate(draft.buy_lines):
        if line.token is None:
            raise IncompleteDraftError(f"buy line {i} has no token")
        raw = to_raw_amount(line.amount, line.token.decimals)
        if raw <= 0:
            raise IncompleteDraftError(f"buy amount for {line.token.ticker} must be greater than zero")
        indices.append(_whitelist_index(registry, line.token.address, line.token.ticker))
        amounts.append(raw)

    return SubmissionDraft(
        sell_token_address=draft.sell_token.address,
        sell_amount_raw=sell_raw,
        buy_token_indices=tuple(indices),
        buy_amounts_raw=tuple(amounts),
        expiration_unix_seconds=now + draft.expiration_seconds,
    )
