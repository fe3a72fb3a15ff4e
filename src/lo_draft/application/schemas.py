"""Pydantic schemas for lo_draft API requests and responses.

Canonical prices are returned unrounded next to their rounded display form;
display values use DraftRules.significant_figures.
"""

from pydantic import BaseModel, Field

from src.lo_common.enums import DragPhase, PresetDirection
from src.lo_common.errors import AppError
from src.lo_common.numbers import to_significant
from src.lo_draft.domain.drag import DragInteractionController
from src.lo_draft.domain.models import DraftResult, DraftRules, OrderDraft
from src.lo_draft.domain.pricing import display_percent, to_displayed
from src.lo_draft.domain.submission import SubmissionDraft
from src.lo_draft.domain.summary import order_summary
from src.lo_draft.domain.synchronizer import line_market_price
from src.lo_market.domain.models import TokenMetadata, TokenRef
from src.lo_market.domain.pricing import MarketContext
from src.lo_market.domain.registry import display_ticker

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateDraftRequest(BaseModel):
    sell_token: str | None = Field(None, description="Sell token address; default PLS")
    buy_token: str | None = Field(None, description="Primary buy token address; default HEX")


class AmountRequest(BaseModel):
    amount: float | str


class PriceRequest(BaseModel):
    price: float | None
    displayed: bool = False


class PresetRequest(BaseModel):
    percent: float = Field(..., ge=0)
    direction: PresetDirection = PresetDirection.ABOVE


class BoundRequest(BaseModel):
    bound: bool


class TokenSelectRequest(BaseModel):
    address: str


class ExpirationRequest(BaseModel):
    seconds: int


class DragBeginRequest(BaseModel):
    target: int = Field(0, ge=0)


class DragUpdateRequest(BaseModel):
    pointer_y: float
    container_height: float


class DragEndRequest(BaseModel):
    abandoned: bool = False


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ErrorOut(BaseModel):
    code: int
    message: str

    @classmethod
    def from_error(cls, error: AppError) -> "ErrorOut":
        return cls(code=error.code, message=error.message)


class TokenBrief(BaseModel):
    address: str
    ticker: str
    display_ticker: str
    decimals: int

    @classmethod
    def from_ref(cls, token: TokenRef | None) -> "TokenBrief | None":
        if token is None:
            return None
        return cls(
            address=token.address,
            ticker=token.ticker,
            display_ticker=display_ticker(token.ticker),
            decimals=token.decimals,
        )


class BuyLineOut(BaseModel):
    index: int
    token: TokenBrief | None
    amount: float
    amount_display: float | None
    limit_price: float | None
    displayed_price: float | None
    price_percent: float | None
    market_price: float | None


class SummaryLineOut(BaseModel):
    index: int
    ticker: str | None
    asking: float | None
    fee: float | None
    receive: float | None


class DragStateOut(BaseModel):
    phase: DragPhase
    target: int
    range_percent: float
    display_price: float | None
    display_percent: float | None


class DraftOut(BaseModel):
    session_id: str
    sell_token: TokenBrief | None
    sell_amount: float
    sell_amount_display: float | None
    buy_lines: list[BuyLineOut]
    limit_price: float | None
    displayed_price: float | None
    price_percent: float | None
    invert: bool
    bound: bool
    expiration_seconds: int
    last_edited: str | None
    summary: list[SummaryLineOut]
    errors: list[ErrorOut]
    drag: DragStateOut

    @classmethod
    def from_domain(
        cls,
        session_id: str,
        result: DraftResult,
        drag: DragInteractionController,
        market: MarketContext,
        rules: DraftRules,
    ) -> "DraftOut":
        draft: OrderDraft = result.draft
        figures = rules.significant_figures
        lines = []
        for i, line in enumerate(draft.buy_lines):
            price = draft.effective_price(i)
            lines.append(
                BuyLineOut(
                    index=i,
                    token=TokenBrief.from_ref(line.token),
                    amount=line.amount,
                    amount_display=to_significant(line.amount, figures),
                    limit_price=price,
                    displayed_price=to_significant(to_displayed(price, draft.invert), figures),
                    price_percent=display_percent(
                        draft.effective_percent(i), rules.percent_display_epsilon
                    ),
                    market_price=to_significant(
                        to_displayed(line_market_price(draft, i, market), draft.invert), figures
                    ),
                )
            )
        tag = draft.last_edited
        return cls(
            session_id=session_id,
            sell_token=TokenBrief.from_ref(draft.sell_token),
            sell_amount=draft.sell_amount,
            sell_amount_display=to_significant(draft.sell_amount, figures),
            buy_lines=lines,
            limit_price=draft.limit_price,
            displayed_price=to_significant(to_displayed(draft.limit_price, draft.invert), figures),
            price_percent=display_percent(draft.price_percent, rules.percent_display_epsilon),
            invert=draft.invert,
            bound=draft.bound,
            expiration_seconds=draft.expiration_seconds,
            last_edited=f"{tag.field.value}:{tag.index}" if tag else None,
            summary=[
                SummaryLineOut(
                    index=s.index,
                    ticker=s.ticker,
                    asking=to_significant(s.asking, figures),
                    fee=to_significant(s.fee, figures),
                    receive=to_significant(s.receive, figures),
                )
                for s in order_summary(draft, rules.protocol_fee_bps)
            ],
            errors=[ErrorOut.from_error(e) for e in result.errors],
            drag=DragStateOut(
                phase=drag.phase(),
                target=drag.target,
                range_percent=drag.range_percent,
                display_price=to_significant(to_displayed(drag.display_price(), draft.invert), figures),
                display_percent=drag.display_percent(),
            ),
        )


class SelectableTokenOut(BaseModel):
    address: str
    ticker: str
    display_ticker: str
    name: str

    @classmethod
    def from_domain(cls, meta: TokenMetadata) -> "SelectableTokenOut":
        return cls(
            address=meta.address,
            ticker=meta.ticker,
            display_ticker=display_ticker(meta.ticker),
            name=meta.name,
        )


class SelectableTokensResponse(BaseModel):
    items: list[SelectableTokenOut]


class SubmissionOut(BaseModel):
    sell_token_address: str
    sell_amount_raw: str  # decimal string; raw amounts overflow JSON numbers
    buy_token_indices: list[int]
    buy_amounts_raw: list[str]
    expiration_unix_seconds: int

    @classmethod
    def from_domain(cls, submission: SubmissionDraft) -> "SubmissionOut":
        return cls(
            sell_token_address=submission.sell_token_address,
            sell_amount_raw=str(submission.sell_amount_raw),
            buy_token_indices=list(submission.buy_token_indices),
            buy_amounts_raw=[str(a) for a in submission.buy_amounts_raw],
            expiration_unix_seconds=submission.expiration_unix_seconds,
        )
