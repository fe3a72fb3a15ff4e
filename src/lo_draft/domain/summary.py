"""Order summary: what the seller asks for and what arrives after the protocol fee."""
from dataclasses import dataclass

from src.lo_draft.domain.models import OrderDraft

BPS_DENOMINATOR = 10_000


@dataclass(frozen=True)
class SummaryLine:
    index: int
    ticker: str | None
    asking: float
    fee: float
    receive: float


def net_of_fee(amount: float, fee_bps: int) -> float:
    return amount * (BPS_DENOMINATOR - fee_bps) / BPS_DENOMINATOR


def order_summary(draft: OrderDraft, fee_bps: int) -> list[SummaryLine]:
    lines = []
    for i, line in enumerate(draft.buy_lines):
        receive = net_of_fee(line.amount, fee_bps)
        lines.append(
            SummaryLine(
                index=i,
                ticker=line.token.ticker if line.token else None,
                asking=line.amount,
                fee=line.amount - receive,
                receive=receive,
            )
        )
    return lines
