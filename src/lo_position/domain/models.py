"""Position domain models — pure dataclasses, no framework dependency.

OnChainOrder mirrors the order contract's storage: every amount is a raw
integer scaled by the token's decimals, fractions are scaled by 1e18.
"""
from dataclasses import dataclass

from src.lo_common.enums import (
    CategoryFilter,
    EffectiveStatus,
    OnChainStatus,
    OwnershipFilter,
    StatusFilter,
)


@dataclass(frozen=True)
class OnChainOrder:
    order_id: int
    owner: str
    sell_token: str  # canonical address
    original_sell_amount: int
    remaining_sell_amount: int
    redeemed_sell_amount: int
    status: OnChainStatus
    expiration_time: int  # unix seconds
    buy_token_indices: tuple[int, ...]
    buy_amounts: tuple[int, ...]  # original asks, one per buy token
    remaining_fill_percentage: int | None = None  # 1e18 == nothing filled yet
    last_update_time: int = 0

    @property
    def is_final(self) -> bool:
        return self.status in (OnChainStatus.COMPLETED, OnChainStatus.CANCELLED)


@dataclass(frozen=True)
class DerivedOrderView:
    order_id: int
    effective_status: EffectiveStatus
    fill_percent: float
    proceeds_available: bool
    limit_vs_market_percent: float | None


@dataclass(frozen=True)
class PositionFilter:
    ownership: OwnershipFilter = OwnershipFilter.ALL
    status: StatusFilter = StatusFilter.ACTIVE
    category: CategoryFilter = CategoryFilter.ALL
    search: str = ""
