"""OrderSource Protocol — interface contract for the on-chain order indexer."""
from collections.abc import Iterable
from typing import Protocol

from src.lo_position.domain.models import OnChainOrder


class OrderSourceProtocol(Protocol):
    def upsert_many(self, orders: Iterable[OnChainOrder]) -> int: ...

    async def get_order_details(self, order_id: int) -> OnChainOrder | None: ...

    async def list_orders(self, owner: str | None = None) -> list[OnChainOrder]: ...
