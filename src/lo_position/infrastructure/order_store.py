"""In-process order source fed by the ingest endpoint.

Orders are only ever replaced by order_id, never deleted.
"""
import logging
from collections.abc import Iterable

from src.lo_position.domain.models import OnChainOrder

logger = logging.getLogger(__name__)


class InMemoryOrderStore:
    def __init__(self) -> None:
        self._orders: dict[int, OnChainOrder] = {}

    def upsert_many(self, orders: Iterable[OnChainOrder]) -> int:
        count = 0
        for order in orders:
            self._orders[order.order_id] = order
            count += 1
        logger.info("Orders ingested: count=%d total=%d", count, len(self._orders))
        return count

    def clear(self) -> None:
        self._orders.clear()

    async def get_order_details(self, order_id: int) -> OnChainOrder | None:
        return self._orders.get(order_id)

    async def list_orders(self, owner: str | None = None) -> list[OnChainOrder]:
        orders = sorted(self._orders.values(), key=lambda o: o.order_id)
        if owner is None:
            return orders
        return [o for o in orders if o.owner.lower() == owner.lower()]


order_store = InMemoryOrderStore()
