"""PositionApplicationService — order collection views over the processor.

Reads capture one market snapshot and one `now` per call.
"""
import logging
from collections.abc import Callable, Iterable

from src.lo_common.datetime_utils import unix_now
from src.lo_common.enums import SortDirection, SortField
from src.lo_common.errors import OrderNotFoundError
from src.lo_market.application.service import current_market
from src.lo_market.domain.pricing import MarketContext
from src.lo_position.application.schemas import (
    ExpiredOrdersResponse,
    IngestResponse,
    OnChainOrderIn,
    PositionListResponse,
    PositionOut,
)
from src.lo_position.domain.models import PositionFilter
from src.lo_position.domain.processor import (
    bucket_counts,
    expired_order_ids,
    filter_orders,
    sort_orders,
)
from src.lo_position.domain.repository import OrderSourceProtocol
from src.lo_position.infrastructure.order_store import order_store

logger = logging.getLogger(__name__)


class PositionApplicationService:
    def __init__(
        self,
        store: OrderSourceProtocol | None = None,
        market_provider: Callable[[], MarketContext] = current_market,
        clock: Callable[[], int] = unix_now,
    ) -> None:
        self._store: OrderSourceProtocol = store if store is not None else order_store
        self._market_provider = market_provider
        self._clock = clock

    def ingest(self, orders: Iterable[OnChainOrderIn]) -> IngestResponse:
        return IngestResponse(ingested=self._store.upsert_many(o.to_domain() for o in orders))

    async def list_positions(
        self,
        criteria: PositionFilter,
        sort_field: SortField,
        direction: SortDirection,
        viewer: str | None,
    ) -> PositionListResponse:
        market = self._market_provider()
        now = self._clock()
        orders = await self._store.list_orders()
        selected = filter_orders(orders, criteria, viewer=viewer, now=now, registry=market.registry)
        ordered = sort_orders(selected, sort_field, direction, market=market)
        counts = bucket_counts(orders, criteria, viewer=viewer, now=now, registry=market.registry)
        logger.debug(
            "Positions listed: filter=%s sort=%s/%s -> %d of %d",
            criteria, sort_field.value, direction.value, len(ordered), len(orders),
        )
        return PositionListResponse(
            items=[PositionOut.from_domain(o, market, now) for o in ordered],
            counts=counts,
            total=len(ordered),
        )

    async def get_position(self, order_id: int) -> PositionOut:
        order = await self._store.get_order_details(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return PositionOut.from_domain(order, self._market_provider(), self._clock())

    async def expired(self, viewer: str | None) -> ExpiredOrdersResponse:
        orders = await self._store.list_orders(owner=viewer)
        return ExpiredOrdersResponse(order_ids=expired_order_ids(orders, viewer, self._clock()))
