"""MarketSnapshotStore — holds the current MarketSnapshot.

Readers take `current()` once per operation and keep that object for the
whole computation; `replace()` swaps the reference in a single assignment.
"""
import logging
from collections.abc import Mapping

from src.lo_common.datetime_utils import utc_now
from src.lo_market.domain.models import MarketSnapshot
from src.lo_market.domain.registry import canonical_address

logger = logging.getLogger(__name__)


class MarketSnapshotStore:
    def __init__(self, snapshot: MarketSnapshot | None = None) -> None:
        self._snapshot = snapshot or MarketSnapshot()

    def current(self) -> MarketSnapshot:
        return self._snapshot

    def replace(self, prices: Mapping[str, float]) -> MarketSnapshot:
        snapshot = MarketSnapshot(
            prices={canonical_address(a): float(p) for a, p in prices.items()},
            fetched_at=utc_now(),
        )
        self._snapshot = snapshot
        logger.info("Market snapshot replaced: tokens=%d", len(snapshot.prices))
        return snapshot


market_snapshot_store = MarketSnapshotStore()
