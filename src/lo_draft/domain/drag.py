"""DragInteractionController: price-marker drag as an explicit state machine.

    IDLE --begin_drag--> DRAGGING --end_drag--> COOLDOWN --(cooldown elapsed)--> IDLE
                             |                                       ^
                             +------- end_drag(abandoned=True) ------+ (straight to IDLE)

The percent range is frozen at begin_drag. Updates closer together than the
throttle interval are held as a single pending update; end_drag emits the
latest value unthrottled. All times are seconds from the injected clock.

Percents here are percent-from-market in displayed space: with invert on, a
positive percent raises the on-screen price, which lowers the canonical one.
"""
import math
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from src.lo_common.enums import DragPhase
from src.lo_draft.domain.pricing import price_from_percent


@dataclass(frozen=True)
class DragUpdate:
    target: int  # buy line index being dragged
    price: float | None  # canonical
    percent: float  # displayed-space percent from market


def drag_range(
    line_percents: Iterable[float | None],
    default_range: float = 30.0,
    bucket: float = 10.0,
    padding: float = 5.0,
) -> float:
    """Half-height of the chart in percent: 30, or the furthest line rounded up a bucket plus padding.

    `line_percents` are displayed-space percents from market, as the draft reports them.
    """
    furthest = max((abs(p) for p in line_percents if p is not None), default=0.0)
    if furthest <= default_range:
        return default_range
    return math.ceil(furthest / bucket) * bucket + padding


def percent_for_pointer(pointer_y: float, height: float, range_percent: float) -> float:
    y = min(max(pointer_y, 0.0), height)
    return ((height - y) / height) * 2 * range_percent - range_percent


def pointer_for_percent(percent: float, height: float, range_percent: float) -> float:
    clamped = min(max(percent, -range_percent), range_percent)
    return height - ((clamped + range_percent) / (2 * range_percent)) * height


class DragInteractionController:
    def __init__(
        self,
        throttle_ms: int = 50,
        cooldown_ms: int = 300,
        default_range: float = 30.0,
        bucket: float = 10.0,
        padding: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._throttle = throttle_ms / 1000
        self._cooldown = cooldown_ms / 1000
        self._default_range = default_range
        self._bucket = bucket
        self._padding = padding
        self._clock = clock

        self._phase = DragPhase.IDLE
        self._target = 0
        self._market_price: float | None = None
        self._invert = True
        self._range = default_range
        self._last_emit_at: float | None = None
        self._pending: DragUpdate | None = None
        self._latest: DragUpdate | None = None
        self._cooldown_until = 0.0

    def _now(self, now: float | None) -> float:
        return self._clock() if now is None else now

    def phase(self, now: float | None = None) -> DragPhase:
        if self._phase == DragPhase.COOLDOWN and self._now(now) >= self._cooldown_until:
            self._phase = DragPhase.IDLE
            self._latest = None
        return self._phase

    @property
    def range_percent(self) -> float:
        return self._range

    @property
    def target(self) -> int:
        return self._target

    def begin_drag(
        self,
        target: int,
        market_price: float | None,
        invert: bool,
        line_percents: Iterable[float | None] = (),
        now: float | None = None,
    ) -> None:
        """Start a drag; an active drag is abandoned first, a cooldown is cut short."""
        now = self._now(now)
        if self.phase(now) == DragPhase.DRAGGING:
            self.end_drag(now=now, abandoned=True)
        self._phase = DragPhase.DRAGGING
        self._target = target
        self._market_price = market_price
        self._invert = invert
        self._range = drag_range(line_percents, self._default_range, self._bucket, self._padding)
        self._last_emit_at = None
        self._pending = None
        self._latest = None
        self._cooldown_until = 0.0

    def _make_update(self, percent: float) -> DragUpdate:
        price = price_from_percent(self._market_price, percent, self._invert)
        return DragUpdate(target=self._target, price=price, percent=percent)

    def update_drag(
        self, pointer_y: float, container_height: float, now: float | None = None
    ) -> DragUpdate | None:
        """Map a pointer position to an update; None while throttled or not dragging."""
        now = self._now(now)
        if self.phase(now) != DragPhase.DRAGGING or container_height <= 0:
            return None
        update = self._make_update(percent_for_pointer(pointer_y, container_height, self._range))
        self._latest = update
        if self._last_emit_at is not None and now - self._last_emit_at < self._throttle:
            self._pending = update
            return None
        self._pending = None
        self._last_emit_at = now
        return update

    def flush(self, now: float | None = None) -> DragUpdate | None:
        """Emit the held update once the throttle interval has passed."""
        now = self._now(now)
        if self._pending is None or self.phase(now) != DragPhase.DRAGGING:
            return None
        if self._last_emit_at is not None and now - self._last_emit_at < self._throttle:
            return None
        update, self._pending = self._pending, None
        self._last_emit_at = now
        return update

    def end_drag(self, now: float | None = None, abandoned: bool = False) -> DragUpdate | None:
        now = self._now(now)
        if self.phase(now) != DragPhase.DRAGGING:
            return None
        self._pending = None
        if abandoned or self._latest is None:
            self._phase = DragPhase.IDLE
            self._latest = None
            return None
        self._phase = DragPhase.COOLDOWN
        self._cooldown_until = now + self._cooldown
        return self._latest

    def display_price(self, now: float | None = None) -> float | None:
        """Dragged price while dragging or cooling down, else None (show the draft's own price)."""
        if self.phase(now) == DragPhase.IDLE or self._latest is None:
            return None
        return self._latest.price

    def display_percent(self, now: float | None = None) -> float | None:
        if self.phase(now) == DragPhase.IDLE or self._latest is None:
            return None
        return self._latest.percent

    def pointer_y_for_percent(self, percent: float, container_height: float) -> float:
        return pointer_for_percent(percent, container_height, self._range)
