"""DraftApplicationService — draft sessions over the pure reducer.

Each call captures the market snapshot current at its start and uses it for
the whole reduction.
"""
import logging
from collections.abc import Callable

from config.settings import settings
from src.lo_common.datetime_utils import unix_now
from src.lo_common.errors import DraftSessionNotFoundError
from src.lo_common.id_generator import SnowflakeIdGenerator
from src.lo_draft.application.schemas import (
    CreateDraftRequest,
    DraftOut,
    SelectableTokenOut,
    SelectableTokensResponse,
    SubmissionOut,
)
from src.lo_draft.domain.allocator import selectable_tokens
from src.lo_draft.domain.drag import DragInteractionController, DragUpdate
from src.lo_draft.domain.models import DraftRules, new_draft
from src.lo_draft.domain.reducer import DraftAction, EditLinePrice, EditPrice, RefreshMarket, reduce
from src.lo_draft.domain.repository import DraftSession, DraftSessionRepositoryProtocol
from src.lo_draft.domain.submission import build_submission
from src.lo_draft.domain.synchronizer import check_line_index, line_market_price
from src.lo_draft.infrastructure.session_store import InMemoryDraftSessionStore
from src.lo_market.application.service import current_market
from src.lo_market.domain.models import TokenRef
from src.lo_market.domain.pricing import MarketContext
from src.lo_market.domain.token_table import HEX_ADDRESS, NATIVE_ADDRESS

logger = logging.getLogger(__name__)


def rules_from_settings() -> DraftRules:
    return DraftRules(
        max_buy_lines=settings.MAX_BUY_LINES,
        min_expiration_seconds=settings.MIN_EXPIRATION_SECONDS,
        default_expiration_seconds=settings.DEFAULT_EXPIRATION_DAYS * 86_400,
        protocol_fee_bps=settings.PROTOCOL_FEE_BPS,
        significant_figures=settings.DISPLAY_SIGNIFICANT_FIGURES,
        percent_display_epsilon=settings.PERCENT_DISPLAY_EPSILON,
    )


def drag_controller_from_settings() -> DragInteractionController:
    return DragInteractionController(
        throttle_ms=settings.DRAG_THROTTLE_MS,
        cooldown_ms=settings.DRAG_COOLDOWN_MS,
        default_range=settings.DEFAULT_RANGE_PERCENT,
        bucket=settings.RANGE_BUCKET_PERCENT,
        padding=settings.RANGE_PADDING_PERCENT,
    )


class DraftApplicationService:
    def __init__(
        self,
        store: DraftSessionRepositoryProtocol | None = None,
        market_provider: Callable[[], MarketContext] = current_market,
        rules: DraftRules | None = None,
        drag_factory: Callable[[], DragInteractionController] = drag_controller_from_settings,
        clock: Callable[[], int] = unix_now,
    ) -> None:
        self._store: DraftSessionRepositoryProtocol = (
            store if store is not None else InMemoryDraftSessionStore()
        )
        self._market_provider = market_provider
        self._rules = rules or rules_from_settings()
        self._drag_factory = drag_factory
        self._clock = clock
        self._ids = SnowflakeIdGenerator(prefix="DRF")

    def _get(self, session_id: str) -> DraftSession:
        session = self._store.get(session_id)
        if session is None:
            raise DraftSessionNotFoundError(session_id)
        return session

    def _out(self, session: DraftSession, market: MarketContext) -> DraftOut:
        return DraftOut.from_domain(
            session.session_id, session.result, session.drag, market, self._rules
        )

    def _apply(self, session: DraftSession, action: DraftAction, market: MarketContext) -> None:
        session.result = reduce(session.draft, action, market, self._rules)
        if session.result.errors:
            logger.debug(
                "Draft %s %s -> errors=%s",
                session.session_id,
                type(action).__name__,
                [e.code for e in session.result.errors],
            )

    def create(self, req: CreateDraftRequest) -> DraftOut:
        market = self._market_provider()
        registry = market.registry
        draft = new_draft(
            sell_token=registry.token_ref(req.sell_token or NATIVE_ADDRESS),
            buy_token=registry.token_ref(req.buy_token or HEX_ADDRESS),
            expiration_seconds=self._rules.default_expiration_seconds,
        )
        session = DraftSession(
            session_id=self._ids.next_id(),
            result=reduce(draft, RefreshMarket(), market, self._rules),
            drag=self._drag_factory(),
        )
        self._store.save(session)
        logger.info(
            "Draft created: id=%s sell=%s buy=%s",
            session.session_id,
            draft.sell_token.ticker if draft.sell_token else None,
            draft.primary.token.ticker if draft.primary.token else None,
        )
        return self._out(session, market)

    def get(self, session_id: str) -> DraftOut:
        session = self._get(session_id)
        market = self._market_provider()
        self._apply(session, RefreshMarket(), market)
        self._apply_drag(session, session.drag.flush(), market)
        return self._out(session, market)

    def delete(self, session_id: str) -> None:
        if not self._store.delete(session_id):
            raise DraftSessionNotFoundError(session_id)
        logger.info("Draft discarded: id=%s", session_id)

    def dispatch(self, session_id: str, action: DraftAction) -> DraftOut:
        session = self._get(session_id)
        market = self._market_provider()
        self._apply(session, action, market)
        return self._out(session, market)

    def resolve_token(self, address: str) -> TokenRef:
        return self._market_provider().registry.require(address).token

    def selectable_tokens(self, session_id: str, query: str = "") -> SelectableTokensResponse:
        session = self._get(session_id)
        items = selectable_tokens(session.draft, self._market_provider().registry, query)
        return SelectableTokensResponse(items=[SelectableTokenOut.from_domain(m) for m in items])

    # --- price marker drag ---

    def begin_drag(self, session_id: str, target: int) -> DraftOut:
        session = self._get(session_id)
        market = self._market_provider()
        draft = session.draft
        check_line_index(draft, target)
        market_price = line_market_price(draft, target, market)
        session.drag.begin_drag(
            target=target,
            market_price=market_price,
            invert=draft.invert,
            line_percents=[draft.effective_percent(i) for i in range(len(draft.buy_lines))],
        )
        return self._out(session, market)

    def _apply_drag(self, session: DraftSession, update: DragUpdate | None, market: MarketContext) -> None:
        if update is None or update.price is None:
            return
        if update.target == 0:
            self._apply(session, EditPrice(update.price), market)
        else:
            self._apply(session, EditLinePrice(update.target, update.price), market)

    def update_drag(self, session_id: str, pointer_y: float, container_height: float) -> DraftOut:
        session = self._get(session_id)
        market = self._market_provider()
        # a held update goes out first once the throttle interval has passed
        self._apply_drag(session, session.drag.flush(), market)
        self._apply_drag(session, session.drag.update_drag(pointer_y, container_height), market)
        return self._out(session, market)

    def end_drag(self, session_id: str, abandoned: bool = False) -> DraftOut:
        session = self._get(session_id)
        market = self._market_provider()
        self._apply_drag(session, session.drag.end_drag(abandoned=abandoned), market)
        return self._out(session, market)

    # --- submission ---

    def submission(self, session_id: str) -> SubmissionOut:
        session = self._get(session_id)
        submission = build_submission(
            session.draft,
            self._market_provider().registry,
            now=self._clock(),
            min_expiration_seconds=self._rules.min_expiration_seconds,
        )
        logger.info(
            "Submission built: id=%s sell=%s lines=%d",
            session_id,
            submission.sell_token_address,
            len(submission.buy_token_indices),
        )
        return SubmissionOut.from_domain(submission)
