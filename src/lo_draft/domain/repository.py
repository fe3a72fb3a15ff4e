"""DraftSessionRepository Protocol — interface contract for session storage."""
from dataclasses import dataclass, field
from typing import Protocol

from src.lo_draft.domain.drag import DragInteractionController
from src.lo_draft.domain.models import DraftResult, OrderDraft


@dataclass
class DraftSession:
    session_id: str
    result: DraftResult
    drag: DragInteractionController = field(default_factory=DragInteractionController)

    @property
    def draft(self) -> OrderDraft:
        return self.result.draft


class DraftSessionRepositoryProtocol(Protocol):
    def save(self, session: DraftSession) -> None: ...

    def get(self, session_id: str) -> DraftSession | None: ...

    def delete(self, session_id: str) -> bool: ...
