"""In-process draft session storage."""
from src.lo_draft.domain.repository import DraftSession


class InMemoryDraftSessionStore:
    def __init__(self) -> None:
        self._sessions: dict[str, DraftSession] = {}

    def save(self, session: DraftSession) -> None:
        self._sessions[session.session_id] = session

    def get(self, session_id: str) -> DraftSession | None:
        return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
