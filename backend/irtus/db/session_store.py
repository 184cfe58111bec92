"""
Process-local store for pitch deck form sessions.

Sessions live only in memory and are discarded on reset, delete or restart;
nothing is persisted.
"""

import logging
from uuid import UUID

from irtus.core.exceptions import SessionNotFoundError
from irtus.schemas.session import GenerationSession

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self) -> None:
        self._sessions: dict[UUID, GenerationSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: UUID) -> bool:
        return session_id in self._sessions

    def create(self) -> GenerationSession:
        session = GenerationSession()
        self._sessions[session.id] = session
        logger.debug("Created session %s", session.id)
        return session

    def get(self, session_id: UUID) -> GenerationSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def delete(self, session_id: UUID) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.debug("Deleted session %s", session_id)

    def clear(self) -> None:
        self._sessions.clear()


session_store = SessionStore()


def get_session_store() -> SessionStore:
    """FastAPI dependency returning the process-wide session store."""
    return session_store
