"""In-memory registry of page sessions for the HTTP daemon."""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from collections.abc import Callable

from png_vectorizer.application.session import VectorizerSession
from png_vectorizer.errors import SessionNotFoundError

logger = logging.getLogger(__name__)


class SessionStore:
    """Bounded, least-recently-used store of :class:`VectorizerSession`.

    Sessions live only in process memory. When ``max_sessions`` is reached
    the least recently used session is evicted.
    """

    def __init__(
        self,
        max_sessions: int = 256,
        factory: Callable[[], VectorizerSession] = VectorizerSession,
    ) -> None:
        if max_sessions <= 0:
            raise ValueError("max_sessions must be > 0")
        self._max_sessions = max_sessions
        self._factory = factory
        self._sessions: OrderedDict[str, VectorizerSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def create(self) -> tuple[str, VectorizerSession]:
        """Create a new session and return its id with the session."""
        while len(self._sessions) >= self._max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.debug("evicted session %s", evicted)
        session_id = uuid.uuid4().hex
        session = self._factory()
        self._sessions[session_id] = session
        return session_id, session

    def get(self, session_id: str) -> VectorizerSession:
        """Return the session for *session_id*.

        Raises
        ------
        SessionNotFoundError
            If the id is unknown or was evicted.
        """
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"unknown session: {session_id}") from None
        self._sessions.move_to_end(session_id)
        return session
