"""
In-memory store of search form sessions.

A session is one FlightSearchOrchestrator; nothing survives a restart.
Idle sessions expire after SESSION_TTL_MINUTES (settings), purged lazily on
every create/get.

Use as FastAPI dependency:
    store = Annotated[SessionStore, Depends(get_session_store)]
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone

from skyform.config import settings
from skyform.services.orchestrator import FlightSearchOrchestrator

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:

    def __init__(self, ttl: timedelta) -> None:
        self.ttl = ttl
        self._sessions: dict[str, tuple[FlightSearchOrchestrator, datetime]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def _cutoff(self) -> datetime:
        """Sessions last seen before this instant are expired."""
        return _now() - self.ttl

    def purge_expired(self) -> int:
        cutoff = self._cutoff()
        expired = [sid for sid, (_, seen) in self._sessions.items() if seen < cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Purged %d expired form sessions", len(expired))
        return len(expired)

    def create(self, orchestrator: FlightSearchOrchestrator) -> str:
        self.purge_expired()
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = (orchestrator, _now())
        logger.debug("Created form session %s", session_id)
        return session_id

    def get(self, session_id: str) -> FlightSearchOrchestrator | None:
        """The session's orchestrator (refreshing its TTL), or None if unknown/expired."""
        self.purge_expired()
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        orchestrator = entry[0]
        self._sessions[session_id] = (orchestrator, _now())
        return orchestrator

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        self._sessions.clear()


_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Return the process-wide store (lazy singleton)."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(ttl=timedelta(minutes=settings.session_ttl_minutes))
    return _session_store


def close_session_store() -> None:
    """Drop every session. Called on shutdown by the lifespan."""
    global _session_store
    if _session_store is not None:
        logger.info("Closing session store (%d sessions)", len(_session_store))
        _session_store.clear()
        _session_store = None
