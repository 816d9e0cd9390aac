import logging
import secrets
import time
from threading import Lock
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class SessionStore:
    """Server-side sessions: session id -> (user id, expiry)."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, Tuple[int, float]] = {}
        self._lock = Lock()

    def create(self, user_id: int) -> str:
        session_id = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[session_id] = (user_id, self._clock() + self.ttl_seconds)
        return session_id

    def resolve(self, session_id: str) -> Optional[int]:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            user_id, expires_at = entry
            if self._clock() >= expires_at:
                del self._sessions[session_id]
                return None
            return user_id

    def destroy(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [sid for sid, (_, expires_at) in self._sessions.items() if now >= expires_at]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info("Purged %d expired sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
