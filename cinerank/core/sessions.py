"""
Session management for cookie-based authentication.

Maps opaque session tokens to user IDs with a fixed time-to-live. Sessions
live in process memory only, so a restart logs everybody out.
"""

import logging
import secrets
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from cinerank.core.errors import SessionNotFoundError

logger = logging.getLogger(__name__)


DEFAULT_SESSION_TTL = timedelta(hours=24)
DEFAULT_SWEEP_INTERVAL = timedelta(hours=1)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionData:
    """A single authenticated session."""

    token: str
    user_id: int
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


class SessionStore(ABC):
    """
    Interface for session storage.

    Implementations must be safe to call from concurrent request threads.
    """

    ttl: timedelta = DEFAULT_SESSION_TTL

    @abstractmethod
    def create(self, user_id: int) -> str:
        """Start a session for a user and return its token."""

    @abstractmethod
    def resolve(self, token: str) -> int:
        """
        Look up the user ID for a token.

        Raises:
            SessionNotFoundError: If the token is unknown or expired
        """

    @abstractmethod
    def invalidate(self, token: str) -> None:
        """Remove a session. Unknown tokens are ignored."""

    @abstractmethod
    def invalidate_user(self, user_id: int) -> int:
        """Remove every session belonging to a user, returning how many."""

    @abstractmethod
    def purge_expired(self) -> int:
        """Remove expired sessions, returning how many were dropped."""


class InMemorySessionStore(SessionStore):
    """
    Lock-guarded in-memory session table.

    Expired entries are dropped when they are looked up, and the whole table
    is swept at most once per sweep interval when new sessions are created.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        sweep_interval: timedelta = DEFAULT_SWEEP_INTERVAL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the session store.

        Args:
            ttl: Lifetime of a new session
            sweep_interval: Minimum time between full sweeps of expired entries
            clock: Callable returning the current aware datetime (for tests)
        """
        self.ttl = ttl
        self.sweep_interval = sweep_interval
        self._clock = clock or utcnow
        self._sessions: Dict[str, SessionData] = {}
        self._lock = threading.Lock()
        self._last_sweep = self._clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, user_id: int) -> str:
        token = secrets.token_urlsafe(32)
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.sweep_interval:
                self._purge_locked(now)
            self._sessions[token] = SessionData(
                token=token,
                user_id=user_id,
                expires_at=now + self.ttl,
            )
        logger.debug("Created session for user %s", user_id)
        return token

    def resolve(self, token: str) -> int:
        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                raise SessionNotFoundError("Session not found")
            if session.is_expired(now):
                del self._sessions[token]
                raise SessionNotFoundError("Session expired")
            return session.user_id

    def get(self, token: str) -> Optional[SessionData]:
        """Return the live session for a token, or None."""
        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None or session.is_expired(now):
                return None
            return session

    def invalidate(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def invalidate_user(self, user_id: int) -> int:
        with self._lock:
            tokens = [t for t, s in self._sessions.items() if s.user_id == user_id]
            for token in tokens:
                del self._sessions[token]
        if tokens:
            logger.info("Dropped %d session(s) for user %s", len(tokens), user_id)
        return len(tokens)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            return self._purge_locked(now)

    def _purge_locked(self, now: datetime) -> int:
        expired = [t for t, s in self._sessions.items() if s.is_expired(now)]
        for token in expired:
            del self._sessions[token]
        self._last_sweep = now
        if expired:
            logger.debug("Purged %d expired session(s)", len(expired))
        return len(expired)
