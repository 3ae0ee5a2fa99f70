"""In-process store for authenticated session tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import secrets
import threading
from typing import Dict, Optional

from authgate.dtos.user_record import UserRecord


logger = logging.getLogger(__name__)


class SessionStoreError(RuntimeError):
    """Raised when a session cannot be created or destroyed."""


@dataclass(frozen=True)
class SessionEntry:
    """Bookkeeping kept for each live token."""

    username: str
    createdAt: datetime


class SessionStore:
    """Issue opaque tokens for logged in accounts and track which are live."""

    TOKEN_BYTES = 32

    def __init__(self) -> None:
        self._sessions: Dict[str, SessionEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _utcnow() -> datetime:
        """Return the current UTC timestamp with second precision."""

        return datetime.now(timezone.utc).replace(microsecond=0)

    def create(self, account: UserRecord) -> str:
        """Open a session for ``account`` and return its token."""

        if not account.username:
            raise SessionStoreError("Cannot open a session for an account without username.")
        token = secrets.token_urlsafe(self.TOKEN_BYTES)
        with self._lock:
            self._sessions[token] = SessionEntry(username=account.username, createdAt=self._utcnow())
        return token

    def destroy(self, token: Optional[str]) -> None:
        """Close the session; unknown tokens are ignored."""

        if not token:
            return
        with self._lock:
            removed = self._sessions.pop(token, None)
        if removed is None:
            logger.debug("Ignoring logout for an unknown session token")

    def is_guest(self, token: Optional[str]) -> bool:
        """Return ``True`` unless ``token`` belongs to a live session."""

        if not token:
            return True
        with self._lock:
            return token not in self._sessions

    def get_username(self, token: Optional[str]) -> Optional[str]:
        """Return the username behind a live token, if any."""

        if not token:
            return None
        with self._lock:
            entry = self._sessions.get(token)
        return entry.username if entry else None

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)
