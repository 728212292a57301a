from __future__ import annotations

from threading import Lock
from typing import Dict, Optional, Protocol

from google.oauth2.credentials import Credentials


DEFAULT_SESSION_ID = "default"


class SessionStore(Protocol):
    def get(self, session_id: str) -> Optional[Credentials]: ...
    def save(self, session_id: str, credentials: Credentials) -> None: ...
    def delete(self, session_id: str) -> None: ...


class InMemorySessionStore:
    """Mailbox credentials per session id. Lost on restart."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._sessions: Dict[str, Credentials] = {}

    def get(self, session_id: str) -> Optional[Credentials]:
        with self._lock:
            return self._sessions.get(session_id)

    def save(self, session_id: str, credentials: Credentials) -> None:
        with self._lock:
            self._sessions[session_id] = credentials

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
