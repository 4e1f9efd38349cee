"""Registry of calls that are in progress.

Sessions live only between "create call" and "end call" in the process
that created them. Nothing expires them: a call that is never ended keeps
its entry until the process exits.
"""

from __future__ import annotations

import threading
from typing import Optional, Protocol

from callcoach.storage.models import CallSession


class CallSessionStore(Protocol):
    def set(self, session: CallSession) -> None: ...

    def get(self, call_id: str) -> Optional[CallSession]: ...

    def delete(self, call_id: str) -> Optional[CallSession]: ...

    def all(self) -> list[CallSession]: ...


class InMemoryCallSessionStore:
    """Process-local session store for single-instance deployments."""

    def __init__(self):
        self._sessions: dict[str, CallSession] = {}
        self._lock = threading.Lock()

    def set(self, session: CallSession) -> None:
        with self._lock:
            self._sessions[session.call_id] = session

    def get(self, call_id: str) -> Optional[CallSession]:
        with self._lock:
            return self._sessions.get(call_id)

    def delete(self, call_id: str) -> Optional[CallSession]:
        """Remove and return the session; None if already gone."""
        with self._lock:
            return self._sessions.pop(call_id, None)

    def all(self) -> list[CallSession]:
        with self._lock:
            return list(self._sessions.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
