from __future__ import annotations  # In-memory session store

import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator

from .state import Session


class SessionNotFound(KeyError):  # Unknown session identifier
    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"session not found: {self.session_id}"


class SessionStore:  # Process-lifetime mapping of session id to session record
    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def create(self, *, role: str, level: str, persona: str) -> Session:  # Allocate a session with a fresh id
        session = Session(id=str(uuid.uuid4()), role=role, level=level, persona=persona)
        with self._guard:
            self._sessions[session.id] = session
            self._locks[session.id] = threading.Lock()
        return session

    def get(self, session_id: str) -> Session:  # Look up a session or raise SessionNotFound
        with self._guard:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    @contextmanager
    def lock(self, session_id: str) -> Iterator[Session]:  # Hold the session's exclusive lock
        with self._guard:
            session = self._sessions.get(session_id)
            lock = self._locks.get(session_id)
        if session is None or lock is None:
            raise SessionNotFound(session_id)
        with lock:
            yield session

    def __contains__(self, session_id: object) -> bool:
        with self._guard:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._guard:
            return len(self._sessions)


__all__ = ["SessionNotFound", "SessionStore"]
