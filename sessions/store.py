"""
MODULE: sessions/store.py
PURPOSE: Session storage with per-identity serialization.

Messages for one identity are processed strictly one at a time, in arrival
order: ``session(identity)`` holds an asyncio.Lock (FIFO waiters) for the
duration of one dispatch. Different identities never contend.

The in-memory store is the default; anything implementing SessionStore
(e.g. an identity-sharded external store) can replace it.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Iterator, List, Optional

from .types import Session

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Interface the router depends on."""

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        # Holders plus queued waiters per identity
        self._users: Dict[str, int] = {}

    @abstractmethod
    def get(self, identity: str) -> Optional[Session]:
        """Return the session for ``identity`` without creating one."""

    @abstractmethod
    def get_or_create(self, identity: str) -> Session:
        """Return the session for ``identity``, creating it in the start state."""

    @abstractmethod
    def reset(self, identity: str) -> None:
        """Discard the session; the next access starts fresh."""

    @abstractmethod
    def all(self) -> Iterator[Session]:
        """Iterate over every stored session."""

    def discard(self, identity: str) -> None:
        """Remove a session and its lock, unless a message holds or awaits it."""
        self.reset(identity)
        if not self.is_busy(identity):
            self._locks.pop(identity, None)

    def is_busy(self, identity: str) -> bool:
        """True while a message for ``identity`` is being handled or queued.

        ``Lock.locked()`` alone is not enough: it reads False between a
        release and the next waiter waking up.
        """
        return self._users.get(identity, 0) > 0

    def lock_for(self, identity: str) -> asyncio.Lock:
        lock = self._locks.get(identity)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[identity] = lock
        return lock

    @asynccontextmanager
    async def hold(self, identity: str) -> AsyncIterator[None]:
        """Hold the identity's lock without touching its session."""
        lock = self.lock_for(identity)
        self._users[identity] = self._users.get(identity, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._users[identity] - 1
            if remaining:
                self._users[identity] = remaining
            else:
                del self._users[identity]

    @asynccontextmanager
    async def session(self, identity: str) -> AsyncIterator[Session]:
        """Hold the identity's lock and yield its session."""
        async with self.hold(identity):
            yield self.get_or_create(identity)


class InMemorySessionStore(SessionStore):
    """Process-local store; sessions do not survive a restart."""

    def __init__(self) -> None:
        super().__init__()
        self._sessions: Dict[str, Session] = {}

    def get(self, identity: str) -> Optional[Session]:
        return self._sessions.get(identity)

    def get_or_create(self, identity: str) -> Session:
        session = self._sessions.get(identity)
        if session is None:
            session = Session(identity=identity)
            self._sessions[identity] = session
            logger.info("[SESSION] Created session for %s", identity)
        return session

    def reset(self, identity: str) -> None:
        if self._sessions.pop(identity, None) is not None:
            logger.info("[SESSION] Reset session for %s", identity)

    def all(self) -> Iterator[Session]:
        # Snapshot so callers may discard while iterating
        sessions: List[Session] = list(self._sessions.values())
        return iter(sessions)

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["SessionStore", "InMemorySessionStore"]
