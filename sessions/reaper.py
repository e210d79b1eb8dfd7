"""
MODULE: sessions/reaper.py
PURPOSE: Periodic removal of finished and stuck sessions.

Two rules:
- Sessions resting in a flow's end state are removed once their payload is
  older than ``max_age`` (default 24h).
- Sessions stuck in error recovery are removed once their last message is
  older than ``recovery_idle`` (default 1h).
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from workflows.common.states import RECOVERY

from .store import SessionStore
from .types import Session, utcnow

logger = logging.getLogger(__name__)


class SessionReaper:
    def __init__(
        self,
        store: SessionStore,
        is_terminal: Callable[[str], bool],
        *,
        max_age: timedelta = timedelta(hours=24),
        recovery_idle: timedelta = timedelta(hours=1),
    ) -> None:
        self._store = store
        self._is_terminal = is_terminal
        self.max_age = max_age
        self.recovery_idle = recovery_idle

    def is_expired(self, session: Session, now: datetime) -> bool:
        if session.state == RECOVERY:
            return now - session.last_activity > self.recovery_idle
        if self._is_terminal(session.state):
            started = session.payload_started_at or session.created_at
            return now - started > self.max_age
        return False

    def sweep(self, now: Optional[datetime] = None) -> int:
        """Delete expired sessions and return how many were removed."""
        now = now or utcnow()
        removed = 0
        for session in self._store.all():
            if self._store.is_busy(session.identity):
                continue
            if self.is_expired(session, now):
                self._store.discard(session.identity)
                removed += 1
        if removed:
            logger.info("[REAPER] Removed %d expired session(s)", removed)
        return removed

    async def run_periodically(self, interval_seconds: float) -> None:
        """Sweep forever; cancel the task to stop."""
        logger.info("[REAPER] Sweeping every %.0fs", interval_seconds)
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                self.sweep()
            except Exception as exc:
                logger.exception("[REAPER] Sweep failed: %s", exc)


__all__ = ["SessionReaper"]
