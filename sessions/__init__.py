"""
MODULE: sessions/__init__.py
PURPOSE: Per-identity conversation state.

Provides:
- Session / HistoryEntry data model
- SessionStore interface with an in-memory default
- SessionReaper for expiring finished and stuck sessions
"""

from .types import HistoryEntry, Session
from .store import InMemorySessionStore, SessionStore
from .reaper import SessionReaper

__all__ = [
    "HistoryEntry",
    "Session",
    "SessionStore",
    "InMemorySessionStore",
    "SessionReaper",
]
