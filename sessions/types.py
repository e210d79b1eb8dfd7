"""
MODULE: sessions/types.py
PURPOSE: Conversation state kept per user identity.

Contains:
- HistoryEntry: One inbound message, stamped with the state it arrived in
- Session: Current state, selections, flow payload and error bookkeeping
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from workflows.common.states import START


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class HistoryEntry:
    timestamp: datetime
    raw_input: str
    state: str

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "input": self.raw_input,
            "state": self.state,
        }


@dataclass
class Session:
    """One user's conversation.

    Attributes:
        identity: Opaque channel identity (e.g. a WhatsApp number)
        state: Current state tag, owned by exactly one flow or the router
        selected_service: Main-menu category label, if chosen
        selected_sub_service: Sub-service label, if chosen
        domain_payload: Values collected by the current flow; None outside a flow
        payload_started_at: When the current payload was created
        history: Append-only inbound message log
        error_count: Consecutive unexpected failures, managed by error recovery
        submission_attempts: Submit calls made from the current confirmation
        submission_in_flight: True while a submit call is pending
    """
    identity: str
    state: str = START
    selected_service: Optional[str] = None
    selected_sub_service: Optional[str] = None
    domain_payload: Optional[Dict[str, Any]] = None
    payload_started_at: Optional[datetime] = None
    history: List[HistoryEntry] = field(default_factory=list)
    error_count: int = 0
    submission_attempts: int = 0
    submission_in_flight: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def record(self, raw_input: str, *, now: Optional[datetime] = None) -> HistoryEntry:
        entry = HistoryEntry(timestamp=now or utcnow(), raw_input=raw_input, state=self.state)
        self.history.append(entry)
        return entry

    @property
    def last_activity(self) -> datetime:
        if self.history:
            return self.history[-1].timestamp
        return self.created_at

    def start_payload(self, *, now: Optional[datetime] = None) -> Dict[str, Any]:
        self.domain_payload = {}
        self.payload_started_at = now or utcnow()
        self.submission_attempts = 0
        return self.domain_payload

    def clear_payload(self) -> None:
        self.domain_payload = None
        self.payload_started_at = None
        self.submission_attempts = 0
        self.submission_in_flight = False

    def clear_selection(self) -> None:
        self.selected_service = None
        self.selected_sub_service = None

    def to_dict(self) -> dict:
        return {
            "identity": self.identity,
            "state": self.state,
            "selectedService": self.selected_service,
            "selectedSubService": self.selected_sub_service,
            "domainPayload": self.domain_payload,
            "payloadStartedAt": self.payload_started_at.isoformat() if self.payload_started_at else None,
            "errorCount": self.error_count,
            "submissionAttempts": self.submission_attempts,
            "historyLength": len(self.history),
            "lastActivity": self.last_activity.isoformat(),
        }
