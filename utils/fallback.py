"""
Fallback handling utilities for visible error reporting.

When a dispatch or a submission fails, the user gets a friendly message and
the failure is logged with enough context to trace it. Raw exception text is
only appended to user-facing replies when diagnostics are switched on.

Usage:
    from utils.fallback import create_fallback_context, wrap_fallback

    try:
        response = await dispatch(session, text)
    except Exception as exc:
        ctx = create_fallback_context(
            source="workflows.runtime.router.process",
            trigger="dispatch_failed",
            identity=session.identity,
            state=session.state,
            error=exc,
        )
        return wrap_fallback("Something went wrong. Type 'menu' to continue.", ctx)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class FallbackContext:
    """Context information for a fallback event."""

    source: str  # e.g., "workflows.engine.submit"
    trigger: str  # e.g., "dispatch_failed", "submission_unreachable"
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    # Optional context
    identity: Optional[str] = None
    state: Optional[str] = None
    flow_id: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/storage."""
        return {
            "source": self.source,
            "trigger": self.trigger,
            "timestamp": self.timestamp,
            "identity": self.identity,
            "state": self.state,
            "flow_id": self.flow_id,
            "error": self.error,
            "error_type": self.error_type,
        }


def create_fallback_context(
    source: str,
    trigger: str,
    *,
    identity: Optional[str] = None,
    state: Optional[str] = None,
    flow_id: Optional[str] = None,
    error: Optional[BaseException] = None,
) -> FallbackContext:
    """
    Create a fallback context for tracking and debugging.

    Args:
        source: The code location (e.g., "workflows.runtime.recovery")
        trigger: What caused the fallback (e.g., "dispatch_failed")
        identity: Channel identity of the affected session
        state: Session state when the failure happened
        flow_id: Owning flow, if any
        error: The exception that caused the fallback

    Returns:
        FallbackContext with all relevant information
    """
    return FallbackContext(
        source=source,
        trigger=trigger,
        identity=identity,
        state=state,
        flow_id=flow_id,
        error=str(error) if error else None,
        error_type=type(error).__name__ if error else None,
    )


def diagnostics_enabled() -> bool:
    return os.getenv("INTAKE_FALLBACK_DIAGNOSTICS", "").lower() in ("1", "true", "yes")


def log_fallback(context: FallbackContext) -> None:
    """Log fallback event for monitoring and debugging."""
    logger.warning(
        "[FALLBACK] source=%s trigger=%s identity=%s state=%s flow=%s",
        context.source,
        context.trigger,
        context.identity,
        context.state,
        context.flow_id,
    )
    if context.error:
        logger.warning("[FALLBACK]   %s: %s", context.error_type, context.error)


def wrap_fallback(
    user_message: str,
    context: FallbackContext,
    *,
    include_dev_info: bool = False,
) -> str:
    """
    Log the fallback and return the user-facing message.

    Developer diagnostics are appended only when ``include_dev_info`` is set
    or INTAKE_FALLBACK_DIAGNOSTICS is enabled.
    """
    log_fallback(context)

    if include_dev_info or diagnostics_enabled():
        dev_info = f"\n\n[DEV] Fallback: {context.source} | {context.trigger}"
        if context.error:
            dev_info += f" | Error: {context.error}"
        return user_message + dev_info

    return user_message


__all__ = [
    "FallbackContext",
    "create_fallback_context",
    "diagnostics_enabled",
    "log_fallback",
    "wrap_fallback",
]
