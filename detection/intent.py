"""
Command Intent Resolution - One Lookup Per Message

Inbound chat text is resolved exactly once into an Intent before any flow
sees it. Matching is keyword based: trimmed, case-insensitive, trailing
punctuation ignored. Each state may add digit shortcuts (e.g. "1" = confirm
on a confirmation screen); shortcuts win over the shared keyword table.

Text that matches nothing resolves to Intent.NONE and is treated as field
input by the flow engine.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class Intent(str, Enum):
    """Closed set of commands understood across every flow."""

    GREETING = "greeting"
    START = "start"
    MENU = "menu"
    BACK = "back"
    HELP = "help"
    RESET = "reset"
    PROCEED = "proceed"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    EDIT = "edit"
    RETRY = "retry"
    DOCUMENTS = "documents"
    NONE = "none"


# =============================================================================
# KEYWORDS
# =============================================================================

_KEYWORDS: Dict[str, Intent] = {
    "hi": Intent.GREETING,
    "hello": Intent.GREETING,
    "hey": Intent.GREETING,
    "start": Intent.START,
    "restart": Intent.START,
    "menu": Intent.MENU,
    "main menu": Intent.MENU,
    "back": Intent.BACK,
    "help": Intent.HELP,
    "reset": Intent.RESET,
    "proceed": Intent.PROCEED,
    "apply": Intent.PROCEED,
    "continue": Intent.PROCEED,
    "confirm": Intent.CONFIRM,
    "submit": Intent.CONFIRM,
    "cancel": Intent.CANCEL,
    "edit": Intent.EDIT,
    "retry": Intent.RETRY,
    "try again": Intent.RETRY,
    "documents": Intent.DOCUMENTS,
    "docs": Intent.DOCUMENTS,
}

_TRAILING_PUNCTUATION = ".!?,"


def normalize_text(text: Optional[str]) -> str:
    """Lowercase, trim and strip trailing punctuation."""
    if not text:
        return ""
    return text.strip().lower().rstrip(_TRAILING_PUNCTUATION).strip()


def resolve_intent(
    text: Optional[str],
    shortcuts: Optional[Mapping[str, Intent]] = None,
) -> Intent:
    """
    Map raw inbound text to an Intent.

    Args:
        text: Raw message text
        shortcuts: Per-state overrides, e.g. {"1": Intent.CONFIRM}

    Returns:
        The matched Intent, or Intent.NONE
    """
    normalized = normalize_text(text)
    if not normalized:
        return Intent.NONE

    if shortcuts and normalized in shortcuts:
        intent = shortcuts[normalized]
        logger.debug("[INTENT] shortcut %r -> %s", normalized, intent.value)
        return intent

    return _KEYWORDS.get(normalized, Intent.NONE)


def is_greeting(intent: Intent) -> bool:
    return intent in (Intent.GREETING, Intent.START)


__all__ = ["Intent", "resolve_intent", "normalize_text", "is_greeting"]
