"""Inbound message command resolution."""

from .intent import Intent, is_greeting, normalize_text, resolve_intent

__all__ = ["Intent", "is_greeting", "normalize_text", "resolve_intent"]
