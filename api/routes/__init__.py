"""API route modules."""

from .messages import router as messages_router
from .sessions import router as sessions_router

__all__ = ["messages_router", "sessions_router"]
