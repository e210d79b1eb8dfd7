"""External service clients."""

from .submission import SubmissionClient

__all__ = ["SubmissionClient"]
