"""
Error types for flow configuration and intake submission.

Validation failures are not exceptions; see ``workflows.common.validators``.
"""

from __future__ import annotations

from typing import Optional


class FlowConfigError(ValueError):
    """A flow table, menu catalog or registration is inconsistent.

    Raised at load or registration time only, never while handling a message.
    """


class SubmissionError(Exception):
    """Base class for intake service failures."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConnectivityError(SubmissionError):
    """The intake service could not be reached."""


class RemoteAPIError(SubmissionError):
    """The intake service answered with a well-formed error."""


class UnknownError(SubmissionError):
    """Any other submission failure."""


__all__ = [
    "FlowConfigError",
    "SubmissionError",
    "ConnectivityError",
    "RemoteAPIError",
    "UnknownError",
]
