"""
MODULE: activity/__init__.py
PURPOSE: Application progress reporting for diagnostics.

Provides:
- Progress bar showing intake stages (service → details → review → submitted)
- Minimal progress summaries for session listings
"""

from .types import ProgressStage, Progress
from .progress import get_progress, get_progress_summary, CORE_STATE_PROGRESS

__all__ = [
    # Types
    "ProgressStage",
    "Progress",
    # Progress
    "get_progress",
    "get_progress_summary",
    "CORE_STATE_PROGRESS",
]
