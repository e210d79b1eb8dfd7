"""
MODULE: activity/types.py
PURPOSE: Data types for conversation progress reporting.

Contains:
- ProgressStage: One stage in the progress bar
- Progress: Complete progress state for one session
"""

from dataclasses import dataclass, field
from typing import List, Literal, Optional


StageStatus = Literal["completed", "active", "pending"]


@dataclass
class ProgressStage:
    """A single stage in the application progress bar.

    Attributes:
        id: Stage identifier (e.g., "service", "details")
        label: Display label (e.g., "Service", "Details")
        status: "completed", "active", or "pending"
        icon: Emoji icon for the stage
    """
    id: str
    label: str
    status: StageStatus
    icon: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "status": self.status,
            "icon": self.icon,
        }


@dataclass
class Progress:
    """Complete application progress state.

    Attributes:
        current_stage: ID of the currently active stage
        stages: Ordered list of all stages
        percentage: Progress percentage (0-100)
        flow_id: Flow the session is in, if any
    """
    current_stage: str
    stages: List[ProgressStage] = field(default_factory=list)
    percentage: int = 0
    flow_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "current_stage": self.current_stage,
            "stages": [s.to_dict() for s in self.stages],
            "percentage": self.percentage,
            "flow_id": self.flow_id,
        }
