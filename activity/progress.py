"""
MODULE: activity/progress.py
PURPOSE: Convert a session's state to a progress bar representation.

Maps router and flow states to 4 user-friendly stages:
  service → details → review → submitted
"""

from typing import Any, Dict, List, Optional

from sessions.types import Session
from workflows.common import states
from workflows.definitions import FlowDefinition, Phase

from .types import Progress, ProgressStage


# Stage definitions with icons
STAGE_DEFINITIONS = [
    {"id": "service", "label": "Service", "icon": "🧭"},
    {"id": "details", "label": "Details", "icon": "📝"},
    {"id": "review", "label": "Review", "icon": "📋"},
    {"id": "submitted", "label": "Submitted", "icon": "✅"},
]


# Router-owned states
CORE_STATE_PROGRESS: Dict[str, Dict[str, Any]] = {
    states.START: {"stage": "service", "percentage": 0},
    states.MAIN_MENU: {"stage": "service", "percentage": 10},
    states.SUB_SERVICES: {"stage": "service", "percentage": 20},
    states.DEFAULT: {"stage": "service", "percentage": 0},
    states.RECOVERY: {"stage": "service", "percentage": 0},
}

ENTRY_PERCENTAGE = 25
FIELDS_START = 30
FIELDS_SPAN = 55
REVIEW_PERCENTAGE = 90


def get_progress(session: Optional[Session], definition: Optional[FlowDefinition] = None) -> Progress:
    """
    Get progress state for a session.

    Args:
        session: Session to report on, or None
        definition: Flow that owns the session's state, if any

    Returns:
        Progress object with current stage and percentage

    Example:
        >>> progress = get_progress(Session(identity="x", state="main_menu"))
        >>> progress.current_stage
        'service'
        >>> progress.percentage
        10
    """
    if session is None:
        return _build_progress("service", 0)

    if definition is None or not definition.owns(session.state):
        info = CORE_STATE_PROGRESS.get(session.state, {"stage": "service", "percentage": 0})
        return _build_progress(info["stage"], info["percentage"])

    spec = definition.state(session.state)
    flow_id = definition.flow_id

    if spec.phase == Phase.ENTRY:
        return _build_progress("service", ENTRY_PERCENTAGE, flow_id)
    if spec.phase == Phase.CONFIRMATION:
        return _build_progress("review", REVIEW_PERCENTAGE, flow_id)
    if spec.phase == Phase.END:
        return _build_progress("submitted", 100, flow_id)

    field_states = [s.name for s in definition.field_states()]
    index = field_states.index(spec.name)
    percentage = FIELDS_START + int(FIELDS_SPAN * index / len(field_states))
    return _build_progress("details", percentage, flow_id)


def _build_progress(current_stage_id: str, percentage: int, flow_id: Optional[str] = None) -> Progress:
    """Build Progress object with all stages marked appropriately."""
    stages: List[ProgressStage] = []
    found_current = False

    for stage_def in STAGE_DEFINITIONS:
        stage_id = stage_def["id"]

        if stage_id == current_stage_id:
            status = "active"
            found_current = True
        elif found_current:
            status = "pending"
        else:
            status = "completed"

        stages.append(ProgressStage(
            id=stage_id,
            label=stage_def["label"],
            status=status,
            icon=stage_def["icon"],
        ))

    return Progress(
        current_stage=current_stage_id,
        stages=stages,
        percentage=percentage,
        flow_id=flow_id,
    )


def get_progress_summary(session: Optional[Session], definition: Optional[FlowDefinition] = None) -> Dict[str, Any]:
    """
    Get a minimal progress summary for API responses.

    Returns dict suitable for embedding in a session listing:
        {"current_stage": "details", "percentage": 57}
    """
    progress = get_progress(session, definition)
    return {
        "current_stage": progress.current_stage,
        "percentage": progress.percentage,
    }
