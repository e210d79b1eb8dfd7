"""
Tests for activity/progress.py - state to progress bar conversion.
"""

from activity.progress import get_progress, get_progress_summary
from sessions.types import Session
from workflows.common import states
from workflows.flows import company_registration, vat_registration


class TestCoreStates:
    def test_no_session(self):
        progress = get_progress(None)
        assert progress.current_stage == "service"
        assert progress.percentage == 0

    def test_main_menu(self):
        progress = get_progress(Session(identity="x", state=states.MAIN_MENU))
        assert progress.current_stage == "service"
        assert progress.percentage == 10
        assert progress.flow_id is None
        assert [stage.status for stage in progress.stages] == ["active", "pending", "pending", "pending"]


class TestFlowStates:
    def test_entry_state(self):
        definition = vat_registration.build()
        progress = get_progress(Session(identity="x", state=definition.entry_state), definition)
        assert progress.current_stage == "service"
        assert progress.percentage == 25
        assert progress.flow_id == "vat_registration"

    def test_field_states_advance(self):
        definition = vat_registration.build()
        percentages = [
            get_progress(Session(identity="x", state=spec.name), definition).percentage
            for spec in definition.field_states()
        ]
        assert percentages[0] == 30
        assert percentages == sorted(percentages)
        assert percentages[-1] < 90

    def test_review_marks_earlier_stages_completed(self):
        definition = company_registration.build()
        progress = get_progress(Session(identity="x", state=definition.confirmation_state), definition)
        assert progress.current_stage == "review"
        assert progress.percentage == 90
        assert [stage.status for stage in progress.stages] == ["completed", "completed", "active", "pending"]

    def test_end_state(self):
        definition = company_registration.build()
        summary = get_progress_summary(Session(identity="x", state=definition.end_state), definition)
        assert summary == {"current_stage": "submitted", "percentage": 100}
