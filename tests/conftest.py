"""Pytest configuration and shared fixtures for intake router tests."""

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

# Ensure project root is on PYTHONPATH
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sessions.store import InMemorySessionStore
from workflows.common.types import SubmissionResult
from workflows.io.config_store import IntakeSettings
from workflows.runtime import build_router


class FakeSubmissionClient:
    """Records submissions and replays scripted results.

    Once the scripted results run out, every call succeeds with REF-001.
    """

    def __init__(self, results: Optional[List[SubmissionResult]] = None, *, always: Optional[SubmissionResult] = None):
        self.calls: List[Tuple[Dict[str, Any], Optional[str]]] = []
        self._results = list(results or [])
        self._always = always

    async def submit(self, payload: Dict[str, Any], *, endpoint: Optional[str] = None) -> SubmissionResult:
        self.calls.append((payload, endpoint))
        if self._results:
            return self._results.pop(0)
        if self._always is not None:
            return self._always
        return SubmissionResult(success=True, id="app-1", reference_number="REF-001")


def make_settings(**overrides) -> IntakeSettings:
    values = {
        "api_base_url": "http://intake.test/api",
        "submit_timeout": 10.0,
        "max_submission_attempts": 3,
        "retry_backoff_seconds": 0.0,
        "session_max_age_hours": 24.0,
        "recovery_idle_minutes": 60.0,
        "reaper_interval_seconds": 900.0,
    }
    values.update(overrides)
    return IntakeSettings(**values)


@pytest.fixture
def fake_client():
    return FakeSubmissionClient()


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def intake_router(store, fake_client):
    return build_router(make_settings(), store=store, client=fake_client)


@pytest.fixture
def converse(intake_router):
    """Send messages for one identity in order; returns the replies."""

    def _converse(identity: str, *messages: str):
        async def _run():
            return [await intake_router.process(identity, message) for message in messages]

        return asyncio.run(_run())

    return _converse
