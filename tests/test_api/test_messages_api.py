"""
HTTP surface tests using FastAPI's TestClient.

The app is built around a router with a fake submission client, so no
intake service is needed.
"""

import pytest
from fastapi.testclient import TestClient

from app import create_app
from conftest import FakeSubmissionClient, make_settings
from sessions.store import InMemorySessionStore
from workflows.common.templates import TEMPLATE_IDS
from workflows.runtime import build_router


@pytest.fixture
def intake():
    return build_router(make_settings(), store=InMemorySessionStore(), client=FakeSubmissionClient())


@pytest.fixture
def client(intake):
    app = create_app(intake, run_reaper=False, include_diagnostics=True)
    with TestClient(app) as test_client:
        yield test_client


def _send(client, identity, text):
    response = client.post("/api/messages", json={"identity": identity, "text": text})
    assert response.status_code == 200
    return response.json()


class TestMessagesEndpoint:
    def test_greeting_returns_main_menu_template(self, client):
        body = _send(client, "+263770000070", "hi")

        assert body["identity"] == "+263770000070"
        assert body["state"] == "main_menu"
        assert body["reply"]["kind"] == "template"
        assert body["reply"]["templateId"] == TEMPLATE_IDS["MAIN_MENU"]
        assert "Business Registration" in body["reply"]["fallback"]
        assert body["progress"] == {"current_stage": "service", "percentage": 10}

    def test_flow_reply_is_text_with_progress(self, client):
        _send(client, "+263770000071", "hi")
        body = _send(client, "+263770000071", "Company Registration")

        assert body["reply"]["kind"] == "text"
        assert "First Company Name Option" in body["reply"]["content"]
        assert body["state"] == "registration_name1"
        assert body["progress"]["current_stage"] == "details"
        assert body["progress"]["percentage"] == 30

    def test_missing_identity_is_rejected(self, client):
        response = client.post("/api/messages", json={"identity": "", "text": "hi"})
        assert response.status_code == 422

    def test_empty_text_is_accepted(self, client):
        body = _send(client, "+263770000072", "")
        assert body["state"] == "main_menu"


class TestHealth:
    def test_health_lists_flows(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "company_registration" in body["flows"]
        assert "vat_registration" in body["flows"]


class TestSessionDiagnostics:
    def test_list_and_get_session(self, client):
        _send(client, "+263770000073", "hi")
        _send(client, "+263770000073", "2")

        listing = client.get("/api/sessions").json()
        assert listing["count"] == 1
        assert listing["sessions"][0]["state"] == "sub_services"

        detail = client.get("/api/sessions/+263770000073").json()
        assert detail["selectedService"] == "Licensing"
        assert [entry["input"] for entry in detail["history"]] == ["hi", "2"]
        assert detail["progress"]["current_stage"] == "service"

    def test_unknown_session_is_404(self, client):
        assert client.get("/api/sessions/nobody").status_code == 404

    def test_reset_session(self, client, intake):
        _send(client, "+263770000074", "hi")

        body = client.post("/api/sessions/+263770000074/reset").json()

        assert body == {"identity": "+263770000074", "reset": True}
        assert intake.store.get("+263770000074") is None

    def test_sweep_runs_reaper(self, client):
        _send(client, "+263770000075", "hi")
        body = client.post("/api/sessions/sweep").json()
        assert body == {"removed": 0}


class TestDiagnosticsDisabled:
    def test_session_routes_are_not_mounted(self, intake):
        app = create_app(intake, run_reaper=False, include_diagnostics=False)
        with TestClient(app) as client:
            assert client.get("/api/sessions").status_code == 404
            assert client.post("/api/messages", json={"identity": "+1", "text": "hi"}).status_code == 200
