"""
Flow engine behaviour: field validation, confirmation commands, bounded
retries and navigation, exercised through the router with the VAT and tax
consultancy flows.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from conftest import FakeSubmissionClient, make_settings
from sessions.store import InMemorySessionStore
from workflows.common import states
from workflows.common.templates import TEMPLATE_IDS
from workflows.common.types import SubmissionResult
from workflows.runtime import build_router

VAT_TO_FIELDS = ("hi", "1", "VAT Registration", "proceed")
VAT_DETAILS = ("Acme Ltd", "Jane Doe", "foo@bar.com", "+263 77 123 4567")


def _run(router, identity, *messages):
    async def _go():
        return [await router.process(identity, message) for message in messages]

    return asyncio.run(_go())


@pytest.fixture
def failing_setup():
    store = InMemorySessionStore()
    client = FakeSubmissionClient(always=SubmissionResult(
        success=False,
        message="Company name already reserved",
        failure_kind="remote",
    ))
    router = build_router(make_settings(max_submission_attempts=3), store=store, client=client)
    return router, store, client


class TestFieldValidation:
    def test_invalid_email_keeps_state_and_payload(self, converse, store):
        identity = "+263770000010"
        converse(identity, *VAT_TO_FIELDS, "Acme Ltd", "Jane Doe")
        before = dict(store.get(identity).domain_payload)

        (reply,) = converse(identity, "foo")

        session = store.get(identity)
        assert session.state == "vat_email"
        assert session.domain_payload == before
        assert reply.content.startswith("❌")
        assert "Please enter your email address:" in reply.content

    def test_valid_email_reaches_summary(self, converse, store):
        identity = "+263770000011"
        converse(identity, *VAT_TO_FIELDS, "Acme Ltd", "Jane Doe", "foo")

        replies = converse(identity, "foo@bar.com", "+263 77 123 4567")

        assert replies[0].content.startswith("✅ 📧 Email Address: foo@bar.com")
        assert store.get(identity).state == "vat_confirmation"
        assert "foo@bar.com" in replies[-1].content
        assert "1. Confirm" in replies[-1].content

    def test_help_does_not_change_state(self, converse, store):
        identity = "+263770000012"
        converse(identity, *VAT_TO_FIELDS, "Acme Ltd")
        before = dict(store.get(identity).domain_payload)

        (reply,) = converse(identity, "help")

        session = store.get(identity)
        assert "I'm waiting for: 👤 Contact Person" in reply.content
        assert session.state == "vat_contactName"
        assert session.domain_payload == before

    def test_help_lists_every_field_and_marks_current(self, converse):
        identity = "+263770000014"
        converse(identity, *VAT_TO_FIELDS, "Acme Ltd")

        (reply,) = converse(identity, "help")

        lines = reply.content.splitlines()
        assert lines.index("• 🏢 Company Name") < lines.index("👉 👤 Contact Person")
        assert lines.index("👉 👤 Contact Person") < lines.index("• 📧 Email Address")
        assert "• 📱 Phone Number" in lines

    def test_back_clears_payload_and_returns_to_entry(self, converse, store):
        identity = "+263770000013"
        converse(identity, *VAT_TO_FIELDS, "Acme Ltd")

        (reply,) = converse(identity, "back")

        session = store.get(identity)
        assert session.state == "vat_info"
        assert session.domain_payload is None
        assert "cleared" in reply.content

    def test_menu_leaves_flow(self, converse, store):
        identity = "+263770000014"
        converse(identity, *VAT_TO_FIELDS, "Acme Ltd")

        (reply,) = converse(identity, "menu")

        session = store.get(identity)
        assert reply.template_id == TEMPLATE_IDS["MAIN_MENU"]
        assert session.state == states.MAIN_MENU
        assert session.domain_payload is None
        assert session.selected_service is None


class TestEntryState:
    def test_documents_lists_required_documents(self, converse):
        (reply,) = converse("+263770000020", "hi", "1", "VAT Registration", "documents")[-1:]
        assert "Certificate of incorporation" in reply.content

    def test_back_returns_to_category(self, converse, store):
        identity = "+263770000021"
        replies = converse(identity, "hi", "1", "VAT Registration", "back")

        assert replies[-1].template_id == TEMPLATE_IDS["COMPANY_REGISTRATION"]
        session = store.get(identity)
        assert session.state == states.SUB_SERVICES
        assert session.selected_service == "Business Registration"

    def test_sub_service_is_required_before_proceeding(self, converse, store):
        identity = "+263770000022"
        replies = converse(identity, "hi", "Tax Consultancy Application", "proceed")

        assert "Please choose one of the following services" in replies[1].content
        assert "Please choose a service first" in replies[2].content
        assert store.get(identity).state == "tax_info"

    def test_sub_service_choice_shows_pricing(self, converse, store):
        identity = "+263770000023"
        replies = converse(identity, "hi", "Tax Consultancy Application", "tax advisory", "1")

        assert "Consultation (1 hour): $150" in replies[2].content
        session = store.get(identity)
        assert session.selected_sub_service == "Tax Advisory"
        assert session.state == "tax_companyName"
        assert "Let's start your application" in replies[3].content

    def test_category_sub_service_carries_into_submission(self, converse, fake_client):
        identity = "+263770000024"
        replies = converse(identity, "hi", "3", "Tax Registration")
        assert "Basic Registration: $150" in replies[-1].content

        converse(identity, "proceed", *VAT_DETAILS, "confirm")

        body, endpoint = fake_client.calls[0]
        assert endpoint == "/universal-applications"
        assert body["serviceType"] == "Tax Consultancy"
        assert body["subServiceType"] == "Tax Registration"
        assert body["email"] == "foo@bar.com"


class TestConfirmation:
    def test_confirm_twice_submits_once(self, converse, store, fake_client):
        identity = "+263770000030"
        replies = converse(identity, *VAT_TO_FIELDS, *VAT_DETAILS, "confirm", "confirm")

        assert len(fake_client.calls) == 1
        assert "Application Submitted Successfully" in replies[-2].content
        assert "already been submitted" not in replies[-1].content
        assert "REF-001" in replies[-1].content
        assert store.get(identity).state == "vat_complete"

    def test_numeric_shortcut_confirms(self, converse, fake_client):
        converse("+263770000031", *VAT_TO_FIELDS, *VAT_DETAILS, "1")
        assert len(fake_client.calls) == 1

    def test_cancel_clears_payload(self, converse, store, fake_client):
        identity = "+263770000032"
        replies = converse(identity, *VAT_TO_FIELDS, *VAT_DETAILS, "cancel")

        session = store.get(identity)
        assert "Application cancelled" in replies[-1].content
        assert session.state == "vat_info"
        assert session.domain_payload is None
        assert fake_client.calls == []

    def test_edit_restarts_fields(self, converse, store, fake_client):
        identity = "+263770000033"
        replies = converse(identity, *VAT_TO_FIELDS, *VAT_DETAILS, "2")

        session = store.get(identity)
        assert "Let's edit your information" in replies[-1].content
        assert session.state == "vat_companyName"
        assert session.domain_payload == {}
        assert fake_client.calls == []

    def test_retry_before_any_attempt_shows_summary(self, converse, fake_client):
        replies = converse("+263770000034", *VAT_TO_FIELDS, *VAT_DETAILS, "retry")

        assert "Please confirm your application" in replies[-1].content
        assert fake_client.calls == []

    def test_overlapping_submission_is_rejected(self, converse, store, fake_client):
        identity = "+263770000035"
        converse(identity, *VAT_TO_FIELDS, *VAT_DETAILS)
        store.get(identity).submission_in_flight = True

        (reply,) = converse(identity, "confirm")

        assert "already being submitted" in reply.content
        assert fake_client.calls == []


class TestSubmissionFailures:
    def test_remote_message_is_shown_verbatim(self, failing_setup):
        router, store, client = failing_setup
        replies = _run(router, "+263770000040", *VAT_TO_FIELDS, *VAT_DETAILS, "confirm")

        assert "❌ Error creating application: Company name already reserved" in replies[-1].content
        assert "Type 'retry'" in replies[-1].content
        session = store.get("+263770000040")
        assert session.state == "vat_confirmation"
        assert session.submission_in_flight is False
        assert session.domain_payload["email"] == "foo@bar.com"

    def test_retries_are_bounded(self, failing_setup):
        router, store, client = failing_setup
        identity = "+263770000041"
        _run(router, identity, *VAT_TO_FIELDS, *VAT_DETAILS)

        replies = _run(router, identity, "confirm", "retry", "retry", "retry", "confirm")

        assert len(client.calls) == 3
        assert "Type 'retry'" not in replies[2].content
        assert "after 3 attempts" in replies[3].content
        assert "after 3 attempts" in replies[4].content
        assert store.get(identity).state == "vat_confirmation"

    def test_retry_after_failure_can_succeed(self):
        client = FakeSubmissionClient([
            SubmissionResult(success=False, message="Cannot connect to application service", failure_kind="connectivity"),
        ])
        store = InMemorySessionStore()
        router = build_router(make_settings(), store=store, client=client)
        identity = "+263770000042"

        replies = _run(router, identity, *VAT_TO_FIELDS, *VAT_DETAILS, "confirm", "try again")

        assert "Cannot connect to application service" in replies[-2].content
        assert "Application Submitted Successfully" in replies[-1].content
        assert len(client.calls) == 2
        assert store.get(identity).state == "vat_complete"

    def test_retry_waits_with_linear_backoff(self):
        client = FakeSubmissionClient(always=SubmissionResult(success=False, message="down", failure_kind="unknown"))
        router = build_router(
            make_settings(retry_backoff_seconds=0.5),
            store=InMemorySessionStore(),
            client=client,
        )
        identity = "+263770000043"
        _run(router, identity, *VAT_TO_FIELDS, *VAT_DETAILS)

        with patch("workflows.engine.asyncio.sleep", new_callable=AsyncMock) as sleep:
            _run(router, identity, "confirm", "retry", "retry")

        assert [call.args[0] for call in sleep.await_args_list] == [0.5, 1.0]
        assert len(client.calls) == 3
