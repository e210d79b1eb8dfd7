"""
Unit tests for the intake service client.

The intake service is replaced by httpx.MockTransport, so every outcome
(success, remote rejection, connection failure, anything else) is exercised
without a network.
"""

import asyncio
import json

import httpx

from services.submission import (
    CONNECTIVITY_MESSAGE,
    PENDING_REFERENCE,
    REMOTE_FALLBACK_MESSAGE,
    UNKNOWN_MESSAGE,
    SubmissionClient,
)


def _client(handler, **kwargs):
    return SubmissionClient("http://intake.test/api/", transport=httpx.MockTransport(handler), **kwargs)


class TestSuccessfulSubmission:
    def test_returns_id_and_reference(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"success": True, "data": {"_id": "abc123", "referenceNumber": "REF-9"}})

        result = asyncio.run(_client(handler).submit({"name1": "Alpha"}, endpoint="/applications"))

        assert result.success is True
        assert result.id == "abc123"
        assert result.reference_number == "REF-9"
        assert result.failure_kind is None
        assert seen["url"] == "http://intake.test/api/applications"
        assert seen["body"] == {"name1": "Alpha"}

    def test_missing_reference_uses_placeholder(self):
        def handler(request):
            return httpx.Response(200, json={"data": {"id": 42}})

        result = asyncio.run(_client(handler).submit({}))

        assert result.success is True
        assert result.id == "42"
        assert result.reference_number == PENDING_REFERENCE

    def test_default_endpoint(self):
        client = SubmissionClient("http://intake.test/api")
        assert client.url_for() == "http://intake.test/api/universal-applications"
        assert client.url_for("licence-applications") == "http://intake.test/api/licence-applications"


class TestFailedSubmission:
    def test_remote_error_message_is_verbatim(self):
        def handler(request):
            return httpx.Response(400, json={"success": False, "message": "Company name already reserved"})

        result = asyncio.run(_client(handler).submit({}))

        assert result.success is False
        assert result.failure_kind == "remote"
        assert result.message == "Company name already reserved"
        assert result.id is None

    def test_success_false_with_ok_status_is_remote(self):
        def handler(request):
            return httpx.Response(200, json={"success": False, "message": "Validation failed"})

        result = asyncio.run(_client(handler).submit({}))

        assert result.failure_kind == "remote"
        assert result.message == "Validation failed"

    def test_unreadable_error_body_uses_generic_remote_message(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad gateway</html>")

        result = asyncio.run(_client(handler).submit({}))

        assert result.failure_kind == "remote"
        assert result.message == REMOTE_FALLBACK_MESSAGE

    def test_connection_refused_is_connectivity(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        result = asyncio.run(_client(handler).submit({}))

        assert result.success is False
        assert result.failure_kind == "connectivity"
        assert result.message == CONNECTIVITY_MESSAGE
        assert result.id is None

    def test_timeout_is_unknown(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = asyncio.run(_client(handler, timeout=0.5).submit({}))

        assert result.failure_kind == "unknown"
        assert result.message == UNKNOWN_MESSAGE

    def test_unreadable_success_body_is_unknown(self):
        def handler(request):
            return httpx.Response(200, text="OK")

        result = asyncio.run(_client(handler).submit({}))

        assert result.success is False
        assert result.failure_kind == "unknown"

    def test_timeout_is_configurable(self):
        assert SubmissionClient("http://x", timeout=3.0).timeout == 3.0
        assert SubmissionClient("http://x").timeout == 10.0
