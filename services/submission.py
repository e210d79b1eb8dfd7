"""Intake service client for application submission."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from workflows.common.errors import ConnectivityError, RemoteAPIError, UnknownError
from workflows.common.types import SubmissionResult
from workflows.definitions import DEFAULT_ENDPOINT

logger = logging.getLogger(__name__)

CONNECTIVITY_MESSAGE = "Cannot connect to application service"
REMOTE_FALLBACK_MESSAGE = "API error occurred"
UNKNOWN_MESSAGE = "Something went wrong while submitting your application"
PENDING_REFERENCE = "Pending"


class SubmissionClient:
    """Posts completed application payloads to the back-office intake service.

    One call per ``submit``; retrying is the caller's decision.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Intake service root, e.g. ``http://localhost:5000/api``.
            timeout: Seconds allowed per call.
            transport: Optional httpx transport (tests use ``httpx.MockTransport``).
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def timeout(self) -> float:
        return self._timeout

    def url_for(self, endpoint: Optional[str] = None) -> str:
        path = endpoint or DEFAULT_ENDPOINT
        if not path.startswith("/"):
            path = "/" + path
        return f"{self._base_url}{path}"

    async def submit(
        self,
        payload: Dict[str, Any],
        *,
        endpoint: Optional[str] = None,
    ) -> SubmissionResult:
        """Submit one application.

        Never raises: every failure is folded into a SubmissionResult with
        ``failure_kind`` set to "connectivity", "remote" or "unknown".
        """
        url = self.url_for(endpoint)
        try:
            data = await self._post(url, payload)
        except ConnectivityError as exc:
            logger.warning("[SUBMIT] Intake service unreachable at %s: %s", url, exc)
            return SubmissionResult(success=False, message=CONNECTIVITY_MESSAGE, failure_kind="connectivity")
        except RemoteAPIError as exc:
            logger.warning("[SUBMIT] Intake service rejected submission (status=%s): %s", exc.status_code, exc.message)
            return SubmissionResult(success=False, message=exc.message, failure_kind="remote")
        except Exception as exc:
            logger.exception("[SUBMIT] Unexpected submission failure: %s", exc)
            return SubmissionResult(success=False, message=UNKNOWN_MESSAGE, failure_kind="unknown")

        application_id = data.get("_id") or data.get("id")
        reference = data.get("referenceNumber") or PENDING_REFERENCE
        logger.info("[SUBMIT] Application %s accepted (reference %s)", application_id, reference)
        return SubmissionResult(
            success=True,
            id=str(application_id) if application_id is not None else None,
            reference_number=str(reference),
        )

    async def _post(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
            except httpx.ConnectError as e:
                raise ConnectivityError(CONNECTIVITY_MESSAGE) from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Dict[str, Any]:
        """Return the application record from a successful response.

        Raises:
            RemoteAPIError: The service answered with an error.
            UnknownError: The response could not be understood.
        """
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            if status >= 400:
                raise RemoteAPIError(REMOTE_FALLBACK_MESSAGE, status_code=status)
            raise UnknownError(f"Unreadable response body (status {status})", status_code=status)

        if status >= 400 or body.get("success") is False:
            message = body.get("message") or body.get("error") or REMOTE_FALLBACK_MESSAGE
            raise RemoteAPIError(str(message), status_code=status)

        data = body.get("data")
        if isinstance(data, dict):
            return data
        return body


__all__ = [
    "SubmissionClient",
    "CONNECTIVITY_MESSAGE",
    "REMOTE_FALLBACK_MESSAGE",
    "UNKNOWN_MESSAGE",
    "PENDING_REFERENCE",
]
