"""
Shared result types passed between the router, flow engines and the channel adapter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

ResponseKind = Literal["text", "template"]
FailureKind = Literal["connectivity", "remote", "unknown"]


@dataclass
class OutboundResponse:
    """What the channel adapter sends back for one inbound message.

    Template responses carry a plain-text ``fallback`` so the adapter can still
    reply when the template send itself fails.
    """

    kind: ResponseKind
    content: Optional[str] = None
    template_id: Optional[str] = None
    variables: Dict[str, str] = field(default_factory=dict)
    fallback: Optional[str] = None

    @classmethod
    def text(cls, content: str) -> "OutboundResponse":
        return cls(kind="text", content=content)

    @classmethod
    def template(
        cls,
        template_id: str,
        variables: Optional[Dict[str, str]] = None,
        *,
        fallback: Optional[str] = None,
    ) -> "OutboundResponse":
        return cls(
            kind="template",
            template_id=template_id,
            variables=dict(variables or {}),
            fallback=fallback,
        )

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == "text":
            return {"kind": "text", "content": self.content}
        return {
            "kind": "template",
            "templateId": self.template_id,
            "variables": dict(self.variables),
            "fallback": self.fallback,
        }


@dataclass
class SubmissionResult:
    """Outcome of one call to the intake service."""

    success: bool
    id: Optional[str] = None
    reference_number: Optional[str] = None
    message: Optional[str] = None
    failure_kind: Optional[FailureKind] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "id": self.id,
            "referenceNumber": self.reference_number,
            "message": self.message,
            "failureKind": self.failure_kind,
        }


__all__ = ["OutboundResponse", "SubmissionResult", "ResponseKind", "FailureKind"]
