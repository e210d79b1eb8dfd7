"""
Shared building blocks for intake flow tables.

Most consultancy services collect the same four contact fields after the
user has seen pricing, so those flows are declared through
``consultancy_flow`` and differ only in their catalog data.
"""

from __future__ import annotations

from typing import Dict, Tuple

from workflows.common.validators import email, min_length, non_empty, phone_shape
from workflows.definitions import DEFAULT_ENDPOINT, FieldSpec, FlowDefinition


def contact_fields() -> Tuple[FieldSpec, ...]:
    return (
        FieldSpec(
            key="companyName",
            label="🏢 Company Name",
            prompt="Please enter your company name:",
            validator=min_length(2),
        ),
        FieldSpec(
            key="contactName",
            label="👤 Contact Person",
            prompt="Please enter the full name of the contact person:",
            validator=min_length(2),
        ),
        FieldSpec(
            key="email",
            label="📧 Email Address",
            prompt="Please enter your email address:",
            validator=email(),
        ),
        FieldSpec(
            key="phoneNumber",
            label="📱 Phone Number",
            prompt="Please enter your phone number:",
            validator=phone_shape(),
        ),
    )


def free_text(key: str, label: str, prompt: str) -> FieldSpec:
    return FieldSpec(key=key, label=label, prompt=prompt, validator=non_empty())


def consultancy_flow(
    flow_id: str,
    label: str,
    prefix: str,
    service_type: str,
    *,
    sub_services: Tuple[str, ...],
    pricing: Dict[str, Tuple[str, ...]],
    documents: Dict[str, Tuple[str, ...]] | None = None,
    intro: str | None = None,
    endpoint: str = DEFAULT_ENDPOINT,
    **options,
) -> FlowDefinition:
    return FlowDefinition(
        flow_id=flow_id,
        label=label,
        prefix=prefix,
        service_type=service_type,
        steps=contact_fields(),
        endpoint=endpoint,
        intro=intro,
        sub_services=sub_services,
        pricing=pricing,
        documents=documents or {},
        **options,
    )


__all__ = ["contact_fields", "free_text", "consultancy_flow"]
