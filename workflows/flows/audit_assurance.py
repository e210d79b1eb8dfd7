"""Audit and assurance engagements; pricing is quoted after review."""

from __future__ import annotations

from workflows.definitions import FlowDefinition

from .common import consultancy_flow

FLOW_ID = "audit_assurance"

SUB_SERVICES = (
    "External Audits",
    "Internal Audits",
    "Forensic Investigations",
    "Special Purpose Audits",
)

DOCUMENTS = {
    "External Audits": (
        "Audited financial statements for the previous year",
        "General ledger and trial balance",
        "Bank statements for the period",
    ),
    "Internal Audits": ("Organisational chart", "Policies and procedure manuals"),
}


def build(**options) -> FlowDefinition:
    return consultancy_flow(
        FLOW_ID,
        "Audit Engagement Application",
        "audit",
        "Audit & Assurance",
        sub_services=SUB_SERVICES,
        pricing={},
        documents=DOCUMENTS,
        **options,
    )
