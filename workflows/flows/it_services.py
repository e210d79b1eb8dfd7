"""IT and information systems services."""

from __future__ import annotations

from workflows.definitions import FlowDefinition

from .common import consultancy_flow

FLOW_ID = "it_services"

SUB_SERVICES = (
    "IT Audit & Consultancy",
    "Software Intelligence",
    "Systems Installations",
    "Thermal Printers",
)

PRICING = {
    "IT Audit & Consultancy": ("Basic Audit: $800", "Comprehensive Audit: $2000", "Ongoing Consultancy: Custom pricing"),
    "Software Intelligence": ("Software Analysis: $1200", "Optimization Plan: $2500", "Implementation Support: Custom pricing"),
    "Systems Installations": (
        "Standard Installation: $1500",
        "Enterprise Setup: $3500",
        "Custom Configuration: Contact for quote",
    ),
    "Thermal Printers": ("Basic Setup: $300", "Advanced Configuration: $800", "Bulk Deployment: Custom pricing"),
}


def build(**options) -> FlowDefinition:
    return consultancy_flow(
        FLOW_ID,
        "IT Services Application",
        "it",
        "IT & Information Systems",
        sub_services=SUB_SERVICES,
        pricing=PRICING,
        **options,
    )
