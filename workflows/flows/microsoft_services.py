"""Microsoft licensing and email server setup."""

from __future__ import annotations

from workflows.definitions import FlowDefinition

from .common import consultancy_flow

FLOW_ID = "microsoft_services"

SUB_SERVICES = ("Microsoft Excel", "365 Copilot", "Email Server")

PRICING = {
    "Microsoft Excel": (
        "Single License: $150",
        "Business Package (5 licenses): $600",
        "Enterprise Package: Contact for pricing",
    ),
    "365 Copilot": (
        "Per User/Month: $30",
        "Annual Subscription (per user): $300",
        "Business Package (10+ users): Contact for discount",
    ),
    "Email Server": (
        "Basic Setup: $500",
        "Standard (up to 50 users): $1000",
        "Enterprise (unlimited users): $2500+",
        "Monthly Maintenance: $100",
    ),
}


def build(**options) -> FlowDefinition:
    return consultancy_flow(
        FLOW_ID,
        "Microsoft Services Application",
        "microsoft",
        "Microsoft Services",
        sub_services=SUB_SERVICES,
        pricing=PRICING,
        endpoint="/microsoft-applications",
        intro="🪟 *Microsoft Services*\n\nLicensing, Copilot and business email for your team.",
        **options,
    )
