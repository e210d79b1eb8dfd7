"""Business strategy consultancy with per-service pricing."""

from __future__ import annotations

from workflows.definitions import FlowDefinition

from .common import consultancy_flow

FLOW_ID = "business_strategy"

SUB_SERVICES = (
    "Strategic Planning",
    "Business Plan Development",
    "Market Research",
    "Feasibility Studies",
)

PRICING = {
    "Strategic Planning": (
        "Basic Consultation: $500",
        "Comprehensive Strategy: $2000",
        "Ongoing Support: Custom pricing",
    ),
    "Business Plan Development": (
        "Standard Plan: $1500",
        "Investor-Ready Plan: $3000",
        "Custom Package: Contact for quote",
    ),
    "Market Research": (
        "Industry Analysis: $1000",
        "Competitive Analysis: $1500",
        "Custom Research: Contact for quote",
    ),
    "Feasibility Studies": (
        "Basic Study: $1200",
        "Comprehensive Study: $2500",
        "Industry Specific: Custom pricing",
    ),
}


def build(**options) -> FlowDefinition:
    return consultancy_flow(
        FLOW_ID,
        "Business Strategy Application",
        "strategy",
        "Business Strategy",
        sub_services=SUB_SERVICES,
        pricing=PRICING,
        intro="📈 *Business Strategy*\n\nPlanning, research and feasibility work for growing businesses.",
        **options,
    )
