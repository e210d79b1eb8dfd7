"""Accounting and management consultancy."""

from __future__ import annotations

from workflows.definitions import FlowDefinition

from .common import consultancy_flow

FLOW_ID = "accounting_management"

SUB_SERVICES = (
    "Book-keeping Services",
    "Payroll Outsourcing",
    "Business Valuations",
    "Due Diligence",
    "Dividend Certificates",
)

PRICING = {
    "Book-keeping Services": (
        "Basic Package: $150/month",
        "Standard Package: $300/month",
        "Premium Package: $500/month",
    ),
    "Payroll Outsourcing": (
        "Up to 10 employees: $100/month",
        "11-25 employees: $200/month",
        "26-50 employees: $350/month",
        "Custom Quote: Contact for pricing",
    ),
    "Business Valuations": (
        "Small Business: $1,000 - $2,500",
        "Medium Business: $2,500 - $5,000",
        "Large Business: Custom quote based on complexity",
    ),
    "Due Diligence": (
        "Basic Review: $1,500 - $3,000",
        "Comprehensive Review: $3,000 - $7,000",
        "Enterprise Level: Custom quote based on scope",
    ),
    "Dividend Certificates": (
        "Per Certificate: $50",
        "Bulk (10+): $40 each",
        "Annual Service: Contact for package pricing",
    ),
}


def build(**options) -> FlowDefinition:
    return consultancy_flow(
        FLOW_ID,
        "Accounting Services Application",
        "accounting",
        "Accounting & Management",
        sub_services=SUB_SERVICES,
        pricing=PRICING,
        **options,
    )
