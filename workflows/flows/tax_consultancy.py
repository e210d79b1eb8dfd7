"""Tax consultancy services with per-service pricing."""

from __future__ import annotations

from workflows.definitions import FlowDefinition

from .common import consultancy_flow

FLOW_ID = "tax_consultancy"

SUB_SERVICES = (
    "Tax Registration",
    "Tax Clearance Renewal",
    "Quarterly Payment Dates",
    "Fiscalisation",
    "Fiscal Devices",
    "NSSA Registration",
    "Tax Advisory",
    "Tax Health Check",
)

PRICING = {
    "Tax Registration": ("Basic Registration: $150", "Express Service: $300", "Complete Package: $500"),
    "Tax Clearance Renewal": ("Standard Renewal: $100", "Express Processing: $200", "Compliance Check Included: $350"),
    "Quarterly Payment Dates": (
        "Basic Reminder Service: $50/month",
        "Full Compliance Management: $150/month",
        "Annual Package: $1200/year",
    ),
    "Fiscalisation": ("Device Installation: $200", "Compliance Setup: $400", "Ongoing Support: $100/month"),
    "Fiscal Devices": ("Device Rental: $50/month", "Device Purchase: $800", "Maintenance Contract: $100/month"),
    "NSSA Registration": ("Basic Registration: $100", "Employee Setup (up to 10): $250", "Complete HR Package: $500"),
    "Tax Advisory": ("Consultation (1 hour): $150", "Monthly Retainer: $500/month", "Annual Tax Planning: $2000"),
    "Tax Health Check": ("Basic Review: $300", "Comprehensive Audit: $800", "Full Compliance Report: $1200"),
}

DOCUMENTS = {
    "Tax Registration": (
        "Business registration certificate",
        "Director(s) ID copies",
        "Proof of address",
        "Bank statement",
    ),
    "Tax Clearance Renewal": (
        "Previous tax clearance certificate",
        "Recent financial statements",
        "Tax returns for previous year",
    ),
    "NSSA Registration": (
        "Company registration documents",
        "Employee details and IDs",
        "Business bank details",
    ),
}


def build(**options) -> FlowDefinition:
    return consultancy_flow(
        FLOW_ID,
        "Tax Consultancy Application",
        "tax",
        "Tax Consultancy",
        sub_services=SUB_SERVICES,
        pricing=PRICING,
        documents=DOCUMENTS,
        **options,
    )
