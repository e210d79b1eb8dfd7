"""VAT and vendor number registrations: apply, give contact details, confirm."""

from __future__ import annotations

from workflows.definitions import FlowDefinition

from .common import contact_fields

VAT_FLOW_ID = "vat_registration"
VENDOR_FLOW_ID = "vendor_number"


def build(**options) -> FlowDefinition:
    return FlowDefinition(
        flow_id=VAT_FLOW_ID,
        label="VAT Registration",
        prefix="vat",
        service_type="VAT Registration",
        intro=(
            "🧾 *VAT Registration*\n\n"
            "We register your business for VAT with the revenue authority and "
            "handle the follow-up on your behalf."
        ),
        documents={
            "VAT Registration": (
                "Certificate of incorporation",
                "Tax clearance certificate",
                "Latest bank statement",
                "Lease agreement or proof of business premises",
            ),
        },
        steps=contact_fields(),
        **options,
    )


def build_vendor(**options) -> FlowDefinition:
    return FlowDefinition(
        flow_id=VENDOR_FLOW_ID,
        label="Vendor Number",
        prefix="vendor",
        service_type="Vendor Number",
        intro=(
            "🏷️ *Vendor Number Application*\n\n"
            "A vendor number lets your company supply government entities."
        ),
        steps=contact_fields(),
        **options,
    )
