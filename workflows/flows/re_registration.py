"""
Company re-registration.

The first answer, how many years of annual returns are outstanding, is
priced immediately; the rest is the company record and a contact person.
"""

from __future__ import annotations

from typing import Any, Dict

from workflows.common.validators import email, min_length, numeric_range, phone_shape
from workflows.definitions import FieldSpec, FlowDefinition

FLOW_ID = "company_reregistration"
ANNUAL_RETURN_FEE = 50
MAX_OUTSTANDING_YEARS = 10


def quote(years: int) -> Dict[str, Any]:
    return {"quoteAmount": years * ANNUAL_RETURN_FEE}


def build(**options) -> FlowDefinition:
    return FlowDefinition(
        flow_id=FLOW_ID,
        label="Company Re-Registration",
        prefix="reregistration",
        service_type="Company Re-Registration",
        endpoint="/applications",
        intro=(
            "🔄 *Company Re-Registration*\n\n"
            "Restore a deregistered company by filing its outstanding annual returns.\n"
            f"Each outstanding year costs ${ANNUAL_RETURN_FEE}."
        ),
        pricing={"Company Re-Registration": (f"Annual return filing: ${ANNUAL_RETURN_FEE} per outstanding year",)},
        derived_labels={"quoteAmount": "💰 Quote (USD)"},
        steps=(
            FieldSpec(
                key="outstandingYears",
                label="📅 Outstanding Years",
                prompt=f"How many years of annual returns are outstanding? (1 to {MAX_OUTSTANDING_YEARS})",
                validator=numeric_range(1, MAX_OUTSTANDING_YEARS),
                derive=quote,
            ),
            FieldSpec(
                key="companyName",
                label="🏢 Company Name",
                prompt="Please enter the registered company name:",
                validator=min_length(2),
            ),
            FieldSpec(
                key="registrationNumber",
                label="🔢 Registration Number",
                prompt="Please enter the company registration number:",
                validator=min_length(3),
            ),
            FieldSpec(
                key="businessType",
                label="🏷️ Business Type",
                prompt="Please enter the type of business (e.g., Private Limited Company):",
                validator=min_length(2),
            ),
            FieldSpec(
                key="currentAddress",
                label="📍 Current Address",
                prompt="Please enter the company's current physical address:",
                validator=min_length(5),
            ),
            FieldSpec(
                key="contactName",
                label="👤 Contact Person",
                prompt="Please enter the full name of the contact person:",
                validator=min_length(2),
            ),
            FieldSpec(
                key="contactEmail",
                label="📧 Contact Email",
                prompt="Please enter the contact email address:",
                validator=email(),
            ),
            FieldSpec(
                key="contactPhone",
                label="📱 Contact Phone",
                prompt="Please enter the contact phone number:",
                validator=phone_shape(),
            ),
            FieldSpec(
                key="position",
                label="💼 Position",
                prompt="Please enter the contact person's position in the company:",
                validator=min_length(2),
            ),
        ),
        **options,
    )
