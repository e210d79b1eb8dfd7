"""
Company de-registration.

Asks why the company is closing and whether obligations are outstanding,
then the company record and the person authorised to request closure.
"""

from __future__ import annotations

from workflows.common.validators import (
    email,
    iso_date,
    min_length,
    non_empty,
    numbered_choice,
    phone_shape,
    yes_no,
)
from workflows.definitions import FieldSpec, FlowDefinition

FLOW_ID = "company_deregistration"

REASONS = (
    "Business Closure",
    "Merger/Acquisition",
    "Restructuring",
    "Relocation Abroad",
    "Other",
)

INTRO = (
    "📤 *Company De-Registration*\n\n"
    "⚠️ *Important:* before a company can be removed from the register:\n"
    "• All tax obligations must be settled\n"
    "• Annual returns must be up to date\n"
    "• Creditors must be notified\n\n"
    "We'll guide you through the rest."
)


def build(**options) -> FlowDefinition:
    reasons = "\n".join(f"{number}. {reason}" for number, reason in enumerate(REASONS, start=1))
    return FlowDefinition(
        flow_id=FLOW_ID,
        label="Company De-Registration",
        prefix="deregistration",
        service_type="Company De-Registration",
        endpoint="/comp_de_reg_applications",
        intro=INTRO,
        steps=(
            FieldSpec(
                key="reason",
                label="📋 Reason for De-Registration",
                prompt=f"Why is the company being de-registered?\n\n{reasons}",
                validator=numbered_choice(REASONS),
            ),
            FieldSpec(
                key="hasOutstandingObligations",
                label="💼 Outstanding Obligations",
                prompt="Does the company have any outstanding debts, taxes or contracts? (yes/no)",
                validator=yes_no(),
            ),
            FieldSpec(
                key="obligationDetails",
                label="📝 Obligation Details",
                prompt="Please describe any outstanding obligations, or type 'none':",
                validator=non_empty(),
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
                key="registrationDate",
                label="📅 Registration Date",
                prompt="Please enter the date the company was registered (YYYY-MM-DD):",
                validator=iso_date(),
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
            FieldSpec(
                key="hasAuthority",
                label="✍️ Authorised to De-Register",
                prompt="Are you authorised by the board to request de-registration? (yes/no)",
                validator=yes_no(),
            ),
        ),
        **options,
    )
