"""
PRAZ supplier registration.

Starts collecting immediately: company email, then the banking details the
procurement authority needs to pay the supplier.
"""

from __future__ import annotations

from workflows.common.validators import digits_only, email, min_length, non_empty, numbered_choice, skippable
from workflows.definitions import FieldSpec, FlowDefinition

FLOW_ID = "praz_registration"

BANKS = (
    "CBZ Bank",
    "Stanbic Bank",
    "Standard Chartered Bank",
    "CABS",
    "Steward Bank",
    "FBC Bank",
    "NMB Bank",
    "ZB Bank",
    "Agribank",
    "People's Own Savings Bank",
    "Other",
)

ACCOUNT_TYPES = ("Current Account", "Savings Account", "Business Account", "Corporate Account")


def _numbered(options) -> str:
    return "\n".join(f"{number}. {option}" for number, option in enumerate(options, start=1))


def build(**options) -> FlowDefinition:
    return FlowDefinition(
        flow_id=FLOW_ID,
        label="PRAZ Registration",
        prefix="praz",
        service_type="PRAZ Registration",
        endpoint="/praz_reg_apply",
        intro=(
            "🏛️ *PRAZ Registration Application*\n\n"
            "Registration with the Procurement Regulatory Authority lets your "
            "company bid for public tenders. We'll need your company email and "
            "the bank account tender payments should go to."
        ),
        auto_proceed=True,
        steps=(
            FieldSpec(
                key="companyEmail",
                label="📧 Company Email Address",
                prompt="Please enter your company email address:",
                validator=email(),
            ),
            FieldSpec(
                key="bankName",
                label="🏦 Bank Name",
                prompt="Please select your bank (number or name):\n\n" + _numbered(BANKS),
                validator=numbered_choice(BANKS),
            ),
            FieldSpec(
                key="accountNumber",
                label="🔢 Account Number",
                prompt="Please enter your account number (digits only):",
                validator=digits_only(8),
            ),
            FieldSpec(
                key="accountHolder",
                label="👤 Account Holder Name",
                prompt="Please enter the account holder name exactly as it appears on the account:",
                validator=min_length(2),
            ),
            FieldSpec(
                key="branchName",
                label="🏢 Branch Name",
                prompt="Please enter the branch name:",
                validator=min_length(3),
            ),
            FieldSpec(
                key="branchCode",
                label="🔢 Branch Code",
                prompt="Please enter the branch code, or type 'skip' if you don't have it:",
                validator=skippable(non_empty()),
            ),
            FieldSpec(
                key="accountType",
                label="💳 Account Type",
                prompt="Please select the account type:\n\n" + _numbered(ACCOUNT_TYPES),
                validator=numbered_choice(ACCOUNT_TYPES),
            ),
        ),
        **options,
    )
