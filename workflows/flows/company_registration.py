"""
New company registration.

Collects three candidate names, the director count, one record per
director, a contact email and whether the supporting documents are ready.
"""

from __future__ import annotations

from workflows.common.validators import email, enum_choice, min_length, numeric_range, phone_shape
from workflows.definitions import FieldSpec, FlowDefinition, RepeatGroup

FLOW_ID = "company_registration"
MAX_DIRECTORS = 10

INTRO = (
    "🏢 *New Company Registration*\n\n"
    "Welcome! I'll help you register your new company.\n\n"
    "First, I need 3 possible names for your company. This gives us "
    "alternatives in case your first choice isn't available."
)

DOCUMENTS_PROMPT = (
    "To complete your registration, please have the following ready for each director:\n"
    "- Copy of National ID (both sides)\n"
    "- Proof of residential address (not older than 3 months)\n\n"
    "Are your documents ready?\n\n"
    "Type 1 for: Documents ready\n"
    "Type 2 for: Documents not ready"
)

DIRECTOR_FIELDS = (
    FieldSpec(
        key="fullName",
        label="Full Name",
        prompt="Please enter the director's full name (as it appears on their ID):",
        validator=min_length(2),
    ),
    FieldSpec(
        key="idNumber",
        label="ID Number",
        prompt="Please enter the director's national ID or passport number:",
        validator=min_length(5),
    ),
    FieldSpec(
        key="nationality",
        label="Nationality",
        prompt="Please enter the director's nationality:",
        validator=min_length(2),
    ),
    FieldSpec(
        key="occupation",
        label="Occupation",
        prompt="Please enter the director's occupation:",
        validator=min_length(2),
    ),
    FieldSpec(
        key="phoneNumber",
        label="Phone Number",
        prompt="Please enter the director's phone number (e.g., +263 77 123 4567):",
        validator=phone_shape(),
    ),
)


def build(**options) -> FlowDefinition:
    return FlowDefinition(
        flow_id=FLOW_ID,
        label="Company Registration",
        prefix="registration",
        service_type="Company Registration",
        endpoint="/applications",
        intro=INTRO,
        auto_proceed=True,
        documents={
            "Company Registration": (
                "Copy of National ID for each director (both sides)",
                "Proof of residential address for each director",
            ),
        },
        steps=(
            FieldSpec(
                key="name1",
                label="First Company Name Option",
                prompt="Please provide your first company name choice:",
                validator=min_length(3),
            ),
            FieldSpec(
                key="name2",
                label="Second Company Name Option",
                prompt="Please provide your second company name choice:",
                validator=min_length(3),
            ),
            FieldSpec(
                key="name3",
                label="Third Company Name Option",
                prompt="Please provide your third company name choice:",
                validator=min_length(3),
            ),
            FieldSpec(
                key="directorsCount",
                label="Number of Directors",
                prompt=(
                    "How many directors will this company have?\n"
                    f"(A company needs at least 1 director; up to {MAX_DIRECTORS} can be registered here.)"
                ),
                validator=numeric_range(1, MAX_DIRECTORS),
            ),
            RepeatGroup(
                key="directors",
                count_key="directorsCount",
                item_label="Director",
                fields=DIRECTOR_FIELDS,
            ),
            FieldSpec(
                key="contactEmail",
                label="Contact Email",
                prompt="Please provide the email address where we should send updates about your registration:",
                validator=email(),
            ),
            FieldSpec(
                key="documentsReady",
                label="Documents Ready",
                prompt=DOCUMENTS_PROMPT,
                validator=enum_choice({"1": "ready", "2": "not_ready"}),
                abort_values=frozenset({"not_ready"}),
                abort_message=(
                    "No problem. Your application has been cancelled; come back "
                    "once your documents are ready."
                ),
                summary=False,
            ),
        ),
        **options,
    )
