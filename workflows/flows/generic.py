"""
Built-in application flow for sub-services without a dedicated table.

Its states are the router's reserved core names, so it is held by the router
directly instead of being registered like a domain flow.
"""

from __future__ import annotations

from workflows.common import states
from workflows.common.validators import email, min_length, phone_shape
from workflows.definitions import DEFAULT_ENDPOINT, FieldSpec, FlowDefinition

FLOW_ID = "generic_application"


def build(**options) -> FlowDefinition:
    return FlowDefinition(
        flow_id=FLOW_ID,
        label="Service Application",
        prefix="generic",
        service_type="",
        endpoint=DEFAULT_ENDPOINT,
        entry_state=states.APPLICATION_PROCESS,
        confirmation_state=states.CONFIRMATION,
        end_state=states.END,
        state_names={
            "fullName": states.COLLECT_INFO_NAME,
            "email": states.COLLECT_INFO_EMAIL,
            "phoneNumber": states.COLLECT_INFO_PHONE,
            "companyName": states.COLLECT_INFO_COMPANY,
        },
        steps=(
            FieldSpec(
                key="fullName",
                label="👤 Full Name",
                prompt="Please enter your full name:",
                validator=min_length(2),
            ),
            FieldSpec(
                key="email",
                label="📧 Email Address",
                prompt="Please enter your email address:",
                validator=email(),
            ),
            FieldSpec(
                key="phoneNumber",
                label="📱 Phone Number",
                prompt="Please enter your phone number:",
                validator=phone_shape(),
            ),
            FieldSpec(
                key="companyName",
                label="🏢 Company Name",
                prompt="Please enter your company name:",
                validator=min_length(2),
            ),
        ),
        **options,
    )
