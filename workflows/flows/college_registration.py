"""College registration for church or company sponsored institutions."""

from __future__ import annotations

from workflows.common.validators import email, min_length, phone_shape
from workflows.definitions import FieldSpec, FlowDefinition

FLOW_ID = "college_registration"


def build(**options) -> FlowDefinition:
    return FlowDefinition(
        flow_id=FLOW_ID,
        label="College Registration",
        prefix="college",
        service_type="College Registration",
        endpoint="/college_applications",
        intro=(
            "🎓 *College Registration*\n\n"
            "We register colleges run by churches and companies with the "
            "relevant ministry."
        ),
        steps=(
            FieldSpec(
                key="fullName",
                label="👤 Full Name",
                prompt="Please enter your full name:",
                validator=min_length(2),
            ),
            FieldSpec(
                key="churchName",
                label="⛪ Church/Company Name",
                prompt="Please enter the name of the sponsoring church or company:",
                validator=min_length(2),
            ),
            FieldSpec(
                key="email",
                label="📧 Email Address",
                prompt="Please enter your email address:",
                validator=email(),
            ),
            FieldSpec(
                key="phone",
                label="📱 Phone Number",
                prompt="Please enter your phone number:",
                validator=phone_shape(),
            ),
        ),
        **options,
    )
