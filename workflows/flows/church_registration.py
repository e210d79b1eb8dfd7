"""Church registration: church name, one record per founder, objectives."""

from __future__ import annotations

from workflows.common.validators import min_length, non_empty, numeric_range, phone_shape
from workflows.definitions import FieldSpec, FlowDefinition, RepeatGroup

FLOW_ID = "church_registration"
MAX_FOUNDERS = 10
REGISTRATION_FEE = "$650"

FOUNDER_FIELDS = (
    FieldSpec(
        key="name",
        label="👤 Full Name",
        prompt="Please enter the founder's full name:",
        validator=min_length(2),
    ),
    FieldSpec(
        key="idNumber",
        label="🆔 ID Number",
        prompt="Please enter the founder's national ID number:",
        validator=min_length(5),
    ),
    FieldSpec(
        key="address",
        label="🏠 Physical Address",
        prompt="Please enter the founder's physical address:",
        validator=min_length(5),
    ),
    FieldSpec(
        key="contact",
        label="📞 Contact Information",
        prompt="Please enter the founder's phone number:",
        validator=phone_shape(),
    ),
)


def build(**options) -> FlowDefinition:
    return FlowDefinition(
        flow_id=FLOW_ID,
        label="Church Registration",
        prefix="church",
        service_type="Church Registration",
        endpoint="/church_reg_apply",
        intro=(
            "⛪ *Church Registration*\n\n"
            f"Registration fee: {REGISTRATION_FEE}\n\n"
            "We'll need the church name, details for each founder and the "
            "church's objectives."
        ),
        auto_proceed=True,
        pricing={"Church Registration": (f"Registration fee: {REGISTRATION_FEE}",)},
        steps=(
            FieldSpec(
                key="churchName",
                label="⛪ Church Name",
                prompt="Please enter the proposed name of the church:",
                validator=min_length(2),
            ),
            FieldSpec(
                key="foundersCount",
                label="Number of Founders",
                prompt=f"How many founders will be listed? (1 to {MAX_FOUNDERS})",
                validator=numeric_range(1, MAX_FOUNDERS),
            ),
            RepeatGroup(
                key="founders",
                count_key="foundersCount",
                item_label="Founder",
                fields=FOUNDER_FIELDS,
            ),
            FieldSpec(
                key="objectives",
                label="🎯 Objectives",
                prompt="Please describe the main objectives of the church:",
                validator=non_empty(),
            ),
        ),
        **options,
    )
