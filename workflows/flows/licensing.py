"""Business licence applications (liquor, import, trading, money lending)."""

from __future__ import annotations

from workflows.common.validators import email, min_length, numeric_range, phone_shape
from workflows.definitions import FieldSpec, FlowDefinition

from .common import free_text

FLOW_ID = "licensing"

SUB_SERVICES = (
    "Liquor license",
    "Import license",
    "Trading license",
    "Money lending license",
)


def build(**options) -> FlowDefinition:
    return FlowDefinition(
        flow_id=FLOW_ID,
        label="Licence Application",
        prefix="licensing",
        service_type="Licensing",
        endpoint="/licence-applications",
        sub_services=SUB_SERVICES,
        intro="📜 *Business Licensing*\n\nWe prepare and lodge licence applications on your behalf.",
        steps=(
            FieldSpec(
                key="companyName",
                label="🏢 Company/Business Name",
                prompt="Please enter your company or business name:",
                validator=min_length(2),
            ),
            FieldSpec(
                key="email",
                label="📧 Email Address",
                prompt="Please enter your email address:",
                validator=email(),
            ),
            free_text("address", "📍 Business Address", "Please enter your business address:"),
            FieldSpec(
                key="contactPerson",
                label="👤 Contact Person Name",
                prompt="Please enter the contact person's name:",
                validator=min_length(2),
            ),
            FieldSpec(
                key="phoneNumber",
                label="📱 Phone Number",
                prompt="Please enter your phone number:",
                validator=phone_shape(),
            ),
            free_text("businessType", "🏪 Type of Business", "What type of business is this (e.g., restaurant, retail, wholesale)?"),
            FieldSpec(
                key="premisesSize",
                label="📏 Premises Size (m²)",
                prompt="What is the size of your premises in square meters?",
                validator=numeric_range(1, 1_000_000),
            ),
            free_text("targetMarket", "🎯 Target Market", "Please briefly describe your target market:"),
        ),
        **options,
    )
