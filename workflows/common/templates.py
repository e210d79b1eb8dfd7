"""
Chat template catalog.

Maps template names used by the router to the channel's template ids, with
a plain-text rendering for each so the adapter can still answer when a
template send fails.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from workflows.common.types import OutboundResponse

MAIN_MENU = "MAIN_MENU"
ERROR_RECOVERY = "ERROR_RECOVERY"

TEMPLATE_IDS: Dict[str, str] = {
    MAIN_MENU: "HX1709f2dbf88a5e5cf077a618ada6a8e0",
    ERROR_RECOVERY: "HXc1d7091fad11d1b12a8a0da7666d24e5",
    "COMPANY_REGISTRATION": "HX7b4e6872461fcb15654fd16777965318",
    "TAX_CONSULTANCY": "HX4dfa2cdc77dc9b6e1caebbde44d371c4",
    "LICENSING": "HXea5ec4982c3dd8cbaac667c79a60de53",
    "ACCOUNTING_MANAGEMENT": "HX168e6d2f02789f825a371b58125b87be",
    "AUDIT_ASSURANCE": "HX6ebf2d3d216ab02342453a666ee61991",
    "IT_IS_MANAGEMENT": "HXc7b4fbad99fe9dc75f48a96a422bfeb2",
    "BUSINESS_SOFTWARE": "HX8404ac62c493dfbb97301e2f35a21fb4",
    "MICROSOFT_SERVICES": "HXf057ef40ecb1b5e7f0c35714ec1bc5dd",
    "BUSINESS_STRATEGY": "HXa4f1174d6825429e34b5db664eb5071b",
}

ERROR_RECOVERY_TEXT = (
    "⚠️ Sorry, something went wrong on our side (issue #{error_count}).\n\n"
    "Type 'menu' to return to the main menu, 'start' to begin again "
    "or 'help' for assistance."
)

HELP_TEXT = (
    "🆘 *Help*\n\n"
    "• 'menu' - return to the main menu\n"
    "• 'back' - go back one step\n"
    "• 'start' - start over\n"
    "• 'help' - show this message"
)


def template_id(name: str) -> Optional[str]:
    return TEMPLATE_IDS.get(name)


def is_placeholder(value: Optional[str]) -> bool:
    """True for empty ids or unfilled ``HX..._template_id`` stand-ins."""
    if not value:
        return True
    return value.endswith("_template_id") or not value.startswith("HX")


def main_menu_text(labels: Iterable[str]) -> str:
    lines = ["🏢 *Our Services*", "", "Please reply with a service name or number:"]
    lines += [f"{number}. {label}" for number, label in enumerate(labels, start=1)]
    lines += ["", "Type 'help' at any time for assistance."]
    return "\n".join(lines)


def category_text(label: str, sub_services: Iterable[str]) -> str:
    lines = [f"📋 *{label}*", "", "Please choose one of the following services:"]
    lines += [f"• {name}" for name in sub_services]
    lines += ["", "Type 'back' to return to the main menu."]
    return "\n".join(lines)


def main_menu_response(labels: Iterable[str]) -> OutboundResponse:
    return OutboundResponse.template(
        TEMPLATE_IDS[MAIN_MENU],
        fallback=main_menu_text(labels),
    )


def recovery_response(error_count: int) -> OutboundResponse:
    variables = {"error_count": str(error_count)}
    return OutboundResponse.template(
        TEMPLATE_IDS[ERROR_RECOVERY],
        variables,
        fallback=ERROR_RECOVERY_TEXT.format(**variables),
    )


__all__ = [
    "MAIN_MENU",
    "ERROR_RECOVERY",
    "TEMPLATE_IDS",
    "HELP_TEXT",
    "template_id",
    "is_placeholder",
    "main_menu_text",
    "category_text",
    "main_menu_response",
    "recovery_response",
]
