"""
Core state tags owned by the router.

Domain flows never reuse these names; registration rejects any overlap.
"""

START = "start"
MAIN_MENU = "main_menu"
SUB_SERVICES = "sub_services"
DEFAULT = "default"
RECOVERY = "error_recovery"

# Built-in generic application flow
APPLICATION_PROCESS = "application_process"
COLLECT_INFO_NAME = "collect_info_name"
COLLECT_INFO_EMAIL = "collect_info_email"
COLLECT_INFO_PHONE = "collect_info_phone"
COLLECT_INFO_COMPANY = "collect_info_company"
CONFIRMATION = "confirmation"
END = "end"

ROUTER_STATES = frozenset({START, MAIN_MENU, SUB_SERVICES, DEFAULT, RECOVERY})

GENERIC_FLOW_STATES = frozenset({
    APPLICATION_PROCESS,
    COLLECT_INFO_NAME,
    COLLECT_INFO_EMAIL,
    COLLECT_INFO_PHONE,
    COLLECT_INFO_COMPANY,
    CONFIRMATION,
    END,
})

RESERVED_STATES = ROUTER_STATES | GENERIC_FLOW_STATES

__all__ = [
    "START",
    "MAIN_MENU",
    "SUB_SERVICES",
    "DEFAULT",
    "RECOVERY",
    "APPLICATION_PROCESS",
    "COLLECT_INFO_NAME",
    "COLLECT_INFO_EMAIL",
    "COLLECT_INFO_PHONE",
    "COLLECT_INFO_COMPANY",
    "CONFIRMATION",
    "END",
    "ROUTER_STATES",
    "GENERIC_FLOW_STATES",
    "RESERVED_STATES",
]
