"""
MODULE: workflows/catalog.py
PURPOSE: Main-menu service catalog.

Maps each main-menu category to its chat template and its sub-services, and
each sub-service to the flow that handles it. Sub-services without a
dedicated flow (``flow_id=None``) fall through to the built-in generic
application flow.

DESIGN:
- Labels are matched case-insensitively, exact match first
- A category may also be picked by its menu number
- The catalog is validated against the registered flows at startup:
  duplicate labels, unknown flow ids and missing or placeholder template ids
  raise FlowConfigError instead of surfacing mid-conversation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from workflows.common.errors import FlowConfigError
from workflows.common.templates import TEMPLATE_IDS, category_text, is_placeholder
from workflows.common.types import OutboundResponse
from workflows.definitions import FlowDefinition

logger = logging.getLogger(__name__)

# Partial matches shorter than this are ignored
MIN_PARTIAL_MATCH = 3


@dataclass(frozen=True)
class SubService:
    label: str
    flow_id: Optional[str] = None


@dataclass(frozen=True)
class ServiceCategory:
    label: str
    template: str
    sub_services: Tuple[SubService, ...]

    @property
    def template_id(self) -> Optional[str]:
        return TEMPLATE_IDS.get(self.template)

    @property
    def sub_service_labels(self) -> List[str]:
        return [sub.label for sub in self.sub_services]

    def find(self, text: str) -> Optional[SubService]:
        return _match(text, self.sub_services)

    def response(self) -> OutboundResponse:
        return OutboundResponse.template(
            self.template_id,
            fallback=category_text(self.label, self.sub_service_labels),
        )


def _match(text: str, items):
    wanted = text.strip().lower()
    if not wanted:
        return None
    for item in items:
        if item.label.lower() == wanted:
            return item
    if len(wanted) < MIN_PARTIAL_MATCH:
        return None
    for item in items:
        if wanted in item.label.lower():
            return item
    return None


@dataclass(frozen=True)
class MenuCatalog:
    categories: Tuple[ServiceCategory, ...]

    @property
    def labels(self) -> List[str]:
        return [category.label for category in self.categories]

    def category(self, label: Optional[str]) -> Optional[ServiceCategory]:
        if not label:
            return None
        for category in self.categories:
            if category.label == label:
                return category
        return None

    def match_category(self, text: str) -> Optional[ServiceCategory]:
        stripped = text.strip()
        if stripped.isdigit():
            index = int(stripped) - 1
            if 0 <= index < len(self.categories):
                return self.categories[index]
            return None
        return _match(stripped, self.categories)

    def validate(self, flows: Mapping[str, FlowDefinition]) -> None:
        """Raise FlowConfigError if the catalog disagrees with itself or the flows."""
        problems: List[str] = []

        seen_categories: Dict[str, str] = {}
        for category in self.categories:
            key = category.label.lower()
            if key in seen_categories:
                problems.append(f"duplicate menu category '{category.label}'")
            seen_categories[key] = category.label

            if is_placeholder(category.template_id):
                problems.append(
                    f"category '{category.label}' uses undefined template '{category.template}'"
                )

            seen_subs: Dict[str, str] = {}
            for sub in category.sub_services:
                sub_key = sub.label.lower()
                if sub_key in seen_subs:
                    problems.append(f"duplicate sub-service '{sub.label}' in '{category.label}'")
                seen_subs[sub_key] = sub.label
                if sub.flow_id is None:
                    continue
                flow = flows.get(sub.flow_id)
                if flow is None:
                    problems.append(f"sub-service '{sub.label}' references unknown flow '{sub.flow_id}'")
                elif flow.sub_services and sub.label not in flow.sub_services:
                    problems.append(
                        f"sub-service '{sub.label}' is not offered by flow '{sub.flow_id}'"
                    )

        for flow in flows.values():
            if flow.label.lower() in seen_categories:
                problems.append(f"menu label '{flow.label}' is claimed by a flow and a category")

        if problems:
            raise FlowConfigError("menu catalog is invalid: " + "; ".join(problems))
        logger.debug("[CATALOG] %d categories validated", len(self.categories))


def _subs(flow_id: Optional[str], *labels: str) -> Tuple[SubService, ...]:
    return tuple(SubService(label, flow_id) for label in labels)


def default_catalog() -> MenuCatalog:
    return MenuCatalog(categories=(
        ServiceCategory(
            label="Business Registration",
            template="COMPANY_REGISTRATION",
            sub_services=(
                SubService("Company Registration", "company_registration"),
                SubService("VAT Registration", "vat_registration"),
                SubService("Vendor Number", "vendor_number"),
                SubService("Company Re-Registration", "company_reregistration"),
                SubService("Company De-Registration", "company_deregistration"),
                SubService("Church Registration", "church_registration"),
                SubService("College Registration", "college_registration"),
                SubService("PRAZ Registration", "praz_registration"),
            ) + _subs(None, "NASSA Registration", "Annual Registration"),
        ),
        ServiceCategory(
            label="Licensing",
            template="LICENSING",
            sub_services=_subs(
                "licensing",
                "Liquor license",
                "Import license",
                "Trading license",
                "Money lending license",
            ),
        ),
        ServiceCategory(
            label="Tax Consultancy",
            template="TAX_CONSULTANCY",
            sub_services=_subs(
                "tax_consultancy",
                "Tax Registration",
                "Tax Clearance Renewal",
                "Quarterly Payment Dates",
                "Fiscalisation",
                "Fiscal Devices",
                "NSSA Registration",
                "Tax Advisory",
                "Tax Health Check",
            ),
        ),
        ServiceCategory(
            label="IT & Information Systems",
            template="IT_IS_MANAGEMENT",
            sub_services=_subs(
                "it_services",
                "IT Audit & Consultancy",
                "Software Intelligence",
                "Systems Installations",
                "Thermal Printers",
            ),
        ),
        ServiceCategory(
            label="Business Software",
            template="BUSINESS_SOFTWARE",
            sub_services=_subs(None, "SAGE Evolution", "Zoho", "Bookkeeper license", "QuickPro Payroll"),
        ),
        ServiceCategory(
            label="Accounting & Management",
            template="ACCOUNTING_MANAGEMENT",
            sub_services=_subs(
                "accounting_management",
                "Book-keeping Services",
                "Payroll Outsourcing",
                "Business Valuations",
                "Due Diligence",
                "Dividend Certificates",
            ),
        ),
        ServiceCategory(
            label="Audit & Assurance",
            template="AUDIT_ASSURANCE",
            sub_services=_subs(
                "audit_assurance",
                "External Audits",
                "Internal Audits",
                "Forensic Investigations",
                "Special Purpose Audits",
            ),
        ),
        ServiceCategory(
            label="Microsoft Services",
            template="MICROSOFT_SERVICES",
            sub_services=_subs("microsoft_services", "Microsoft Excel", "365 Copilot", "Email Server"),
        ),
        ServiceCategory(
            label="Business Strategy",
            template="BUSINESS_STRATEGY",
            sub_services=_subs(
                "business_strategy",
                "Strategic Planning",
                "Business Plan Development",
                "Market Research",
                "Feasibility Studies",
            ),
        ),
    ))


__all__ = ["SubService", "ServiceCategory", "MenuCatalog", "default_catalog"]
