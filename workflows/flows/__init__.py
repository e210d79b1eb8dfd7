"""
Intake flow tables, one module per service family.

``build_flows`` returns every domain flow in registration order; options such
as ``max_submission_attempts`` apply to all of them.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from workflows.definitions import FlowDefinition

from . import (
    accounting_management,
    audit_assurance,
    business_strategy,
    church_registration,
    college_registration,
    company_registration,
    de_registration,
    it_services,
    licensing,
    microsoft_services,
    praz_registration,
    re_registration,
    tax_consultancy,
    vat_registration,
)

FLOW_BUILDERS: Dict[str, Callable[..., FlowDefinition]] = {
    company_registration.FLOW_ID: company_registration.build,
    vat_registration.VAT_FLOW_ID: vat_registration.build,
    vat_registration.VENDOR_FLOW_ID: vat_registration.build_vendor,
    re_registration.FLOW_ID: re_registration.build,
    de_registration.FLOW_ID: de_registration.build,
    church_registration.FLOW_ID: church_registration.build,
    college_registration.FLOW_ID: college_registration.build,
    praz_registration.FLOW_ID: praz_registration.build,
    tax_consultancy.FLOW_ID: tax_consultancy.build,
    accounting_management.FLOW_ID: accounting_management.build,
    it_services.FLOW_ID: it_services.build,
    audit_assurance.FLOW_ID: audit_assurance.build,
    licensing.FLOW_ID: licensing.build,
    microsoft_services.FLOW_ID: microsoft_services.build,
    business_strategy.FLOW_ID: business_strategy.build,
}


def build_flows(**options) -> List[FlowDefinition]:
    return [builder(**options) for builder in FLOW_BUILDERS.values()]


__all__ = ["FLOW_BUILDERS", "build_flows"]
