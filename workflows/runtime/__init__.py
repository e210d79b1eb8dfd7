"""Router assembly.

``build_router`` wires the session store, submission client, menu catalog,
every domain flow and the generic flow into one validated IntakeRouter.
"""
from __future__ import annotations

from typing import Optional

from services.submission import SubmissionClient
from sessions.store import InMemorySessionStore, SessionStore
from workflows.catalog import MenuCatalog, default_catalog
from workflows.engine import FlowEngine
from workflows.flows import build_flows
from workflows.flows import generic as generic_flow
from workflows.io.config_store import IntakeSettings, get_settings
from workflows.runtime.router import IntakeRouter


def build_router(
    settings: Optional[IntakeSettings] = None,
    *,
    store: Optional[SessionStore] = None,
    client: Optional[SubmissionClient] = None,
    catalog: Optional[MenuCatalog] = None,
) -> IntakeRouter:
    settings = settings if settings is not None else get_settings()
    store = store if store is not None else InMemorySessionStore()
    client = client if client is not None else SubmissionClient(settings.api_base_url, timeout=settings.submit_timeout)
    catalog = catalog if catalog is not None else default_catalog()
    options = {
        "max_submission_attempts": settings.max_submission_attempts,
        "retry_backoff_seconds": settings.retry_backoff_seconds,
    }

    router = IntakeRouter(
        store,
        catalog=catalog,
        generic=FlowEngine(generic_flow.build(**options), client, catalog=catalog),
    )
    for definition in build_flows(**options):
        engine = FlowEngine(definition, client, catalog=catalog)
        router.register_flow(definition.flow_id, engine.owns, engine)
    router.validate_catalog()
    return router


__all__ = ["build_router", "IntakeRouter"]
