"""
Production-safe FastAPI application entrypoint.

This module provides a clean FastAPI app instance with NO import-time side effects
beyond logging setup: the intake router and session reaper are built in the
lifespan handler, so tests can create isolated apps via ``create_app``.

For production deployment: uvicorn app:app
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager, suppress
from datetime import timedelta
from typing import Optional
import asyncio
import os
import logging

from sessions.reaper import SessionReaper
from workflows.io.config_store import get_settings
from workflows.runtime import build_router
from workflows.runtime.router import IntakeRouter

# Configure logging (this is acceptable at import time - just sets up handlers)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


# Environment mode detection (read-only, no mutations)
def _is_dev_mode() -> bool:
    """Check if running in development mode. Does NOT mutate environment."""
    env_value = os.getenv("ENV", "prod").lower()
    return env_value in ("dev", "development", "local")


def _make_lifespan(intake_router: Optional[IntakeRouter], run_reaper: bool):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the intake router and start the periodic session sweep."""
        settings = get_settings()
        router = intake_router if intake_router is not None else build_router(settings)
        reaper = SessionReaper(
            router.store,
            router.is_terminal,
            max_age=timedelta(hours=settings.session_max_age_hours),
            recovery_idle=timedelta(minutes=settings.recovery_idle_minutes),
        )
        app.state.intake_router = router
        app.state.session_reaper = reaper
        logger.info("[Backend] Intake API base URL: %s", settings.api_base_url)

        reaper_task = None
        if run_reaper:
            reaper_task = asyncio.create_task(reaper.run_periodically(settings.reaper_interval_seconds))

        yield

        if reaper_task is not None:
            reaper_task.cancel()
            with suppress(asyncio.CancelledError):
                await reaper_task

    return lifespan


def create_app(
    intake_router: Optional[IntakeRouter] = None,
    *,
    run_reaper: bool = True,
    include_diagnostics: Optional[bool] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is a factory function that returns a fully configured app.
    Safe to call multiple times (e.g., for testing).
    """
    is_dev = _is_dev_mode() if include_diagnostics is None else include_diagnostics

    app = FastAPI(title="Business Intake Router", lifespan=_make_lifespan(intake_router, run_reaper))

    # Import routers (lazy import to avoid circular dependencies)
    from api.routes import messages_router, sessions_router

    app.include_router(messages_router)

    # Session diagnostics only in dev mode (exposes collected personal data)
    if is_dev:
        app.include_router(sessions_router)

    _configure_cors(app)
    _add_health_endpoint(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware based on environment."""
    raw_origins = os.getenv("ALLOWED_ORIGINS")

    if raw_origins:
        allowed_origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
        # Remove "*" if present (causes crash with allow_credentials=True)
        if "*" in allowed_origins:
            allowed_origins = [o for o in allowed_origins if o != "*"]

        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # Dev default: localhost only
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )


def _add_health_endpoint(app: FastAPI) -> None:
    """Add health check endpoint."""

    @app.get("/health")
    async def health():
        router = getattr(app.state, "intake_router", None)
        return {
            "status": "ok" if router is not None else "starting",
            "flows": sorted(router.flow_states()) if router is not None else [],
        }


# Create the default app instance
# This is what gets imported by uvicorn (e.g., uvicorn app:app)
app = create_app()
