"""Request-scoped access to the application's intake router."""

from fastapi import HTTPException, Request

from workflows.runtime.router import IntakeRouter


def get_intake_router(request: Request) -> IntakeRouter:
    router = getattr(request.app.state, "intake_router", None)
    if router is None:
        raise HTTPException(status_code=503, detail="Intake router is not initialised")
    return router
