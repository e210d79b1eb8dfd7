"""
MODULE: api/routes/sessions.py
PURPOSE: Session diagnostics endpoints.

ENDPOINTS:
    GET  /api/sessions                     - List active sessions with progress
    GET  /api/sessions/{identity}          - One session with full progress bar
    POST /api/sessions/{identity}/reset    - Discard a session
    POST /api/sessions/sweep               - Run the session reaper now

Only mounted in dev mode (see app.py); session payloads contain personal data.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from activity.progress import get_progress, get_progress_summary
from api.deps import get_intake_router
from sessions.types import Session
from workflows.runtime.router import IntakeRouter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sessions"])


def _definition_for(intake: IntakeRouter, session: Session):
    engine = intake.engine_for(session.state)
    return engine.definition if engine is not None else None


@router.get("/api/sessions")
async def list_sessions(intake: IntakeRouter = Depends(get_intake_router)) -> Dict[str, Any]:
    sessions = []
    for session in intake.store.all():
        entry = session.to_dict()
        entry["progress"] = get_progress_summary(session, _definition_for(intake, session))
        sessions.append(entry)
    return {"count": len(sessions), "sessions": sessions}


@router.get("/api/sessions/{identity}")
async def get_session(identity: str, intake: IntakeRouter = Depends(get_intake_router)) -> Dict[str, Any]:
    session = intake.store.get(identity)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    body = session.to_dict()
    body["history"] = [entry.to_dict() for entry in session.history]
    body["progress"] = get_progress(session, _definition_for(intake, session)).to_dict()
    return body


@router.post("/api/sessions/sweep")
async def sweep_sessions(request: Request) -> Dict[str, Any]:
    reaper = getattr(request.app.state, "session_reaper", None)
    if reaper is None:
        raise HTTPException(status_code=503, detail="Session reaper is not running")
    removed = reaper.sweep()
    return {"removed": removed}


@router.post("/api/sessions/{identity}/reset")
async def reset_session(identity: str, intake: IntakeRouter = Depends(get_intake_router)) -> Dict[str, Any]:
    async with intake.store.hold(identity):
        existed = intake.store.get(identity) is not None
        intake.store.reset(identity)
    logger.info("[API] Session %s reset via diagnostics (existed=%s)", identity, existed)
    return {"identity": identity, "reset": existed}
