"""
MODULE: api/routes/messages.py
PURPOSE: Inbound chat message endpoint for the channel adapter.

ROUTES:
    POST /api/messages   - Process one inbound message and return the reply

The channel adapter (e.g. a WhatsApp webhook bridge) posts the sender identity
and message text; the reply is either plain text or a template selection with
variables and a plain-text fallback.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_intake_router
from workflows.runtime.router import IntakeRouter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------

class InboundMessageRequest(BaseModel):
    identity: str = Field(..., min_length=1)
    text: str = ""


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.post("/api/messages")
async def receive_message(
    request: InboundMessageRequest,
    intake: IntakeRouter = Depends(get_intake_router),
) -> Dict[str, Any]:
    """
    Process one inbound message.

    Example response:
    {
        "identity": "+263771234567",
        "reply": {"kind": "template", "templateId": "HX...", "variables": {}, "fallback": "..."},
        "state": "main_menu",
        "progress": {"current_stage": "service", "percentage": 10}
    }
    """
    identity = request.identity.strip()
    outcome = await intake.handle_message(identity, request.text)

    logger.info("[API] %s -> %s (%s)", identity, outcome.state, outcome.reply.kind)
    return {
        "identity": identity,
        "reply": outcome.reply.to_dict(),
        "state": outcome.state,
        "progress": outcome.progress,
    }
