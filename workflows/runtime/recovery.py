"""
Error recovery boundary for message dispatch.

Any exception escaping a dispatch moves the session into the recovery
state, bumps its error count and answers with the recovery template. The
session itself is kept, so the user can return to the menu, start over or
ask for help without losing their identity's conversation.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence

from detection.intent import Intent, is_greeting, resolve_intent
from sessions.store import SessionStore
from sessions.types import Session
from utils.fallback import create_fallback_context, log_fallback
from workflows.common import states
from workflows.common.templates import main_menu_response, recovery_response
from workflows.common.types import OutboundResponse

logger = logging.getLogger(__name__)

RECOVERY_HELP = (
    "🆘 *Need a hand?*\n\n"
    "Something went wrong while handling your last message.\n\n"
    "• Type 'menu' to return to the main menu\n"
    "• Type 'start' to begin a new conversation\n"
    "• Contact our support team if the problem continues"
)


class ErrorRecoveryController:
    def __init__(self, store: SessionStore, menu_labels: Sequence[str] = ()) -> None:
        self._store = store
        self._menu_labels = list(menu_labels)

    async def guard(
        self,
        session: Session,
        dispatch: Callable[[], Awaitable[OutboundResponse]],
    ) -> OutboundResponse:
        """Run ``dispatch``; convert any failure into the recovery response."""
        try:
            return await dispatch()
        except Exception as exc:
            logger.exception("[RECOVERY] Dispatch failed for %s in state %s", session.identity, session.state)
            return self.enter(session, exc)

    def enter(self, session: Session, error: BaseException) -> OutboundResponse:
        log_fallback(create_fallback_context(
            source="workflows.runtime.router.process",
            trigger="dispatch_failed",
            identity=session.identity,
            state=session.state,
            error=error,
        ))
        session.state = states.RECOVERY
        session.error_count += 1
        session.submission_in_flight = False
        return recovery_response(session.error_count)

    def handle(self, session: Session, text: str) -> OutboundResponse:
        """Handle a message while the session is in the recovery state."""
        intent = resolve_intent(text)

        if intent == Intent.MENU:
            logger.info("[RECOVERY] %s returned to menu after %d error(s)", session.identity, session.error_count)
            session.error_count = 0
            session.clear_payload()
            session.clear_selection()
            session.state = states.MAIN_MENU
            return main_menu_response(self._menu_labels)

        if is_greeting(intent):
            logger.info("[RECOVERY] %s restarted their session", session.identity)
            self._store.reset(session.identity)
            fresh = self._store.get_or_create(session.identity)
            fresh.record(text)
            fresh.state = states.MAIN_MENU
            return main_menu_response(self._menu_labels)

        if intent == Intent.HELP:
            return OutboundResponse.text(RECOVERY_HELP)

        return recovery_response(session.error_count)


__all__ = ["ErrorRecoveryController", "RECOVERY_HELP"]
