"""Router-owned states: start, main menu, sub-service selection and default.

These states sit outside every domain flow. They pick which flow a
conversation enters and catch anything no flow claims.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from detection.intent import Intent, is_greeting, resolve_intent
from sessions.types import Session
from workflows.common import states
from workflows.common.templates import HELP_TEXT, main_menu_response, main_menu_text
from workflows.common.types import OutboundResponse

if TYPE_CHECKING:
    from workflows.runtime.router import IntakeRouter

logger = logging.getLogger(__name__)


class CoreStates:
    def __init__(self, router: "IntakeRouter") -> None:
        self._router = router

    @property
    def catalog(self):
        return self._router.catalog

    def main_menu(self, session: Session) -> OutboundResponse:
        session.clear_payload()
        session.clear_selection()
        session.state = states.MAIN_MENU
        return main_menu_response(self.catalog.labels)

    async def handle(self, session: Session, text: str) -> OutboundResponse:
        """Dispatch a message for a session in a core state."""
        if session.state not in states.ROUTER_STATES:
            logger.warning("[ROUTER] Unrecognized state %r for %s, using default", session.state, session.identity)
            session.state = states.DEFAULT

        intent = resolve_intent(text)
        if intent == Intent.HELP:
            return OutboundResponse.text(HELP_TEXT)
        if intent == Intent.RESET:
            return self.reset(session)

        if session.state == states.START:
            return self.handle_start(session, intent)
        if session.state == states.MAIN_MENU:
            return await self.handle_main_menu(session, text, intent)
        if session.state == states.SUB_SERVICES:
            return await self.handle_sub_services(session, text, intent)
        return self.handle_default(session, intent)

    def handle_start(self, session: Session, intent: Intent) -> OutboundResponse:
        logger.info("[ROUTER] %s opened a conversation (%s)", session.identity, intent.value)
        return self.main_menu(session)

    async def handle_main_menu(self, session: Session, text: str, intent: Intent) -> OutboundResponse:
        if is_greeting(intent) or intent in (Intent.MENU, Intent.BACK):
            return self.main_menu(session)

        engine = self._router.flow_by_label(text)
        if engine is not None:
            session.clear_selection()
            return await engine.start(session)

        category = self.catalog.match_category(text)
        if category is not None:
            session.clear_payload()
            session.selected_service = category.label
            session.selected_sub_service = None
            session.state = states.SUB_SERVICES
            logger.info("[ROUTER] %s selected category %s", session.identity, category.label)
            return category.response()

        logger.debug("[ROUTER] No service matches %r", text)
        return OutboundResponse.text(
            f"❓ Sorry, \"{text.strip()}\" is not one of our services.\n\n"
            + main_menu_text(self.catalog.labels)
        )

    async def handle_sub_services(self, session: Session, text: str, intent: Intent) -> OutboundResponse:
        category = self.catalog.category(session.selected_service)
        if category is None or is_greeting(intent) or intent in (Intent.MENU, Intent.BACK):
            return self.main_menu(session)

        sub_service = category.find(text) if intent == Intent.NONE else None
        if sub_service is not None:
            engine = self._router.flow(sub_service.flow_id) if sub_service.flow_id else self._router.generic
            logger.info(
                "[ROUTER] %s selected %s -> %s",
                session.identity,
                sub_service.label,
                engine.flow_id,
            )
            return await engine.start(session, sub_service.label)

        options = "\n".join(f"• {label}" for label in category.sub_service_labels)
        return OutboundResponse.text(
            f"You're in the *{category.label}* section. Please choose a service:\n\n{options}\n\n"
            "↩️ Type 'back' for the main menu"
        )

    def handle_default(self, session: Session, intent: Intent) -> OutboundResponse:
        if is_greeting(intent) or intent in (Intent.MENU, Intent.BACK):
            return self.main_menu(session)
        return OutboundResponse.text(
            "🤔 I didn't understand that.\n\nType 'menu' to see our services or 'help' for assistance."
        )

    def reset(self, session: Session) -> OutboundResponse:
        self._router.store.reset(session.identity)
        return OutboundResponse.text("🔄 Your session has been reset. Say 'hi' to start again.")


__all__ = ["CoreStates"]
