"""
MODULE: workflows/engine.py
PURPOSE: Runs one transition of a declarative intake flow.

One FlowEngine serves one FlowDefinition. Given the session and the already
resolved Intent, ``handle`` applies exactly one transition:

    ENTRY         proceed -> first field; documents / sub-service choice / guidance
    FIELD         valid input -> store, advance (loop inside repeat groups)
                  invalid input -> same state, payload untouched
    CONFIRMATION  confirm -> submit once; retry (after a failure, bounded);
                  cancel -> entry; edit/back -> first field
    END           start/menu -> main menu

``menu`` and ``help`` behave the same in every state; ``back`` moves one
level up. The only suspension point is the submission call.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from detection.intent import Intent
from services.submission import SubmissionClient
from sessions.types import Session
from utils.fallback import create_fallback_context, wrap_fallback
from workflows.catalog import MenuCatalog
from workflows.common import states
from workflows.common.templates import main_menu_response
from workflows.common.types import OutboundResponse, SubmissionResult
from workflows.definitions import FlowDefinition, Phase, StateSpec

logger = logging.getLogger(__name__)

# Keys the engine adds to the payload after a successful submission
RESULT_KEYS = ("applicationId", "referenceNumber")


class FlowEngine:
    def __init__(
        self,
        definition: FlowDefinition,
        client: SubmissionClient,
        *,
        catalog: Optional[MenuCatalog] = None,
    ) -> None:
        self.definition = definition
        self._client = client
        self._catalog = catalog

    @property
    def flow_id(self) -> str:
        return self.definition.flow_id

    def owns(self, state: Optional[str]) -> bool:
        return self.definition.owns(state)

    def shortcuts_for(self, state: str) -> Mapping[str, Intent]:
        spec = self.definition.states.get(state)
        return spec.shortcuts if spec is not None else {}

    def is_terminal(self, state: str) -> bool:
        return state == self.definition.end_state

    # ================================================================ entry

    async def start(self, session: Session, sub_service: Optional[str] = None) -> OutboundResponse:
        """Enter the flow with a fresh payload."""
        session.start_payload()
        if sub_service is not None:
            session.selected_sub_service = sub_service
        logger.info(
            "[FLOW] %s started for %s (sub-service=%s)",
            self.flow_id,
            session.identity,
            session.selected_sub_service,
        )

        if self.definition.auto_proceed:
            first = self.definition.state(self.definition.first_field_state)
            session.state = first.name
            parts = [self.definition.intro] if self.definition.intro else []
            parts.append(self._prompt(first, session))
            return OutboundResponse.text("\n\n".join(parts))

        session.state = self.definition.entry_state
        return OutboundResponse.text(self._guidance(session, with_intro=True))

    # ============================================================= dispatch

    async def handle(self, session: Session, text: str, intent: Intent) -> OutboundResponse:
        spec = self.definition.states.get(session.state)
        if spec is None:
            raise LookupError(f"state '{session.state}' is not part of flow '{self.flow_id}'")

        if intent == Intent.HELP:
            return OutboundResponse.text(self._help(spec))
        if intent == Intent.MENU:
            return self.to_main_menu(session)

        if spec.phase == Phase.ENTRY:
            return self._handle_entry(session, text, intent)
        if spec.phase == Phase.FIELD:
            return self._handle_field(session, spec, text, intent)
        if spec.phase == Phase.CONFIRMATION:
            return await self._handle_confirmation(session, intent)
        return self._handle_end(session, intent)

    def _handle_entry(self, session: Session, text: str, intent: Intent) -> OutboundResponse:
        definition = self.definition

        if intent == Intent.BACK:
            return self.exit_to_services(session)
        if intent == Intent.DOCUMENTS:
            return OutboundResponse.text(self._documents(session))

        if intent == Intent.NONE and definition.sub_services:
            chosen = definition.find_sub_service(text)
            if chosen is not None:
                session.selected_sub_service = chosen
                logger.debug("[FLOW] %s sub-service selected: %s", self.flow_id, chosen)
                return OutboundResponse.text(self._guidance(session))

        if intent == Intent.PROCEED:
            if definition.sub_services and session.selected_sub_service not in definition.sub_services:
                return OutboundResponse.text(
                    "Please choose a service first:\n\n" + self._sub_service_list()
                )
            if session.domain_payload is None:
                session.start_payload()
            first = definition.state(definition.first_field_state)
            session.state = first.name
            return OutboundResponse.text(
                "📝 Let's start your application.\n\n" + self._prompt(first, session)
            )

        return OutboundResponse.text(self._guidance(session))

    def _handle_field(
        self,
        session: Session,
        spec: StateSpec,
        text: str,
        intent: Intent,
    ) -> OutboundResponse:
        definition = self.definition
        field_spec = spec.field_spec

        if intent == Intent.BACK:
            session.clear_payload()
            session.state = definition.entry_state
            return OutboundResponse.text(
                "↩️ Your application details were cleared.\n\n" + self._guidance(session)
            )

        result = field_spec.validator(text.strip())
        if not result.is_valid:
            logger.debug("[FLOW] %s rejected %s: %s", self.flow_id, field_spec.key, result.reason)
            return OutboundResponse.text(f"❌ {result.reason}\n\n{self._prompt(spec, session)}")

        if result.value in field_spec.abort_values:
            logger.info("[FLOW] %s aborted by %s at %s", self.flow_id, session.identity, spec.name)
            session.clear_payload()
            session.clear_selection()
            session.state = states.MAIN_MENU
            message = field_spec.abort_message or "Your application has been cancelled."
            return OutboundResponse.text(f"{message}\n\nType 'menu' to see our services.")

        payload = session.domain_payload if session.domain_payload is not None else session.start_payload()
        next_state = spec.next_state

        derived = field_spec.derive(result.value) if field_spec.derive is not None else {}
        if spec.group is not None:
            records: List[Dict[str, Any]] = payload.setdefault(spec.group.key, [])
            if spec.is_group_start or not records:
                records.append({})
            records[-1][field_spec.key] = result.value
            records[-1].update(derived)
            if spec.loop_state is not None and len(records) < int(payload.get(spec.group.count_key, 0)):
                next_state = spec.loop_state
        else:
            payload[field_spec.key] = result.value
            payload.update(derived)

        session.state = next_state
        upcoming = definition.state(next_state)
        acknowledgement = f"✅ {field_spec.label}: {result.value}"
        for key, value in derived.items():
            acknowledgement += f"\n• {definition.derived_labels.get(key, key)}: {value}"

        if upcoming.phase == Phase.CONFIRMATION:
            session.submission_attempts = 0
            return OutboundResponse.text(f"{acknowledgement}\n\n{self.render_summary(session)}")
        return OutboundResponse.text(f"{acknowledgement}\n\n{self._prompt(upcoming, session)}")

    async def _handle_confirmation(self, session: Session, intent: Intent) -> OutboundResponse:
        definition = self.definition

        if intent == Intent.CONFIRM:
            return await self._submit(session)
        if intent == Intent.RETRY:
            if session.submission_attempts == 0:
                return OutboundResponse.text(self.render_summary(session))
            return await self._submit(session)

        if intent == Intent.CANCEL:
            logger.info("[FLOW] %s cancelled by %s", self.flow_id, session.identity)
            session.clear_payload()
            session.state = definition.entry_state
            return OutboundResponse.text("❌ Application cancelled.\n\n" + self._guidance(session))

        if intent in (Intent.EDIT, Intent.BACK):
            session.start_payload()
            first = definition.state(definition.first_field_state)
            session.state = first.name
            return OutboundResponse.text("✏️ Let's edit your information.\n\n" + self._prompt(first, session))

        return OutboundResponse.text(self.render_summary(session))

    def _handle_end(self, session: Session, intent: Intent) -> OutboundResponse:
        if intent in (Intent.START, Intent.GREETING, Intent.MENU, Intent.BACK):
            return self.to_main_menu(session)
        reference = (session.domain_payload or {}).get("referenceNumber")
        line = "✅ Your application has been submitted"
        if reference:
            line += f" (reference {reference})"
        return OutboundResponse.text(
            f"{line}.\n\nType 'start' to begin a new application or 'menu' for main services."
        )

    # =========================================================== submission

    async def _submit(self, session: Session) -> OutboundResponse:
        definition = self.definition

        if session.submission_in_flight:
            logger.warning("[FLOW] %s overlapping submission rejected for %s", self.flow_id, session.identity)
            return OutboundResponse.text("⏳ Your application is already being submitted. Please wait a moment.")

        if session.submission_attempts >= definition.max_submission_attempts:
            return OutboundResponse.text(
                f"⚠️ We couldn't submit your application after {session.submission_attempts} attempts.\n\n"
                "Type 'edit' to review your details, 'cancel' to stop, or contact our support team."
            )

        if session.submission_attempts > 0 and definition.retry_backoff_seconds > 0:
            await asyncio.sleep(definition.retry_backoff_seconds * session.submission_attempts)

        body = self.build_submission(session)
        session.submission_in_flight = True
        session.submission_attempts += 1
        try:
            result = await self._client.submit(body, endpoint=definition.endpoint)
        finally:
            session.submission_in_flight = False

        if result.success:
            return self._on_submitted(session, result)

        context = create_fallback_context(
            source="workflows.engine.submit",
            trigger=f"submission_{result.failure_kind or 'failed'}",
            identity=session.identity,
            state=session.state,
            flow_id=self.flow_id,
        )
        message = wrap_fallback(f"❌ Error creating application: {result.message}", context)
        remaining = definition.max_submission_attempts - session.submission_attempts
        hint = "Type 'retry' to try again, " if remaining > 0 else ""
        return OutboundResponse.text(
            f"{message}\n\n{hint}Type 'edit' to modify your information or 'cancel' to cancel."
        )

    def _on_submitted(self, session: Session, result: SubmissionResult) -> OutboundResponse:
        payload = session.domain_payload if session.domain_payload is not None else session.start_payload()
        payload["applicationId"] = result.id
        payload["referenceNumber"] = result.reference_number
        session.state = self.definition.end_state
        logger.info(
            "[FLOW] %s submitted for %s (id=%s, reference=%s)",
            self.flow_id,
            session.identity,
            result.id,
            result.reference_number,
        )
        return OutboundResponse.text(
            "🎉 *Application Submitted Successfully!*\n\n"
            f"Service: {self._title(session)}\n"
            f"Reference Number: {result.reference_number}\n\n"
            "Our team will review your application and contact you shortly.\n\n"
            "Type 'start' for a new application or 'menu' for main services."
        )

    def build_submission(self, session: Session) -> Dict[str, Any]:
        """Submission body: every collected field plus service metadata."""
        body = {
            key: copy.deepcopy(value)
            for key, value in (session.domain_payload or {}).items()
            if key not in RESULT_KEYS
        }
        body.update({
            "serviceType": self.definition.service_type or session.selected_service or self.definition.label,
            "subServiceType": session.selected_sub_service,
            "status": "Pending",
            "submittedAt": datetime.now(timezone.utc).isoformat(),
            "whatsappNumber": session.identity,
            "flowType": self.flow_id,
        })
        return body

    # ============================================================= exits

    def to_main_menu(self, session: Session) -> OutboundResponse:
        session.clear_payload()
        session.clear_selection()
        session.state = states.MAIN_MENU
        labels = self._catalog.labels if self._catalog is not None else []
        return main_menu_response(labels)

    def exit_to_services(self, session: Session) -> OutboundResponse:
        """Leave the flow for the category it was chosen from, or the main menu."""
        category = self._catalog.category(session.selected_service) if self._catalog is not None else None
        if category is None:
            return self.to_main_menu(session)
        session.clear_payload()
        session.selected_sub_service = None
        session.state = states.SUB_SERVICES
        return category.response()

    # ============================================================ rendering

    def _title(self, session: Session) -> str:
        return session.selected_sub_service or self.definition.label

    def _prompt(self, spec: StateSpec, session: Session) -> str:
        field_spec = spec.field_spec
        header = ""
        if spec.group is not None:
            payload = session.domain_payload or {}
            records = payload.get(spec.group.key) or []
            number = len(records) + 1 if spec.is_group_start else max(len(records), 1)
            total = payload.get(spec.group.count_key, "?")
            header = f"*{spec.group.item_label} {number} of {total}*\n"
        return f"{header}*{field_spec.label}*\n{field_spec.prompt}"

    def _sub_service_list(self) -> str:
        return "\n".join(f"• {label}" for label in self.definition.sub_services)

    def _guidance(self, session: Session, *, with_intro: bool = False) -> str:
        definition = self.definition
        lines: List[str] = []
        if with_intro and definition.intro:
            lines += [definition.intro, ""]

        if definition.sub_services and session.selected_sub_service not in definition.sub_services:
            lines += ["Please choose one of the following services:", self._sub_service_list(), ""]
            lines += ["↩️ Type 'back' to go back", "🏠 Type 'menu' for main menu"]
            return "\n".join(lines)

        title = self._title(session)
        pricing = definition.pricing.get(title)
        if pricing:
            lines.append(f"💰 *Pricing for {title}*")
            lines += [f"• {item}" for item in pricing]
        elif definition.sub_services:
            lines.append(f"💰 *{title}*: pricing is quoted after we review your requirements.")
        else:
            lines.append(f"📋 *{title}*")

        documents = definition.documents.get(title)
        if documents:
            lines += ["", "📋 *Required Documents:*"]
            lines += [f"• {doc}" for doc in documents]

        lines += [
            "",
            "✅ Type 'proceed' to start application",
            "📋 Type 'documents' to see required documents",
            "↩️ Type 'back' to choose a different service",
            "🏠 Type 'menu' for main menu",
        ]
        return "\n".join(lines)

    def _documents(self, session: Session) -> str:
        title = self._title(session)
        documents = self.definition.documents.get(title)
        if not documents:
            return (
                f"📋 *{title}*\n\nNo specific documents required. "
                "We'll guide you through the process.\n\n✅ Type 'proceed' to continue"
            )
        lines = [f"📋 *Required Documents for {title}*", ""]
        lines += [f"{number}. {doc}" for number, doc in enumerate(documents, start=1)]
        lines += ["", "✅ Type 'proceed' to start application", "↩️ Type 'back' to return"]
        return "\n".join(lines)

    def render_summary(self, session: Session) -> str:
        lines = ["📋 *Please confirm your application:*", "", f"Service: {self._title(session)}"]
        lines += [f"• {label}: {value}" for label, value in self.definition.summary_rows(session.domain_payload or {})]
        lines += [
            "",
            "1. Confirm",
            "2. Edit",
            "3. Cancel",
            "",
            "Type 'confirm' to submit, 'edit' to change your details or 'cancel' to stop.",
        ]
        return "\n".join(lines)

    @staticmethod
    def _field_title(spec: StateSpec) -> str:
        if spec.group is not None:
            return f"{spec.group.item_label} {spec.field_spec.label}"
        return spec.field_spec.label

    def _help(self, spec: StateSpec) -> str:
        lines = [f"🆘 *{self.definition.label} Help*", ""]
        if spec.phase == Phase.FIELD:
            lines.append(f"I'm waiting for: {spec.field_spec.label}")
            lines += ["", "This application asks for:"]
            for field_state in self.definition.field_states():
                marker = "👉" if field_state.name == spec.name else "•"
                lines.append(f"{marker} {self._field_title(field_state)}")
        elif spec.phase == Phase.CONFIRMATION:
            lines.append("Review your details, then confirm, edit or cancel.")
        elif spec.phase == Phase.END:
            lines.append("Your application is complete.")
        else:
            lines.append("Type 'proceed' when you're ready to apply.")
        lines += [
            "",
            "Available commands:",
            "• 'back' - go back one step",
            "• 'menu' - return to the main menu",
            "• 'help' - show this help",
        ]
        return "\n".join(lines)


__all__ = ["FlowEngine", "RESULT_KEYS"]
