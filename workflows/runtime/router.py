"""Session-scoped message router.

Every inbound message is processed under its identity's lock:

1. Append the message to the session history
2. Find the one registered flow whose predicate claims the current state
3. Otherwise use the built-in generic flow or the router's core states
4. Any exception is turned into the recovery response

Flows are registered with disjoint state sets; overlaps with each other or
with the reserved core states are rejected at registration time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Iterator, List, Optional

from activity.progress import get_progress_summary
from detection.intent import resolve_intent
from sessions.store import SessionStore
from sessions.types import Session
from workflows.catalog import MenuCatalog
from workflows.common import states
from workflows.common.errors import FlowConfigError
from workflows.common.types import OutboundResponse
from workflows.engine import FlowEngine
from workflows.runtime.core_states import CoreStates
from workflows.runtime.recovery import ErrorRecoveryController

logger = logging.getLogger(__name__)

StatePredicate = Callable[[str], bool]


@dataclass
class FlowRegistration:
    flow_id: str
    predicate: StatePredicate
    engine: FlowEngine
    states: FrozenSet[str]


@dataclass
class MessageOutcome:
    """Reply plus the session state and progress captured under the lock."""

    reply: OutboundResponse
    state: Optional[str]
    progress: Dict[str, Any]


class IntakeRouter:
    def __init__(
        self,
        store: SessionStore,
        *,
        catalog: MenuCatalog,
        generic: FlowEngine,
        recovery: Optional[ErrorRecoveryController] = None,
    ) -> None:
        if not generic.definition.state_set <= states.GENERIC_FLOW_STATES:
            raise FlowConfigError("generic flow must only use the reserved generic state names")
        self.store = store
        self.catalog = catalog
        self.generic = generic
        self.recovery = recovery if recovery is not None else ErrorRecoveryController(store, catalog.labels)
        self.core = CoreStates(self)
        self._flows: List[FlowRegistration] = []

    # ========================================================== registration

    def register_flow(
        self,
        flow_id: str,
        predicate: Optional[StatePredicate],
        engine: FlowEngine,
    ) -> None:
        """Register a domain flow.

        Raises:
            FlowConfigError: duplicate flow id, or a state shared with another
                flow or with the reserved core states.
        """
        flow_states = engine.definition.state_set
        if any(reg.flow_id == flow_id for reg in self._flows):
            raise FlowConfigError(f"flow '{flow_id}' is already registered")

        reserved = flow_states & states.RESERVED_STATES
        if reserved:
            raise FlowConfigError(f"flow '{flow_id}' uses reserved states: {sorted(reserved)}")

        for reg in self._flows:
            overlap = flow_states & reg.states
            if overlap:
                raise FlowConfigError(
                    f"flow '{flow_id}' shares states with '{reg.flow_id}': {sorted(overlap)}"
                )

        self._flows.append(FlowRegistration(
            flow_id=flow_id,
            predicate=predicate or engine.owns,
            engine=engine,
            states=flow_states,
        ))
        logger.info("[ROUTER] Registered flow %s (%d states)", flow_id, len(flow_states))

    def validate_catalog(self) -> None:
        flows = {reg.flow_id: reg.engine.definition for reg in self._flows}
        self.catalog.validate(flows)

    # ================================================================ lookups

    def flow(self, flow_id: Optional[str]) -> Optional[FlowEngine]:
        for reg in self._flows:
            if reg.flow_id == flow_id:
                return reg.engine
        return None

    def flow_by_label(self, text: str) -> Optional[FlowEngine]:
        wanted = text.strip().lower()
        for reg in self._flows:
            if reg.engine.definition.label.lower() == wanted:
                return reg.engine
        return None

    def engines(self) -> Iterator[FlowEngine]:
        for reg in self._flows:
            yield reg.engine
        yield self.generic

    def owners_of(self, state: str) -> List[FlowRegistration]:
        return [reg for reg in self._flows if reg.predicate(state)]

    def engine_for(self, state: str) -> Optional[FlowEngine]:
        owners = self.owners_of(state)
        if len(owners) > 1:
            logger.error(
                "[ROUTER] State %r claimed by several flows: %s; using %s",
                state,
                [reg.flow_id for reg in owners],
                owners[0].flow_id,
            )
        if owners:
            return owners[0].engine
        if self.generic.owns(state):
            return self.generic
        return None

    def is_terminal(self, state: str) -> bool:
        return any(engine.is_terminal(state) for engine in self.engines())

    def flow_states(self) -> Dict[str, FrozenSet[str]]:
        return {reg.flow_id: reg.states for reg in self._flows}

    # ============================================================= dispatch

    async def process(self, identity: str, raw_message: Optional[str]) -> OutboundResponse:
        """Handle one inbound message and return the reply."""
        outcome = await self.handle_message(identity, raw_message)
        return outcome.reply

    async def handle_message(self, identity: str, raw_message: Optional[str]) -> MessageOutcome:
        """Handle one inbound message; the resulting state is read before the lock is released."""
        text = raw_message or ""
        async with self.store.session(identity) as session:
            session.record(text)
            logger.debug("[ROUTER] %s state=%s input=%r", identity, session.state, text)
            reply = await self.recovery.guard(session, lambda: self._dispatch(session, text))

            # A reset discards the session mid-dispatch
            current = self.store.get(identity)
            state = current.state if current is not None else None
            engine = self.engine_for(state) if state else None
            progress = get_progress_summary(current, engine.definition if engine else None)
            return MessageOutcome(reply=reply, state=state, progress=progress)

    async def _dispatch(self, session: Session, text: str) -> OutboundResponse:
        if session.state == states.RECOVERY:
            return self.recovery.handle(session, text)

        engine = self.engine_for(session.state)
        if engine is None:
            return await self.core.handle(session, text)

        intent = resolve_intent(text, engine.shortcuts_for(session.state))
        return await engine.handle(session, text, intent)


__all__ = ["IntakeRouter", "FlowRegistration", "MessageOutcome", "StatePredicate"]
