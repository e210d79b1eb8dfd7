"""
MODULE: workflows/definitions.py
PURPOSE: Declarative intake flow tables.

A FlowDefinition lists the ordered steps of one business application
(plain fields and repeat groups) and derives its state table from them:

    entry -> field[0] -> ... -> field[n] -> confirmation -> end

Every state records its phase, the field it collects, the next state on
success, the state to fall back to on failure and the commands it accepts.
The table is validated when the definition is built so that a broken flow
fails at import time, never halfway through a conversation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple, Union

from detection.intent import Intent
from workflows.common.errors import FlowConfigError
from workflows.common.validators import NumericRange, Validator

DEFAULT_ENDPOINT = "/universal-applications"


class Phase(str, Enum):
    ENTRY = "entry"
    FIELD = "field"
    CONFIRMATION = "confirmation"
    END = "end"


PHASE_COMMANDS: Dict[Phase, FrozenSet[Intent]] = {
    Phase.ENTRY: frozenset({Intent.PROCEED, Intent.DOCUMENTS, Intent.BACK, Intent.MENU, Intent.HELP}),
    Phase.FIELD: frozenset({Intent.BACK, Intent.MENU, Intent.HELP}),
    Phase.CONFIRMATION: frozenset({
        Intent.CONFIRM,
        Intent.RETRY,
        Intent.CANCEL,
        Intent.EDIT,
        Intent.BACK,
        Intent.MENU,
        Intent.HELP,
    }),
    Phase.END: frozenset({Intent.START, Intent.GREETING, Intent.MENU, Intent.BACK, Intent.HELP}),
}

ENTRY_SHORTCUTS: Dict[str, Intent] = {
    "1": Intent.PROCEED,
}

CONFIRMATION_SHORTCUTS: Dict[str, Intent] = {
    "1": Intent.CONFIRM,
    "2": Intent.EDIT,
    "3": Intent.CANCEL,
}


@dataclass(frozen=True)
class FieldSpec:
    """One value collected from the user.

    Attributes:
        key: Payload key the validated value is stored under
        label: Human label used in prompts and the confirmation summary
        prompt: Question sent when the field becomes current
        validator: Callable returning a ValidationResult
        abort_values: Validated values that end the flow and return to the menu
        abort_message: Text shown when an abort value is given
        derive: Extra payload values computed from the accepted value
            (e.g. a quote from a year count); labelled by the flow's
            ``derived_labels``
    """

    key: str
    label: str
    prompt: str
    validator: Validator
    abort_values: FrozenSet[str] = frozenset()
    abort_message: Optional[str] = None
    summary: bool = True
    derive: Optional[Callable[[Any], Dict[str, Any]]] = None


@dataclass(frozen=True)
class RepeatGroup:
    """Fields collected once per record, N times.

    N is read from the earlier field named by ``count_key``.
    """

    key: str
    count_key: str
    item_label: str
    fields: Tuple[FieldSpec, ...]


Step = Union[FieldSpec, RepeatGroup]


@dataclass(frozen=True)
class StateSpec:
    name: str
    phase: Phase
    field_spec: Optional[FieldSpec] = None
    group: Optional[RepeatGroup] = None
    next_state: Optional[str] = None
    failure_state: Optional[str] = None
    loop_state: Optional[str] = None
    commands: FrozenSet[Intent] = frozenset()
    shortcuts: Mapping[str, Intent] = field(default_factory=dict)

    @property
    def is_group_start(self) -> bool:
        return self.group is not None and self.field_spec == self.group.fields[0]


@dataclass
class FlowDefinition:
    """A complete intake flow.

    State names are ``{prefix}_{field key}`` unless overridden, so two flows
    with distinct prefixes never share a state.
    """

    flow_id: str
    label: str
    prefix: str
    service_type: str
    steps: Tuple[Step, ...]
    endpoint: str = DEFAULT_ENDPOINT
    intro: Optional[str] = None
    sub_services: Tuple[str, ...] = ()
    pricing: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    derived_labels: Dict[str, str] = field(default_factory=dict)
    documents: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    auto_proceed: bool = False
    max_submission_attempts: int = 3
    retry_backoff_seconds: float = 0.0
    entry_state: Optional[str] = None
    confirmation_state: Optional[str] = None
    end_state: Optional[str] = None
    state_names: Dict[str, str] = field(default_factory=dict)
    states: Dict[str, StateSpec] = field(init=False, default_factory=dict)
    order: List[str] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.entry_state = self.entry_state or f"{self.prefix}_info"
        self.confirmation_state = self.confirmation_state or f"{self.prefix}_confirmation"
        self.end_state = self.end_state or f"{self.prefix}_complete"
        self._build()
        self.validate()

    # ------------------------------------------------------------------ build

    def _field_state_name(self, spec: FieldSpec, group: Optional[RepeatGroup] = None) -> str:
        if group is not None:
            return self.state_names.get(f"{group.key}.{spec.key}", f"{self.prefix}_{group.key}_{spec.key}")
        return self.state_names.get(spec.key, f"{self.prefix}_{spec.key}")

    def _build(self) -> None:
        field_states: List[Tuple[str, FieldSpec, Optional[RepeatGroup]]] = []
        for step in self.steps:
            if isinstance(step, RepeatGroup):
                for spec in step.fields:
                    field_states.append((self._field_state_name(spec, step), spec, step))
            else:
                field_states.append((self._field_state_name(step), step, None))

        names = [self.entry_state] + [name for name, _, _ in field_states]
        names += [self.confirmation_state, self.end_state]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise FlowConfigError(f"flow '{self.flow_id}' declares duplicate states: {duplicates}")
        self.order = names

        first_field = field_states[0][0] if field_states else None
        self.states = {
            self.entry_state: StateSpec(
                name=self.entry_state,
                phase=Phase.ENTRY,
                next_state=first_field,
                commands=PHASE_COMMANDS[Phase.ENTRY],
                shortcuts=dict(ENTRY_SHORTCUTS),
            ),
        }

        for index, (name, spec, group) in enumerate(field_states):
            following = field_states[index + 1][0] if index + 1 < len(field_states) else self.confirmation_state
            loop_state = None
            if group is not None and spec == group.fields[-1]:
                loop_state = self._field_state_name(group.fields[0], group)
            self.states[name] = StateSpec(
                name=name,
                phase=Phase.FIELD,
                field_spec=spec,
                group=group,
                next_state=following,
                loop_state=loop_state,
                commands=PHASE_COMMANDS[Phase.FIELD],
            )

        self.states[self.confirmation_state] = StateSpec(
            name=self.confirmation_state,
            phase=Phase.CONFIRMATION,
            next_state=self.end_state,
            failure_state=None,
            commands=PHASE_COMMANDS[Phase.CONFIRMATION],
            shortcuts=dict(CONFIRMATION_SHORTCUTS),
        )
        self.states[self.end_state] = StateSpec(
            name=self.end_state,
            phase=Phase.END,
            commands=PHASE_COMMANDS[Phase.END],
        )

    # ------------------------------------------------------------- validation

    def validate(self) -> None:
        """Raise FlowConfigError if the state table is inconsistent."""
        problems: List[str] = []

        if not self.flow_id:
            problems.append("missing flow_id")
        if not self.steps:
            problems.append("no fields to collect")
        if self.max_submission_attempts < 1:
            problems.append("max_submission_attempts must be at least 1")

        for required in (self.entry_state, self.confirmation_state, self.end_state):
            if required not in self.states:
                problems.append(f"missing state '{required}'")

        for spec in self.states.values():
            for target in (spec.next_state, spec.failure_state, spec.loop_state):
                if target is not None and target not in self.states:
                    problems.append(f"state '{spec.name}' points at undefined state '{target}'")

        seen_keys: List[str] = []
        for step in self.steps:
            if isinstance(step, RepeatGroup):
                count_field = next(
                    (s for s in self.steps if isinstance(s, FieldSpec) and s.key == step.count_key),
                    None,
                )
                if step.count_key not in seen_keys or count_field is None:
                    problems.append(
                        f"group '{step.key}' counts by '{step.count_key}' which is not collected before it"
                    )
                elif not isinstance(count_field.validator, NumericRange):
                    problems.append(f"group count '{step.count_key}' must use numeric_range")
                if not step.fields:
                    problems.append(f"group '{step.key}' has no fields")
                inner = [spec.key for spec in step.fields]
                if len(inner) != len(set(inner)):
                    problems.append(f"group '{step.key}' repeats a field key")
                key = step.key
            else:
                key = step.key
            if key in seen_keys:
                problems.append(f"field key '{key}' collected twice")
            seen_keys.append(key)

        for key in self.derived_labels:
            if key in seen_keys:
                problems.append(f"derived value '{key}' shadows a collected field")

        for sub_service in list(self.pricing) + list(self.documents):
            if self.sub_services and sub_service not in self.sub_services:
                problems.append(f"pricing/documents reference unknown sub-service '{sub_service}'")

        if problems:
            raise FlowConfigError(f"flow '{self.flow_id}' is invalid: " + "; ".join(problems))

    # ---------------------------------------------------------------- lookups

    def owns(self, state: Optional[str]) -> bool:
        return state in self.states

    @property
    def state_set(self) -> FrozenSet[str]:
        return frozenset(self.states)

    def state(self, name: str) -> StateSpec:
        return self.states[name]

    @property
    def first_field_state(self) -> str:
        return self.states[self.entry_state].next_state

    def field_states(self) -> Iterator[StateSpec]:
        for name in self.order:
            spec = self.states[name]
            if spec.phase == Phase.FIELD:
                yield spec

    def find_sub_service(self, text: str) -> Optional[str]:
        wanted = text.strip().lower()
        for label in self.sub_services:
            if label.lower() == wanted:
                return label
        return None

    def summary_rows(self, payload: Mapping[str, object]) -> List[Tuple[str, str]]:
        """Label/value rows for every collected field, in flow order."""
        rows: List[Tuple[str, str]] = []
        for step in self.steps:
            if isinstance(step, RepeatGroup):
                for number, record in enumerate(payload.get(step.key) or [], start=1):
                    for spec in step.fields:
                        if spec.summary and spec.key in record:
                            rows.append((f"{step.item_label} {number} {spec.label}", str(record[spec.key])))
            elif step.summary and step.key in payload:
                rows.append((step.label, str(payload[step.key])))
        for key, label in self.derived_labels.items():
            if key in payload:
                rows.append((label, str(payload[key])))
        return rows


__all__ = [
    "Phase",
    "FieldSpec",
    "RepeatGroup",
    "StateSpec",
    "FlowDefinition",
    "PHASE_COMMANDS",
    "ENTRY_SHORTCUTS",
    "CONFIRMATION_SHORTCUTS",
    "DEFAULT_ENDPOINT",
]
