"""Lifecycle phases of a contract being assembled in the builder."""

from __future__ import annotations

import enum


class InvalidTransitionError(ValueError):
    """Raised when a disallowed state transition is attempted."""


class BuilderPhase(str, enum.Enum):
    NONE_SELECTED = "none_selected"
    TEMPLATE_LOADED = "template_loaded"
    EDITED = "edited"
    SAVED = "saved"


class StateMachine:
    """Simple in-memory state machine over string-valued phases."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")


BUILDER_TRANSITIONS: dict[str, set[str]] = {
    BuilderPhase.NONE_SELECTED.value: {BuilderPhase.TEMPLATE_LOADED.value},
    BuilderPhase.TEMPLATE_LOADED.value: {
        BuilderPhase.TEMPLATE_LOADED.value,
        BuilderPhase.EDITED.value,
        BuilderPhase.SAVED.value,
    },
    BuilderPhase.EDITED.value: {
        BuilderPhase.TEMPLATE_LOADED.value,
        BuilderPhase.EDITED.value,
        BuilderPhase.SAVED.value,
    },
    BuilderPhase.SAVED.value: {
        BuilderPhase.TEMPLATE_LOADED.value,
        BuilderPhase.EDITED.value,
        BuilderPhase.SAVED.value,
    },
}

builder_lifecycle = StateMachine(BUILDER_TRANSITIONS)
