from __future__ import annotations

import pytest

from app.builder.state_machine import BuilderPhase, InvalidTransitionError, StateMachine, builder_lifecycle


def test_state_machine_allows_valid_transition():
    sm = StateMachine({"new": {"running"}, "running": {"completed"}})
    assert sm.can_transition("new", "running") is True
    sm.assert_transition("new", "running")


def test_state_machine_rejects_invalid_transition():
    sm = StateMachine({"new": {"running"}})
    with pytest.raises(InvalidTransitionError):
        sm.assert_transition("new", "completed")


@pytest.mark.parametrize(
    "current,target",
    [
        (BuilderPhase.NONE_SELECTED, BuilderPhase.TEMPLATE_LOADED),
        (BuilderPhase.TEMPLATE_LOADED, BuilderPhase.EDITED),
        (BuilderPhase.EDITED, BuilderPhase.SAVED),
        (BuilderPhase.SAVED, BuilderPhase.EDITED),
        (BuilderPhase.SAVED, BuilderPhase.TEMPLATE_LOADED),
    ],
)
def test_builder_lifecycle_allows(current, target):
    assert builder_lifecycle.can_transition(current.value, target.value)


@pytest.mark.parametrize("target", [BuilderPhase.EDITED, BuilderPhase.SAVED, BuilderPhase.NONE_SELECTED])
def test_builder_lifecycle_requires_a_loaded_template(target):
    with pytest.raises(InvalidTransitionError):
        builder_lifecycle.assert_transition(BuilderPhase.NONE_SELECTED.value, target.value)
