"""Immutable builder state and the reducers that edit it.

Every reducer returns a new :class:`BuilderState`; the part tuple's position
is the render order, and ``order_index`` is re-derived from it after each
change so indices are always ``0..n-1``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Any

from app.builder.state_machine import BuilderPhase, builder_lifecycle
from app.compiler.assembler import compile_content_with_data, compile_preview
from app.compiler.formatting import field as read_field

TITLE_REQUIRED = "Contract title is required"
PARTS_REQUIRED = "At least one contract section is required"


@dataclass(frozen=True)
class BuilderPart:
    id: int
    title: str
    content: str
    order_index: int = 0
    is_required: bool = False
    sort_order: int = 0
    is_included: bool = True

    @classmethod
    def from_record(cls, record: Any, order_index: int | None = None) -> "BuilderPart":
        """Build from a ``ContractPart`` row, a mapping or another part."""
        if order_index is None:
            order_index = read_field(record, "order_index") or 0
        return cls(
            id=int(read_field(record, "id")),
            title=read_field(record, "title") or "",
            content=read_field(record, "content") or "",
            order_index=int(order_index),
            is_required=bool(read_field(record, "is_required", False)),
            sort_order=int(read_field(record, "sort_order", 0) or 0),
            is_included=read_field(record, "is_included") is not False,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "order_index": self.order_index,
            "is_required": self.is_required,
            "sort_order": self.sort_order,
            "is_included": self.is_included,
        }


@dataclass(frozen=True)
class BuilderState:
    contract_id: int | None = None
    title: str = ""
    parts: tuple[BuilderPart, ...] = ()
    available_parts: tuple[BuilderPart, ...] = ()
    errors: Mapping[str, str] = field(default_factory=dict)
    phase: str = BuilderPhase.NONE_SELECTED.value

    def part_ids(self) -> list[int]:
        return [part.id for part in self.parts]

    def find(self, part_id: int) -> BuilderPart | None:
        return next((part for part in self.parts if part.id == part_id), None)


def _reindex(parts: Iterable[BuilderPart]) -> tuple[BuilderPart, ...]:
    return tuple(
        part if part.order_index == index else replace(part, order_index=index)
        for index, part in enumerate(parts)
    )


def _transition(state: BuilderState, target: BuilderPhase, **changes: Any) -> BuilderState:
    builder_lifecycle.assert_transition(state.phase, target.value)
    if "parts" in changes:
        changes["parts"] = _reindex(changes["parts"])
    return replace(state, phase=target.value, **changes)


def _edit(state: BuilderState, **changes: Any) -> BuilderState:
    return _transition(state, BuilderPhase.EDITED, **changes)


def _by_sort_order(parts: Iterable[BuilderPart]) -> list[BuilderPart]:
    return sorted(parts, key=lambda part: part.sort_order)


def new_state(contract_id: int | None = None, title: str = "") -> BuilderState:
    return BuilderState(contract_id=contract_id, title=title)


def load_template(
    state: BuilderState,
    available_parts: Iterable[Any],
    linked_parts: Iterable[Any] | None = None,
) -> BuilderState:
    """Load the part library and the starting selection.

    New contracts start with every required part in ``sort_order``. Existing
    contracts start from their linked parts (in ``order_index`` order), or
    empty when none are supplied.
    """
    available = tuple(_by_sort_order(BuilderPart.from_record(part) for part in available_parts))
    if state.contract_id is None:
        selected = [part for part in available if part.is_required]
    else:
        linked = [BuilderPart.from_record(part) for part in (linked_parts or ())]
        selected = sorted(linked, key=lambda part: part.order_index)
    return _transition(
        state,
        BuilderPhase.TEMPLATE_LOADED,
        parts=selected,
        available_parts=available,
        errors={},
    )


def set_title(state: BuilderState, title: str) -> BuilderState:
    return _edit(state, title=title)


def add_existing_part(state: BuilderState, part: Any) -> BuilderState:
    candidate = BuilderPart.from_record(part)
    if state.find(candidate.id) is not None:
        return state
    return _edit(state, parts=(*state.parts, candidate))


def add_custom_part(state: BuilderState, part: Any) -> BuilderState:
    """Append a freshly created part and register it in the library."""
    created = BuilderPart.from_record(part)
    available = state.available_parts
    if all(existing.id != created.id for existing in available):
        available = (*available, replace(created, order_index=0))
    parts = state.parts if state.find(created.id) else (*state.parts, created)
    return _edit(state, parts=parts, available_parts=available)


def add_all_required(state: BuilderState) -> BuilderState:
    used = set(state.part_ids())
    missing = [part for part in state.available_parts if part.is_required and part.id not in used]
    if not missing:
        return state
    return _edit(state, parts=(*state.parts, *_by_sort_order(missing)))


def set_parts(state: BuilderState, parts: Iterable[Any]) -> BuilderState:
    """Replace the whole selection, keeping the given order."""
    selected = _reindex(BuilderPart.from_record(part) for part in parts)
    if selected == state.parts:
        return state
    return _edit(state, parts=selected)


def remove_part(state: BuilderState, part_id: int) -> BuilderState:
    if state.find(part_id) is None:
        return state
    return _edit(state, parts=tuple(part for part in state.parts if part.id != part_id))


def reorder(state: BuilderState, active_id: int, over_id: int) -> BuilderState:
    """Move ``active_id`` to the position currently held by ``over_id``."""
    if active_id == over_id:
        return state
    ids = state.part_ids()
    if active_id not in ids or over_id not in ids:
        return state

    parts = list(state.parts)
    moving = parts.pop(ids.index(active_id))
    parts.insert(ids.index(over_id), moving)
    return _edit(state, parts=parts)


def _update_part(state: BuilderState, part_id: int, **changes: Any) -> BuilderState:
    if state.find(part_id) is None:
        return state
    return _edit(
        state,
        parts=tuple(replace(part, **changes) if part.id == part_id else part for part in state.parts),
    )


def update_content(state: BuilderState, part_id: int, content: str) -> BuilderState:
    return _update_part(state, part_id, content=content)


def update_title(state: BuilderState, part_id: int, title: str) -> BuilderState:
    return _update_part(state, part_id, title=title)


def set_included(state: BuilderState, part_id: int, included: bool) -> BuilderState:
    """Keep the part linked but toggle whether it renders."""
    return _update_part(state, part_id, is_included=included)


def validate(state: BuilderState) -> BuilderState:
    """Attach validation errors; an empty mapping means the state can be saved."""
    errors: dict[str, str] = {}
    if not state.title.strip():
        errors["title"] = TITLE_REQUIRED
    if not state.parts:
        errors["parts"] = PARTS_REQUIRED
    return replace(state, errors=errors)


def is_valid(state: BuilderState) -> bool:
    return not validate(state).errors


def mark_saved(state: BuilderState, contract_id: int | None = None) -> BuilderState:
    changes: dict[str, Any] = {}
    if contract_id is not None:
        changes["contract_id"] = contract_id
    return _transition(state, BuilderPhase.SAVED, **changes)


def included_parts(parts: Iterable[BuilderPart]) -> list[BuilderPart]:
    return [part for part in parts if part.is_included]


@lru_cache(maxsize=128)
def _preview(parts: tuple[BuilderPart, ...]) -> str:
    return compile_preview(included_parts(parts))


def compiled_content(state: BuilderState) -> str:
    """Preview HTML without data merge, memoized on the part tuple."""
    return _preview(state.parts)


def compile_with_data(
    state: BuilderState,
    contract_data: Mapping[str, Any] | None = None,
    related_data: Mapping[str, Any] | None = None,
    framed: bool = False,
) -> str:
    return compile_content_with_data(included_parts(state.parts), contract_data, related_data, framed=framed)
