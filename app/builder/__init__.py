"""Contract builder state: part selection, ordering and editing."""

from app.builder.state import (
    BuilderPart,
    BuilderState,
    add_all_required,
    add_custom_part,
    add_existing_part,
    compile_with_data,
    compiled_content,
    included_parts,
    is_valid,
    load_template,
    mark_saved,
    new_state,
    remove_part,
    reorder,
    set_included,
    set_parts,
    set_title,
    update_content,
    update_title,
    validate,
)
from app.builder.state_machine import BuilderPhase, InvalidTransitionError

__all__ = [
    "BuilderPart",
    "BuilderPhase",
    "BuilderState",
    "InvalidTransitionError",
    "add_all_required",
    "add_custom_part",
    "add_existing_part",
    "compile_with_data",
    "compiled_content",
    "included_parts",
    "is_valid",
    "load_template",
    "mark_saved",
    "new_state",
    "remove_part",
    "reorder",
    "set_included",
    "set_parts",
    "set_title",
    "update_content",
    "update_title",
    "validate",
]
