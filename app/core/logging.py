"""Structured logging helpers for contract assembly and persistence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class LogContext:
    """Normalized context fields expected in structured logs."""

    contract_id: int | None = None
    part_id: int | None = None
    actor: str | None = None
    trace_id: str | None = None


def build_log_event(event: str, context: LogContext, **fields: Any) -> dict[str, Any]:
    """Build a normalized structured log payload.

    The result is meant to be passed as ``extra=`` to a logger call, so keys
    must not collide with ``logging.LogRecord`` attributes.
    """
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "contract_id": context.contract_id,
        "part_id": context.part_id,
        "actor": context.actor,
        "trace_id": context.trace_id,
    }
    payload.update(fields)
    return payload
