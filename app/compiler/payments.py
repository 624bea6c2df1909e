"""Payment schedule table rendered in place of the ``{{payments}}`` token."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from app.compiler.formatting import field, format_short_date, format_usd, parse_amount

NO_SCHEDULE_HTML = "<p><em>No payment schedule defined.</em></p>"

_CELL = "border: 1px solid #e5e7eb; padding: 12px;"
_HEADER_CELL = f"{_CELL} font-weight: 600; text-align: left;"
_AMOUNT_CELL = f"{_CELL} text-align: right; font-weight: 600; color: #059669;"
_TOTAL_LABEL_CELL = f"{_CELL} font-weight: bold; color: #0c4a6e;"
_TOTAL_AMOUNT_CELL = f"{_CELL} text-align: right; font-weight: bold; color: #0ea5e9; font-size: 1.125rem;"
_COLUMNS = ("Payment", "Amount", "Due Date", "Alternative Due Date")


def due_date_columns(payment: Any) -> tuple[str, str]:
    """Return the (due date, alternative date) cell texts for one payment.

    A real due date wins, then the free-text alternative, then ``TBD``. The
    alternative column is only filled when both kinds of date exist.
    """
    raw_due = field(payment, "due_date")
    due = format_short_date(raw_due) if raw_due else ""
    alt = field(payment, "alt_due_date") or ""
    display = due or alt or "TBD"
    annotation = alt if (alt and due) else "&mdash;"
    return display, annotation


def _row(payment: Any) -> str:
    display, annotation = due_date_columns(payment)
    title = field(payment, "title") or ""
    return (
        "<tr>"
        f'<td style="{_CELL}">{title}</td>'
        f'<td style="{_AMOUNT_CELL}">{format_usd(field(payment, "amount"))}</td>'
        f'<td style="{_CELL}">{display}</td>'
        f'<td style="{_CELL}">{annotation}</td>'
        "</tr>"
    )


def payments_total(payments: Sequence[Any]) -> Decimal:
    return sum((parse_amount(field(payment, "amount")) for payment in payments), Decimal("0"))


def render_payments_table(payments: Sequence[Any]) -> str:
    """Render the schedule table (or the empty-schedule notice)."""
    if not payments:
        return NO_SCHEDULE_HTML

    header = "".join(f'<th style="{_HEADER_CELL}">{label}</th>' for label in _COLUMNS)
    rows = "".join(_row(payment) for payment in payments)
    total_row = (
        '<tr style="background-color: #f0f9ff; border-top: 2px solid #0ea5e9;">'
        f'<td style="{_TOTAL_LABEL_CELL}">Total Project Cost</td>'
        f'<td style="{_TOTAL_AMOUNT_CELL}">{format_usd(payments_total(payments))}</td>'
        f'<td style="{_CELL}"></td>'
        f'<td style="{_CELL}"></td>'
        "</tr>"
    )
    return (
        '<table style="border-collapse: collapse; margin: 2rem 0; width: 100%; border: 2px solid #d1d5db;">'
        f'<thead><tr style="background-color: #f9fafb;">{header}</tr></thead>'
        f"<tbody>{rows}{total_row}</tbody>"
        "</table>"
    )
