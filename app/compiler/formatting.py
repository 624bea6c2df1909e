"""Value coercion and display formatting shared by the compiler stages."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_CENTS = Decimal("0.01")
# Integer digits beyond this are treated as unusable input.
_MAX_DIGITS = 1000
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def _usable(parsed: Decimal) -> Decimal:
    if not parsed.is_finite() or parsed.adjusted() >= _MAX_DIGITS:
        return Decimal("0")
    return parsed


def parse_amount(value: Any) -> Decimal:
    """Lenient numeric parse: leading number of a string, 0 when unusable."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return _usable(value)
    if isinstance(value, (int, float)):
        try:
            return _usable(Decimal(str(value)))
        except (InvalidOperation, ValueError):
            return Decimal("0")

    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return Decimal("0")
    try:
        return _usable(Decimal(match.group(0).strip()))
    except InvalidOperation:
        return Decimal("0")


def quantize_cents(amount: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round to whole cents, widening precision so large amounts never trap."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        try:
            return amount.quantize(_CENTS, rounding=rounding)
        except InvalidOperation:
            return amount


def format_usd(value: Any) -> str:
    """Format as US dollars with thousands separators, e.g. ``-$1,234.50``."""
    amount = quantize_cents(parse_amount(value))
    sign = "-" if amount < 0 else ""
    return f"{sign}${amount.copy_abs():,.2f}"


def to_date(value: Any) -> date | None:
    """Coerce a date, datetime or ISO-8601 string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def format_short_date(value: Any) -> str:
    """en-US short date (``1/31/2024``); unparseable strings pass through."""
    parsed = to_date(value)
    if parsed is None:
        return "" if value is None else str(value)
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def format_long_date(value: Any) -> str:
    """en-US long date (``January 31, 2024``), empty when not a date."""
    parsed = to_date(value)
    if parsed is None:
        return ""
    return f"{_MONTHS[parsed.month - 1]} {parsed.day}, {parsed.year}"


def stringify(value: Any) -> str | None:
    """Render a scalar for template output.

    Returns None for values that are not scalars (None, mappings, sequences),
    which callers treat as unresolved.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (Mapping, list, tuple, set)):
        return None
    return str(value)


def field(item: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an attribute-style record."""
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)
