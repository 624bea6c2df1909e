from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.compiler.payments import (
    NO_SCHEDULE_HTML,
    due_date_columns,
    payments_total,
    render_payments_table,
)


def test_empty_schedule_renders_notice():
    assert render_payments_table([]) == NO_SCHEDULE_HTML


def test_table_has_one_row_per_payment_and_a_total_row():
    payments = [
        {"title": "Deposit", "amount": 100, "due_date": "2024-01-01"},
        {"title": "Final", "amount": 200, "alt_due_date": "On delivery"},
    ]

    html = render_payments_table(payments)

    assert html.count("<tr>") == 2
    assert html.count("Total Project Cost") == 1
    assert "$300.00" in html
    assert "1/1/2024" in html
    assert "On delivery" in html
    assert html.index("Deposit") < html.index("Final") < html.index("Total Project Cost")


def test_due_date_columns():
    assert due_date_columns({"due_date": "2024-01-01"}) == ("1/1/2024", "&mdash;")
    assert due_date_columns({"alt_due_date": "On delivery"}) == ("On delivery", "&mdash;")
    assert due_date_columns({"due_date": date(2024, 3, 5), "alt_due_date": "Upon launch"}) == (
        "3/5/2024",
        "Upon launch",
    )
    assert due_date_columns({}) == ("TBD", "&mdash;")


def test_amounts_are_lenient_and_signed():
    payments = [{"title": "Credit", "amount": -5}, {"title": "Odd", "amount": "n/a"}, {"amount": "12.5"}]

    html = render_payments_table(payments)

    assert "-$5.00" in html
    assert "$0.00" in html
    assert payments_total(payments) == Decimal("7.5")
    assert "$7.50" in html


def test_rendering_is_pure():
    payments = [{"title": "Deposit", "amount": 100, "due_date": "2024-01-01"}]
    assert render_payments_table(payments) == render_payments_table(list(payments))
