from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from app.core.exceptions import ValidationError
from app.models import Payment
from app.services.payment_schedule_service import (
    PaymentScheduleService,
    add_months,
    build_schedule,
    summarize,
)

START = date(2024, 1, 31)


def test_add_months_clamps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
    assert add_months(date(2024, 5, 10), 0) == date(2024, 5, 10)


def test_one_time_split_creates_monthly_installments():
    planned = build_schedule([{"title": "Website", "price": "1200", "payment_split_count": 3}], "one-time", START)

    assert [item.title for item in planned] == [
        "Website - Payment 1 of 3",
        "Website - Payment 2 of 3",
        "Website - Payment 3 of 3",
    ]
    assert [item.amount for item in planned] == [Decimal("400.00"), Decimal("400.00"), Decimal("400.00")]
    assert [item.due_date for item in planned] == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)]
    assert [item.order_index for item in planned] == [1, 2, 3]
    assert not any(item.is_recurring for item in planned)


def test_split_remainder_goes_to_last_installment():
    planned = build_schedule([{"title": "Audit", "price": 100, "payment_split_count": 3}], "one-time", START)
    assert [item.amount for item in planned] == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert sum(item.amount for item in planned) == Decimal("100")


def test_one_time_without_split_is_due_at_start():
    (item,) = build_schedule([{"title": "Logo", "price": "300"}], "one-time", START)
    assert item.title == "Logo"
    assert item.due_date == START
    assert item.frequency is None


def test_recurring_modes_bill_one_period_out():
    products = [
        {"title": "Website", "price": "1200", "yearly_price": "12000"},
        {"title": "Hosting", "price": "50"},
    ]

    monthly = build_schedule(products, "monthly", START)
    yearly = build_schedule(products, "yearly", START)

    assert [(item.title, item.amount, item.due_date) for item in monthly] == [
        ("Website (monthly)", Decimal("1200"), date(2024, 2, 29)),
        ("Hosting (monthly)", Decimal("50"), date(2024, 2, 29)),
    ]
    assert [(item.title, item.due_date) for item in yearly] == [("Website (yearly)", date(2025, 1, 31))]
    assert all(item.is_recurring for item in monthly + yearly)


def test_custom_price_wins_and_unpriced_products_are_skipped():
    planned = build_schedule(
        [{"title": "Retainer", "price": "10", "custom_price": "99"}, {"title": "Free", "price": None}],
        "monthly",
        START,
    )
    assert [(item.title, item.amount) for item in planned] == [("Retainer (monthly)", Decimal("99"))]
    assert build_schedule([{"title": "Free", "price": "0"}], "one-time", START) == []


def test_unknown_billing_mode_is_rejected():
    with pytest.raises(ValidationError):
        build_schedule([{"title": "X", "price": "1"}], "weekly", START)


def test_summarize_splits_recurring_and_one_time():
    planned = build_schedule([{"title": "Hosting", "price": "50"}], "monthly", START)
    planned += build_schedule([{"title": "Logo", "price": "300"}], "one-time", START)

    summary = summarize(planned, "mixed")

    assert summary.total_amount == Decimal("350")
    assert summary.recurring_total == Decimal("50")
    assert summary.one_time_total == Decimal("300")
    assert summary.payment_count == 2


def test_generate_for_contract_persists_payments(session, contract, catalog):
    service = PaymentScheduleService(db=session)

    rows, summary = service.generate_for_contract(contract.id, [catalog["website"]], "one-time", START)

    assert len(rows) == 3
    assert summary.total_amount == Decimal("1200.00")
    stored = session.query(Payment).filter(Payment.contract_id == contract.id).order_by(Payment.order_index).all()
    assert [row.title for row in stored] == [row.title for row in rows]
    assert stored[0].status == "pending"


def test_generate_for_contract_requires_at_least_one_payment(session, contract, catalog):
    with pytest.raises(ValidationError):
        PaymentScheduleService(db=session).generate_for_contract(contract.id, [catalog["hosting"]], "yearly", START)


def test_split_of_a_very_large_price_still_rounds_to_cents():
    planned = build_schedule([{"title": "Huge", "price": "1e30", "payment_split_count": 3}], "one-time", START)

    assert len(planned) == 3
    assert planned[0].amount == planned[1].amount
    assert planned[0].amount.as_tuple().exponent == -2
