"""Payment schedule generation from selected products."""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_DOWN, Decimal
from typing import Any

from app.compiler.formatting import field, parse_amount, quantize_cents
from app.core.exceptions import ValidationError
from app.models import BillingMode, Payment
from app.services.base_service import BaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedPayment:
    title: str
    amount: Decimal
    due_date: date
    frequency: str | None
    is_recurring: bool
    order_index: int


@dataclass(frozen=True)
class ScheduleSummary:
    total_amount: Decimal
    recurring_total: Decimal
    one_time_total: Decimal
    payment_count: int
    billing_mode: str


def add_months(start: date, months: int) -> date:
    """Shift by whole months, clamping to the last day of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _split(amount: Decimal, count: int) -> list[Decimal]:
    """Even split to the cent; the last installment absorbs the remainder."""
    share = quantize_cents(amount / count, rounding=ROUND_DOWN)
    return [share] * (count - 1) + [amount - share * (count - 1)]


def _price_for_mode(product: Any, mode: BillingMode) -> tuple[Decimal, str | None] | None:
    custom_price = parse_amount(field(product, "custom_price"))
    if custom_price > 0:
        return custom_price, (None if mode is BillingMode.ONE_TIME else mode.value)

    price = parse_amount(field(product, "price"))
    yearly_price = parse_amount(field(product, "yearly_price"))
    if mode is BillingMode.YEARLY and yearly_price > 0:
        return yearly_price, BillingMode.YEARLY.value
    if mode is BillingMode.MONTHLY and price > 0:
        return price, BillingMode.MONTHLY.value
    if mode is BillingMode.ONE_TIME and price > 0:
        return price, None
    return None


def build_schedule(
    products: list[Any],
    billing_mode: str,
    start_date: date | None = None,
) -> list[PlannedPayment]:
    """Plan payments for ``products`` under ``billing_mode``.

    One-time products with ``payment_split_count > 1`` are split into monthly
    installments starting at ``start_date``. Recurring products get a single
    payment one period out. Products without a price for the mode are skipped.
    """
    try:
        mode = BillingMode(billing_mode)
    except ValueError as exc:
        raise ValidationError(f"Unsupported billing mode: {billing_mode}") from exc

    start = start_date or date.today()
    planned: list[PlannedPayment] = []

    for product in products:
        title = field(product, "title") or "Product"
        priced = _price_for_mode(product, mode)
        if priced is None:
            logger.warning(
                "payment_schedule.product_skipped",
                extra={"event": "payment_schedule.product_skipped", "product": title, "billing_mode": mode.value},
            )
            continue
        amount, frequency = priced
        is_recurring = frequency is not None
        split_count = int(field(product, "payment_split_count") or 0)

        if not is_recurring and split_count > 1:
            for index, share in enumerate(_split(amount, split_count)):
                planned.append(
                    PlannedPayment(
                        title=f"{title} - Payment {index + 1} of {split_count}",
                        amount=share,
                        due_date=add_months(start, index),
                        frequency=None,
                        is_recurring=False,
                        order_index=len(planned) + 1,
                    )
                )
            continue

        if frequency == BillingMode.YEARLY.value:
            due = add_months(start, 12)
        elif frequency == BillingMode.MONTHLY.value:
            due = add_months(start, 1)
        else:
            due = start
        planned.append(
            PlannedPayment(
                title=f"{title} ({frequency})" if frequency else title,
                amount=amount,
                due_date=due,
                frequency=frequency,
                is_recurring=is_recurring,
                order_index=len(planned) + 1,
            )
        )

    return planned


def summarize(planned: list[PlannedPayment], billing_mode: str) -> ScheduleSummary:
    recurring = sum((p.amount for p in planned if p.is_recurring), Decimal("0"))
    one_time = sum((p.amount for p in planned if not p.is_recurring), Decimal("0"))
    return ScheduleSummary(
        total_amount=recurring + one_time,
        recurring_total=recurring,
        one_time_total=one_time,
        payment_count=len(planned),
        billing_mode=billing_mode,
    )


class PaymentScheduleService(BaseService):
    """Persist generated payment schedules for contracts."""

    def generate_for_contract(
        self,
        contract_id: int,
        products: list[Any],
        billing_mode: str,
        start_date: date | None = None,
    ) -> tuple[list[Payment], ScheduleSummary]:
        planned = build_schedule(products, billing_mode, start_date=start_date)
        if not planned:
            raise ValidationError("No valid payments could be generated")

        rows = [
            Payment(
                contract_id=contract_id,
                title=item.title,
                amount=item.amount,
                due_date=item.due_date,
                frequency=item.frequency,
                is_recurring=item.is_recurring,
                order_index=item.order_index,
            )
            for item in planned
        ]
        self.db.add_all(rows)
        self.commit()
        for row in rows:
            self.db.refresh(row)

        logger.info(
            "payment_schedule.generated",
            extra={"event": "payment_schedule.generated", "contract_id": contract_id, "count": len(rows)},
        )
        return rows, summarize(planned, billing_mode)
