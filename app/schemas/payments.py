"""Payment schedule schemas."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PaymentGenerateRequest(BaseModel):
    billing_mode: str = Field(default="monthly", min_length=2, max_length=16)
    start_date: date | None = None


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_id: int
    title: str
    amount: Decimal
    due_date: date | None = None
    alt_due_date: str | None = None
    order_index: int | None = None
    frequency: str | None = None
    is_recurring: bool
    status: str


class ScheduleSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_amount: Decimal
    recurring_total: Decimal
    one_time_total: Decimal
    payment_count: int
    billing_mode: str


class PaymentScheduleResponse(BaseModel):
    payments: list[PaymentResponse]
    summary: ScheduleSummaryResponse
