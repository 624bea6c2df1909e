"""Collect the records a contract's templates iterate over."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from app.models import Contract, Payment
from app.services.base_service import BaseService

logger = logging.getLogger(__name__)


def _payment_sort_key(payment: Payment) -> tuple[int, int, datetime | None]:
    if payment.order_index is not None:
        return (0, payment.order_index, None)
    return (1, 0, payment.created_at)


class RelatedDataService(BaseService):
    """Build the ``related_data`` bundle consumed by the compiler."""

    def fetch_related_data(self, contract: Contract) -> dict[str, Any]:
        related: dict[str, Any] = {}

        if contract.milestones:
            related["selectedMilestones"] = [
                {
                    "id": milestone.id,
                    "title": milestone.title,
                    "description": milestone.description,
                    "order_index": milestone.order_index,
                }
                for milestone in contract.milestones
            ]

        if contract.products:
            related["products"] = [
                {
                    "id": product.id,
                    "title": product.title,
                    "description": product.description,
                    "price": product.price,
                    "deliverables": [
                        {"id": deliverable.id, "title": deliverable.title}
                        for deliverable in product.deliverables
                    ],
                }
                for product in contract.products
            ]

        related["payments"] = self.fetch_payments(contract.id) if contract.id else []
        return related

    def fetch_payments(self, contract_id: int) -> list[dict[str, Any]]:
        try:
            rows = self.db.query(Payment).filter(Payment.contract_id == contract_id).all()
        except SQLAlchemyError:
            logger.exception(
                "related_data.payments.fetch_failed",
                extra={"event": "related_data.payments.fetch_failed", "contract_id": contract_id},
            )
            return []

        return [
            {
                "id": row.id,
                "title": row.title,
                "amount": row.amount,
                "due_date": row.due_date,
                "alt_due_date": row.alt_due_date,
                "order_index": row.order_index,
            }
            for row in sorted(rows, key=_payment_sort_key)
        ]
