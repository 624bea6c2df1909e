"""Contract service for contract record operations."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from app.core.exceptions import NotFoundError, ValidationError
from app.models import Contract, ContractStatus, Milestone, Product
from app.services.base_service import BaseService

_STATUSES = {status.value for status in ContractStatus}


class ContractService(BaseService):
    """Service for contract CRUD and status transitions."""

    def create_contract(
        self,
        title: str,
        company_id: int | None = None,
        status: str | None = None,
        start_date: date | None = None,
        due_date: date | None = None,
        milestone_ids: Iterable[int] = (),
        product_ids: Iterable[int] = (),
        **fields: str | None,
    ) -> Contract:
        status = status or ContractStatus.DRAFT.value
        if status not in _STATUSES:
            raise ValidationError(f"Unknown contract status: {status}")

        contract = Contract(
            title=title,
            company_id=company_id,
            status=status,
            start_date=start_date,
            due_date=due_date,
            content="",
            **fields,
        )
        contract.milestones = self._load(Milestone, milestone_ids)
        contract.products = self._load(Product, product_ids)
        self.db.add(contract)
        self.commit()
        self.db.refresh(contract)
        return contract

    def _load(self, model, ids: Iterable[int]) -> list:
        wanted = list(dict.fromkeys(ids))
        if not wanted:
            return []
        rows = self.db.query(model).filter(model.id.in_(wanted)).all()
        found = {row.id for row in rows}
        missing = [row_id for row_id in wanted if row_id not in found]
        if missing:
            raise NotFoundError(f"{model.__tablename__} not found: {missing}")
        return rows

    def get_contract(self, contract_id: int) -> Contract | None:
        return self.db.query(Contract).filter(Contract.id == contract_id).first()

    def list_by_status(self, status: str) -> list[Contract]:
        return self.db.query(Contract).filter(Contract.status == status).order_by(Contract.id.asc()).all()

    def update_status(self, contract_id: int, status: str) -> Contract | None:
        if status not in _STATUSES:
            raise ValidationError(f"Unknown contract status: {status}")
        contract = self.get_contract(contract_id)
        if contract is None:
            return None

        contract.status = status
        self.commit()
        self.db.refresh(contract)
        return contract

    def update_content(self, contract_id: int, content: str) -> Contract | None:
        contract = self.get_contract(contract_id)
        if contract is None:
            return None

        contract.content = content
        self.commit()
        self.db.refresh(contract)
        return contract
