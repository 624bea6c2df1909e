"""Contract part library operations."""

from __future__ import annotations

from app.core.config import get_config
from app.models import ContractPart
from app.services.base_service import BaseService


class ContractPartService(BaseService):
    """Service for the reusable contract part library."""

    def list_parts(self) -> list[ContractPart]:
        return (
            self.db.query(ContractPart)
            .order_by(ContractPart.sort_order.asc(), ContractPart.id.asc())
            .all()
        )

    def get_part(self, part_id: int) -> ContractPart | None:
        return self.db.query(ContractPart).filter(ContractPart.id == part_id).first()

    def create_part(
        self,
        title: str,
        content: str = "",
        is_required: bool = False,
        sort_order: int | None = None,
    ) -> ContractPart:
        if sort_order is None:
            sort_order = self._next_sort_order()
        part = ContractPart(
            title=title,
            content=content,
            is_required=is_required,
            sort_order=sort_order,
        )
        self.db.add(part)
        self.commit()
        self.db.refresh(part)
        return part

    def create_custom_part(self) -> ContractPart:
        """Create an optional part with the configured placeholder title/content."""
        cfg = get_config()
        return self.create_part(title=cfg.CUSTOM_PART_TITLE, content=cfg.CUSTOM_PART_CONTENT)

    def update_part(
        self,
        part_id: int,
        title: str | None = None,
        content: str | None = None,
        is_required: bool | None = None,
        sort_order: int | None = None,
    ) -> ContractPart | None:
        part = self.get_part(part_id)
        if part is None:
            return None

        if title is not None:
            part.title = title
        if content is not None:
            part.content = content
        if is_required is not None:
            part.is_required = is_required
        if sort_order is not None:
            part.sort_order = sort_order
        self.commit()
        self.db.refresh(part)
        return part

    def _next_sort_order(self) -> int:
        last = self.db.query(ContractPart).order_by(ContractPart.sort_order.desc()).first()
        return 0 if last is None else last.sort_order + 1
