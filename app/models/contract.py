"""Contract model module."""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import Date, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.associations import contract_milestone, contract_product
from app.models.base import Base, TimestampMixin
from app.models.enums import ContractStatus

# The compiled content cache is never a template scalar.
_NON_TEMPLATE_COLUMNS = {"content"}


class Contract(Base, TimestampMixin):
    __tablename__ = "contract"
    __table_args__ = (Index("idx_contract_status", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    company_id: Mapped[int | None] = mapped_column(Integer, index=True)
    status: Mapped[str] = mapped_column(String(32), default=ContractStatus.DRAFT.value, nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date)
    due_date: Mapped[date | None] = mapped_column(Date)
    projected_length: Mapped[str | None] = mapped_column(String(120))
    platform: Mapped[str | None] = mapped_column(String(64))
    client_name: Mapped[str | None] = mapped_column(String(255))
    client_business: Mapped[str | None] = mapped_column(String(255))
    company_address: Mapped[str | None] = mapped_column(String(500))
    company_email: Mapped[str | None] = mapped_column(String(320))

    part_links = relationship(
        "ContractPartLink",
        back_populates="contract",
        order_by="ContractPartLink.order_index",
        cascade="all, delete-orphan",
    )
    payments = relationship("Payment", back_populates="contract", cascade="all, delete-orphan")
    milestones = relationship("Milestone", secondary=contract_milestone, order_by="Milestone.order_index")
    products = relationship("Product", secondary=contract_product, order_by="Product.id")

    def template_fields(self) -> dict[str, Any]:
        """Flat column mapping used as the scalar scope when compiling."""
        return {
            column.key: getattr(self, column.key)
            for column in self.__table__.columns
            if column.key not in _NON_TEMPLATE_COLUMNS
        }
