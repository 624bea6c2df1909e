"""Ordered association between a contract and its parts."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class ContractPartLink(Base, TimestampMixin):
    __tablename__ = "contract_contractpart"
    __table_args__ = (
        UniqueConstraint("contract_id", "contractpart_id", name="uq_contract_contractpart_part"),
        UniqueConstraint("contract_id", "order_index", name="uq_contract_contractpart_order"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contract_id: Mapped[int] = mapped_column(ForeignKey("contract.id", ondelete="CASCADE"), nullable=False, index=True)
    contractpart_id: Mapped[int] = mapped_column(ForeignKey("contractpart.id", ondelete="RESTRICT"), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    is_included: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    custom_content: Mapped[str | None] = mapped_column(Text)

    contract = relationship("Contract", back_populates="part_links")
    part = relationship("ContractPart")
