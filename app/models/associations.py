"""Plain many-to-many association tables."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Table

from app.models.base import Base

contract_milestone = Table(
    "contract_milestone",
    Base.metadata,
    Column("contract_id", ForeignKey("contract.id", ondelete="CASCADE"), primary_key=True),
    Column("milestone_id", ForeignKey("milestone.id", ondelete="CASCADE"), primary_key=True),
)

contract_product = Table(
    "contract_product",
    Base.metadata,
    Column("contract_id", ForeignKey("contract.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", ForeignKey("product.id", ondelete="CASCADE"), primary_key=True),
)

deliverable_product = Table(
    "deliverable_product",
    Base.metadata,
    Column("deliverable_id", ForeignKey("deliverable.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", ForeignKey("product.id", ondelete="CASCADE"), primary_key=True),
)
