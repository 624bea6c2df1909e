"""Product and deliverable model module."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.associations import deliverable_product
from app.models.base import Base, TimestampMixin


class Deliverable(Base, TimestampMixin):
    __tablename__ = "deliverable"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)


class Product(Base, TimestampMixin):
    __tablename__ = "product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    yearly_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    payment_split_count: Mapped[int | None] = mapped_column(Integer)

    deliverables = relationship("Deliverable", secondary=deliverable_product, order_by="Deliverable.id")
