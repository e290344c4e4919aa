"""Discount code ORM model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Boolean, Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from catering.db.base import Base


class DiscountCode(Base):
    """Discount code definition. Codes are unique ignoring case."""

    __tablename__ = "discount_codes"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    valid_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    valid_to: Mapped[date | None] = mapped_column(Date, nullable=True)
    min_order_value: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    applicable_categories: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_stackable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    max_usage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
