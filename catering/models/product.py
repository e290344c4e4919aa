"""Catalog product ORM model."""

from decimal import Decimal

from sqlalchemy import Boolean, Float, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from catering.db.base import Base


class Product(Base):
    """Persistent catalog product with preparation and packaging figures."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    workload: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    workload_overhead: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    volume: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    lead_time_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    no_packaging: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
