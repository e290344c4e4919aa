"""Capacity configuration ORM models."""

from datetime import date

from sqlalchemy import JSON, Boolean, Date, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from catering.db.base import Base


class CategoryCapacity(Base):
    """Default daily workload limit for one product category."""

    __tablename__ = "category_capacities"

    category: Mapped[str] = mapped_column(String(32), primary_key=True)
    limit: Mapped[float] = mapped_column(Float, nullable=False)


class DayConfig(Base):
    """Optional per-date opening flag and capacity overrides."""

    __tablename__ = "day_configs"

    day: Mapped[date] = mapped_column("date", Date, primary_key=True)
    is_open: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    capacity_overrides: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
