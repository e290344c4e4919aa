"""Database-backed implementation of the engine's read ports."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from catering.core.config import settings
from catering.models import CategoryCapacity, Order
from catering.models import DayConfig as DayConfigRow
from catering.models import DiscountCode as DiscountCodeRow
from catering.models import PackagingType as PackagingTypeRow
from catering.models import Product as ProductRow
from catering.schemas.catalog import Product
from catering.schemas.common import ProductCategory
from catering.schemas.discount import DiscountCode
from catering.schemas.order import AppliedDiscount, OrderLineSnapshot, OrderSnapshot
from catering.schemas.settings import DayConfig, PackagingConfig, PackagingType
from catering.services.settings_service import get_packaging_free_from


def order_snapshot(order: Order) -> OrderSnapshot:
    """Convert an order row into the immutable snapshot used for accounting."""
    return OrderSnapshot(
        id=order.id,
        delivery_date=order.delivery_date,
        status=order.status,
        items=tuple(
            OrderLineSnapshot(
                product_id=item.product_id,
                quantity=item.quantity,
                category=item.category,
                workload=item.workload or 0,
                workload_overhead=item.workload_overhead or 0,
            )
            for item in order.items
        ),
        applied_discounts=tuple(
            AppliedDiscount(code=applied.code, amount=applied.amount) for applied in order.applied_discounts
        ),
    )


def day_config_snapshot(row: DayConfigRow) -> DayConfig:
    return DayConfig(date=row.day, is_open=row.is_open, capacity_overrides=row.capacity_overrides or {})


class SqlStore:
    """Order store, catalog and settings store over one SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_orders(self, delivery_date: date | None = None) -> list[OrderSnapshot]:
        query = select(Order).options(selectinload(Order.items), selectinload(Order.applied_discounts))
        if delivery_date is not None:
            query = query.where(Order.delivery_date == delivery_date)
        return [order_snapshot(order) for order in self.db.scalars(query.order_by(Order.id.asc())).all()]

    def get_product(self, product_id: int) -> Product | None:
        row: ProductRow | None = self.db.get(ProductRow, product_id)
        if row is None or not row.is_active:
            return None
        return Product.model_validate(row)

    def get_day_config(self, day: date) -> DayConfig | None:
        row: DayConfigRow | None = self.db.get(DayConfigRow, day)
        return day_config_snapshot(row) if row is not None else None

    def get_day_configs(self, start: date, end: date) -> list[DayConfig]:
        rows = self.db.scalars(
            select(DayConfigRow).where(DayConfigRow.day >= start, DayConfigRow.day <= end)
        ).all()
        return [day_config_snapshot(row) for row in rows]

    def get_default_capacities(self) -> dict[ProductCategory, float]:
        stored: dict[str, float] = {row.category: row.limit for row in self.db.scalars(select(CategoryCapacity)).all()}
        return {
            category: stored.get(category.value, settings.default_capacity) for category in ProductCategory
        }

    def get_discount_catalog(self) -> list[DiscountCode]:
        rows = self.db.scalars(select(DiscountCodeRow).order_by(DiscountCodeRow.id.asc())).all()
        return [DiscountCode.model_validate(row) for row in rows]

    def get_packaging_config(self) -> PackagingConfig:
        rows = self.db.scalars(select(PackagingTypeRow).order_by(PackagingTypeRow.volume.asc())).all()
        return PackagingConfig(
            types=[PackagingType.model_validate(row) for row in rows],
            free_from=get_packaging_free_from(self.db),
        )
