"""Read interfaces the admission and pricing engine consumes.

Any object providing these methods can back the engine; ``SqlStore`` in
``catering.services.store`` is the database-backed implementation.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from catering.schemas.catalog import Product
from catering.schemas.common import ProductCategory
from catering.schemas.discount import DiscountCode
from catering.schemas.order import OrderSnapshot
from catering.schemas.settings import DayConfig, PackagingConfig


class OrderStore(Protocol):
    def get_orders(self, delivery_date: date | None = None) -> list[OrderSnapshot]:
        """Return order snapshots, cancelled ones included."""


class Catalog(Protocol):
    def get_product(self, product_id: int) -> Product | None:
        ...


class SettingsStore(Protocol):
    def get_day_config(self, day: date) -> DayConfig | None:
        ...

    def get_day_configs(self, start: date, end: date) -> list[DayConfig]:
        """Return stored day configs with ``start <= date <= end``."""

    def get_default_capacities(self) -> dict[ProductCategory, float]:
        ...

    def get_discount_catalog(self) -> list[DiscountCode]:
        ...

    def get_packaging_config(self) -> PackagingConfig:
        ...


class CheckoutStore(OrderStore, Catalog, SettingsStore, Protocol):
    """Everything the commit path reads."""
