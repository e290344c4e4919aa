"""Per-category workload aggregation for a delivery date."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import Protocol

from catering.schemas.common import OrderStatus, ProductCategory
from catering.schemas.order import OrderSnapshot
from catering.schemas.settings import CategoryLoad
from catering.services.capacity_service import CapacityModel

logger = logging.getLogger(__name__)


class WorkloadLine(Protocol):
    """Shape shared by order line snapshots and cart lines."""

    @property
    def product_id(self) -> int | None: ...

    @property
    def category(self) -> ProductCategory: ...

    @property
    def workload(self) -> float: ...

    @property
    def workload_overhead(self) -> float: ...

    @property
    def quantity(self) -> int: ...


def empty_load() -> dict[ProductCategory, float]:
    """Return a load map with every known category at zero."""
    return {category: 0.0 for category in ProductCategory}


def add_batch_load(load: dict[ProductCategory, float], lines: Iterable[WorkloadLine]) -> None:
    """Add one prep batch (one order or one cart) to ``load`` in place.

    Unit workload scales with quantity. Overhead is charged once per distinct
    product within the batch.
    """
    seen_products: set[int | None] = set()
    for line in lines:
        category = ProductCategory(line.category)
        load[category] = load.get(category, 0.0) + (line.workload or 0) * line.quantity
        if line.product_id is None or line.product_id not in seen_products:
            load[category] += line.workload_overhead or 0
            seen_products.add(line.product_id)


def compute_load(
    day: date,
    orders: Iterable[OrderSnapshot],
    exclude_order_id: int | None = None,
) -> dict[ProductCategory, float]:
    """Sum workload of non-cancelled orders delivered on ``day`` per category.

    Overhead is deduplicated inside each order only; two orders containing the
    same product are two independent batches.
    """
    load = empty_load()
    counted = 0
    for order in orders:
        if order.delivery_date != day or order.status == OrderStatus.CANCELLED:
            continue
        if exclude_order_id is not None and order.id == exclude_order_id:
            continue
        add_batch_load(load, order.items)
        counted += 1
    logger.debug("Computed load for %s from %d orders: %s", day, counted, load)
    return load


def daily_load_report(
    day: date,
    orders: Iterable[OrderSnapshot],
    capacity: CapacityModel,
    exclude_order_id: int | None = None,
) -> list[CategoryLoad]:
    """Return load, effective limit and remaining headroom for every category."""
    load = compute_load(day, orders, exclude_order_id)
    report: list[CategoryLoad] = []
    for category in capacity.categories:
        limit = capacity.effective_limit(day, category)
        report.append(
            CategoryLoad(
                category=category,
                load=load[category],
                limit=limit,
                remaining=limit - load[category],
            )
        )
    return report
