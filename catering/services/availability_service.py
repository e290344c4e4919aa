"""Order admission: can a cart be delivered on a given date."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, timedelta

from catering.schemas.availability import AvailabilityResult
from catering.schemas.catalog import CartLine
from catering.schemas.common import DayStatus
from catering.schemas.order import OrderSnapshot
from catering.services.capacity_service import CapacityModel
from catering.services.load_service import add_batch_load, compute_load
from catering.utils.time import business_today

logger = logging.getLogger(__name__)

REASONS: dict[DayStatus, str] = {
    DayStatus.PAST: "Date is in the past.",
    DayStatus.TOO_SOON: "Some items need more advance notice for this date.",
    DayStatus.CLOSED: "We are closed on this date.",
    DayStatus.EXCEEDS: "Kitchen capacity for this date is exhausted.",
}


def max_lead_time(cart: Sequence[CartLine]) -> int:
    """Return the longest lead time in the cart, 0 for an empty cart."""
    return max((line.product.lead_time_days for line in cart), default=0)


def check_availability(
    day: date,
    cart: Sequence[CartLine],
    *,
    orders: Sequence[OrderSnapshot],
    capacity: CapacityModel,
    exclude_order_id: int | None = None,
    today: date | None = None,
) -> AvailabilityResult:
    """Classify ``day`` for ``cart``; the first failing rule wins.

    Rules in order: past, too_soon, closed, exceeds, available. Only
    categories present in the cart are compared against their limits.
    """
    today = today or business_today()

    if day < today:
        return _rejected(DayStatus.PAST)
    if day < today + timedelta(days=max_lead_time(cart)):
        return _rejected(DayStatus.TOO_SOON)
    if capacity.is_date_closed(day):
        return _rejected(DayStatus.CLOSED)

    load = compute_load(day, orders, exclude_order_id)
    add_batch_load(load, cart)
    for category in {line.category for line in cart}:
        limit: float = capacity.effective_limit(day, category)
        if load[category] > limit:
            logger.debug("Category %s over limit on %s: %s > %s", category.value, day, load[category], limit)
            return _rejected(DayStatus.EXCEEDS)

    return AvailabilityResult(status=DayStatus.AVAILABLE)


def get_date_status(
    day: date,
    cart: Sequence[CartLine],
    *,
    orders: Sequence[OrderSnapshot],
    capacity: CapacityModel,
    exclude_order_id: int | None = None,
    today: date | None = None,
) -> DayStatus:
    """Return only the status of ``check_availability`` for calendar rendering."""
    return check_availability(
        day, cart, orders=orders, capacity=capacity, exclude_order_id=exclude_order_id, today=today
    ).status


def date_statuses(
    start: date,
    days: int,
    cart: Sequence[CartLine],
    *,
    orders: Sequence[OrderSnapshot],
    capacity: CapacityModel,
    exclude_order_id: int | None = None,
    today: date | None = None,
) -> dict[date, DayStatus]:
    """Return date status for ``days`` consecutive dates beginning at ``start``.

    Pass ``exclude_order_id`` when rescheduling an existing order so its own
    load does not block the dates offered.
    """
    today = today or business_today()
    return {
        start + timedelta(days=offset): get_date_status(
            start + timedelta(days=offset),
            cart,
            orders=orders,
            capacity=capacity,
            exclude_order_id=exclude_order_id,
            today=today,
        )
        for offset in range(days)
    }


def _rejected(status: DayStatus) -> AvailabilityResult:
    return AvailabilityResult(status=status, reason=REASONS[status])
