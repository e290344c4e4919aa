"""Order submission and staff edits with commit-time re-validation.

Availability is checked again inside a per-date critical section so two
checkouts for the same date cannot both pass on a stale read. Discount codes
are additionally locked per code, always in sorted order after the date lock,
so a usage-limited code cannot be consumed twice by checkouts for different
dates. The locks are process-local; multi-process deployments need a
database-level lock instead.
"""

from __future__ import annotations

import logging
import threading
from contextlib import ExitStack
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from catering.models import Order, OrderDiscount, OrderItem
from catering.schemas.availability import AvailabilityResult
from catering.schemas.catalog import CartItemPayload, CartLine, Product, cart_subtotal
from catering.schemas.common import DiscountError, OrderStatus
from catering.schemas.order import AppliedDiscount, OrderSnapshot
from catering.services.availability_service import check_availability
from catering.services.capacity_service import CapacityModel
from catering.services.discount_service import apply_discount, revalidate_discounts
from catering.services.packaging_service import compute_packaging_fee
from catering.services.ports import Catalog, CheckoutStore, SettingsStore
from catering.services.store import SqlStore
from catering.utils.time import business_today

logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()
_date_locks: dict[date, threading.Lock] = {}
_code_locks: dict[str, threading.Lock] = {}


class CheckoutError(Exception):
    """Base class for checkout failures surfaced to API callers."""


class EmptyCartError(CheckoutError):
    """Raised when an order has no items."""


class UnknownProductError(CheckoutError):
    """Raised when a cart references a missing or inactive product."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class OrderNotFoundError(CheckoutError):
    """Raised when an order id does not exist."""


class CapacityExceededError(CheckoutError):
    """Raised when the delivery date no longer admits the cart."""

    def __init__(self, result: AvailabilityResult) -> None:
        super().__init__(result.reason or result.status.value)
        self.result = result


class DiscountRejectedError(CheckoutError):
    """Raised when a requested discount code cannot be applied."""

    def __init__(self, code: str, error: DiscountError | None, message: str | None) -> None:
        super().__init__(message or f"Discount {code} rejected")
        self.code = code
        self.error = error


class InvalidStatusTransitionError(CheckoutError):
    """Raised when changing the status of a cancelled order."""


def _lock_for(day: date, today: date) -> threading.Lock:
    """Return the lock for ``day``, dropping idle locks for dates before ``today``."""
    with _registry_lock:
        stale = [key for key, lock in _date_locks.items() if key < today and not lock.locked()]
        for key in stale:
            del _date_locks[key]
        return _date_locks.setdefault(day, threading.Lock())


def _locks_for_codes(codes: Iterable[str]) -> list[threading.Lock]:
    """Return one lock per distinct code, in a fixed order."""
    with _registry_lock:
        return [
            _code_locks.setdefault(code, threading.Lock())
            for code in sorted({code.strip().upper() for code in codes})
        ]


def resolve_cart(store: Catalog, items: Iterable[CartItemPayload]) -> list[CartLine]:
    """Build cart lines from catalog products; raise on unknown products."""
    cart: list[CartLine] = []
    for item in items:
        product: Product | None = store.get_product(item.product_id)
        if product is None:
            raise UnknownProductError(item.product_id)
        cart.append(CartLine(product=product, quantity=item.quantity))
    return cart


def _ensure_admitted(
    store: CheckoutStore,
    delivery_date: date,
    cart: Sequence[CartLine],
    *,
    today: date,
    exclude_order_id: int | None = None,
) -> None:
    result: AvailabilityResult = check_availability(
        delivery_date,
        cart,
        orders=store.get_orders(delivery_date=delivery_date),
        capacity=CapacityModel.from_store(store, delivery_date),
        exclude_order_id=exclude_order_id,
        today=today,
    )
    if not result.allowed:
        logger.warning("Rejected order for %s at commit time: %s", delivery_date, result.status.value)
        raise CapacityExceededError(result)


def _replace_items(order: Order, cart: Sequence[CartLine]) -> None:
    order.items.clear()
    for line in cart:
        order.items.append(
            OrderItem(
                product_id=line.product.id,
                name=line.product.name,
                category=line.category.value,
                quantity=line.quantity,
                unit_price=line.product.price,
                workload=line.product.workload,
                workload_overhead=line.product.workload_overhead,
            )
        )


def _apply_totals(
    store: SettingsStore,
    order: Order,
    cart: Sequence[CartLine],
    applied: Sequence[AppliedDiscount],
) -> None:
    """Price the order. Stored per-code amounts are capped so they sum to at most the subtotal."""
    packaging = store.get_packaging_config()
    subtotal: Decimal = cart_subtotal(cart)
    remaining: Decimal = subtotal
    order.applied_discounts.clear()
    for active in applied:
        amount: Decimal = min(active.amount, remaining)
        remaining -= amount
        order.applied_discounts.append(OrderDiscount(code=active.code, amount=amount))

    discount_total: Decimal = subtotal - remaining
    order.subtotal_amount = subtotal
    order.discount_total = discount_total
    order.packaging_fee = compute_packaging_fee(cart, packaging.types, packaging.free_from)
    order.total_amount = subtotal - discount_total + order.packaging_fee


def submit_order(
    db: Session,
    *,
    delivery_date: date,
    items: Sequence[CartItemPayload],
    discount_codes: Sequence[str] = (),
    note: str | None = None,
    today: date | None = None,
) -> Order:
    """Admit, price and persist a new order."""
    today = today or business_today()
    store = SqlStore(db)
    cart: list[CartLine] = resolve_cart(store, items)
    if not cart:
        raise EmptyCartError("Cart is empty")

    with _lock_for(delivery_date, today), ExitStack() as code_locks:
        _ensure_admitted(store, delivery_date, cart, today=today)

        applied: list[AppliedDiscount] = []
        if discount_codes:
            for lock in _locks_for_codes(discount_codes):
                code_locks.enter_context(lock)
            catalog = store.get_discount_catalog()
            history: list[OrderSnapshot] = store.get_orders()
            for code in discount_codes:
                outcome = apply_discount(code, applied, cart, catalog, history, today=today)
                if not outcome.success:
                    raise DiscountRejectedError(code, outcome.error, outcome.message)
                applied = outcome.applied

        order = Order(delivery_date=delivery_date, status=OrderStatus.CREATED.value, note=note)
        _replace_items(order, cart)
        _apply_totals(store, order, cart, applied)
        db.add(order)
        db.commit()
        db.refresh(order)

    logger.info("Accepted order %s for %s (total %s)", order.id, delivery_date, order.total_amount)
    return order


def update_order_items(
    db: Session,
    order_id: int,
    items: Sequence[CartItemPayload],
    *,
    today: date | None = None,
) -> tuple[Order, list[str]]:
    """Replace an order's items; returns the order and any discount codes dropped."""
    today = today or business_today()
    store = SqlStore(db)
    order: Order | None = db.get(Order, order_id)
    if order is None:
        raise OrderNotFoundError(f"Order {order_id} not found")
    cart: list[CartLine] = resolve_cart(store, items)
    if not cart:
        raise EmptyCartError("Cart is empty")

    with _lock_for(order.delivery_date, today):
        _ensure_admitted(store, order.delivery_date, cart, today=today, exclude_order_id=order.id)

        history = [snapshot for snapshot in store.get_orders() if snapshot.id != order.id]
        current = [AppliedDiscount(code=row.code, amount=row.amount) for row in order.applied_discounts]
        revalidation = revalidate_discounts(current, cart, store.get_discount_catalog(), history, today=today)

        _replace_items(order, cart)
        _apply_totals(store, order, cart, revalidation.applied)
        db.commit()
        db.refresh(order)

    if revalidation.removed_codes:
        logger.info("Order %s lost discounts after edit: %s", order.id, ", ".join(revalidation.removed_codes))
    return order, revalidation.removed_codes


def set_order_status(db: Session, order_id: int, new_status: OrderStatus) -> Order:
    """Set order status. Cancelling releases the order's capacity and code usage."""
    order: Order | None = db.get(Order, order_id)
    if order is None:
        raise OrderNotFoundError(f"Order {order_id} not found")
    if order.status == OrderStatus.CANCELLED.value and new_status != OrderStatus.CANCELLED:
        raise InvalidStatusTransitionError("Cancelled orders cannot be reopened")

    order.status = new_status.value
    order.status_updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(order)
    logger.info("Order %s status set to %s", order.id, new_status.value)
    return order
