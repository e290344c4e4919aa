"""Discount code validation, stacking and re-validation.

Every function here is pure over the supplied cart, discount catalog and
order history. Usage limits are always recounted from non-cancelled orders;
the ``usage_count`` stored on a code is never trusted.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from catering.schemas.catalog import CartLine, cart_subtotal
from catering.schemas.common import DiscountError, DiscountType, OrderStatus
from catering.schemas.discount import (
    ApplyDiscountResult,
    DiscountCode,
    DiscountResult,
    DiscountUsage,
    RevalidationResult,
)
from catering.schemas.order import AppliedDiscount, OrderSnapshot
from catering.utils.time import business_today

logger = logging.getLogger(__name__)

MESSAGES: dict[DiscountError, str] = {
    DiscountError.INVALID_CODE: "Invalid discount code.",
    DiscountError.INACTIVE: "This discount code is not active.",
    DiscountError.USED_UP: "This discount code has been used up.",
    DiscountError.NOT_YET_VALID: "This discount code is not valid yet.",
    DiscountError.EXPIRED: "This discount code has expired.",
    DiscountError.NOT_APPLICABLE: "The discount does not apply to any item in the cart.",
    DiscountError.MIN_ORDER_NOT_MET: "Minimum order value for this code is {min_order_value}.",
    DiscountError.ALREADY_APPLIED: "This discount code is already applied.",
    DiscountError.NOT_STACKABLE: "This discount code cannot be combined with other codes.",
}


def _same_code(left: str, right: str) -> bool:
    return left.strip().upper() == right.strip().upper()


def find_discount(code: str, discounts: Iterable[DiscountCode]) -> DiscountCode | None:
    """Return the discount matching ``code`` ignoring case, if any."""
    return next((discount for discount in discounts if _same_code(discount.code, code)), None)


def _uses(code: str, orders: Iterable[OrderSnapshot]) -> list[AppliedDiscount]:
    return [
        applied
        for order in orders
        if order.status != OrderStatus.CANCELLED
        for applied in order.applied_discounts
        if _same_code(applied.code, code)
    ]


def count_usage(code: str, orders: Iterable[OrderSnapshot]) -> int:
    """Count non-cancelled orders that used ``code``."""
    return sum(
        1
        for order in orders
        if order.status != OrderStatus.CANCELLED
        and any(_same_code(applied.code, code) for applied in order.applied_discounts)
    )


def discount_usage(code: str, orders: Iterable[OrderSnapshot]) -> DiscountUsage:
    """Recompute usage count and total saved for ``code`` from order history."""
    orders = list(orders)
    total_saved = sum((applied.amount for applied in _uses(code, orders)), Decimal("0"))
    return DiscountUsage(code=code.strip().upper(), usage_count=count_usage(code, orders), total_saved=total_saved)


def _failure(error: DiscountError, **context: object) -> DiscountResult:
    return DiscountResult(success=False, error=error, message=MESSAGES[error].format(**context))


def validate_discount(
    code: str,
    cart: Sequence[CartLine],
    discounts: Iterable[DiscountCode],
    orders: Iterable[OrderSnapshot],
    *,
    today: date | None = None,
) -> DiscountResult:
    """Validate ``code`` against the cart and price it.

    Checks short-circuit in order: existence, enabled, usage limit, date
    window, category applicability, minimum order value. When categories are
    restricted the restricted subtotal is compared to the minimum.
    """
    discount: DiscountCode | None = find_discount(code, discounts)
    if discount is None:
        return _failure(DiscountError.INVALID_CODE)
    if not discount.enabled:
        return _failure(DiscountError.INACTIVE)

    if discount.max_usage > 0 and count_usage(discount.code, orders) >= discount.max_usage:
        return _failure(DiscountError.USED_UP)

    today = today or business_today()
    if discount.valid_from is not None and today < discount.valid_from:
        return _failure(DiscountError.NOT_YET_VALID)
    if discount.valid_to is not None and today > discount.valid_to:
        return _failure(DiscountError.EXPIRED)

    if discount.applicable_categories:
        eligible = [line for line in cart if line.category in discount.applicable_categories]
        if not eligible:
            return _failure(DiscountError.NOT_APPLICABLE)
        applicable_total: Decimal = cart_subtotal(eligible)
    else:
        applicable_total = cart_subtotal(cart)

    if applicable_total < discount.min_order_value:
        return _failure(DiscountError.MIN_ORDER_NOT_MET, min_order_value=discount.min_order_value)

    if discount.type == DiscountType.PERCENTAGE:
        amount = Decimal(math.floor(applicable_total * discount.value / 100))
    else:
        amount = min(discount.value, applicable_total)

    return DiscountResult(success=True, discount=discount, amount=amount)


def apply_discount(
    code: str,
    applied: Sequence[AppliedDiscount],
    cart: Sequence[CartLine],
    discounts: Sequence[DiscountCode],
    orders: Sequence[OrderSnapshot],
    *,
    today: date | None = None,
) -> ApplyDiscountResult:
    """Add ``code`` to the active discount list when allowed.

    A second code is accepted only if every code in the resulting list is
    stackable. The input list is never modified; the result carries the new
    list, or the unchanged one on failure.
    """
    current: list[AppliedDiscount] = list(applied)
    if any(_same_code(active.code, code) for active in current):
        return _apply_failure(current, DiscountError.ALREADY_APPLIED)

    result: DiscountResult = validate_discount(code, cart, discounts, orders, today=today)
    if not result.success:
        logger.debug("Discount %s refused: %s", code, result.error)
        return ApplyDiscountResult(success=False, applied=current, error=result.error, message=result.message)

    if current:
        active_codes = [find_discount(active.code, discounts) for active in current]
        if not result.discount.is_stackable or not all(
            active is not None and active.is_stackable for active in active_codes
        ):
            return _apply_failure(current, DiscountError.NOT_STACKABLE)

    current.append(AppliedDiscount(code=result.discount.code, amount=result.amount))
    return ApplyDiscountResult(success=True, applied=current)


def remove_discount(code: str, applied: Sequence[AppliedDiscount]) -> list[AppliedDiscount]:
    """Return ``applied`` without ``code``."""
    return [active for active in applied if not _same_code(active.code, code)]


def revalidate_discounts(
    applied: Sequence[AppliedDiscount],
    cart: Sequence[CartLine],
    discounts: Sequence[DiscountCode],
    orders: Sequence[OrderSnapshot],
    *,
    today: date | None = None,
) -> RevalidationResult:
    """Re-run validation for every active code after a cart change.

    Codes that still validate are kept with their amount recomputed; the rest
    are dropped and reported in ``removed_codes`` for the caller to surface.
    """
    kept: list[AppliedDiscount] = []
    removed: list[str] = []
    for active in applied:
        result: DiscountResult = validate_discount(active.code, cart, discounts, orders, today=today)
        if result.success:
            kept.append(AppliedDiscount(code=active.code, amount=result.amount))
        else:
            removed.append(active.code)
    if removed:
        logger.debug("Dropped discounts after cart change: %s", ", ".join(removed))
    return RevalidationResult(applied=kept, removed_codes=removed)


def _apply_failure(current: list[AppliedDiscount], error: DiscountError) -> ApplyDiscountResult:
    return ApplyDiscountResult(success=False, applied=current, error=error, message=MESSAGES[error])
