"""Packaging fee calculation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from catering.schemas.catalog import CartLine, cart_subtotal
from catering.schemas.settings import PackagingType


def packaging_volume(cart: Iterable[CartLine]) -> float:
    """Total volume of cart lines that need packaging."""
    return sum(line.product.volume * line.quantity for line in cart if not line.product.no_packaging)


def compute_packaging_fee(
    cart: Sequence[CartLine],
    packaging_types: Iterable[PackagingType],
    free_from: Decimal,
) -> Decimal:
    """Return the packaging fee for ``cart``.

    Packaging is free once the subtotal reaches ``free_from``. Otherwise the
    volume is covered greedily: the largest container while the remainder
    exceeds it, then the smallest container that fits what is left. This is
    not an optimal packing.
    """
    if cart_subtotal(cart) >= free_from:
        return Decimal("0")

    remaining: float = packaging_volume(cart)
    containers: list[PackagingType] = sorted(
        (container for container in packaging_types if container.enabled and container.volume > 0),
        key=lambda container: container.volume,
    )
    if remaining <= 0 or not containers:
        return Decimal("0")

    largest: PackagingType = containers[-1]
    fee = Decimal("0")
    while remaining > 0:
        if remaining > largest.volume:
            fee += largest.price
            remaining -= largest.volume
            continue
        best_fit: PackagingType | None = next(
            (container for container in containers if container.volume >= remaining),
            None,
        )
        if best_fit is None:
            fee += largest.price
            remaining -= largest.volume
        else:
            fee += best_fit.price
            remaining = 0
    return fee
