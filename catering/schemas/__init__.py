"""Schema exports."""

from catering.schemas.availability import AvailabilityRequest, AvailabilityResult, CalendarDay, CalendarRequest
from catering.schemas.catalog import CartItemPayload, CartLine, Product, ProductCreate, ProductResponse, cart_subtotal
from catering.schemas.common import DayStatus, DiscountError, DiscountType, OrderStatus, ProductCategory
from catering.schemas.discount import (
    ApplyDiscountResult,
    DiscountCode,
    DiscountCodeCreate,
    DiscountResult,
    DiscountUsage,
    RevalidationResult,
)
from catering.schemas.order import (
    AppliedDiscount,
    OrderCreate,
    OrderLineSnapshot,
    OrderResponse,
    OrderSnapshot,
)
from catering.schemas.settings import CategoryLoad, DayConfig, PackagingConfig, PackagingFeeRequest, PackagingType

__all__ = [
    "AvailabilityRequest",
    "AvailabilityResult",
    "CalendarDay",
    "CalendarRequest",
    "CartItemPayload",
    "CartLine",
    "Product",
    "ProductCreate",
    "ProductResponse",
    "cart_subtotal",
    "DayStatus",
    "DiscountError",
    "DiscountType",
    "OrderStatus",
    "ProductCategory",
    "ApplyDiscountResult",
    "DiscountCode",
    "DiscountCodeCreate",
    "DiscountResult",
    "DiscountUsage",
    "RevalidationResult",
    "AppliedDiscount",
    "OrderCreate",
    "OrderLineSnapshot",
    "OrderResponse",
    "OrderSnapshot",
    "CategoryLoad",
    "DayConfig",
    "PackagingConfig",
    "PackagingFeeRequest",
    "PackagingType",
]
