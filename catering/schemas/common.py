"""Closed enumerations shared by engine, storage and API layers."""

from enum import Enum


class ProductCategory(str, Enum):
    """Preparation category a product's workload is charged against."""

    WARM = "warm"
    COLD = "cold"
    DESSERT = "dessert"
    DRINK = "drink"


class OrderStatus(str, Enum):
    CREATED = "created"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    ON_WAY = "on_way"
    DELIVERED = "delivered"
    NOT_PICKED_UP = "not_picked_up"
    CANCELLED = "cancelled"


class DayStatus(str, Enum):
    """Admission outcome for a delivery date."""

    AVAILABLE = "available"
    CLOSED = "closed"
    EXCEEDS = "exceeds"
    PAST = "past"
    TOO_SOON = "too_soon"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class DiscountError(str, Enum):
    """Machine-readable reason a discount code was refused."""

    INVALID_CODE = "invalid_code"
    INACTIVE = "inactive"
    USED_UP = "used_up"
    NOT_YET_VALID = "not_yet_valid"
    EXPIRED = "expired"
    NOT_APPLICABLE = "not_applicable"
    MIN_ORDER_NOT_MET = "min_order_not_met"
    ALREADY_APPLIED = "already_applied"
    NOT_STACKABLE = "not_stackable"
