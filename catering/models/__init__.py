"""Application models package."""

from catering.models.app_setting import AppSetting
from catering.models.capacity import CategoryCapacity, DayConfig
from catering.models.discount import DiscountCode
from catering.models.order import Order, OrderDiscount, OrderItem
from catering.models.packaging import PackagingType
from catering.models.product import Product

__all__ = [
    "AppSetting", "CategoryCapacity", "DayConfig", "DiscountCode", "Order", "OrderDiscount", "OrderItem",
    "PackagingType", "Product",
]
