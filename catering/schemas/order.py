"""Order snapshots and order API schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from catering.schemas.catalog import CartItemPayload
from catering.schemas.common import OrderStatus, ProductCategory


class AppliedDiscount(BaseModel):
    """Discount code with the amount computed against a specific cart."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    code: str
    amount: Decimal


class OrderLineSnapshot(BaseModel):
    """Line item as captured when the order was placed.

    Workload figures are frozen at order time so later catalog edits do not
    change historical load.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    product_id: int | None = None
    quantity: int = Field(ge=1)
    category: ProductCategory
    workload: float = 0
    workload_overhead: float = 0


class OrderSnapshot(BaseModel):
    """Persisted order as consumed by load and usage accounting."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    delivery_date: date
    status: OrderStatus
    items: tuple[OrderLineSnapshot, ...] = ()
    applied_discounts: tuple[AppliedDiscount, ...] = ()


class OrderCreate(BaseModel):
    """Checkout submission."""

    delivery_date: date
    items: list[CartItemPayload]
    discount_codes: list[str] = Field(default_factory=list)
    note: str | None = None


class OrderItemsUpdate(BaseModel):
    """Staff edit replacing an order's line items."""

    items: list[CartItemPayload]


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemResponse(BaseModel):
    """Serialized order item."""

    product_id: int | None
    name: str
    category: ProductCategory
    quantity: int
    unit_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Serialized order with totals."""

    id: int
    delivery_date: date
    status: OrderStatus
    created_at: datetime
    subtotal_amount: Decimal
    discount_total: Decimal
    packaging_fee: Decimal
    total_amount: Decimal
    note: str | None = None
    items: list[OrderItemResponse]
    applied_discounts: list[AppliedDiscount]
    removed_discounts: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
