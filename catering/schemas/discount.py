"""Discount code schemas and discount evaluation results."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from catering.schemas.catalog import CartItemPayload
from catering.schemas.common import DiscountError, DiscountType, ProductCategory
from catering.schemas.order import AppliedDiscount


class DiscountCodeCreate(BaseModel):
    """Payload for creating a discount code."""

    code: str = Field(min_length=1, max_length=64)
    type: DiscountType
    value: Decimal = Field(ge=0)
    valid_from: date | None = None
    valid_to: date | None = None
    min_order_value: Decimal = Field(default=Decimal("0"), ge=0)
    applicable_categories: list[ProductCategory] = Field(default_factory=list)
    is_stackable: bool = False
    max_usage: int = Field(default=0, ge=0)
    enabled: bool = True


class DiscountCode(DiscountCodeCreate):
    """Discount code as evaluated by the discount engine.

    ``usage_count`` and ``total_saved`` are informational only; usage limits
    are always checked against order history.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int | None = None
    usage_count: int = 0
    total_saved: Decimal = Decimal("0")


class DiscountResult(BaseModel):
    """Outcome of validating one code against a cart."""

    success: bool
    discount: DiscountCode | None = None
    amount: Decimal | None = None
    error: DiscountError | None = None
    message: str | None = None


class ApplyDiscountResult(BaseModel):
    """Outcome of adding a code to the active discount list."""

    success: bool
    applied: list[AppliedDiscount]
    error: DiscountError | None = None
    message: str | None = None


class RevalidationResult(BaseModel):
    """Discounts still valid for the cart and the codes that were dropped."""

    applied: list[AppliedDiscount]
    removed_codes: list[str] = Field(default_factory=list)


class DiscountUsage(BaseModel):
    code: str
    usage_count: int
    total_saved: Decimal


class DiscountValidateRequest(BaseModel):
    code: str
    items: list[CartItemPayload]


class DiscountApplyRequest(BaseModel):
    code: str
    items: list[CartItemPayload]
    applied: list[AppliedDiscount] = Field(default_factory=list)


class DiscountRevalidateRequest(BaseModel):
    items: list[CartItemPayload]
    applied: list[AppliedDiscount]
