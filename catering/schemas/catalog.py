"""Catalog and cart schemas."""

from collections.abc import Iterable
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from catering.schemas.common import ProductCategory


class Product(BaseModel):
    """Read-only catalog entry as seen by the admission engine."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str = ""
    category: ProductCategory
    price: Decimal = Field(default=Decimal("0"), ge=0)
    workload: float = Field(default=0, ge=0)
    workload_overhead: float = Field(default=0, ge=0)
    volume: float = Field(default=0, ge=0)
    lead_time_days: int = Field(default=0, ge=0)
    no_packaging: bool = False


class CartLine(BaseModel):
    """Product snapshot plus requested quantity."""

    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(ge=1)

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def category(self) -> ProductCategory:
        return self.product.category

    @property
    def workload(self) -> float:
        return self.product.workload

    @property
    def workload_overhead(self) -> float:
        return self.product.workload_overhead

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


def cart_subtotal(cart: Iterable[CartLine]) -> Decimal:
    """Return sum of price x quantity over all cart lines."""
    return sum((line.line_total for line in cart), Decimal("0"))


class ProductCreate(BaseModel):
    """Payload for creating a catalog product."""

    name: str
    category: ProductCategory
    price: Decimal = Field(ge=0)
    workload: float = Field(default=0, ge=0)
    workload_overhead: float = Field(default=0, ge=0)
    volume: float = Field(default=0, ge=0)
    lead_time_days: int = Field(default=0, ge=0)
    no_packaging: bool = False
    is_active: bool = True


class ProductResponse(ProductCreate):
    """Serialized catalog product."""

    id: int

    model_config = ConfigDict(from_attributes=True)


class CartItemPayload(BaseModel):
    """Single cart item as submitted by a client."""

    product_id: int
    quantity: int = Field(default=1, ge=1)
