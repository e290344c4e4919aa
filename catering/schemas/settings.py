"""Capacity, day and packaging configuration schemas."""

from datetime import date
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from catering.schemas.catalog import CartItemPayload
from catering.schemas.common import ProductCategory

CapacityLimit = Annotated[float, Field(ge=0)]


class DayConfig(BaseModel):
    """Per-date opening flag and partial capacity overrides."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    date: date
    is_open: bool = True
    capacity_overrides: dict[ProductCategory, CapacityLimit] = Field(default_factory=dict)


class PackagingType(BaseModel):
    """Packaging container available for checkout fees."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int | None = None
    name: str = ""
    volume: float = Field(ge=0)
    price: Decimal = Field(ge=0)
    enabled: bool = True


class PackagingConfig(BaseModel):
    """Container list plus the subtotal above which packaging is free."""

    model_config = ConfigDict(frozen=True)

    types: list[PackagingType] = Field(default_factory=list)
    free_from: Decimal = Field(ge=0)


class PackagingFeeRequest(BaseModel):
    items: list[CartItemPayload]


class CapacitiesUpdate(BaseModel):
    """Payload replacing default category capacities."""

    capacities: dict[ProductCategory, CapacityLimit]


class DayConfigUpdate(BaseModel):
    """Payload for creating or replacing one day's configuration."""

    is_open: bool = True
    capacity_overrides: dict[ProductCategory, CapacityLimit] = Field(default_factory=dict)


class CategoryLoad(BaseModel):
    """Load, limit and headroom for one category on one date."""

    category: ProductCategory
    load: float
    limit: float
    remaining: float


class DailyLoadResponse(BaseModel):
    date: date
    is_closed: bool
    categories: list[CategoryLoad]
