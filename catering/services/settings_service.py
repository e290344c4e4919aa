"""Settings write boundary: capacities, day configs, packaging and codes."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catering.core.config import settings
from catering.models import AppSetting, CategoryCapacity, DayConfig, DiscountCode, PackagingType
from catering.schemas.common import ProductCategory
from catering.schemas.discount import DiscountCodeCreate
from catering.schemas.settings import PackagingConfig

logger = logging.getLogger(__name__)

PACKAGING_FREE_FROM_KEY: str = "packaging_free_from"


class DuplicateDiscountCodeError(Exception):
    """Raised when a discount code already exists ignoring case."""


def get_packaging_free_from(db: Session) -> Decimal:
    """Read the free-packaging threshold with fallback to configured default."""
    setting: AppSetting | None = db.get(AppSetting, PACKAGING_FREE_FROM_KEY)
    if setting is None:
        return settings.packaging_free_from
    try:
        return Decimal(setting.value)
    except InvalidOperation:
        logger.warning("Ignoring malformed %s setting: %r", PACKAGING_FREE_FROM_KEY, setting.value)
        return settings.packaging_free_from


def _save_setting(db: Session, key: str, value: str) -> None:
    setting: AppSetting | None = db.get(AppSetting, key)
    if setting is None:
        db.add(AppSetting(key=key, value=value))
    else:
        setting.value = value


def ensure_default_capacities(db: Session) -> int:
    """Seed a default limit for every category that has none; return count created."""
    existing: set[str] = set(db.scalars(select(CategoryCapacity.category)).all())
    created: int = 0
    for category in ProductCategory:
        if category.value in existing:
            continue
        db.add(CategoryCapacity(category=category.value, limit=settings.default_capacity))
        created += 1
    if created:
        db.commit()
    return created


def save_default_capacities(db: Session, capacities: Mapping[ProductCategory, float]) -> None:
    """Persist default limits for the given categories."""
    for category, limit in capacities.items():
        row: CategoryCapacity | None = db.get(CategoryCapacity, category.value)
        if row is None:
            db.add(CategoryCapacity(category=category.value, limit=limit))
        else:
            row.limit = limit
    db.commit()


def save_day_config(
    db: Session,
    *,
    day: date,
    is_open: bool,
    capacity_overrides: Mapping[ProductCategory, float],
) -> DayConfig:
    """Create or replace the configuration for one date."""
    overrides: dict[str, float] = {category.value: limit for category, limit in capacity_overrides.items()}
    row: DayConfig | None = db.get(DayConfig, day)
    if row is None:
        row = DayConfig(day=day, is_open=is_open, capacity_overrides=overrides)
        db.add(row)
    else:
        row.is_open = is_open
        row.capacity_overrides = overrides
    db.commit()
    db.refresh(row)
    return row


def delete_day_config(db: Session, day: date) -> bool:
    """Drop a date's configuration so it falls back to defaults."""
    row: DayConfig | None = db.get(DayConfig, day)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    return True


def save_packaging_config(db: Session, config: PackagingConfig) -> None:
    """Replace all container types and the free-from threshold."""
    for row in db.scalars(select(PackagingType)).all():
        db.delete(row)
    for container in config.types:
        db.add(
            PackagingType(
                name=container.name,
                volume=container.volume,
                price=container.price,
                enabled=container.enabled,
            )
        )
    _save_setting(db, PACKAGING_FREE_FROM_KEY, str(config.free_from))
    db.commit()


def create_discount_code(db: Session, payload: DiscountCodeCreate) -> DiscountCode:
    """Persist a new discount code, normalized to upper case."""
    code: str = payload.code.strip().upper()
    duplicate = db.scalar(select(DiscountCode).where(func.upper(DiscountCode.code) == code))
    if duplicate is not None:
        raise DuplicateDiscountCodeError(code)

    data = payload.model_dump()
    data["code"] = code
    data["type"] = payload.type.value
    data["applicable_categories"] = [category.value for category in payload.applicable_categories]
    row = DiscountCode(**data)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
