"""Daily capacity limits and closures."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date

from catering.schemas.common import ProductCategory
from catering.schemas.settings import DayConfig
from catering.services.ports import SettingsStore


class CapacityModel:
    """Resolve effective category limits from defaults plus per-day overrides.

    Built from an immutable snapshot of settings; it never reads storage after
    construction. Categories missing from ``default_capacities`` resolve to a
    limit of 0.
    """

    def __init__(
        self,
        default_capacities: Mapping[ProductCategory | str, float],
        day_configs: Iterable[DayConfig] = (),
    ) -> None:
        self._defaults: dict[ProductCategory, float] = {
            ProductCategory(category): float(limit) for category, limit in default_capacities.items()
        }
        self._days: dict[date, DayConfig] = {config.date: config for config in day_configs}

    @classmethod
    def from_store(cls, store: SettingsStore, start: date, end: date | None = None) -> CapacityModel:
        """Snapshot defaults and day configs for ``start..end`` (inclusive)."""
        return cls(store.get_default_capacities(), store.get_day_configs(start, end or start))

    @property
    def categories(self) -> tuple[ProductCategory, ...]:
        return tuple(ProductCategory)

    def effective_limit(self, day: date, category: ProductCategory) -> float:
        """Return the day's override for category, else the default limit."""
        config: DayConfig | None = self._days.get(day)
        if config is not None and category in config.capacity_overrides:
            return config.capacity_overrides[category]
        return self._defaults.get(category, 0.0)

    def is_date_closed(self, day: date) -> bool:
        """Return True only when a day config exists and marks the date closed."""
        config: DayConfig | None = self._days.get(day)
        return config is not None and not config.is_open
