"""Application configuration."""

from decimal import Decimal
from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "catering checkout API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./catering.db")
    business_timezone: str = getenv("BUSINESS_TIMEZONE", "Europe/Prague")
    default_capacity: float = float(getenv("DEFAULT_CATEGORY_CAPACITY", "1000"))
    packaging_free_from: Decimal = Decimal(getenv("PACKAGING_FREE_FROM", "2000"))


settings: Settings = Settings()
