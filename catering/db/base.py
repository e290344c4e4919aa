"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from catering.models import app_setting as _app_setting  # noqa: E402,F401
from catering.models import capacity as _capacity  # noqa: E402,F401
from catering.models import discount as _discount  # noqa: E402,F401
from catering.models import order as _order  # noqa: E402,F401
from catering.models import packaging as _packaging  # noqa: E402,F401
from catering.models import product as _product  # noqa: E402,F401
