"""Business-date helpers used for 'today' comparisons."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from catering.core.config import settings


def business_today() -> date:
    """Return today's date in the business timezone.

    Availability and discount windows are date-only, so the time of day is
    dropped here and nowhere else.
    """
    return datetime.now(ZoneInfo(settings.business_timezone)).date()
