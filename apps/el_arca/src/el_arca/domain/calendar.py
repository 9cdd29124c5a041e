"""Date helpers based on the configured treasury timezone."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from el_arca.core.settings import get_settings


def app_timezone() -> ZoneInfo:
    return ZoneInfo(get_settings().app_timezone)


def today_local() -> date:
    """Return the current calendar day in the treasury timezone."""

    return datetime.now(tz=app_timezone()).date()
