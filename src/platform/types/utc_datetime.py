from datetime import date, datetime, timezone
from typing import overload
import zoneinfo

from src.platform.config.core_setting import settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@overload
def as_utc(value: datetime) -> datetime: ...


@overload
def as_utc(value: None) -> None: ...


def as_utc(value: datetime | None) -> datetime | None:
    """Timestamps are stored in UTC; drivers without tz support hand them back naive."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def museum_today() -> date:
    return datetime.now(zoneinfo.ZoneInfo(settings.MUSEUM_TIMEZONE)).date()
