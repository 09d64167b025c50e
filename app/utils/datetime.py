"""Timezone helpers used for timestamps and the model-year ceiling."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

DEFAULT_TIMEZONE: Final[str] = "America/Lima"
_FIXED_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)\s*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def get_app_timezone() -> tzinfo:
    """Return the zone named by ``APP_TIMEZONE``.

    IANA names and fixed offsets written as ``UTC-05:00`` are both accepted.
    Anything else resolves to ``America/Lima``.
    """

    name = (get_settings().app_timezone or "").strip()
    return _zone_for(name or DEFAULT_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def current_year_in_app_timezone() -> int:
    """Year used as the upper bound of ``anio`` (next year is still accepted)."""

    return now_in_app_timezone().year


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the application zone."""

    if value is None:
        return None
    zone = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Local wall-clock time without ``tzinfo``, as stored in the database."""

    localized = ensure_app_timezone(value)
    return None if localized is None else localized.replace(tzinfo=None)


def _fixed_offset(name: str) -> tzinfo | None:
    match = _FIXED_OFFSET.match(name)
    if match is None:
        return None
    delta = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    if match.group("sign") == "-":
        delta = -delta
    return timezone(delta, name=name.upper())


@lru_cache(maxsize=8)
def _zone_for(name: str) -> tzinfo:
    offset = _fixed_offset(name)
    if offset is not None:
        return offset
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE)
