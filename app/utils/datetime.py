"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=16)
def resolve_timezone(tz_name: str | None) -> tzinfo:
    """Resolve ``tz_name`` into a ``tzinfo`` instance.

    Accepts IANA names (``Europe/Madrid``) and fixed offsets such as
    ``UTC+05:30``. Unknown or empty names fall back to UTC.
    """

    name = (tz_name or "").strip() or _DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc


def now_in_timezone(tz_name: str | None = None) -> datetime:
    """Return the current time localized to ``tz_name``."""

    return datetime.now(tz=resolve_timezone(tz_name))


def ensure_naive_datetime(value: datetime | None, tz_name: str | None = None) -> datetime | None:
    """Return ``value`` localized to ``tz_name`` but without ``tzinfo``.

    ``DateTime`` columns without timezone support reject aware values, so aware
    datetimes are converted before being stored. Naive values are assumed to be
    already expressed in the target timezone.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(resolve_timezone(tz_name)).replace(tzinfo=None)


def now_naive(tz_name: str | None = None) -> datetime:
    """Return the current localized time without attaching ``tzinfo``."""

    return now_in_timezone(tz_name).replace(tzinfo=None)


def attach_timezone(value: datetime | None, tz_name: str | None = None) -> datetime | None:
    """Mark a naive value stored in ``tz_name`` local time with that timezone."""

    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=resolve_timezone(tz_name))
