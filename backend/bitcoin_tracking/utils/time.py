from __future__ import annotations

from datetime import datetime, timezone

import pytz
from dateutil import tz

from bitcoin_tracking.core.config import settings


LOCAL_TZ = pytz.timezone(settings.display_timezone)
DISPLAY_FORMAT = "%d.%m.%Y %H:%M"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    # naive values come back from SQLite and are stored as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz.UTC)
    return dt.astimezone(tz.UTC)


def to_local(dt: datetime) -> datetime:
    return as_utc(dt).astimezone(LOCAL_TZ)


def format_local(dt: datetime) -> str:
    return to_local(dt).strftime(DISPLAY_FORMAT)
