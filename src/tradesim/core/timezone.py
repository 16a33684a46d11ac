"""Timezone utilities. Order timestamps are kept in UTC."""

from datetime import datetime, timedelta
from typing import Union

import pytz
from dateutil import parser as date_parser

UTC = pytz.utc
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Assume naive datetime is already UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def from_epoch_millis(value: Union[int, float]) -> datetime:
    """Build a UTC datetime from milliseconds since the epoch."""
    return EPOCH + timedelta(milliseconds=value)


def to_epoch_millis(dt: datetime) -> int:
    """Return milliseconds since the epoch for a datetime."""
    return (to_utc(dt) - EPOCH) // timedelta(milliseconds=1)


def parse_datetime_utc(value: str) -> datetime:
    """
    Parse a datetime string and return it in UTC.

    If no timezone is provided in the string, assumes UTC.
    """
    return to_utc(date_parser.parse(value))


def to_iso_utc(dt: datetime) -> str:
    """Format as ISO-8601 with millisecond precision and a Z suffix."""
    dt = to_utc(dt)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
