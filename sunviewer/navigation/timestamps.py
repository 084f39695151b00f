"""
Timestamp Parsing and Local-Time Helpers

Timestamps are timezone-aware datetimes expressed in the viewer's local
timezone. Hour steps and ordering checks use UTC so they are unaffected by
DST offsets. A ``tz`` of None means the system local zone.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from ..common.constants import TIMESTAMP_FORMAT, TIMESTAMP_INPUT_FORMATS


class InvalidInputError(ValueError):
    """Raised when timestamp input cannot be parsed."""


def localize(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Normalize a datetime to the local timezone.

    Naive values are read as local wall-clock time; aware values are
    converted.
    """
    if value.tzinfo is None:
        if tz is None:
            return value.astimezone()
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def parse_timestamp(raw: Union[str, datetime], tz: Optional[tzinfo] = None) -> datetime:
    """
    Parse display-layer input into a local, timezone-aware datetime.

    Args:
        raw: ``YYYY-MM-DDTHH:mm`` text (a seconds suffix is tolerated)
            or a datetime
        tz: Local timezone (None for system local)

    Returns:
        Aware datetime in the local timezone

    Raises:
        InvalidInputError: If raw is not a well-formed timestamp
    """
    if isinstance(raw, datetime):
        return localize(raw, tz)

    if not isinstance(raw, str):
        raise InvalidInputError(f"Unsupported timestamp type: {type(raw).__name__}")

    text = raw.strip()
    for fmt in TIMESTAMP_INPUT_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return localize(parsed, tz)

    raise InvalidInputError(f"Malformed timestamp: {raw!r}")


def format_timestamp(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format a datetime as local ``YYYY-MM-DDTHH:mm`` text."""
    return localize(value, tz).strftime(TIMESTAMP_FORMAT)


def shift_hours(value: datetime, hours: int, tz: Optional[tzinfo] = None) -> datetime:
    """Move a timestamp by whole hours of absolute time."""
    shifted = to_utc(value) + timedelta(hours=hours)
    return shifted.astimezone(tz)


def to_utc(value: datetime) -> datetime:
    """
    Absolute (UTC) form of an aware timestamp.

    Aware datetimes sharing a tzinfo compare by wall clock, so ordering
    checks go through UTC.
    """
    return value.astimezone(timezone.utc)
