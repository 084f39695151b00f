"""
Navigation Bounds

Immutable [minimum, maximum] range of navigable snapshots, built once per
session.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional, Union

from ..common.constants import EARLIEST_OBSERVATION, SNAPSHOT_SETTLE_MINUTES, TIMESTAMP_FORMAT
from .timestamps import localize, parse_timestamp, shift_hours, to_utc


def latest_snapshot(
    now: Optional[datetime] = None,
    settle_minutes: int = SNAPSHOT_SETTLE_MINUTES,
    tz: Optional[tzinfo] = None
) -> datetime:
    """
    Most recent hourly snapshot expected to exist at ``now``.

    Before HH:<settle_minutes> the current hour's image may not be published
    yet, so the previous hour is used.

    Args:
        now: Wall-clock time (defaults to the current time)
        settle_minutes: Minutes past the hour after which HH:00 is available
        tz: Local timezone (None for system local)

    Returns:
        Local, aware datetime on an hour boundary
    """
    if now is None:
        now = datetime.now().astimezone()

    local_now = localize(now, tz)
    if local_now.minute < settle_minutes:
        local_now = shift_hours(local_now, -1, tz)

    return local_now.replace(minute=0, second=0, microsecond=0)


@dataclass(frozen=True)
class Bounds:
    """Earliest and latest navigable timestamps"""

    minimum: datetime
    maximum: datetime

    def __post_init__(self):
        if to_utc(self.minimum) > to_utc(self.maximum):
            raise ValueError(
                f"Bounds minimum {self.minimum.isoformat()} is after "
                f"maximum {self.maximum.isoformat()}"
            )

    @classmethod
    def from_now(
        cls,
        now: Optional[datetime] = None,
        earliest: Union[str, datetime] = EARLIEST_OBSERVATION,
        settle_minutes: int = SNAPSHOT_SETTLE_MINUTES,
        tz: Optional[tzinfo] = None
    ) -> 'Bounds':
        """Build session bounds from the archive start and wall-clock now."""
        return cls(
            minimum=parse_timestamp(earliest, tz),
            maximum=latest_snapshot(now, settle_minutes, tz)
        )

    def clamp(self, value: datetime) -> datetime:
        """Snap value into [minimum, maximum]."""
        if value in self:
            return value
        if to_utc(value) < to_utc(self.minimum):
            return self.minimum
        return self.maximum

    def __contains__(self, value: datetime) -> bool:
        return to_utc(self.minimum) <= to_utc(value) <= to_utc(self.maximum)

    def __str__(self) -> str:
        return f"[{self.minimum.strftime(TIMESTAMP_FORMAT)}, {self.maximum.strftime(TIMESTAMP_FORMAT)}]"
