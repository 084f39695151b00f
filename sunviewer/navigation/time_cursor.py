"""
Time Cursor

Owns the current snapshot timestamp and the session bounds, and derives
which navigation directions are available.

Clamping in set_to() is the single point of bound enforcement: stepping
only checks the availability gate and then delegates to set_to().
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional, Union, Dict, Any

from ..common.constants import (
    EARLIEST_OBSERVATION, SNAPSHOT_SETTLE_MINUTES
)
from ..common.logging_config import ServiceLogger
from .bounds import Bounds
from .timestamps import format_timestamp, localize, parse_timestamp, shift_hours, to_utc


@dataclass(frozen=True)
class NavigationState:
    """Availability of the previous/next navigation affordances"""

    prev_available: bool
    next_available: bool


class TimeCursor:
    """
    Clamped hourly cursor over [MIN, MAX]

    Invariants after every call:
        minimum <= current <= maximum
        prev_available == (current > minimum)
        next_available == (current < maximum)
    """

    def __init__(self, bounds: Bounds, tz: Optional[tzinfo] = None):
        """
        Initialize cursor at the latest snapshot

        Args:
            bounds: Session bounds
            tz: Local timezone (None for system local)
        """
        self.bounds = bounds
        self.tz = tz
        self.logger = ServiceLogger("sunviewer", "time_cursor")

        self._current = localize(bounds.maximum, tz)

    @classmethod
    def initialize(
        cls,
        now: Optional[datetime] = None,
        earliest: Union[str, datetime] = EARLIEST_OBSERVATION,
        settle_minutes: int = SNAPSHOT_SETTLE_MINUTES,
        tz: Optional[tzinfo] = None
    ) -> 'TimeCursor':
        """
        Create the session cursor from wall-clock time

        Args:
            now: Wall-clock time (defaults to the current time)
            earliest: Archive start (MIN)
            settle_minutes: Minutes past the hour after which HH:00 is available
            tz: Local timezone (None for system local)

        Returns:
            Cursor positioned at MAX
        """
        bounds = Bounds.from_now(now, earliest, settle_minutes, tz)
        cursor = cls(bounds, tz)

        cursor.logger.info(f"Time cursor initialized: bounds={bounds}")
        return cursor

    @property
    def current(self) -> datetime:
        """Current snapshot timestamp"""
        return self._current

    @property
    def minimum(self) -> datetime:
        return self.bounds.minimum

    @property
    def maximum(self) -> datetime:
        return self.bounds.maximum

    @property
    def prev_available(self) -> bool:
        return to_utc(self._current) > to_utc(self.bounds.minimum)

    @property
    def next_available(self) -> bool:
        return to_utc(self._current) < to_utc(self.bounds.maximum)

    @property
    def navigation_state(self) -> NavigationState:
        """Navigation flags derived from the current timestamp"""
        return NavigationState(
            prev_available=self.prev_available,
            next_available=self.next_available
        )

    def set_to(self, candidate: Union[str, datetime]) -> NavigationState:
        """
        Move the cursor to a timestamp, clamped into bounds

        Args:
            candidate: ``YYYY-MM-DDTHH:mm`` text or a datetime

        Returns:
            Updated navigation state

        Raises:
            InvalidInputError: If candidate is malformed (state is unchanged)
        """
        parsed = parse_timestamp(candidate, self.tz)
        clamped = self.bounds.clamp(parsed)

        if clamped != parsed:
            self.logger.debug(
                f"Clamped {format_timestamp(parsed, self.tz)} "
                f"to {format_timestamp(clamped, self.tz)}"
            )

        self._current = localize(clamped, self.tz)
        return self.navigation_state

    def step_backward(self) -> Optional[NavigationState]:
        """Move one hour back; None if already at the lower bound"""
        if not self.prev_available:
            return None
        return self.set_to(shift_hours(self._current, -1, self.tz))

    def step_forward(self) -> Optional[NavigationState]:
        """Move one hour forward; None if already at the upper bound"""
        if not self.next_available:
            return None
        return self.set_to(shift_hours(self._current, 1, self.tz))

    def get_status(self) -> Dict[str, Any]:
        """
        Get current cursor status

        Returns:
            Status dictionary
        """
        return {
            'current': format_timestamp(self._current, self.tz),
            'minimum': format_timestamp(self.bounds.minimum, self.tz),
            'maximum': format_timestamp(self.bounds.maximum, self.tz),
            'prev_available': self.prev_available,
            'next_available': self.next_available
        }
