"""
Sun Viewer Controller

Qt-free state machine behind the viewer. Routes the inbound events
(time input, previous/next steps, channel changes, image load results)
to the time cursor and publishes a snapshot of what the display should
show after each call.

All calls are synchronous and run to completion; the display layer is
responsible for delivering events one at a time.
"""

from dataclasses import dataclass, asdict
from datetime import datetime, tzinfo
from typing import Callable, List, Optional, Dict, Any, Union

from ..common.config import SunViewerConfig
from ..common.constants import (
    DEFAULT_CHANNEL, DEFAULT_MODE, IMAGES_PATH, MAX_LOAD_ERRORS
)
from ..common.logging_config import ServiceLogger
from ..navigation.path_resolver import SELECTABLE_CHANNELS, resolve_path
from ..navigation.time_cursor import TimeCursor
from ..navigation.timestamps import InvalidInputError, format_timestamp, to_utc


@dataclass(frozen=True, eq=False)
class ViewerSnapshot:
    """
    What the display layer should show

    Equality uses the absolute instant of ``current``: during the repeated
    DST hour two snapshots share a wall clock but are an hour apart.
    """

    image_path: str
    prev_available: bool
    next_available: bool
    current: datetime
    channel: str

    def _key(self):
        return (to_utc(self.current), self.image_path, self.prev_available,
                self.next_available, self.channel)

    def __eq__(self, other):
        if not isinstance(other, ViewerSnapshot):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['current'] = format_timestamp(self.current, self.current.tzinfo)
        return data


class ErrorCounter:
    """
    Consecutive image-load failure counter

    Each failure either allows another automatic retreat or, once the
    count has passed the ceiling, resets and ends the streak.
    """

    def __init__(self, ceiling: int = MAX_LOAD_ERRORS):
        self.ceiling = ceiling
        self.count = 0

    def record_failure(self) -> bool:
        """
        Register a failure

        Returns:
            True if the caller should retreat, False if the streak is abandoned
        """
        if self.count > self.ceiling:
            self.count = 0
            return False

        self.count += 1
        return True

    def reset(self):
        self.count = 0


SnapshotListener = Callable[[ViewerSnapshot], None]


class SunViewerController:
    """
    Viewer state: Ready(current, channel, navigation flags)

    Transitions: set_time, step_prev, step_next, set_channel,
    report_load_failure. Every transition returns to Ready; listeners are
    notified only when the snapshot actually changes.
    """

    def __init__(
        self,
        cursor: TimeCursor,
        channel: str = DEFAULT_CHANNEL,
        mode: str = DEFAULT_MODE,
        base_path: str = IMAGES_PATH,
        max_load_errors: int = MAX_LOAD_ERRORS,
        allow_unknown_channels: bool = False
    ):
        """
        Initialize controller

        Args:
            cursor: Session time cursor
            channel: Initially selected channel
            mode: Imaging instrument for wavelength channels
            base_path: URL path prefix of the image tree
            max_load_errors: Failure ceiling for the auto-retreat heuristic
            allow_unknown_channels: Accept channel codes outside the catalog
        """
        self.cursor = cursor
        self.mode = mode
        self.base_path = base_path
        self.allow_unknown_channels = allow_unknown_channels
        self.errors = ErrorCounter(max_load_errors)

        self.logger = ServiceLogger("sunviewer", "controller")
        self._listeners: List[SnapshotListener] = []

        if not self._is_acceptable_channel(channel):
            raise ValueError(f"Channel {channel!r} is not selectable")
        self.channel = channel

    @classmethod
    def from_config(
        cls,
        config: SunViewerConfig,
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None
    ) -> 'SunViewerController':
        """Build a controller and its cursor from configuration"""
        nav = config.navigation
        cursor = TimeCursor.initialize(
            now=now,
            earliest=nav.earliest_timestamp,
            settle_minutes=nav.settle_minutes,
            tz=tz
        )
        return cls(
            cursor,
            channel=nav.default_channel,
            mode=nav.default_mode,
            base_path=config.archive.base_path,
            max_load_errors=nav.max_load_errors,
            allow_unknown_channels=nav.allow_unknown_channels
        )

    # Output

    @property
    def snapshot(self) -> ViewerSnapshot:
        """Current display snapshot"""
        return ViewerSnapshot(
            image_path=resolve_path(
                self.cursor.current,
                self.channel,
                self.mode,
                base=self.base_path,
                strict=not self.allow_unknown_channels,
                tz=self.cursor.tz
            ),
            prev_available=self.cursor.prev_available,
            next_available=self.cursor.next_available,
            current=self.cursor.current,
            channel=self.channel
        )

    def subscribe(self, listener: SnapshotListener):
        """Register a callback for snapshot changes"""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener):
        """Remove a snapshot callback"""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self, previous: ViewerSnapshot) -> ViewerSnapshot:
        snapshot = self.snapshot
        if snapshot != previous:
            self.logger.debug(f"Image path: {snapshot.image_path}")
            for listener in list(self._listeners):
                listener(snapshot)
        return snapshot

    # Inbound events

    def set_time(self, raw: Union[str, datetime]) -> ViewerSnapshot:
        """
        Handle explicit time input

        Malformed input is logged and ignored.
        """
        previous = self.snapshot
        try:
            self.cursor.set_to(raw)
        except InvalidInputError as e:
            self.logger.warning(f"Unable to set time: {e}")
            return previous
        return self._publish(previous)

    def step_prev(self) -> ViewerSnapshot:
        """Show the previous hour, if available"""
        previous = self.snapshot
        self.cursor.step_backward()
        return self._publish(previous)

    def step_next(self) -> ViewerSnapshot:
        """Show the next hour, if available"""
        previous = self.snapshot
        self.cursor.step_forward()
        return self._publish(previous)

    def set_channel(self, channel_id: str) -> ViewerSnapshot:
        """
        Switch the imaging channel

        Channels outside the selectable catalog are logged and ignored
        unless allow_unknown_channels is set.
        """
        previous = self.snapshot
        if not self._is_acceptable_channel(channel_id):
            self.logger.warning(f"Ignoring unknown channel: {channel_id!r}")
            return previous

        self.channel = channel_id
        return self._publish(previous)

    def report_load_failure(self) -> ViewerSnapshot:
        """
        Handle a failed image load

        Retreats one hour per failure, older snapshots being more likely to
        exist. Past the failure ceiling the streak is abandoned and control
        returns to the user. At the lower bound failures cause no movement.
        """
        previous = self.snapshot
        if not self.errors.record_failure():
            self.logger.warning(
                f"Too many images missing ({self.errors.ceiling}), stopping auto-retreat",
                extra={'image_path': previous.image_path}
            )
            return previous

        self.logger.debug(
            f"Image unavailable, retreating (failure {self.errors.count})",
            extra={'image_path': previous.image_path}
        )
        return self.step_prev()

    def report_load_success(self):
        """Handle a successful image load (ends any failure streak)"""
        self.errors.reset()

    # Helpers

    def _is_acceptable_channel(self, channel_id: str) -> bool:
        if channel_id in SELECTABLE_CHANNELS:
            return True
        return self.allow_unknown_channels and isinstance(channel_id, str) and bool(channel_id)

    def get_status(self) -> Dict[str, Any]:
        """
        Get current controller status

        Returns:
            Status dictionary
        """
        status = self.cursor.get_status()
        status.update({
            'channel': self.channel,
            'mode': self.mode,
            'image_path': self.snapshot.image_path,
            'consecutive_failures': self.errors.count,
            'failure_ceiling': self.errors.ceiling
        })
        return status
