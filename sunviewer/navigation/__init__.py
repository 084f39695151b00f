"""
Archive Navigation Core

Clamped hourly time cursor and image path resolution for the solar image
archive. Has no Qt dependency.
"""

from .timestamps import (
    InvalidInputError, parse_timestamp, format_timestamp, localize, shift_hours, to_utc
)
from .bounds import Bounds, latest_snapshot
from .time_cursor import TimeCursor, NavigationState
from .path_resolver import (
    UnknownChannelError, resolve_path, snapshot_key,
    SELECTABLE_CHANNELS, KNOWN_CHANNELS, WAVELENGTH_CHANNELS,
    COMPOSITE_CHANNELS, MAGNETOGRAM, CORONAGRAPH_1, CORONAGRAPH_2
)

__all__ = [
    'InvalidInputError', 'parse_timestamp', 'format_timestamp', 'localize', 'shift_hours', 'to_utc',
    'Bounds', 'latest_snapshot',
    'TimeCursor', 'NavigationState',
    'UnknownChannelError', 'resolve_path', 'snapshot_key',
    'SELECTABLE_CHANNELS', 'KNOWN_CHANNELS', 'WAVELENGTH_CHANNELS',
    'COMPOSITE_CHANNELS', 'MAGNETOGRAM', 'CORONAGRAPH_1', 'CORONAGRAPH_2',
]
