"""
Image Path Resolver

Maps (timestamp, channel, mode) to the URL path of an hourly snapshot in
the static archive tree:

    hmi            <base>/hmi/<year>/<MMddhh>.jpg
    cor1           <base>/soho/1/<year>/<MMddhh>.jpg   (deprecated)
    cor2           <base>/soho/2/<year>/<MMddhh>.jpg
    wavelengths    <base>/<mode>/<channel>/<year>/<MMddhh>.jpg

The archive is laid out by local calendar fields, not UTC.
"""

from datetime import datetime, tzinfo
from typing import Optional, Tuple

from ..common.constants import IMAGES_PATH, IMAGE_EXTENSION, DEFAULT_MODE
from .timestamps import localize


class UnknownChannelError(ValueError):
    """Raised for channel codes outside the known set."""


# Channel codes
WAVELENGTH_CHANNELS = ("0094", "0193", "0131", "0171", "0211", "0304", "0335")
COMPOSITE_CHANNELS = ("211193171",)
MAGNETOGRAM = "hmi"
CORONAGRAPH_1 = "cor1"  # Deprecated, kept for existing archive paths
CORONAGRAPH_2 = "cor2"

SELECTABLE_CHANNELS = WAVELENGTH_CHANNELS + COMPOSITE_CHANNELS + (MAGNETOGRAM, CORONAGRAPH_2)
KNOWN_CHANNELS = SELECTABLE_CHANNELS + (CORONAGRAPH_1,)

# Channels with a fixed directory that ignores the imaging mode
FIXED_CHANNEL_DIRS = {
    MAGNETOGRAM: "hmi",
    CORONAGRAPH_1: "soho/1",
    CORONAGRAPH_2: "soho/2",
}


def snapshot_key(timestamp: datetime, tz: Optional[tzinfo] = None) -> Tuple[str, str]:
    """
    Split a timestamp into its archive year and MMddhh file stem.

    Args:
        timestamp: Snapshot timestamp
        tz: Local timezone (None for system local)

    Returns:
        (year, stem), e.g. ("2012", "030405")
    """
    local = localize(timestamp, tz)
    return f"{local.year:04d}", f"{local.month:02d}{local.day:02d}{local.hour:02d}"


def resolve_path(
    timestamp: datetime,
    channel: str,
    mode: Optional[str] = DEFAULT_MODE,
    base: str = IMAGES_PATH,
    strict: bool = True,
    tz: Optional[tzinfo] = None
) -> str:
    """
    Resolve the image path for a snapshot.

    Args:
        timestamp: Snapshot timestamp
        channel: Channel code (wavelength, composite, 'hmi', 'cor1', 'cor2')
        mode: Imaging instrument directory for wavelength channels
        base: URL path prefix of the image tree
        strict: Reject unknown channel codes; when False they resolve with
            the wavelength template under ``mode``
        tz: Local timezone (None for system local)

    Returns:
        POSIX-style URL path

    Raises:
        UnknownChannelError: If strict and channel is not a known code
    """
    if strict and channel not in KNOWN_CHANNELS:
        raise UnknownChannelError(f"Unknown channel: {channel!r}")

    year, stem = snapshot_key(timestamp, tz)
    filename = f"{stem}.{IMAGE_EXTENSION}"
    base = base.rstrip("/")

    fixed_dir = FIXED_CHANNEL_DIRS.get(channel)
    if fixed_dir is not None:
        return f"{base}/{fixed_dir}/{year}/{filename}"

    return f"{base}/{mode or DEFAULT_MODE}/{channel}/{year}/{filename}"
