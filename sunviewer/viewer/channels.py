"""
Solar Image Channel Catalog

Defines the user-selectable imaging channels of the archive, in selector
order, with display names and short descriptions.
"""

from ..navigation.path_resolver import (
    MAGNETOGRAM, CORONAGRAPH_2, COMPOSITE_CHANNELS
)

# Credit line shown under the image
IMAGE_CREDITS = "Solar images are courtesy of NASA/SDO and the AIA, EVE, and HMI science teams"

SUN_CHANNELS = [
    {
        "id": "0094",
        "display_name": "SDO/AIA 94 A",
        "instrument": "SDO AIA",
        "description": "Hot flare plasma (~6.3 million K). Iron XVIII emission."
    },
    {
        "id": "0193",
        "display_name": "SDO/AIA 193 A",
        "instrument": "SDO AIA",
        "description": "Corona and hot flare plasma at ~1.2 MK and ~20 MK. Iron XII, XXIV."
    },
    {
        "id": "0131",
        "display_name": "SDO/AIA 131 A",
        "instrument": "SDO AIA",
        "description": "Flare plasma (~10 MK) and transition region (~0.4 MK)."
    },
    {
        "id": "0171",
        "display_name": "SDO/AIA 171 A",
        "instrument": "SDO AIA",
        "description": "Quiet corona and coronal loops at ~600,000 K. Iron IX emission."
    },
    {
        "id": "0211",
        "display_name": "SDO/AIA 211 A",
        "instrument": "SDO AIA",
        "description": "Active region corona at ~2 million K. Iron XIV emission."
    },
    {
        "id": "0304",
        "display_name": "SDO/AIA 304 A",
        "instrument": "SDO AIA",
        "description": "Chromosphere and transition region at ~50,000 K. Helium II emission."
    },
    {
        "id": "0335",
        "display_name": "SDO/AIA 335 A",
        "instrument": "SDO AIA",
        "description": "Active region corona at ~2.5 million K. Iron XVI emission."
    },
    {
        "id": COMPOSITE_CHANNELS[0],
        "display_name": "211+193+171A",
        "instrument": "SDO AIA",
        "description": "Three-wavelength composite of 211, 193 and 171 Angstrom."
    },
    {
        "id": MAGNETOGRAM,
        "display_name": "SDO/HMI Magnetogram",
        "instrument": "SDO HMI",
        "description": "Line-of-sight magnetic field. White = positive polarity, Black = negative polarity."
    },
    {
        "id": CORONAGRAPH_2,
        "display_name": "SOHO/LASCO Corona",
        "instrument": "SOHO LASCO",
        "description": "White-light coronagraph. Shows coronal mass ejections leaving the Sun."
    },
]


def get_channel_by_id(channel_id: str):
    """Get a specific channel by its ID."""
    for channel in SUN_CHANNELS:
        if channel['id'] == channel_id:
            return channel
    return None


def get_display_name(channel_id: str) -> str:
    """Display name for a channel, falling back to the raw code."""
    channel = get_channel_by_id(channel_id)
    if channel is None:
        return channel_id
    return channel['display_name']
