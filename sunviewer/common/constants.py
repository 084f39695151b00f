"""
Archive and Navigation Constants for SunViewer

This module contains the fixed values that describe the solar image
archive layout and the hourly navigation model.
"""

# Archive coverage
EARLIEST_OBSERVATION = "2010-05-19T00:00"  # First hourly snapshot in the archive (local time)

# Static file tree
IMAGES_PATH = "/img/sun"  # URL path prefix of the image tree
IMAGE_EXTENSION = "jpg"

# Navigation
SNAPSHOT_SETTLE_MINUTES = 30  # Current hour's image is expected after HH:30
MAX_LOAD_ERRORS = 100  # Consecutive load failures before auto-retreat gives up

# Imaging defaults
DEFAULT_MODE = "aia"  # Only imaging instrument with per-wavelength series
DEFAULT_CHANNEL = "0094"

# Timestamp text exchanged with the display layer (YYYY-MM-DDTHH:mm)
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"
TIMESTAMP_INPUT_FORMATS = (
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
)
