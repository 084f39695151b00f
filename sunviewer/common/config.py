"""
Centralized Configuration Management for SunViewer

This module provides a unified interface for loading and accessing
viewer configuration from YAML files.
"""

import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field, asdict

from .constants import (
    EARLIEST_OBSERVATION, IMAGES_PATH, SNAPSHOT_SETTLE_MINUTES,
    MAX_LOAD_ERRORS, DEFAULT_CHANNEL, DEFAULT_MODE
)


@dataclass
class ArchiveConfig:
    """Configuration for the solar image archive"""

    # Where the static image tree is served from (http(s) URL or local directory)
    archive_url: str = "http://localhost:8080"

    # URL path prefix of the image tree
    base_path: str = IMAGES_PATH

    request_timeout_sec: int = 30

    @property
    def is_remote(self) -> bool:
        """True when images are fetched over HTTP"""
        return self.archive_url.startswith(("http://", "https://"))


@dataclass
class NavigationConfig:
    """Configuration for time navigation and channel selection"""

    earliest_timestamp: str = EARLIEST_OBSERVATION
    settle_minutes: int = SNAPSHOT_SETTLE_MINUTES  # minutes past the hour
    max_load_errors: int = MAX_LOAD_ERRORS

    default_channel: str = DEFAULT_CHANNEL
    default_mode: str = DEFAULT_MODE

    # Compatibility: accept unrecognized channel codes as wavelength-style codes
    allow_unknown_channels: bool = False


@dataclass
class LoggingConfig:
    """Configuration for log output"""

    level: str = "INFO"
    json_format: bool = False
    log_file: Optional[str] = None


@dataclass
class SunViewerConfig:
    """Master configuration for SunViewer"""

    archive: ArchiveConfig = field(default_factory=ArchiveConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'SunViewerConfig':
        """Load configuration from YAML file"""
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(
            archive=ArchiveConfig(**config_dict.get('archive', {})),
            navigation=NavigationConfig(**config_dict.get('navigation', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        )

    def to_yaml(self, yaml_path: str) -> None:
        """Save configuration to YAML file"""
        config_dict = {
            'archive': asdict(self.archive),
            'navigation': asdict(self.navigation),
            'logging': asdict(self.logging)
        }

        with open(yaml_path, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False)


def get_config(config_path: Optional[str] = None) -> SunViewerConfig:
    """
    Get viewer configuration

    Priority:
    1. Provided config_path
    2. SUNVIEWER_CONFIG environment variable
    3. config/sunviewer.yml
    4. Default configuration
    """
    if config_path is None:
        config_path = os.getenv('SUNVIEWER_CONFIG')

    if config_path is None:
        # Try default paths
        default_paths = [
            Path(__file__).parent.parent.parent / 'config' / 'sunviewer.yml',
            Path('config/sunviewer.yml')
        ]

        for path in default_paths:
            if path.exists():
                config_path = str(path)
                break

    if config_path and Path(config_path).exists():
        return SunViewerConfig.from_yaml(config_path)

    # Return default configuration
    return SunViewerConfig()
