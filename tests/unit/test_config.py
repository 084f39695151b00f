"""
Unit Tests for Configuration Management

Tests cover:
- Default values
- YAML parsing with partial, empty and malformed input
- Config file lookup priority
- Save/load round trip
"""

import pytest
import yaml
from pathlib import Path

from sunviewer.common.config import (
    ArchiveConfig, NavigationConfig, LoggingConfig, SunViewerConfig, get_config
)


class TestDefaults:
    """Test default configuration values"""

    def test_navigation_defaults(self):
        nav = NavigationConfig()

        assert nav.earliest_timestamp == "2010-05-19T00:00"
        assert nav.settle_minutes == 30
        assert nav.max_load_errors == 100
        assert nav.default_channel == "0094"
        assert nav.default_mode == "aia"
        assert nav.allow_unknown_channels is False

    def test_archive_defaults(self):
        archive = ArchiveConfig()

        assert archive.base_path == "/img/sun"
        assert archive.is_remote

    def test_local_archive_not_remote(self):
        assert not ArchiveConfig(archive_url="/srv/sunviewer").is_remote
        assert ArchiveConfig(archive_url="https://example.org").is_remote

    def test_logging_defaults(self):
        log = LoggingConfig()

        assert log.level == "INFO"
        assert log.json_format is False
        assert log.log_file is None


class TestYamlParsing:
    """Test loading configuration from YAML"""

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "partial.yml"
        path.write_text("navigation:\n  default_channel: hmi\n  max_load_errors: 5\n")

        config = SunViewerConfig.from_yaml(str(path))

        assert config.navigation.default_channel == "hmi"
        assert config.navigation.max_load_errors == 5
        assert config.navigation.settle_minutes == 30
        assert config.archive == ArchiveConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert SunViewerConfig.from_yaml(str(path)) == SunViewerConfig()

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "typo.yml"
        path.write_text("navigation:\n  max_load_erors: 5\n")

        with pytest.raises(TypeError):
            SunViewerConfig.from_yaml(str(path))

    def test_malformed_yaml_rejected(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("navigation: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            SunViewerConfig.from_yaml(str(path))

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SunViewerConfig.from_yaml(str(tmp_path / "missing.yml"))

    def test_round_trip(self, tmp_path):
        config = SunViewerConfig()
        config.archive.archive_url = "/srv/images"
        config.navigation.allow_unknown_channels = True
        config.logging.level = "DEBUG"

        path = tmp_path / "saved.yml"
        config.to_yaml(str(path))

        assert SunViewerConfig.from_yaml(str(path)) == config

    def test_shipped_config_loads(self):
        shipped = Path(__file__).parent.parent.parent / 'config' / 'sunviewer.yml'
        config = SunViewerConfig.from_yaml(str(shipped))

        assert config.navigation.max_load_errors == 100
        assert config.navigation.default_channel == "0094"


class TestGetConfig:
    """Test configuration lookup priority"""

    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        env_file = tmp_path / "env.yml"
        env_file.write_text("logging:\n  level: ERROR\n")
        explicit = tmp_path / "explicit.yml"
        explicit.write_text("logging:\n  level: DEBUG\n")
        monkeypatch.setenv('SUNVIEWER_CONFIG', str(env_file))

        assert get_config(str(explicit)).logging.level == "DEBUG"

    def test_environment_variable(self, tmp_path, monkeypatch):
        env_file = tmp_path / "env.yml"
        env_file.write_text("logging:\n  level: ERROR\n")
        monkeypatch.setenv('SUNVIEWER_CONFIG', str(env_file))

        assert get_config().logging.level == "ERROR"

    def test_nonexistent_path_gives_defaults(self, tmp_path):
        assert get_config(str(tmp_path / "nope.yml")) == SunViewerConfig()
