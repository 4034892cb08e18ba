"""Tests for map pipeline configuration.

Covers:
- Default values (Toronto map centre, 24 h cache, 3 nm airport buffer)
- Loading from environment variables
- Type coercion (string env vars → numeric fields)
- Fail-fast range validation
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from flight_map.core.config import ConfigValidationError, MapConfig


class TestMapConfigDefaults:
    """Verify default configuration values."""

    def test_default_map_center(self) -> None:
        cfg = MapConfig()
        assert cfg.map_center == (43.6629, -79.3957)

    def test_default_zoom(self) -> None:
        cfg = MapConfig()
        assert cfg.map_default_zoom == 10

    def test_default_cache_age_is_one_day(self) -> None:
        cfg = MapConfig()
        assert cfg.cache_max_age_ms == 86_400_000

    def test_default_airport_buffer(self) -> None:
        cfg = MapConfig()
        assert cfg.airport_buffer_nm == 3.0

    def test_default_cache_backend(self) -> None:
        cfg = MapConfig()
        assert cfg.cache_backend == "memory"
        assert cfg.data_base_path == "data"


class TestMapConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        """All env vars are read and coerced to correct types."""
        env = {
            "MAP_CENTER_LAT": "45.4215",
            "MAP_CENTER_LNG": "-75.6972",
            "MAP_DEFAULT_ZOOM": "12",
            "DATA_BASE_PATH": "/srv/zones",
            "CACHE_MAX_AGE_MS": "60000",
            "AIRPORT_BUFFER_NM": "5",
            "FETCH_TIMEOUT_S": "10",
            "CACHE_BACKEND": "file",
            "CACHE_DIR": "/tmp/zones-cache",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = MapConfig.from_env()

        assert cfg.map_center_lat == 45.4215
        assert cfg.map_center_lng == -75.6972
        assert cfg.map_default_zoom == 12
        assert cfg.data_base_path == "/srv/zones"
        assert cfg.cache_max_age_ms == 60000
        assert cfg.airport_buffer_nm == 5.0
        assert cfg.fetch_timeout_s == 10.0
        assert cfg.cache_backend == "file"
        assert cfg.cache_dir == "/tmp/zones-cache"

    def test_defaults_when_env_missing(self) -> None:
        """Missing environment variables fall back to defaults."""
        with patch.dict(os.environ, {}, clear=True):
            cfg = MapConfig.from_env()

        assert cfg == MapConfig()

    def test_frozen_immutability(self) -> None:
        cfg = MapConfig()
        with pytest.raises(AttributeError):
            cfg.map_default_zoom = 5  # type: ignore[misc]


class TestMapConfigValidation:
    """Fail-fast range validation in from_env."""

    @pytest.mark.parametrize("value", ["90.5", "-91"])
    def test_latitude_out_of_range_rejected(self, value: str) -> None:
        with (
            patch.dict(os.environ, {"MAP_CENTER_LAT": value}, clear=True),
            pytest.raises(ConfigValidationError, match="MAP_CENTER_LAT"),
        ):
            MapConfig.from_env()

    def test_longitude_out_of_range_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"MAP_CENTER_LNG": "181"}, clear=True),
            pytest.raises(ConfigValidationError, match="MAP_CENTER_LNG"),
        ):
            MapConfig.from_env()

    def test_boundary_coordinates_accepted(self) -> None:
        env = {"MAP_CENTER_LAT": "-90", "MAP_CENTER_LNG": "180"}
        with patch.dict(os.environ, env, clear=True):
            cfg = MapConfig.from_env()
        assert cfg.map_center == (-90.0, 180.0)

    def test_zoom_out_of_range_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"MAP_DEFAULT_ZOOM": "23"}, clear=True),
            pytest.raises(ConfigValidationError, match="between 0 and 22"),
        ):
            MapConfig.from_env()

    def test_empty_data_base_path_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"DATA_BASE_PATH": ""}, clear=True),
            pytest.raises(ConfigValidationError, match="DATA_BASE_PATH"),
        ):
            MapConfig.from_env()

    def test_cache_age_zero_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"CACHE_MAX_AGE_MS": "0"}, clear=True),
            pytest.raises(ConfigValidationError, match="must be > 0"),
        ):
            MapConfig.from_env()

    def test_airport_buffer_negative_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"AIRPORT_BUFFER_NM": "-1"}, clear=True),
            pytest.raises(ConfigValidationError, match="AIRPORT_BUFFER_NM"),
        ):
            MapConfig.from_env()

    def test_timeout_zero_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"FETCH_TIMEOUT_S": "0"}, clear=True),
            pytest.raises(ConfigValidationError, match="FETCH_TIMEOUT_S"),
        ):
            MapConfig.from_env()

    def test_unknown_cache_backend_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"CACHE_BACKEND": "redis"}, clear=True),
            pytest.raises(ConfigValidationError, match="file, memory"),
        ):
            MapConfig.from_env()

    def test_file_backend_requires_directory(self) -> None:
        env = {"CACHE_BACKEND": "file", "CACHE_DIR": ""}
        with (
            patch.dict(os.environ, env, clear=True),
            pytest.raises(ConfigValidationError, match="CACHE_DIR"),
        ):
            MapConfig.from_env()

    def test_non_numeric_env_raises_value_error(self) -> None:
        """Non-numeric string for a numeric field → ValueError."""
        with (
            patch.dict(os.environ, {"MAP_DEFAULT_ZOOM": "abc"}, clear=True),
            pytest.raises(ValueError),
        ):
            MapConfig.from_env()

    def test_error_contains_key_and_value(self) -> None:
        with (
            patch.dict(os.environ, {"MAP_CENTER_LAT": "120"}, clear=True),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            MapConfig.from_env()
        assert exc_info.value.key == "MAP_CENTER_LAT"
        assert exc_info.value.value == 120.0
        assert exc_info.value.code == "CONFIG_VALIDATION_FAILED"
