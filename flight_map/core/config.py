"""Map pipeline configuration loaded from environment variables.

All configuration values have defaults matching the Southern Ontario
deployment (map centred on Toronto).  Environment variables are the
source of truth.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric
    value is out of its valid range.  This catches bad configuration at
    startup instead of producing a map centred off the globe.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from flight_map.core.constants import (
    DEFAULT_AIRPORT_BUFFER_NM,
    DEFAULT_CACHE_MAX_AGE_MS,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from flight_map.core.exceptions import ValidationError

MIN_ZOOM = 0
MAX_ZOOM = 22
CACHE_BACKENDS = frozenset({"memory", "file"})


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Full description including the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}", source=key)


@dataclass(frozen=True, slots=True)
class MapConfig:
    """Immutable map pipeline configuration.

    Attributes:
        map_center_lat: Initial map centre latitude in degrees.
        map_center_lng: Initial map centre longitude in degrees.
        map_default_zoom: Initial tile zoom level.
        data_base_path: Directory that relative layer sources resolve against.
        cache_max_age_ms: Age after which cached layer payloads are refetched.
        airport_buffer_nm: Default airport exclusion radius in nautical miles.
        fetch_timeout_s: Per-request timeout for network sources in seconds.
        cache_backend: Key/value store backend for cached layers (``memory`` or ``file``).
        cache_dir: Directory used by the ``file`` cache backend.
    """

    map_center_lat: float = 43.6629
    map_center_lng: float = -79.3957
    map_default_zoom: int = 10
    data_base_path: str = "data"
    cache_max_age_ms: int = DEFAULT_CACHE_MAX_AGE_MS
    airport_buffer_nm: float = DEFAULT_AIRPORT_BUFFER_NM
    fetch_timeout_s: float = 30.0
    cache_backend: str = "memory"
    cache_dir: str = ".cache/flight_map"

    @property
    def map_center(self) -> tuple[float, float]:
        """Map centre as ``(lat, lng)``."""
        return (self.map_center_lat, self.map_center_lng)

    @classmethod
    def from_env(cls) -> MapConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range
                or a required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``MAP_DEFAULT_ZOOM=abc``).
        """
        config = cls(
            map_center_lat=float(os.getenv("MAP_CENTER_LAT", "43.6629")),
            map_center_lng=float(os.getenv("MAP_CENTER_LNG", "-79.3957")),
            map_default_zoom=int(os.getenv("MAP_DEFAULT_ZOOM", "10")),
            data_base_path=os.getenv("DATA_BASE_PATH", "data"),
            cache_max_age_ms=int(os.getenv("CACHE_MAX_AGE_MS", str(DEFAULT_CACHE_MAX_AGE_MS))),
            airport_buffer_nm=float(os.getenv("AIRPORT_BUFFER_NM", "3")),
            fetch_timeout_s=float(os.getenv("FETCH_TIMEOUT_S", "30")),
            cache_backend=os.getenv("CACHE_BACKEND", "memory"),
            cache_dir=os.getenv("CACHE_DIR", ".cache/flight_map"),
        )
        _validate(config)
        return config


def _validate(config: MapConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not MIN_LATITUDE <= config.map_center_lat <= MAX_LATITUDE:
        raise ConfigValidationError(
            "MAP_CENTER_LAT",
            config.map_center_lat,
            f"must be between {MIN_LATITUDE} and {MAX_LATITUDE} (degrees)",
        )

    if not MIN_LONGITUDE <= config.map_center_lng <= MAX_LONGITUDE:
        raise ConfigValidationError(
            "MAP_CENTER_LNG",
            config.map_center_lng,
            f"must be between {MIN_LONGITUDE} and {MAX_LONGITUDE} (degrees)",
        )

    if not MIN_ZOOM <= config.map_default_zoom <= MAX_ZOOM:
        raise ConfigValidationError(
            "MAP_DEFAULT_ZOOM",
            config.map_default_zoom,
            f"must be between {MIN_ZOOM} and {MAX_ZOOM}",
        )

    if not config.data_base_path:
        raise ConfigValidationError(
            "DATA_BASE_PATH",
            config.data_base_path,
            "must not be empty",
        )

    if config.cache_max_age_ms <= 0:
        raise ConfigValidationError(
            "CACHE_MAX_AGE_MS",
            config.cache_max_age_ms,
            "must be > 0 (milliseconds)",
        )

    if config.airport_buffer_nm <= 0:
        raise ConfigValidationError(
            "AIRPORT_BUFFER_NM",
            config.airport_buffer_nm,
            "must be > 0 (nautical miles)",
        )

    if config.fetch_timeout_s <= 0:
        raise ConfigValidationError(
            "FETCH_TIMEOUT_S",
            config.fetch_timeout_s,
            "must be > 0 (seconds)",
        )

    if config.cache_backend not in CACHE_BACKENDS:
        raise ConfigValidationError(
            "CACHE_BACKEND",
            config.cache_backend,
            f"must be one of {', '.join(sorted(CACHE_BACKENDS))}",
        )

    if config.cache_backend == "file" and not config.cache_dir:
        raise ConfigValidationError(
            "CACHE_DIR",
            config.cache_dir,
            "must not be empty when CACHE_BACKEND=file",
        )
