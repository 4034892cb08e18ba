"""Distance, bearing and coordinate validation on the sphere.

All angles are decimal degrees; all distances are metres unless the
function name says otherwise.  Functions never raise on bad numbers:
non-numeric input becomes ``NaN`` and propagates to the caller, who can
reject it up front with ``is_valid_latitude`` / ``is_valid_longitude``.
"""

from __future__ import annotations

import math
from numbers import Real

from pyproj import Geod

from flight_map.core.constants import (
    EARTH_RADIUS_M,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    METRES_PER_NAUTICAL_MILE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)

_GEOD = Geod(ellps="WGS84")

# Haversine ``a`` may overshoot 1.0 by rounding for antipodal points.
_ROUNDING_SLACK = 1e-12


def _as_float(value: object) -> float:
    """Coerce *value* to float, or ``NaN`` if it is not numeric."""
    if isinstance(value, bool):
        return math.nan
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return math.nan


def _sqrt(value: float) -> float:
    """Square root that yields ``NaN`` for negative input instead of raising."""
    return math.sqrt(value) if value >= 0.0 else math.nan


# ---------------------------------------------------------------------------
# Distance and bearing
# ---------------------------------------------------------------------------


def distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points (Haversine formula).

    Uses a spherical Earth of radius 6 371 000 m.  Symmetric in its two
    points and exactly zero for identical points.

    Returns:
        Distance in metres, or ``NaN`` for non-numeric input.
    """
    phi1 = math.radians(_as_float(lat1))
    phi2 = math.radians(_as_float(lat2))
    d_phi = math.radians(_as_float(lat2) - _as_float(lat1))
    d_lambda = math.radians(_as_float(lng2) - _as_float(lng1))

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    if 1.0 < a <= 1.0 + _ROUNDING_SLACK:
        a = 1.0

    c = 2 * math.atan2(_sqrt(a), _sqrt(1 - a))
    return EARTH_RADIUS_M * c


def bearing(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Initial bearing from point 1 towards point 2.

    Returns:
        Compass bearing in ``[0, 360)`` degrees, or ``NaN`` for
        non-numeric input.
    """
    phi1 = math.radians(_as_float(lat1))
    phi2 = math.radians(_as_float(lat2))
    d_lambda = math.radians(_as_float(lng2) - _as_float(lng1))

    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)

    theta = math.atan2(y, x)
    return (math.degrees(theta) + 360.0) % 360.0


def geodesic_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance on the WGS 84 ellipsoid using ``pyproj.Geod``.

    More accurate than ``distance`` (up to ~0.5 % difference) at the
    cost of an iterative solve.

    Returns:
        Distance in metres, or ``NaN`` if any coordinate is invalid.
    """
    if not (
        is_valid_latitude(lat1)
        and is_valid_latitude(lat2)
        and is_valid_longitude(lng1)
        and is_valid_longitude(lng2)
    ):
        return math.nan
    _az12, _az21, dist_m = _GEOD.inv(lng1, lat1, lng2, lat2)
    return float(dist_m)


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------


def nm_to_meters(nm: float) -> float:
    """Convert nautical miles to metres."""
    return _as_float(nm) * METRES_PER_NAUTICAL_MILE


def meters_to_nm(meters: float) -> float:
    """Convert metres to nautical miles."""
    return _as_float(meters) / METRES_PER_NAUTICAL_MILE


# ---------------------------------------------------------------------------
# Validation and display
# ---------------------------------------------------------------------------


def _is_real(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value)


def is_valid_latitude(lat: object) -> bool:
    """Whether *lat* is a real number within ``[-90, 90]``."""
    return _is_real(lat) and MIN_LATITUDE <= lat <= MAX_LATITUDE  # type: ignore[operator]


def is_valid_longitude(lng: object) -> bool:
    """Whether *lng* is a real number within ``[-180, 180]``."""
    return _is_real(lng) and MIN_LONGITUDE <= lng <= MAX_LONGITUDE  # type: ignore[operator]


def format_coordinates(lat: float, lng: float, precision: int = 6) -> str:
    """Format a coordinate pair for display, e.g. ``"43.662900, -79.395700"``."""
    return f"{_as_float(lat):.{precision}f}, {_as_float(lng):.{precision}f}"
