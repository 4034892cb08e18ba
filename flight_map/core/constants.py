"""Shared pipeline constants: single source of truth.

Centralises layer names, zone type labels, unit factors and defaults
that would otherwise be duplicated across the geometry kernel, the zone
filters and the layer orchestrator.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

EARTH_RADIUS_M: float = 6_371_000.0
"""Mean Earth radius used by the Haversine distance."""

METRES_PER_NAUTICAL_MILE: float = 1852.0
"""Exact international nautical mile."""

METRES_PER_DEGREE_LATITUDE: float = 111_320.0
"""Approximate metres per degree of latitude, used for buffer rings."""

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_BUFFER_POINTS: int = 32
"""Vertices used to approximate a circular buffer."""

DEFAULT_AIRPORT_BUFFER_NM: float = 3.0
"""Airport exclusion radius without explicit permission."""

DEFAULT_CACHE_MAX_AGE_MS: int = 24 * 60 * 60 * 1000
"""Cached layer payloads expire after one day."""

# ---------------------------------------------------------------------------
# Zone type labels
# ---------------------------------------------------------------------------

ZONE_PARK = "park"
ZONE_AIRPORT = "airport"
ZONE_CONTROLLED_AIRSPACE = "controlled_airspace"
UNKNOWN_ZONE_TYPE = "unknown"

# ---------------------------------------------------------------------------
# Map layers
# ---------------------------------------------------------------------------

LAYER_CROWN_LAND = "crown_land"
LAYER_EXCLUSION_ZONES = "exclusion_zones"
LAYER_AIRPORTS = "airports"
LAYER_CONTROLLED_AIRSPACE = "controlled_airspace"
LAYER_USER_POIS = "user_pois"

ALL_LAYERS: tuple[str, ...] = (
    LAYER_CROWN_LAND,
    LAYER_EXCLUSION_ZONES,
    LAYER_AIRPORTS,
    LAYER_CONTROLLED_AIRSPACE,
    LAYER_USER_POIS,
)
"""Layers in draw order (bottom first)."""
