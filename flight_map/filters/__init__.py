"""Zone filter engine: classification, spatial filtering, statistics.

All functions are pure and never raise on malformed collections.
"""

from flight_map.filters.buffers import build_airport_buffers, feature_buffer_nm
from flight_map.filters.zones import (
    compose_filters,
    compute_stats,
    features_containing,
    filter_airports,
    filter_by_bounds,
    filter_by_type,
    filter_controlled_airspace,
    filter_parks,
    is_airport,
    is_controlled_airspace,
    is_park,
    zone_info,
)

__all__ = [
    "build_airport_buffers",
    "compose_filters",
    "compute_stats",
    "feature_buffer_nm",
    "features_containing",
    "filter_airports",
    "filter_by_bounds",
    "filter_by_type",
    "filter_controlled_airspace",
    "filter_parks",
    "is_airport",
    "is_controlled_airspace",
    "is_park",
    "zone_info",
]
