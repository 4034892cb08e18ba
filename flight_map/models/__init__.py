"""Data models and schemas.

Defines the data structures used throughout the pipeline:
- FeatureCollection / Feature: GeoJSON payload contracts and shape models
- BoundingBox: Derived latitude/longitude extent
- ZoneStats: Per-type feature counts
- ZoneInfo: Clicked-zone display metadata
- CacheEntry: Serialised cache record
- UserLocation: Device position fix
"""

from flight_map.models.bounds import BoundingBox
from flight_map.models.cache import CacheEntry
from flight_map.models.geojson import (
    Feature,
    FeatureCollection,
    FeatureCollectionModel,
    FeatureModel,
    empty_collection,
    make_collection,
    point_feature,
)
from flight_map.models.location import LocationErrorKind, UserLocation
from flight_map.models.stats import ZoneStats
from flight_map.models.zone import ZoneInfo

__all__ = [
    "BoundingBox",
    "CacheEntry",
    "Feature",
    "FeatureCollection",
    "FeatureCollectionModel",
    "FeatureModel",
    "LocationErrorKind",
    "UserLocation",
    "ZoneInfo",
    "ZoneStats",
    "empty_collection",
    "make_collection",
    "point_feature",
]
