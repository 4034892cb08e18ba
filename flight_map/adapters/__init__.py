"""Format adapters: turn raw source content into canonical FeatureCollections.

- validation: GeoJSON shape checks and normalisation
- tabular: CSV with latitude/longitude columns to Point features
- upload: extension-based dispatch for user POI uploads
"""

from flight_map.adapters.tabular import (
    LATITUDE_HEADERS,
    LONGITUDE_HEADERS,
    MissingRequiredColumnError,
    TabularParseError,
    parse_tabular_to_feature_collection,
)
from flight_map.adapters.upload import UnsupportedFormatError, load_upload
from flight_map.adapters.validation import GeoJSONValidationError, validate_geojson

__all__ = [
    "LATITUDE_HEADERS",
    "LONGITUDE_HEADERS",
    "GeoJSONValidationError",
    "MissingRequiredColumnError",
    "TabularParseError",
    "UnsupportedFormatError",
    "load_upload",
    "parse_tabular_to_feature_collection",
    "validate_geojson",
]
