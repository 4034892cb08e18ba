"""Airport exclusion buffers.

Turns airport Point features into circular Polygon features of the
exclusion radius, the point-to-shape transform the rendering surface
draws for the airports layer.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from flight_map.core.constants import DEFAULT_AIRPORT_BUFFER_NM, DEFAULT_BUFFER_POINTS
from flight_map.geometry.measure import is_valid_latitude, is_valid_longitude, nm_to_meters
from flight_map.geometry.shapes import circular_buffer_polygon
from flight_map.models.geojson import FEATURE, Feature, FeatureCollection, empty_collection

logger = logging.getLogger("flight_map.filters.buffers")


def feature_buffer_nm(properties: dict[str, Any], default_nm: float) -> float:
    """Buffer radius for one feature: its own positive ``buffer_nm`` or *default_nm*."""
    raw = properties.get("buffer_nm")
    if raw is None or isinstance(raw, bool):
        return default_nm
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default_nm
    return value if math.isfinite(value) and value > 0 else default_nm


def build_airport_buffers(
    collection: Any,
    buffer_nm: float = DEFAULT_AIRPORT_BUFFER_NM,
    point_count: int = DEFAULT_BUFFER_POINTS,
) -> FeatureCollection:
    """Replace each Point feature by its circular exclusion buffer.

    Args:
        collection: Airport features, typically from ``filter_airports``.
        buffer_nm: Default radius in nautical miles.
        point_count: Vertices per buffer ring.

    Returns:
        A new collection in input order.  Point features become Polygon
        features whose properties add ``buffer_nm`` and ``buffer_meters``;
        non-Point features are passed through; Points with invalid
        coordinates are dropped.  The input ``metadata`` is carried over.
    """
    if not isinstance(collection, dict) or not isinstance(collection.get("features"), list):
        return empty_collection()

    features: list[Feature] = []
    for feature in collection["features"]:
        if not isinstance(feature, dict):
            continue
        geometry = feature.get("geometry")
        if not (isinstance(geometry, dict) and geometry.get("type") == "Point"):
            features.append(feature)
            continue

        coords = geometry.get("coordinates")
        if not isinstance(coords, list | tuple):
            coords = []
        lng, lat = (coords[0], coords[1]) if len(coords) >= 2 else (None, None)
        if not (is_valid_latitude(lat) and is_valid_longitude(lng)):
            logger.warning(
                "Dropping airport with invalid coordinates | name=%s | coordinates=%s",
                (feature.get("properties") or {}).get("name"),
                coords,
            )
            continue

        properties = dict(feature.get("properties") or {})
        radius_nm = feature_buffer_nm(properties, buffer_nm)
        radius_m = nm_to_meters(radius_nm)
        ring = circular_buffer_polygon(lat, lng, radius_m, point_count)
        properties["buffer_nm"] = radius_nm
        properties["buffer_meters"] = radius_m
        features.append(
            {
                "type": FEATURE,
                "geometry": {"type": "Polygon", "coordinates": [ring]},
                "properties": properties,
            }
        )

    result: FeatureCollection = {"type": "FeatureCollection", "features": features}
    if isinstance(collection.get("metadata"), dict):
        result["metadata"] = dict(collection["metadata"])
    logger.debug("Built %d airport buffer feature(s)", len(features))
    return result
