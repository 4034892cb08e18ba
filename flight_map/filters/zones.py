"""Zone classification and filtering over FeatureCollections.

Every filter returns a new FeatureCollection holding a stable
subsequence of the input features; inputs are never modified.  A
``None`` or malformed collection (no ``features`` list) filters to an
empty, well-formed collection instead of raising, so one bad layer
payload cannot break the view.

Classification rules mirror the upstream data sources:

- park / legal areas: ``type == "park"``, ``category == "park"``, or a
  name containing ``"park"`` in any case.  The name rule is a heuristic
  and also matches names such as "Parker Avenue".
- airports: ``type`` or ``category`` equal to ``"airport"``, or any
  ``aerodrome_type`` value.
- controlled airspace: ``type == "controlled_airspace"`` or any
  ``airspace_class`` / ``class`` value (Class A to G).
"""

from __future__ import annotations

import functools
import logging
from collections import Counter
from typing import TYPE_CHECKING, Any

from shapely.errors import ShapelyError
from shapely.geometry import box, shape

from flight_map.core.constants import (
    DEFAULT_AIRPORT_BUFFER_NM,
    UNKNOWN_ZONE_TYPE,
    ZONE_AIRPORT,
    ZONE_CONTROLLED_AIRSPACE,
    ZONE_PARK,
)
from flight_map.geometry.measure import nm_to_meters
from flight_map.geometry.shapes import point_in_polygon
from flight_map.models.bounds import BoundingBox
from flight_map.models.geojson import Feature, FeatureCollection, empty_collection, make_collection
from flight_map.models.stats import ZoneStats
from flight_map.models.zone import UNKNOWN_TYPE, UNNAMED_ZONE, ZoneInfo

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    ZoneFilter = Callable[[Any], FeatureCollection]

logger = logging.getLogger("flight_map.filters.zones")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _features(collection: Any) -> list[Any] | None:
    """Return the feature list of *collection*, or ``None`` if malformed."""
    if not isinstance(collection, dict):
        return None
    features = collection.get("features")
    if not isinstance(features, list):
        return None
    return features


def _properties(feature: Any) -> dict[str, Any]:
    if not isinstance(feature, dict):
        return {}
    props = feature.get("properties")
    return props if isinstance(props, dict) else {}


def _select(collection: Any, predicate: Callable[[dict[str, Any]], bool]) -> FeatureCollection:
    features = _features(collection)
    if features is None:
        return empty_collection()
    return make_collection([f for f in features if (props := _properties(f)) and predicate(props)])


# ---------------------------------------------------------------------------
# Classification filters
# ---------------------------------------------------------------------------


def filter_by_type(collection: Any, type_label: str) -> FeatureCollection:
    """Keep features whose ``properties.type`` equals *type_label*."""
    return _select(collection, lambda props: props.get("type") == type_label)


def is_park(props: dict[str, Any]) -> bool:
    """Park / legal-area classifier (type, category, or name substring)."""
    name = props.get("name")
    return (
        props.get("type") == ZONE_PARK
        or props.get("category") == ZONE_PARK
        or (isinstance(name, str) and ZONE_PARK in name.lower())
    )


def is_airport(props: dict[str, Any]) -> bool:
    """Airport classifier (type, category, or an aerodrome type)."""
    return (
        props.get("type") == ZONE_AIRPORT
        or props.get("category") == ZONE_AIRPORT
        or bool(props.get("aerodrome_type"))
    )


def is_controlled_airspace(props: dict[str, Any]) -> bool:
    """Controlled airspace classifier (type or an airspace class)."""
    return (
        props.get("type") == ZONE_CONTROLLED_AIRSPACE
        or bool(props.get("airspace_class"))
        or bool(props.get("class"))
    )


def filter_parks(collection: Any) -> FeatureCollection:
    """Keep park / legal-area features."""
    return _select(collection, is_park)


def filter_airports(
    collection: Any,
    buffer_nm: float = DEFAULT_AIRPORT_BUFFER_NM,
) -> FeatureCollection:
    """Keep airport features and attach the collection-wide buffer radius.

    The ``metadata`` block ``{"bufferNm", "bufferMeters"}`` describes the
    default exclusion radius; it is attached even when individual
    features carry their own ``buffer_nm``.
    """
    result = _select(collection, is_airport)
    result["metadata"] = {"bufferNm": buffer_nm, "bufferMeters": nm_to_meters(buffer_nm)}
    return result


def filter_controlled_airspace(collection: Any) -> FeatureCollection:
    """Keep controlled airspace features."""
    return _select(collection, is_controlled_airspace)


# ---------------------------------------------------------------------------
# Spatial filter
# ---------------------------------------------------------------------------


def filter_by_bounds(
    collection: Any,
    bounds: BoundingBox | Any,
    *,
    strict: bool = False,
) -> FeatureCollection:
    """Keep features inside *bounds*.

    Point features are tested exactly against the box (edges inclusive).
    Other geometries are always kept unless *strict* is set, in which
    case they are kept only when they intersect the box.

    Args:
        collection: FeatureCollection to filter.
        bounds: A ``BoundingBox`` or ``[[min_lat, min_lng], [max_lat, max_lng]]``.
        strict: Test non-Point geometries for real intersection.

    Returns:
        The matching features; empty when *bounds* is missing or malformed.
    """
    features = _features(collection)
    if isinstance(bounds, BoundingBox):
        bbox: BoundingBox | None = bounds
    else:
        bbox = BoundingBox.from_corners(bounds) if bounds is not None else None
    if features is None or bbox is None:
        return empty_collection()

    search_area = box(bbox.min_lng, bbox.min_lat, bbox.max_lng, bbox.max_lat) if strict else None
    kept: list[Feature] = []
    for feature in features:
        if not isinstance(feature, dict):
            continue
        geometry = feature.get("geometry")
        if isinstance(geometry, dict) and geometry.get("type") == "Point":
            if _point_in_box(geometry.get("coordinates"), bbox):
                kept.append(feature)
        elif search_area is None or _intersects(geometry, search_area):
            kept.append(feature)
    return make_collection(kept)


def _point_in_box(coordinates: Any, bbox: BoundingBox) -> bool:
    try:
        lng, lat = float(coordinates[0]), float(coordinates[1])
    except (TypeError, ValueError, IndexError):
        return False
    return bbox.contains(lat, lng)


def _intersects(geometry: Any, search_area: Any) -> bool:
    if not isinstance(geometry, dict):
        return True
    try:
        return bool(shape(geometry).intersects(search_area))
    except (ShapelyError, ValueError, TypeError, KeyError, AttributeError, IndexError):
        logger.debug("Keeping unparsable geometry | type=%s", geometry.get("type"))
        return True


# ---------------------------------------------------------------------------
# Composition and statistics
# ---------------------------------------------------------------------------


def compose_filters(collection: Any, filters: Iterable[ZoneFilter]) -> FeatureCollection:
    """Apply *filters* left to right, each receiving the previous output."""
    return functools.reduce(lambda acc, zone_filter: zone_filter(acc), filters, collection)


def compute_stats(collection: Any) -> ZoneStats:
    """Count features in total and per ``properties.type``."""
    features = _features(collection)
    if features is None:
        return ZoneStats()
    counts = Counter(str(_properties(f).get("type") or UNKNOWN_ZONE_TYPE) for f in features)
    return ZoneStats(total=len(features), by_type=dict(counts))


def zone_info(feature: Any) -> ZoneInfo:
    """Display metadata for a clicked feature."""
    props = _properties(feature)

    def text(key: str, default: str = "") -> str:
        value = props.get(key)
        return str(value) if value not in (None, "") else default

    return ZoneInfo(
        name=text("name", UNNAMED_ZONE),
        type=text("type", UNKNOWN_TYPE),
        status=text("status"),
        description=text("description"),
        restrictions=text("restrictions"),
        contact=text("contact"),
    )


def features_containing(collection: Any, lat: float, lng: float) -> FeatureCollection:
    """Keep Polygon / MultiPolygon features whose area contains ``(lat, lng)``.

    A point inside a hole (interior ring) is outside the polygon.
    Other geometry types never contain a point.
    """
    features = _features(collection)
    if features is None:
        return empty_collection()
    point = (lng, lat)
    kept = [
        f
        for f in features
        if isinstance(f, dict) and _polygon_contains(f.get("geometry"), point)
    ]
    return make_collection(kept)


def _polygon_contains(geometry: Any, point: tuple[float, float]) -> bool:
    if not isinstance(geometry, dict):
        return False
    kind = geometry.get("type")
    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, list):
        return False
    if kind == "Polygon":
        polygons = [coordinates]
    elif kind == "MultiPolygon":
        polygons = coordinates
    else:
        return False
    for rings in polygons:
        if not isinstance(rings, list) or not rings:
            continue
        exterior, *holes = rings
        if point_in_polygon(point, exterior) and not any(
            point_in_polygon(point, hole) for hole in holes
        ):
            return True
    return False
