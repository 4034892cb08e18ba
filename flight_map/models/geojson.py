"""GeoJSON payload contracts and shape models.

Feature collections travel between pipeline stages as plain JSON-shaped
dicts, the same form the rendering surface and the cache consume.  The
``TypedDict`` classes document the field names; the pydantic models
validate untrusted payloads at ingestion.

Design notes:
- ``TypedDict`` was chosen over ``dataclass`` because every stage reads
  and writes JSON dicts.  TypedDicts need no conversion.
- The pydantic models allow extra keys (``bbox``, ``id``, ``crs``,
  foreign members) so valid GeoJSON is never rejected for carrying them.
"""

from __future__ import annotations

from typing import Any, Literal, NotRequired, TypedDict

from pydantic import BaseModel, ConfigDict, Field

FEATURE_COLLECTION = "FeatureCollection"
FEATURE = "Feature"

GEOMETRY_TYPES = frozenset(
    {
        "Point",
        "MultiPoint",
        "LineString",
        "MultiLineString",
        "Polygon",
        "MultiPolygon",
        "GeometryCollection",
    }
)

# ---------------------------------------------------------------------------
# Payload contracts
# ---------------------------------------------------------------------------


class Geometry(TypedDict):
    """A GeoJSON geometry; positions are ``[lng, lat]``."""

    type: str
    coordinates: Any


class Feature(TypedDict):
    """A geometry plus its zone properties."""

    type: Literal["Feature"]
    geometry: Geometry | None
    properties: dict[str, Any]


class BufferMetadata(TypedDict):
    """Buffer radius attached to an airport collection."""

    bufferNm: float
    bufferMeters: float


class FeatureCollection(TypedDict):
    """An ordered sequence of features."""

    type: Literal["FeatureCollection"]
    features: list[Feature]
    metadata: NotRequired[BufferMetadata]


def empty_collection() -> FeatureCollection:
    """Return a new, empty, well-formed FeatureCollection."""
    return {"type": FEATURE_COLLECTION, "features": []}


def make_collection(features: list[Feature]) -> FeatureCollection:
    """Wrap *features* in a new FeatureCollection."""
    return {"type": FEATURE_COLLECTION, "features": list(features)}


def point_feature(lng: float, lat: float, properties: dict[str, Any] | None = None) -> Feature:
    """Build a Point feature at ``[lng, lat]``."""
    return {
        "type": FEATURE,
        "geometry": {"type": "Point", "coordinates": [lng, lat]},
        "properties": dict(properties or {}),
    }


# ---------------------------------------------------------------------------
# Ingestion models
# ---------------------------------------------------------------------------


class GeometryModel(BaseModel):
    """Shape check for a GeoJSON geometry object."""

    model_config = ConfigDict(extra="allow")

    type: str
    coordinates: Any = None
    geometries: list[GeometryModel] | None = None


class FeatureModel(BaseModel):
    """Shape check for a GeoJSON Feature."""

    model_config = ConfigDict(extra="allow")

    type: Literal["Feature"]
    geometry: GeometryModel | None = None
    properties: dict[str, Any] | None = Field(default_factory=dict)


class FeatureCollectionModel(BaseModel):
    """Shape check for a GeoJSON FeatureCollection."""

    model_config = ConfigDict(extra="allow")

    type: Literal["FeatureCollection"]
    features: list[FeatureModel] = Field(default_factory=list)


GeometryModel.model_rebuild()
