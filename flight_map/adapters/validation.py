"""GeoJSON shape validation at ingestion.

Responsibilities:
- Check a decoded payload is a ``FeatureCollection`` or ``Feature``
- Wrap a bare Feature into a one-element collection
- Normalise every feature to ``{"type", "geometry", "properties"}`` with
  a dict of properties (``null`` properties become ``{}``)

Unknown geometry types are logged, not rejected, so newer sources keep
loading; the zone filters treat them like any other non-Point shape.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from flight_map.core.exceptions import ContractError
from flight_map.models.geojson import (
    FEATURE,
    FEATURE_COLLECTION,
    GEOMETRY_TYPES,
    Feature,
    FeatureCollection,
    FeatureCollectionModel,
    FeatureModel,
)

logger = logging.getLogger("flight_map.adapters.validation")


class GeoJSONValidationError(ContractError):
    """Raised when a payload is not a recognisable Feature or FeatureCollection."""

    default_stage = "validate"
    default_code = "GEOJSON_INVALID"


def validate_geojson(payload: Any, *, source: str = "") -> FeatureCollection:
    """Validate *payload* and return it as a normalised FeatureCollection.

    Args:
        payload: Decoded JSON document.
        source: Source label used in error messages and logs.

    Returns:
        A new FeatureCollection; the input is not modified.

    Raises:
        GeoJSONValidationError: If the top-level ``type`` is neither
            ``FeatureCollection`` nor ``Feature`` or the members do not
            have the GeoJSON shape.
    """
    label = source or "<payload>"
    if not isinstance(payload, dict):
        msg = f"Invalid GeoJSON format in {label}: expected an object, got {type(payload).__name__}"
        raise GeoJSONValidationError(msg, source=source)

    kind = payload.get("type")
    try:
        if kind == FEATURE_COLLECTION:
            FeatureCollectionModel.model_validate(payload)
            raw_features = payload.get("features") or []
        elif kind == FEATURE:
            FeatureModel.model_validate(payload)
            raw_features = [payload]
            logger.debug("Wrapped bare Feature into collection | source=%s", label)
        else:
            msg = f"Invalid GeoJSON format in {label}: unsupported top-level type {kind!r}"
            raise GeoJSONValidationError(msg, source=source)
    except PydanticValidationError as exc:
        msg = f"Invalid GeoJSON format in {label}: {exc.error_count()} shape error(s)"
        raise GeoJSONValidationError(msg, source=source) from exc

    features = [_normalise_feature(f, label) for f in raw_features]
    result: FeatureCollection = {"type": FEATURE_COLLECTION, "features": features}

    metadata = payload.get("metadata") if kind == FEATURE_COLLECTION else None
    if isinstance(metadata, dict):
        result["metadata"] = dict(metadata)  # type: ignore[typeddict-item]
    return result


def _normalise_feature(raw: dict[str, Any], label: str) -> Feature:
    geometry = raw.get("geometry")
    if isinstance(geometry, dict) and geometry.get("type") not in GEOMETRY_TYPES:
        logger.warning(
            "Unknown geometry type | source=%s | type=%s",
            label,
            geometry.get("type"),
        )
    feature: dict[str, Any] = {
        key: value for key, value in raw.items() if key not in ("geometry", "properties")
    }
    feature["type"] = FEATURE
    feature["geometry"] = geometry
    feature["properties"] = dict(raw.get("properties") or {})
    return feature  # type: ignore[return-value]
