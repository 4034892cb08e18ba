"""User POI upload decoding.

Users may upload points of interest as CSV or GeoJSON.  The file
extension picks the decoder; the result is always a validated
FeatureCollection ready for the ``user_pois`` layer.
"""

from __future__ import annotations

import json
import logging
from pathlib import PurePath

from flight_map.adapters.tabular import TabularParseError, parse_tabular_to_feature_collection
from flight_map.adapters.validation import GeoJSONValidationError, validate_geojson
from flight_map.core.exceptions import FlightMapError, ValidationError
from flight_map.models.geojson import FeatureCollection

logger = logging.getLogger("flight_map.adapters.upload")

CSV_EXTENSIONS = frozenset({".csv"})
GEOJSON_EXTENSIONS = frozenset({".geojson", ".json"})


class UnsupportedFormatError(ValidationError):
    """Raised when an upload is neither CSV nor GeoJSON."""

    default_stage = "upload"
    default_code = "UPLOAD_FORMAT_UNSUPPORTED"


def load_upload(filename: str, content: str | bytes) -> FeatureCollection:
    """Decode an uploaded POI file.

    Args:
        filename: Original file name; only its extension is used.
        content: File content, text or UTF-8 bytes.

    Returns:
        The uploaded points as a FeatureCollection.

    Raises:
        UnsupportedFormatError: If the extension is not ``.csv``,
            ``.geojson`` or ``.json``.
        TabularParseError: If a CSV upload is unusable or not UTF-8.
        GeoJSONValidationError: If a GeoJSON upload is not UTF-8 JSON or
            not a Feature/FeatureCollection.
    """
    extension = PurePath(filename).suffix.lower()

    if extension in CSV_EXTENSIONS:
        text = _decode(filename, content, TabularParseError)
        try:
            collection = parse_tabular_to_feature_collection(text)
        except TabularParseError as exc:
            exc.source = exc.source or filename
            raise
    elif extension in GEOJSON_EXTENSIONS:
        text = _decode(filename, content, GeoJSONValidationError)
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"Upload {filename!r} is not valid JSON: {exc.msg}"
            raise GeoJSONValidationError(msg, source=filename) from exc
        collection = validate_geojson(payload, source=filename)
    else:
        msg = f"Invalid file type {extension or '<none>'!r}. Please upload CSV or GeoJSON files."
        raise UnsupportedFormatError(msg, source=filename)

    logger.info(
        "Upload decoded | file=%s | features=%d",
        filename,
        len(collection["features"]),
    )
    return collection


def _decode(filename: str, content: str | bytes, error: type[FlightMapError]) -> str:
    if not isinstance(content, bytes):
        return content
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        msg = f"Upload {filename!r} is not UTF-8 text (byte {exc.start})"
        raise error(msg, source=filename) from exc
