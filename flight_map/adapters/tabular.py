"""CSV to FeatureCollection conversion.

The first non-empty line is the header.  A latitude column (``lat`` or
``latitude``) and a longitude column (``lng``, ``longitude`` or ``lon``)
are required, matched case-insensitively.  Every other column passes
through as a string property.

Each line is split on its own.  Rows are forgiving, the header is not:
a data row whose column count differs from the header, or whose
coordinates are not numbers, is skipped; a header without coordinate
columns fails the whole parse.
"""

from __future__ import annotations

import csv
import logging
import math

from flight_map.core.exceptions import ValidationError
from flight_map.models.geojson import FeatureCollection, make_collection, point_feature

logger = logging.getLogger("flight_map.adapters.tabular")

LATITUDE_HEADERS = frozenset({"lat", "latitude"})
LONGITUDE_HEADERS = frozenset({"lng", "longitude", "lon"})


class TabularParseError(ValidationError):
    """Raised when tabular input cannot be turned into features."""

    default_stage = "tabular"
    default_code = "TABULAR_PARSE_FAILED"


class MissingRequiredColumnError(TabularParseError):
    """Raised when the header lacks a latitude or longitude column."""

    default_code = "TABULAR_COLUMN_MISSING"


def parse_tabular_to_feature_collection(text: str) -> FeatureCollection:
    """Parse comma-separated *text* into a FeatureCollection of Points.

    Returns:
        One Point feature per valid row, coordinates ``[lng, lat]``, in
        row order.

    Raises:
        TabularParseError: If there is no header plus at least one data row.
        MissingRequiredColumnError: If the latitude or longitude column
            is absent.
    """
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if len(lines) < 2:
        msg = "CSV input must have at least a header and one data row"
        raise TabularParseError(msg)

    headers = [h.strip() for h in _split_line(lines[0])]
    lat_index = _find_column(headers, LATITUDE_HEADERS)
    lng_index = _find_column(headers, LONGITUDE_HEADERS)

    if lat_index is None or lng_index is None:
        msg = f'CSV must have "lat" and "lng" columns, got header {headers!r}'
        raise MissingRequiredColumnError(msg)

    features = []
    skipped = 0
    for line_number, line in enumerate(lines[1:], start=2):
        values = [v.strip() for v in _split_line(line)]
        if len(values) != len(headers):
            logger.debug(
                "Skipping row | line=%d | reason=column count %d != %d",
                line_number,
                len(values),
                len(headers),
            )
            skipped += 1
            continue

        lat = _parse_number(values[lat_index])
        lng = _parse_number(values[lng_index])
        if lat is None or lng is None:
            logger.debug("Skipping row | line=%d | reason=unparsable coordinates", line_number)
            skipped += 1
            continue

        properties = {
            header: values[index]
            for index, header in enumerate(headers)
            if index not in (lat_index, lng_index)
        }
        features.append(point_feature(lng, lat, properties))

    logger.info("Parsed CSV | features=%d | skipped_rows=%d", len(features), skipped)
    return make_collection(features)


def _split_line(line: str) -> list[str]:
    # One line per reader: an unbalanced quote must not run into the next row.
    try:
        return next(csv.reader([line], skipinitialspace=True), [])
    except csv.Error:
        return []


def _find_column(headers: list[str], names: frozenset[str]) -> int | None:
    for index, header in enumerate(headers):
        if header.lower() in names:
            return index
    return None


def _parse_number(value: str) -> float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number
