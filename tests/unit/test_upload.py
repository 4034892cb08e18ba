"""Tests for GeoJSON validation and POI upload decoding."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest

from flight_map.adapters.tabular import MissingRequiredColumnError, TabularParseError
from flight_map.adapters.upload import UnsupportedFormatError, load_upload
from flight_map.adapters.validation import GeoJSONValidationError, validate_geojson
from tests.conftest import point


class TestValidateGeoJSON:
    """Shape checks and normalisation."""

    def test_feature_collection_passes(self, zone_collection: dict[str, Any]) -> None:
        result = validate_geojson(zone_collection)
        assert result["type"] == "FeatureCollection"
        assert len(result["features"]) == len(zone_collection["features"])
        assert result is not zone_collection

    def test_bare_feature_wrapped(self) -> None:
        feature = point(-79.38, 43.65, name="Solo")
        result = validate_geojson(feature)
        assert result["type"] == "FeatureCollection"
        assert result["features"] == [feature]

    def test_null_properties_normalised(self) -> None:
        payload = {
            "type": "FeatureCollection",
            "features": [{"type": "Feature", "geometry": None, "properties": None}],
        }
        assert validate_geojson(payload)["features"][0]["properties"] == {}

    def test_foreign_members_kept(self) -> None:
        feature = point(0, 0)
        feature["id"] = "zone-7"
        payload = {"type": "FeatureCollection", "features": [feature], "bbox": [0, 0, 1, 1]}
        assert validate_geojson(payload)["features"][0]["id"] == "zone-7"

    def test_metadata_kept(self) -> None:
        payload = {
            "type": "FeatureCollection",
            "features": [],
            "metadata": {"bufferNm": 3, "bufferMeters": 5556.0},
        }
        assert validate_geojson(payload)["metadata"] == {"bufferNm": 3, "bufferMeters": 5556.0}

    def test_unknown_geometry_type_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        feature = point(0, 0)
        feature["geometry"] = {"type": "Circle", "coordinates": [0, 0], "radius": 5}
        with caplog.at_level(logging.WARNING, logger="flight_map.adapters.validation"):
            result = validate_geojson({"type": "FeatureCollection", "features": [feature]})
        assert len(result["features"]) == 1
        assert "Circle" in caplog.text

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            "FeatureCollection",
            {"type": "Topology"},
            {"features": []},
            {"type": "Point", "coordinates": [0, 0]},
        ],
    )
    def test_unsupported_top_level(self, payload: Any) -> None:
        with pytest.raises(GeoJSONValidationError, match="Invalid GeoJSON format"):
            validate_geojson(payload, source="zones.geojson")

    def test_bad_member_shape(self) -> None:
        payload = {"type": "FeatureCollection", "features": [{"type": "Point"}]}
        with pytest.raises(GeoJSONValidationError, match="shape error"):
            validate_geojson(payload)

    def test_features_not_a_list(self) -> None:
        with pytest.raises(GeoJSONValidationError):
            validate_geojson({"type": "FeatureCollection", "features": "none"})


class TestLoadUpload:
    """Extension-based dispatch."""

    def test_csv_upload(self) -> None:
        result = load_upload("pois.csv", "name,lat,lng\nLaunch,43.65,-79.38\n")
        assert result["features"][0]["geometry"]["coordinates"] == [-79.38, 43.65]

    def test_csv_bytes_with_bom(self) -> None:
        content = "\ufeffname,lat,lng\nLaunch,43.65,-79.38\n".encode()
        result = load_upload("POIS.CSV", content)
        assert result["features"][0]["properties"] == {"name": "Launch"}

    @pytest.mark.parametrize("filename", ["pois.geojson", "pois.json"])
    def test_geojson_upload(self, filename: str, zone_collection: dict[str, Any]) -> None:
        result = load_upload(filename, json.dumps(zone_collection))
        assert len(result["features"]) == 7

    def test_geojson_feature_upload(self) -> None:
        result = load_upload("one.geojson", json.dumps(point(1, 2, name="One")).encode("utf-8"))
        assert len(result["features"]) == 1

    def test_invalid_json(self) -> None:
        with pytest.raises(GeoJSONValidationError, match="not valid JSON"):
            load_upload("pois.geojson", "{not json")

    def test_csv_errors_propagate(self) -> None:
        with pytest.raises(MissingRequiredColumnError):
            load_upload("pois.csv", "name,x,y\nA,1,2\n")

    @pytest.mark.parametrize("filename", ["pois.kml", "pois", "notes.txt"])
    def test_unsupported_extension(self, filename: str) -> None:
        with pytest.raises(UnsupportedFormatError, match="Please upload CSV or GeoJSON"):
            load_upload(filename, "")

    @pytest.mark.parametrize(
        ("filename", "error"),
        [("pois.csv", TabularParseError), ("pois.geojson", GeoJSONValidationError)],
    )
    def test_non_utf8_bytes_rejected(self, filename: str, error: type[Exception]) -> None:
        with pytest.raises(error, match="not UTF-8") as exc_info:
            load_upload(filename, b"name,lat,lng\n\xff\xfeA,1,2\n")
        assert exc_info.value.source == filename

    def test_csv_errors_name_the_file(self) -> None:
        with pytest.raises(MissingRequiredColumnError) as exc_info:
            load_upload("pois.csv", "name,x,y\nA,1,2\n")
        assert exc_info.value.source == "pois.csv"
