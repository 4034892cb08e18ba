"""Tests for airport exclusion buffer derivation."""

from __future__ import annotations

import copy
import logging
from typing import Any

import pytest

from flight_map.filters.buffers import build_airport_buffers, feature_buffer_nm
from flight_map.filters.zones import filter_airports
from flight_map.models.geojson import make_collection
from tests.conftest import point, square


class TestBuildAirportBuffers:
    """Point airports become closed Polygon rings."""

    def test_points_become_polygons(self, zone_collection: dict[str, Any]) -> None:
        result = build_airport_buffers(filter_airports(zone_collection))

        assert [f["properties"]["name"] for f in result["features"]] == [
            "Toronto Pearson",
            "Billy Bishop",
        ]
        for feature in result["features"]:
            assert feature["geometry"]["type"] == "Polygon"
            ring = feature["geometry"]["coordinates"][0]
            assert len(ring) == 33
            assert ring[0] == ring[-1]
            assert feature["properties"]["buffer_nm"] == 3
            assert feature["properties"]["buffer_meters"] == 5556.0

    def test_metadata_carried_over(self, zone_collection: dict[str, Any]) -> None:
        result = build_airport_buffers(filter_airports(zone_collection, buffer_nm=4), buffer_nm=4)
        assert result["metadata"] == {"bufferNm": 4, "bufferMeters": 7408.0}

    def test_feature_buffer_overrides_default(self) -> None:
        collection = make_collection([point(-79.6, 43.7, name="Big", buffer_nm=5)])
        props = build_airport_buffers(collection)["features"][0]["properties"]
        assert props["buffer_nm"] == 5.0
        assert props["buffer_meters"] == 9260.0

    def test_custom_point_count(self) -> None:
        collection = make_collection([point(-79.6, 43.7)])
        ring = build_airport_buffers(collection, point_count=8)["features"][0]["geometry"][
            "coordinates"
        ][0]
        assert len(ring) == 9

    def test_non_points_pass_through(self) -> None:
        runway = square(-79.63, 43.67, 0.01, name="Runway area")
        result = build_airport_buffers(make_collection([runway]))
        assert result["features"] == [runway]

    def test_invalid_coordinates_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        collection = make_collection(
            [
                point(-79.6, 95.0, name="Broken"),
                point(-79.6, 43.7, name="Good"),
            ]
        )
        with caplog.at_level(logging.WARNING, logger="flight_map.filters.buffers"):
            result = build_airport_buffers(collection)

        assert [f["properties"]["name"] for f in result["features"]] == ["Good"]
        assert "Broken" in caplog.text

    def test_missing_coordinates_dropped(self) -> None:
        feature = point(0, 0)
        feature["geometry"]["coordinates"] = None
        assert build_airport_buffers(make_collection([feature]))["features"] == []

    def test_input_not_mutated(self, zone_collection: dict[str, Any]) -> None:
        airports = filter_airports(zone_collection)
        before = copy.deepcopy(airports)
        build_airport_buffers(airports)
        assert airports == before

    @pytest.mark.parametrize("collection", [None, {}, {"features": 3}])
    def test_malformed_collection(self, collection: Any) -> None:
        assert build_airport_buffers(collection) == {"type": "FeatureCollection", "features": []}


class TestFeatureBufferNm:
    """Per-feature radius resolution."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (5, 5.0),
            ("2.5", 2.5),
            (None, 3.0),
            (0, 3.0),
            (-1, 3.0),
            ("wide", 3.0),
            (True, 3.0),
            (float("nan"), 3.0),
        ],
    )
    def test_resolution(self, raw: Any, expected: float) -> None:
        assert feature_buffer_nm({"buffer_nm": raw}, 3.0) == expected

    def test_absent_key(self) -> None:
        assert feature_buffer_nm({}, 1.5) == 1.5
