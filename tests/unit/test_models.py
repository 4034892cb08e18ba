"""Tests for the pipeline value objects."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from flight_map.models.bounds import BoundingBox
from flight_map.models.cache import CacheEntry
from flight_map.models.geojson import empty_collection, make_collection, point_feature
from flight_map.models.location import UserLocation
from flight_map.models.stats import ZoneStats
from flight_map.models.zone import ZoneInfo


class TestBoundingBox:
    def test_contains_edges(self) -> None:
        box = BoundingBox(min_lat=0, max_lat=1, min_lng=0, max_lng=1)
        assert box.contains(0, 0)
        assert box.contains(1, 1)
        assert not box.contains(1.01, 0.5)

    def test_to_dict(self) -> None:
        box = BoundingBox(1, 2, 3, 4)
        assert box.to_dict() == {"minLat": 1, "maxLat": 2, "minLng": 3, "maxLng": 4}

    def test_from_corners(self) -> None:
        assert BoundingBox.from_corners([[1, 3], [2, 4]]) == BoundingBox(1.0, 2.0, 3.0, 4.0)

    @pytest.mark.parametrize("corners", [None, 5, [], [[1, 2, 3], [4, 5]], [["a", 1], [2, 3]]])
    def test_from_malformed_corners(self, corners: object) -> None:
        assert BoundingBox.from_corners(corners) is None

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            BoundingBox(0, 0, 0, 0).min_lat = 1  # type: ignore[misc]


class TestCacheEntry:
    def test_freshness(self) -> None:
        entry = CacheEntry(data={}, timestamp=1000)
        assert entry.age_ms(1500) == 500
        assert entry.is_fresh(1500, 600) is True
        assert entry.is_fresh(1600, 600) is False

    def test_json_round_trip(self) -> None:
        entry = CacheEntry(data={"type": "FeatureCollection", "features": []}, timestamp=7)
        assert CacheEntry.model_validate_json(entry.model_dump_json()) == entry

    def test_rejects_bad_payload(self) -> None:
        with pytest.raises(ValidationError):
            CacheEntry.model_validate({"data": "x", "timestamp": 1})

    def test_frozen(self) -> None:
        entry = CacheEntry(data={}, timestamp=1)
        with pytest.raises(ValidationError):
            entry.timestamp = 2  # type: ignore[misc]


class TestCollections:
    def test_empty_collections_are_distinct(self) -> None:
        first, second = empty_collection(), empty_collection()
        first["features"].append(point_feature(0, 0))
        assert second["features"] == []

    def test_make_collection_copies_list(self) -> None:
        features = [point_feature(1, 2)]
        collection = make_collection(features)
        features.clear()
        assert len(collection["features"]) == 1

    def test_point_feature_order(self) -> None:
        feature = point_feature(-79.38, 43.65, {"name": "A"})
        assert feature["geometry"]["coordinates"] == [-79.38, 43.65]
        assert feature["properties"] == {"name": "A"}


class TestSmallValues:
    def test_zone_stats_default(self) -> None:
        assert ZoneStats().to_dict() == {"total": 0, "byType": {}}

    def test_zone_info_popup(self) -> None:
        assert ZoneInfo(name="Pearson", type="airport").popup_text() == "Pearson\nairport"

    def test_user_location_to_dict(self) -> None:
        fix = UserLocation(lat=43.65, lng=-79.38, accuracy=12.5, timestamp=99)
        assert fix.to_dict() == {"lat": 43.65, "lng": -79.38, "accuracy": 12.5, "timestamp": 99}
