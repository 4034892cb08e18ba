"""Shared pytest fixtures for the flight map pipeline test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from flight_map.sources.stores import InMemoryStore

# ---------------------------------------------------------------------------
# Sample zone data (Southern Ontario)
# ---------------------------------------------------------------------------


def point(lng: float, lat: float, **properties: Any) -> dict[str, Any]:
    """Build a Point feature."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lng, lat]},
        "properties": properties,
    }


def square(min_lng: float, min_lat: float, size: float, **properties: Any) -> dict[str, Any]:
    """Build a closed square Polygon feature."""
    ring = [
        [min_lng, min_lat],
        [min_lng + size, min_lat],
        [min_lng + size, min_lat + size],
        [min_lng, min_lat + size],
        [min_lng, min_lat],
    ]
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [ring]},
        "properties": properties,
    }


@pytest.fixture()
def zone_collection() -> dict[str, Any]:
    """Mixed zone collection in a known order."""
    return {
        "type": "FeatureCollection",
        "features": [
            point(-79.6248, 43.6777, name="Toronto Pearson", type="airport"),
            square(-79.40, 43.64, 0.02, name="High Park", type="park", status="exclusion"),
            point(-79.3962, 43.6275, name="Billy Bishop", aerodrome_type="certified"),
            square(-79.70, 43.60, 0.3, name="Toronto Class C", airspace_class="C"),
            point(-79.38, 43.65, name="Parker Ave", type="residential"),
            point(-79.10, 43.80, name="Rouge Trail", category="park"),
            square(-80.00, 44.00, 0.5, name="Crown Block 7", type="crown_land", status="legal"),
        ],
    }


@pytest.fixture()
def store() -> InMemoryStore:
    """Fresh in-memory cache store."""
    return InMemoryStore()


@pytest.fixture()
def data_dir(tmp_path: Path, zone_collection: dict[str, Any]) -> Path:
    """Directory of bundled layer files, one per fetched layer."""
    (tmp_path / "crown_land.geojson").write_text(json.dumps(zone_collection), encoding="utf-8")
    (tmp_path / "exclusion_zones.geojson").write_text(json.dumps(zone_collection), encoding="utf-8")
    (tmp_path / "airports.geojson").write_text(json.dumps(zone_collection), encoding="utf-8")
    (tmp_path / "controlled_airspace.geojson").write_text(
        json.dumps(zone_collection), encoding="utf-8"
    )
    return tmp_path
