"""Bounding box value object.

A ``BoundingBox`` is derived from coordinates and never persisted.
Empty coordinate sets have no box at all: the geometry kernel returns
``None`` and callers must handle that explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned latitude/longitude extent in degrees.

    Attributes:
        min_lat: Southern edge.
        max_lat: Northern edge.
        min_lng: Western edge.
        max_lng: Eastern edge.
    """

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lat: float, lng: float) -> bool:
        """Whether ``(lat, lng)`` lies inside the box, edges inclusive."""
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng

    def to_dict(self) -> dict[str, float]:
        """Serialise with the ``minLat``/``maxLat``/``minLng``/``maxLng`` keys."""
        return {
            "minLat": self.min_lat,
            "maxLat": self.max_lat,
            "minLng": self.min_lng,
            "maxLng": self.max_lng,
        }

    @classmethod
    def from_corners(cls, corners: object) -> BoundingBox | None:
        """Build from ``[[min_lat, min_lng], [max_lat, max_lng]]``.

        Returns ``None`` when *corners* is not of that shape.
        """
        try:
            (min_lat, min_lng), (max_lat, max_lng) = corners  # type: ignore[misc]
            return cls(
                min_lat=float(min_lat),
                max_lat=float(max_lat),
                min_lng=float(min_lng),
                max_lng=float(max_lng),
            )
        except (TypeError, ValueError):
            return None
