"""Buffer rings, point-in-polygon and bounding boxes.

Positions follow GeoJSON order, ``[lng, lat]``.  Degenerate input never
raises: an empty coordinate set has no bounding box (``None``) and a
non-positive buffer radius collapses to a single-point ring.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Any

from flight_map.core.constants import DEFAULT_BUFFER_POINTS, METRES_PER_DEGREE_LATITUDE
from flight_map.models.bounds import BoundingBox

Position = list[float]

MIN_BUFFER_POINTS = 3


def circular_buffer_polygon(
    lat: float,
    lng: float,
    radius_m: float,
    point_count: int = DEFAULT_BUFFER_POINTS,
) -> list[Position]:
    """Approximate a circle of *radius_m* metres around ``(lat, lng)``.

    Vertices are spaced evenly by angle starting due north.  The
    longitude offset is divided by ``cos(lat)`` so the ring stays round
    on the ground away from the equator.

    Args:
        lat: Centre latitude in degrees.
        lng: Centre longitude in degrees.
        radius_m: Radius in metres.
        point_count: Number of distinct vertices (at least 3).

    Returns:
        A closed ring of ``point_count + 1`` ``[lng, lat]`` positions whose
        first and last positions are equal.  When ``radius_m`` is not a
        positive finite number, or ``point_count`` is below 3, the
        degenerate ring ``[[lng, lat], [lng, lat]]`` is returned.
    """
    if (
        not isinstance(lat, int | float)
        or not isinstance(lng, int | float)
        or not isinstance(radius_m, int | float)
        or not math.isfinite(radius_m)
        or radius_m <= 0
        or point_count < MIN_BUFFER_POINTS
    ):
        return [[lng, lat], [lng, lat]]

    radius_deg = radius_m / METRES_PER_DEGREE_LATITUDE
    cos_lat = math.cos(math.radians(lat))
    lng_scale = 1.0 / cos_lat if cos_lat != 0.0 else math.nan

    ring: list[Position] = []
    for i in range(point_count):
        angle = (i / point_count) * 2 * math.pi
        d_lat = math.cos(angle) * radius_deg
        d_lng = math.sin(angle) * radius_deg * lng_scale
        ring.append([lng + d_lng, lat + d_lat])

    ring.append(list(ring[0]))
    return ring


def point_in_polygon(point: Sequence[float], ring: Sequence[Sequence[float]]) -> bool:
    """Crossing-number test of *point* against a polygon *ring*.

    The ring may be open or closed; a repeated closing vertex forms a
    zero-length edge that never counts as a crossing.  Points exactly on
    an edge may fall either side.

    Returns:
        ``True`` if the point is inside; ``False`` outside or on
        malformed input.
    """
    try:
        x, y = float(point[0]), float(point[1])
        vertices = [(float(v[0]), float(v[1])) for v in ring]
    except (TypeError, ValueError, IndexError):
        return False

    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def bounding_box(coordinates: Iterable[Sequence[float]] | None) -> BoundingBox | None:
    """Min/max extent of ``[lng, lat]`` positions.

    Returns:
        The enclosing ``BoundingBox``, or ``None`` for an empty or
        malformed coordinate set.
    """
    if not coordinates:
        return None
    try:
        lngs = []
        lats = []
        for position in coordinates:
            lngs.append(float(position[0]))
            lats.append(float(position[1]))
    except (TypeError, ValueError, IndexError):
        return None
    if not lats:
        return None

    return BoundingBox(
        min_lat=min(lats),
        max_lat=max(lats),
        min_lng=min(lngs),
        max_lng=max(lngs),
    )


def centroid_of_bounding_box(box: BoundingBox | None) -> tuple[float, float] | None:
    """Centre of *box* as ``(lat, lng)``, or ``None`` when there is no box."""
    if box is None:
        return None
    return (
        (box.min_lat + box.max_lat) / 2,
        (box.min_lng + box.max_lng) / 2,
    )


def collect_positions(geometry: Any) -> list[Position]:
    """Flatten any GeoJSON geometry into its ``[lng, lat]`` positions.

    Handles every geometry type including ``GeometryCollection``.
    Malformed geometries yield an empty list.
    """
    if not isinstance(geometry, dict):
        return []
    if geometry.get("type") == "GeometryCollection":
        positions: list[Position] = []
        for member in geometry.get("geometries") or []:
            positions.extend(collect_positions(member))
        return positions
    return _flatten(geometry.get("coordinates"))


def _flatten(node: Any) -> list[Position]:
    if not isinstance(node, list | tuple) or not node:
        return []
    if isinstance(node[0], int | float) and not isinstance(node[0], bool):
        if len(node) >= 2 and isinstance(node[1], int | float):
            return [[float(node[0]), float(node[1])]]
        return []
    positions: list[Position] = []
    for child in node:
        positions.extend(_flatten(child))
    return positions
