"""Geometry kernel: pure geodesy and planar helpers.

- measure: distances, bearings, unit conversion, coordinate validation
- shapes: buffer rings, point-in-polygon, bounding boxes

Nothing here performs I/O or raises on bad numeric input; malformed
values propagate as ``NaN`` or ``None``.
"""

from flight_map.geometry.measure import (
    bearing,
    distance,
    format_coordinates,
    geodesic_distance,
    is_valid_latitude,
    is_valid_longitude,
    meters_to_nm,
    nm_to_meters,
)
from flight_map.geometry.shapes import (
    bounding_box,
    centroid_of_bounding_box,
    circular_buffer_polygon,
    collect_positions,
    point_in_polygon,
)

__all__ = [
    "bearing",
    "bounding_box",
    "centroid_of_bounding_box",
    "circular_buffer_polygon",
    "collect_positions",
    "distance",
    "format_coordinates",
    "geodesic_distance",
    "is_valid_latitude",
    "is_valid_longitude",
    "meters_to_nm",
    "nm_to_meters",
    "point_in_polygon",
]
