"""Device location boundary.

The location provider (browser geolocation or any equivalent) is an
external collaborator; this module awaits it with a timeout, checks the
fix, and answers "which zones am I standing in?".
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Protocol

from flight_map.filters.zones import features_containing, zone_info
from flight_map.geometry.measure import is_valid_latitude, is_valid_longitude
from flight_map.models.location import LocationErrorKind, UserLocation

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flight_map.models.zone import ZoneInfo
    from flight_map.orchestrators.layers import MapLayer

logger = logging.getLogger("flight_map.orchestrators.location")

DEFAULT_LOCATION_TIMEOUT_S = 5.0

_ERROR_MESSAGES: dict[LocationErrorKind, str] = {
    LocationErrorKind.PERMISSION_DENIED: (
        "Location permission denied. Please enable location services."
    ),
    LocationErrorKind.UNAVAILABLE: "Location information unavailable.",
    LocationErrorKind.TIMEOUT: "Location request timed out.",
    LocationErrorKind.UNKNOWN: "An unknown error occurred.",
}


class LocationProvider(Protocol):
    """Source of device position fixes."""

    async def request_location(self) -> UserLocation | LocationErrorKind:
        """Return a fix, or the reason none is available."""
        ...


async def locate_user(
    provider: LocationProvider,
    timeout_s: float = DEFAULT_LOCATION_TIMEOUT_S,
) -> UserLocation | LocationErrorKind:
    """Request the user's position.

    Returns:
        The fix, or a ``LocationErrorKind``.  A provider that does not
        answer within *timeout_s* yields ``TIMEOUT``; a fix with
        out-of-range coordinates yields ``UNAVAILABLE``.
    """
    try:
        result = await asyncio.wait_for(provider.request_location(), timeout_s)
    except TimeoutError:
        logger.warning("Location request timed out | timeout_s=%.1f", timeout_s)
        return LocationErrorKind.TIMEOUT

    if isinstance(result, LocationErrorKind):
        logger.info("Location unavailable | reason=%s", result.value)
        return result

    if not (is_valid_latitude(result.lat) and is_valid_longitude(result.lng)):
        logger.warning("Discarding invalid location fix | lat=%s | lng=%s", result.lat, result.lng)
        return LocationErrorKind.UNAVAILABLE

    logger.info(
        "Location fix | lat=%.5f | lng=%.5f | accuracy_m=%.0f",
        result.lat,
        result.lng,
        result.accuracy,
    )
    return result


def describe_location_error(kind: LocationErrorKind) -> str:
    """User-facing message for a failed location request."""
    return _ERROR_MESSAGES.get(kind, _ERROR_MESSAGES[LocationErrorKind.UNKNOWN])


def zones_at_location(
    location: UserLocation,
    layers: Sequence[MapLayer],
) -> list[tuple[str, ZoneInfo]]:
    """Polygon zones of *layers* that contain *location*.

    Returns:
        ``(layer name, ZoneInfo)`` pairs in layer then feature order.
    """
    hits: list[tuple[str, ZoneInfo]] = []
    for layer in layers:
        containing = features_containing(layer.collection, location.lat, location.lng)
        hits.extend((layer.name, zone_info(feature)) for feature in containing["features"])
    return hits
