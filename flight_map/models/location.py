"""User location reported by a device location provider."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class LocationErrorKind(enum.Enum):
    """Why a location request did not produce a fix."""

    PERMISSION_DENIED = "permission_denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class UserLocation:
    """A position fix.

    Attributes:
        lat: Latitude in degrees.
        lng: Longitude in degrees.
        accuracy: Radius of the 68% confidence circle in metres.
        timestamp: Epoch milliseconds at which the fix was taken.
    """

    lat: float
    lng: float
    accuracy: float = 0.0
    timestamp: int = 0

    def to_dict(self) -> dict[str, float | int]:
        """Serialise with the provider's field names."""
        return {
            "lat": self.lat,
            "lng": self.lng,
            "accuracy": self.accuracy,
            "timestamp": self.timestamp,
        }
