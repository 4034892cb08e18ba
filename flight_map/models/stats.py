"""Zone statistics snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ZoneStats:
    """Read-only counts over a FeatureCollection at a point in time.

    Attributes:
        total: Number of features.
        by_type: Feature count per ``properties.type`` label; untyped
            features count under ``"unknown"``.
    """

    total: int = 0
    by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        """Serialise as ``{"total": ..., "byType": {...}}``."""
        return {"total": self.total, "byType": dict(self.by_type)}
