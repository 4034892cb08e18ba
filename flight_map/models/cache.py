"""Serialised cache entry for fetched feature collections.

The key/value store holds one JSON document per key of the form
``{"data": <FeatureCollection>, "timestamp": <epoch-ms>}``.  Entries
are replaced wholesale on refresh, never edited in place.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """A cached FeatureCollection and the epoch-ms time it was stored."""

    model_config = ConfigDict(frozen=True)

    data: dict[str, Any]
    timestamp: int

    def age_ms(self, now_ms: int) -> int:
        """Milliseconds elapsed between storing and *now_ms*."""
        return now_ms - self.timestamp

    def is_fresh(self, now_ms: int, max_age_ms: int) -> bool:
        """Whether the entry is younger than *max_age_ms*."""
        return self.age_ms(now_ms) < max_age_ms
