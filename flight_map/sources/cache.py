"""Age-bounded cache in front of the layer loader.

Each cache key holds one ``CacheEntry`` serialised as
``{"data": <FeatureCollection>, "timestamp": <epoch-ms>}``.  A read
within ``max_age_ms`` of the stored timestamp is served from the store
without touching the source; otherwise the source is fetched again and
the entry replaced.

Concurrency:
    Read-then-possibly-write, no locking.  Concurrent misses on one key
    may fetch twice; the last write wins.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from flight_map.core.constants import DEFAULT_CACHE_MAX_AGE_MS
from flight_map.models.cache import CacheEntry
from flight_map.sources.base import CacheStoreError
from flight_map.sources.loader import DEFAULT_TIMEOUT_S, fetch_feature_collection

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from pathlib import Path

    import httpx

    from flight_map.models.geojson import FeatureCollection
    from flight_map.sources.base import KeyValueStore

logger = logging.getLogger("flight_map.sources.cache")


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def read_entry(store: KeyValueStore, key: str) -> CacheEntry | None:
    """Load the cache entry for *key*, or ``None`` if absent or unreadable.

    Corrupt entries are logged and reported as absent so the caller
    refetches and overwrites them.
    """
    try:
        raw = store.get(key)
    except CacheStoreError as exc:
        logger.warning("Cache read failed | key=%s | error=%s", key, exc)
        return None
    if raw is None:
        return None
    try:
        return CacheEntry.model_validate_json(raw)
    except PydanticValidationError:
        logger.warning("Discarding corrupt cache entry | key=%s", key)
        return None


def write_entry(store: KeyValueStore, key: str, data: FeatureCollection, timestamp: int) -> None:
    """Replace the cache entry for *key*.

    A store that cannot persist the value is logged, not raised: the
    freshly fetched data is still good, only the next read will miss.
    """
    entry = CacheEntry(data=dict(data), timestamp=timestamp)
    try:
        store.set(key, entry.model_dump_json())
    except CacheStoreError as exc:
        logger.warning("Cache write failed | key=%s | error=%s", key, exc)


async def fetch_cached(
    key: str,
    source_ref: str,
    max_age_ms: int = DEFAULT_CACHE_MAX_AGE_MS,
    *,
    store: KeyValueStore,
    clock: Callable[[], int] = now_ms,
    fetcher: Callable[[str], Awaitable[FeatureCollection]] | None = None,
    client: httpx.AsyncClient | None = None,
    base_path: str | Path | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> FeatureCollection:
    """Return the FeatureCollection for *source_ref*, cached under *key*.

    Args:
        key: Cache key identifying the source.
        source_ref: URL or path passed to the fetcher on a miss.
        max_age_ms: Entries at least this old are refetched
            (default 24 hours).
        store: Key/value backend holding the entries.
        clock: Returns the current epoch-ms time.
        fetcher: Coroutine function retrieving a source; defaults to
            ``fetch_feature_collection`` with *client*, *base_path* and
            *timeout_s*.

    Returns:
        The cached payload when fresh, otherwise the freshly fetched one.

    Raises:
        FetchError: If the cache misses and the fetch fails.
    """
    entry = read_entry(store, key)
    now = clock()
    if entry is not None and entry.is_fresh(now, max_age_ms):
        logger.debug("Cache hit | key=%s | age_ms=%d", key, entry.age_ms(now))
        return entry.data  # type: ignore[return-value]

    logger.info(
        "Cache %s | key=%s | source=%s",
        "stale" if entry is not None else "miss",
        key,
        source_ref,
    )

    if fetcher is None:
        data = await fetch_feature_collection(
            source_ref, client=client, base_path=base_path, timeout_s=timeout_s
        )
    else:
        data = await fetcher(source_ref)

    write_entry(store, key, data, clock())
    return data
