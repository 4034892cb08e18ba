"""Fetch & cache layer: the only part of the pipeline that performs I/O.

- base: ``KeyValueStore`` contract and fetch exceptions
- stores: in-memory and file store backends, store factory
- loader: URL/file retrieval, batch fetch, caller-side fallback
- cache: age-bounded cache in front of the loader
"""

from flight_map.sources.base import (
    CacheStoreError,
    FetchError,
    InvalidShapeError,
    KeyValueStore,
    SourceUnreachableError,
)
from flight_map.sources.cache import fetch_cached, now_ms
from flight_map.sources.loader import (
    fetch_feature_collection,
    fetch_many,
    fetch_with_fallback,
)
from flight_map.sources.stores import (
    FILE,
    MEMORY,
    FileStore,
    InMemoryStore,
    get_store,
    list_stores,
    register_store,
    store_from_config,
)

__all__ = [
    "FILE",
    "MEMORY",
    "CacheStoreError",
    "FetchError",
    "FileStore",
    "InMemoryStore",
    "InvalidShapeError",
    "KeyValueStore",
    "SourceUnreachableError",
    "fetch_cached",
    "fetch_feature_collection",
    "fetch_many",
    "fetch_with_fallback",
    "get_store",
    "list_stores",
    "now_ms",
    "register_store",
    "store_from_config",
]
