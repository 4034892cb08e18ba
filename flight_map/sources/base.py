"""Key/value store contract and fetch exceptions.

The cache never talks to a concrete storage backend directly; it goes
through ``KeyValueStore`` so browser storage, a directory on disk, or an
in-memory dict can sit behind it unchanged.

Contract:
    ``get(key)`` returns the serialised value or ``None`` when absent.
    ``set(key, value)`` stores the serialised value, replacing any
    previous value for that key.
"""

from __future__ import annotations

import abc

from flight_map.core.exceptions import ContractError, FlightMapError, TransientError

# ---------------------------------------------------------------------------
# Store contract
# ---------------------------------------------------------------------------


class KeyValueStore(abc.ABC):
    """Abstract string key/value store used by the layer cache."""

    @abc.abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` if absent."""

    @abc.abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value.

        Raises:
            CacheStoreError: If the backend cannot persist the value.
        """


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class FetchError(FlightMapError):
    """Base exception for layer source retrieval failures.

    ``source`` is the URL or path that failed.
    """

    default_stage = "fetch"
    default_code = "FETCH_FAILED"

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message, source=source)

    def __str__(self) -> str:
        return f"[{self.source}] {self.message}"


class SourceUnreachableError(FetchError, TransientError):
    """The network or file source could not be read."""

    default_code = "SOURCE_UNREACHABLE"


class InvalidShapeError(FetchError, ContractError):
    """The source was read but is not a Feature or FeatureCollection."""

    default_code = "INVALID_SHAPE"


class CacheStoreError(TransientError):
    """A key/value store backend failed to read or persist a value."""

    default_stage = "cache"
    default_code = "CACHE_STORE_FAILED"
