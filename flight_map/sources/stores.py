"""Key/value store backends and the store factory.

Backends:
- ``memory``: process-local dict, the default and the test fake
- ``file``: one JSON document per key inside a directory

The factory keeps a registry of known backends.  New backends are
registered with ``register_store``; ``get_store`` builds one by name,
usually ``MapConfig.cache_backend``.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from flight_map.sources.base import CacheStoreError, KeyValueStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from flight_map.core.config import MapConfig

logger = logging.getLogger("flight_map.sources.stores")

MEMORY = "memory"
FILE = "file"


class InMemoryStore(KeyValueStore):
    """Dict-backed store; values live as long as the instance."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class FileStore(KeyValueStore):
    """Directory-backed store; each key maps to ``<sha1(key)>.json``.

    Keys are hashed so any string is a safe key.  Writes go to a
    temporary file that is then renamed over the target, so a reader
    never sees a half-written value.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        """Directory holding the stored values."""
        return self._directory

    def _path_for(self, key: str) -> Path:
        digest = hashlib.sha1(key.encode("utf-8"), usedforsecurity=False).hexdigest()
        return self._directory / f"{digest}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            msg = f"Cannot read cache entry {key!r} from {path}: {exc}"
            raise CacheStoreError(msg, source=str(path)) from exc

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            msg = f"Cannot write cache entry {key!r} to {path}: {exc}"
            raise CacheStoreError(msg, source=str(path)) from exc


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

_STORE_REGISTRY: dict[str, Callable[..., KeyValueStore]] = {
    MEMORY: InMemoryStore,
    FILE: FileStore,
}


def register_store(name: str, builder: Callable[..., KeyValueStore]) -> None:
    """Register a custom store backend.

    Args:
        name: Backend name (e.g. ``"redis"``).
        builder: Callable returning a ``KeyValueStore``; receives the
            keyword options passed to ``get_store``.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Store name must be non-empty"
        raise ValueError(msg)
    _STORE_REGISTRY[name] = builder
    logger.debug("Registered cache store backend: %s", name)


def get_store(name: str = MEMORY, **options: Any) -> KeyValueStore:
    """Create a key/value store by backend name.

    Raises:
        ValueError: If the named backend is not registered.
    """
    builder = _STORE_REGISTRY.get(name)
    if builder is None:
        available = ", ".join(sorted(_STORE_REGISTRY))
        msg = f"Unknown cache store backend: {name!r}. Available: {available}"
        raise ValueError(msg)
    logger.info("Creating cache store: %s", name)
    return builder(**options)


def list_stores() -> list[str]:
    """Return the names of all registered store backends."""
    return sorted(_STORE_REGISTRY)


def store_from_config(config: MapConfig) -> KeyValueStore:
    """Create the store named by ``config.cache_backend``.

    The ``file`` backend is rooted at ``config.cache_dir``; other
    backends are built without options.
    """
    if config.cache_backend == FILE:
        return get_store(FILE, directory=config.cache_dir)
    return get_store(config.cache_backend)
