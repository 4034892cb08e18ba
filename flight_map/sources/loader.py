"""Layer source retrieval.

Sources are addressed by a reference string: ``http://`` and
``https://`` references are fetched with ``httpx``; anything else is a
filesystem path, resolved against the configured data base path when
relative.  Every retrieved document is decoded and shape-checked before
it is handed on.

Failure policy:
    The shared layer fails loudly.  ``SourceUnreachableError`` and
    ``InvalidShapeError`` name the offending source; degrading a failed
    layer to an empty overlay is the caller's decision, expressed with
    ``fetch_with_fallback``.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from flight_map.adapters.validation import GeoJSONValidationError, validate_geojson
from flight_map.models.geojson import FeatureCollection, empty_collection
from flight_map.sources.base import FetchError, InvalidShapeError, SourceUnreachableError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Sequence

logger = logging.getLogger("flight_map.sources.loader")

DEFAULT_TIMEOUT_S = 30.0

_URL_SCHEMES = ("http://", "https://")


def is_url(source_ref: str) -> bool:
    """Whether *source_ref* is fetched over the network."""
    return source_ref.lower().startswith(_URL_SCHEMES)


def resolve_path(source_ref: str, base_path: str | Path | None = None) -> Path:
    """Resolve a filesystem source reference against *base_path*."""
    path = Path(source_ref)
    if base_path is not None and not path.is_absolute():
        path = Path(base_path) / path
    return path


async def fetch_feature_collection(
    source_ref: str,
    *,
    client: httpx.AsyncClient | None = None,
    base_path: str | Path | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> FeatureCollection:
    """Retrieve, decode and validate one GeoJSON source.

    Args:
        source_ref: URL or filesystem path of the GeoJSON document.
        client: Shared ``httpx.AsyncClient``; a short-lived client is
            created when omitted.
        base_path: Directory that relative paths resolve against.
        timeout_s: Request timeout for a client created here.

    Returns:
        The source as a FeatureCollection (a bare Feature is wrapped).

    Raises:
        SourceUnreachableError: If the URL or file cannot be read or the
            server answers with a non-success status.
        InvalidShapeError: If the content is not JSON or not a
            Feature/FeatureCollection.
    """
    if is_url(source_ref):
        raw = await _read_url(source_ref, client, timeout_s)
    else:
        raw = await _read_file(source_ref, base_path)

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"Invalid GeoJSON format: not valid JSON ({exc})"
        raise InvalidShapeError(source_ref, msg) from exc

    try:
        collection = validate_geojson(payload, source=source_ref)
    except GeoJSONValidationError as exc:
        raise InvalidShapeError(source_ref, exc.message) from exc

    logger.info(
        "Source loaded | source=%s | features=%d",
        source_ref,
        len(collection["features"]),
    )
    return collection


async def fetch_many(
    source_refs: Sequence[str],
    *,
    client: httpx.AsyncClient | None = None,
    base_path: str | Path | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> list[FeatureCollection]:
    """Retrieve several sources concurrently.

    All retrievals run to completion before this returns or raises.

    Returns:
        Collections positionally aligned with *source_refs*.

    Raises:
        FetchError: The first failure in input order; the whole batch
            fails if any single source fails.
    """
    if client is None:
        async with httpx.AsyncClient(timeout=timeout_s, follow_redirects=True) as owned:
            return await fetch_many(
                source_refs, client=owned, base_path=base_path, timeout_s=timeout_s
            )

    results = await asyncio.gather(
        *(
            fetch_feature_collection(ref, client=client, base_path=base_path, timeout_s=timeout_s)
            for ref in source_refs
        ),
        return_exceptions=True,
    )

    collections: list[FeatureCollection] = []
    for ref, result in zip(source_refs, results, strict=True):
        if isinstance(result, BaseException):
            logger.error("Batch fetch failed | source=%s | error=%s", ref, result)
            raise result
        collections.append(result)
    return collections


async def fetch_with_fallback(
    fetch: Awaitable[FeatureCollection],
    *,
    label: str = "",
) -> FeatureCollection:
    """Await *fetch*, substituting an empty collection on ``FetchError``.

    This is the per-source partial-failure policy for callers that prefer
    an empty overlay to a failed view.
    """
    try:
        return await fetch
    except FetchError as exc:
        logger.warning(
            "Source degraded to empty collection | label=%s | code=%s | error=%s",
            label or exc.source,
            exc.code,
            exc,
        )
        return empty_collection()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


async def _read_url(url: str, client: httpx.AsyncClient | None, timeout_s: float) -> bytes:
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout_s, follow_redirects=True) as owned:
                response = await owned.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        response = exc.response
        msg = f"Failed to load GeoJSON: HTTP {response.status_code} {response.reason_phrase}"
        raise SourceUnreachableError(url, msg) from exc
    except httpx.HTTPError as exc:
        msg = f"Failed to load GeoJSON: {exc}"
        raise SourceUnreachableError(url, msg) from exc

    logger.debug("Fetched %d bytes from %s", len(response.content), url)
    return response.content


async def _read_file(source_ref: str, base_path: str | Path | None) -> bytes:
    path = resolve_path(source_ref, base_path)
    try:
        return await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        msg = f"Failed to load GeoJSON: cannot read {path} ({exc.strerror or exc})"
        raise SourceUnreachableError(source_ref, msg) from exc
