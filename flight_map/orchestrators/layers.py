"""Map layer orchestration.

Composes the fetch & cache layer and the zone filters according to the
layer toggle state, and hands finished layers to a rendering surface.
This module owns no geometry or filtering logic of its own.

Per-layer pipeline:

- ``crown_land``: source as published
- ``exclusion_zones``: ``filter_parks``
- ``airports``: ``filter_airports`` then ``build_airport_buffers``
- ``controlled_airspace``: ``filter_controlled_airspace``
- ``user_pois``: the uploaded collection, no source fetch

Every fetched layer is wrapped with ``fetch_with_fallback``: a source
that cannot be loaded becomes an empty overlay for that layer only.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from flight_map.core.config import MapConfig
from flight_map.core.constants import (
    ALL_LAYERS,
    LAYER_AIRPORTS,
    LAYER_CONTROLLED_AIRSPACE,
    LAYER_CROWN_LAND,
    LAYER_EXCLUSION_ZONES,
    LAYER_USER_POIS,
)
from flight_map.filters.buffers import build_airport_buffers
from flight_map.filters.zones import (
    compute_stats,
    filter_airports,
    filter_by_bounds,
    filter_controlled_airspace,
    filter_parks,
    zone_info,
)
from flight_map.geometry.shapes import bounding_box, collect_positions
from flight_map.models.geojson import empty_collection
from flight_map.models.stats import ZoneStats
from flight_map.sources.cache import fetch_cached, now_ms
from flight_map.sources.loader import fetch_with_fallback

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from flight_map.models.bounds import BoundingBox
    from flight_map.models.geojson import Feature, FeatureCollection
    from flight_map.models.zone import ZoneInfo
    from flight_map.sources.base import KeyValueStore

logger = logging.getLogger("flight_map.orchestrators.layers")

CACHE_KEY_PREFIX = "flight_map:layer:"


# ---------------------------------------------------------------------------
# Layer toggle state
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LayerState:
    """Visibility of each map layer.  Every change returns a new state."""

    crown_land: bool = True
    exclusion_zones: bool = True
    airports: bool = True
    controlled_airspace: bool = True
    user_pois: bool = False

    def is_visible(self, layer: str) -> bool:
        """Whether *layer* is switched on."""
        _check_layer(layer)
        return bool(getattr(self, layer))

    def set_visibility(self, layer: str, visible: bool) -> LayerState:
        """Return a state with *layer* shown or hidden."""
        _check_layer(layer)
        return dataclasses.replace(self, **{layer: visible})

    def toggle(self, layer: str) -> LayerState:
        """Return a state with *layer* flipped."""
        return self.set_visibility(layer, not self.is_visible(layer))

    def show_all(self) -> LayerState:
        """Return a state with every layer shown."""
        return LayerState(**dict.fromkeys(ALL_LAYERS, True))

    def hide_all(self) -> LayerState:
        """Return a state with every layer hidden."""
        return LayerState(**dict.fromkeys(ALL_LAYERS, False))

    def reset(self) -> LayerState:
        """Return the default state."""
        return LayerState()

    def visible_layers(self) -> tuple[str, ...]:
        """Names of the visible layers in draw order."""
        return tuple(layer for layer in ALL_LAYERS if getattr(self, layer))


def _check_layer(layer: str) -> None:
    if layer not in ALL_LAYERS:
        msg = f"Unknown map layer: {layer!r}. Available: {', '.join(ALL_LAYERS)}"
        raise ValueError(msg)


# ---------------------------------------------------------------------------
# Sources and styles
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LayerSources:
    """Source reference per fetched layer; ``None`` disables the fetch.

    Relative paths resolve against ``MapConfig.data_base_path``.
    """

    crown_land: str | None = "crown_land.geojson"
    exclusion_zones: str | None = "exclusion_zones.geojson"
    airports: str | None = "airports.geojson"
    controlled_airspace: str | None = "controlled_airspace.geojson"

    def source_for(self, layer: str) -> str | None:
        """Source reference for *layer*, or ``None`` when it is not fetched."""
        return getattr(self, layer, None)


@dataclass(frozen=True, slots=True)
class LayerStyle:
    """Static vector style handed to the rendering surface."""

    fill_color: str
    color: str
    fill_opacity: float = 0.3
    weight: int = 2

    def to_dict(self) -> dict[str, object]:
        return {
            "fillColor": self.fill_color,
            "fillOpacity": self.fill_opacity,
            "color": self.color,
            "weight": self.weight,
        }


LAYER_STYLES: dict[str, LayerStyle] = {
    LAYER_CROWN_LAND: LayerStyle(fill_color="#2d7d2d", color="#2d7d2d", fill_opacity=0.3),
    LAYER_EXCLUSION_ZONES: LayerStyle(fill_color="#c4453d", color="#c4453d", fill_opacity=0.4),
    LAYER_AIRPORTS: LayerStyle(fill_color="#e0a526", color="#e0a526", fill_opacity=0.25),
    LAYER_CONTROLLED_AIRSPACE: LayerStyle(fill_color="#3d6fc4", color="#3d6fc4", fill_opacity=0.2),
    LAYER_USER_POIS: LayerStyle(fill_color="#00d4ff", color="#ffffff", fill_opacity=0.8, weight=3),
}


# ---------------------------------------------------------------------------
# Layer building
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MapLayer:
    """A finished layer ready for the rendering surface."""

    name: str
    collection: FeatureCollection
    style: LayerStyle
    stats: ZoneStats = field(default_factory=ZoneStats)

    @property
    def is_empty(self) -> bool:
        return self.stats.total == 0

    @property
    def extent(self) -> BoundingBox | None:
        """Bounding box of every position in the layer, for fitting the view."""
        return bounding_box(
            position
            for feature in self.collection["features"]
            for position in collect_positions(feature.get("geometry"))
        )


def shape_layer(
    layer: str,
    raw: FeatureCollection,
    *,
    airport_buffer_nm: float,
    viewport: BoundingBox | None = None,
) -> FeatureCollection:
    """Apply the zone filters that belong to *layer*.

    Pure: no I/O.  With a *viewport*, the layer is additionally clipped
    to it with ``filter_by_bounds`` before any buffers are derived.
    """
    collection = filter_by_bounds(raw, viewport) if viewport is not None else raw
    if layer == LAYER_EXCLUSION_ZONES:
        return filter_parks(collection)
    if layer == LAYER_AIRPORTS:
        airports = filter_airports(collection, airport_buffer_nm)
        return build_airport_buffers(airports, airport_buffer_nm)
    if layer == LAYER_CONTROLLED_AIRSPACE:
        return filter_controlled_airspace(collection)
    return collection


async def build_layers(
    state: LayerState,
    sources: LayerSources,
    *,
    store: KeyValueStore,
    config: MapConfig | None = None,
    client: httpx.AsyncClient | None = None,
    pois: FeatureCollection | None = None,
    viewport: BoundingBox | None = None,
    clock: Callable[[], int] = now_ms,
) -> list[MapLayer]:
    """Load and shape every visible layer.

    Sources of visible layers are fetched concurrently through the
    cache.  A layer whose source fails degrades to an empty overlay.

    Args:
        state: Layer visibility.
        sources: Source reference per layer.
        store: Cache backend.
        config: Pipeline configuration (defaults when omitted).
        client: Shared HTTP client; one is created when omitted.
        pois: Uploaded user POIs for the ``user_pois`` layer.
        viewport: Optional map extent to clip layers to.
        clock: Epoch-ms clock for cache ageing.

    Returns:
        Visible layers in draw order.
    """
    config = config or MapConfig()
    if client is None:
        async with httpx.AsyncClient(
            timeout=config.fetch_timeout_s, follow_redirects=True
        ) as owned:
            return await build_layers(
                state,
                sources,
                store=store,
                config=config,
                client=owned,
                pois=pois,
                viewport=viewport,
                clock=clock,
            )

    fetched_layers = [
        layer
        for layer in state.visible_layers()
        if layer != LAYER_USER_POIS and sources.source_for(layer)
    ]
    raw_collections = await asyncio.gather(
        *(
            fetch_with_fallback(
                fetch_cached(
                    CACHE_KEY_PREFIX + layer,
                    sources.source_for(layer),  # type: ignore[arg-type]
                    config.cache_max_age_ms,
                    store=store,
                    clock=clock,
                    client=client,
                    base_path=config.data_base_path,
                    timeout_s=config.fetch_timeout_s,
                ),
                label=layer,
            )
            for layer in fetched_layers
        )
    )
    raw_by_layer: dict[str, FeatureCollection] = dict(
        zip(fetched_layers, raw_collections, strict=True)
    )
    if state.user_pois:
        raw_by_layer[LAYER_USER_POIS] = pois if pois is not None else empty_collection()

    layers: list[MapLayer] = []
    for layer in state.visible_layers():
        if layer not in raw_by_layer:
            continue
        collection = shape_layer(
            layer,
            raw_by_layer[layer],
            airport_buffer_nm=config.airport_buffer_nm,
            viewport=viewport,
        )
        stats = compute_stats(collection)
        logger.info("Layer ready | layer=%s | features=%d", layer, stats.total)
        layers.append(
            MapLayer(name=layer, collection=collection, style=LAYER_STYLES[layer], stats=stats)
        )
    return layers


# ---------------------------------------------------------------------------
# Rendering surface boundary
# ---------------------------------------------------------------------------


class RenderSurface(Protocol):
    """Tile-map surface that draws styled feature collections."""

    def add_layer(
        self,
        name: str,
        collection: FeatureCollection,
        style: dict[str, object],
        on_click: Callable[[Feature, Any], None],
    ) -> None:
        """Draw *collection*; call *on_click(feature, handle)* on interaction."""
        ...

    def bind_popup(self, handle: Any, text: str) -> None:
        """Attach a popup with *text* to a drawn feature."""
        ...


def render_layers(
    surface: RenderSurface,
    layers: Sequence[MapLayer],
    on_select: Callable[[ZoneInfo], None] | None = None,
) -> int:
    """Hand non-empty *layers* to *surface*.

    Clicking a feature binds a popup with its name and type and passes
    its ``ZoneInfo`` to *on_select*.

    Returns:
        The number of layers drawn.
    """

    def on_click(feature: Feature, handle: Any) -> None:
        info = zone_info(feature)
        if on_select is not None:
            on_select(info)
        surface.bind_popup(handle, info.popup_text())

    drawn = 0
    for layer in layers:
        if layer.is_empty:
            continue
        surface.add_layer(layer.name, layer.collection, layer.style.to_dict(), on_click)
        drawn += 1
    return drawn
