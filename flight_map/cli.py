"""Command-line host for the zone pipeline.

Wiring only: reads ``MapConfig`` from the environment, configures
logging, calls into the package and prints JSON to stdout.  A failed
command prints ``{"error": ...}`` built from ``FlightMapError.to_error_dict``.

Commands:
    layers   Load the visible layers and print per-layer zone stats
    where    List the zones containing a coordinate
    upload   Decode a CSV/GeoJSON POI file and print it as GeoJSON
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from flight_map.adapters.upload import load_upload
from flight_map.core.config import ConfigValidationError, MapConfig
from flight_map.core.constants import ALL_LAYERS, LAYER_USER_POIS
from flight_map.core.exceptions import FlightMapError
from flight_map.core.logging import configure_logging
from flight_map.geometry.measure import format_coordinates, is_valid_latitude, is_valid_longitude
from flight_map.models.bounds import BoundingBox
from flight_map.models.location import UserLocation
from flight_map.orchestrators.layers import LayerSources, LayerState, build_layers
from flight_map.orchestrators.location import zones_at_location
from flight_map.sources.stores import store_from_config

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flight_map.models.geojson import FeatureCollection
    from flight_map.orchestrators.layers import MapLayer

logger = logging.getLogger("flight_map.cli")


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the ``flight-map`` command."""
    parser = argparse.ArgumentParser(
        prog="flight-map",
        description="Load, filter and inspect drone flight-planning zones.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    layers = commands.add_parser("layers", help="Load visible layers and print their stats")
    _add_layer_options(layers)

    where = commands.add_parser("where", help="List the zones containing a coordinate")
    where.add_argument("lat", type=float, help="Latitude in degrees")
    where.add_argument("lng", type=float, help="Longitude in degrees")
    _add_layer_options(where)

    upload = commands.add_parser("upload", help="Decode a CSV or GeoJSON POI file")
    upload.add_argument("path", type=Path, help="File to decode")
    return parser


def _add_layer_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--show",
        action="append",
        default=[],
        choices=ALL_LAYERS,
        metavar="LAYER",
        help=f"Turn a layer on (one of: {', '.join(ALL_LAYERS)})",
    )
    parser.add_argument(
        "--hide",
        action="append",
        default=[],
        choices=ALL_LAYERS,
        metavar="LAYER",
        help="Turn a layer off",
    )
    parser.add_argument("--pois", type=Path, help="POI file shown as the user_pois layer")
    parser.add_argument(
        "--bounds",
        nargs=4,
        type=float,
        metavar=("MIN_LAT", "MIN_LNG", "MAX_LAT", "MAX_LNG"),
        help="Clip layers to this viewport",
    )


def layer_state(show: Sequence[str], hide: Sequence[str]) -> LayerState:
    """Default layer state with *show* switched on, then *hide* switched off."""
    state = LayerState()
    for layer in show:
        state = state.set_visibility(layer, True)
    for layer in hide:
        state = state.set_visibility(layer, False)
    return state


def read_upload(path: Path) -> FeatureCollection:
    """Decode the POI file at *path*."""
    return load_upload(path.name, path.read_bytes())


async def load_layers(args: argparse.Namespace, config: MapConfig) -> list[MapLayer]:
    """Build the layers selected by the parsed command-line *args*."""
    state = layer_state(args.show, args.hide)
    pois = None
    if args.pois is not None:
        pois = read_upload(args.pois)
        state = state.set_visibility(LAYER_USER_POIS, True)

    viewport = None
    if args.bounds is not None:
        min_lat, min_lng, max_lat, max_lng = args.bounds
        viewport = BoundingBox.from_corners([[min_lat, min_lng], [max_lat, max_lng]])

    return await build_layers(
        state,
        LayerSources(),
        store=store_from_config(config),
        config=config,
        pois=pois,
        viewport=viewport,
    )


def _run(args: argparse.Namespace, config: MapConfig) -> Any:
    if args.command == "upload":
        return read_upload(args.path)

    layers = asyncio.run(load_layers(args, config))
    if args.command == "layers":
        return {layer.name: layer.stats.to_dict() for layer in layers}

    hits = zones_at_location(UserLocation(lat=args.lat, lng=args.lng), layers)
    return {
        "location": format_coordinates(args.lat, args.lng),
        "zones": [{"layer": name, **dataclasses.asdict(info)} for name, info in hits],
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "where" and not (
        is_valid_latitude(args.lat) and is_valid_longitude(args.lng)
    ):
        parser.error(f"invalid coordinate: {args.lat}, {args.lng}")

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = MapConfig.from_env()
    except (ConfigValidationError, ValueError) as exc:
        logger.error("Configuration rejected | error=%s", exc)
        return 2

    try:
        result = _run(args, config)
    except FlightMapError as exc:
        logger.error(
            "Command failed | command=%s | category=%s | code=%s | error=%s",
            args.command,
            exc.category,
            exc.code,
            exc,
        )
        _write_json({"error": exc.to_error_dict()})
        return 1
    except OSError as exc:
        logger.error("Command failed | command=%s | error=%s", args.command, exc)
        return 1

    _write_json(result)
    return 0


def _write_json(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    sys.exit(main())
