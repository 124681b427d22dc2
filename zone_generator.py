"""
Zone Generator - uniform grid of square tiles.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Walk [origin, origin + zone) in tile-sized steps and emit
one Polygon feature per step.

Walk order is latitude (outer) then longitude (inner), from the lower-left
corner. Every step gets the next id (0-based), including hole steps: a hole
tile is still written, with its id and properties, but with empty
coordinates. Loop bounds are exact decimal comparisons, so each axis has
exactly zone / tile steps.

Tile ring: lower-right -> upper-right -> upper-left -> lower-left -> lower-right.

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import logging
import time
from decimal import Decimal
from typing import Iterator, Optional, Tuple

from Fog_Machine.config_types import AppConfig, default_app_config
from Fog_Machine.document_writer import (
    FeatureCollectionWriter,
    format_properties,
    open_sink,
    zone_feature,
)
from Fog_Machine.models.data_models import ExactCoordinate, GenerationResult, ZoneSpec
from Fog_Machine.scale_table import add
from Fog_Machine.validator import validate_zone_spec

logger = logging.getLogger("FogMachine.ZoneGenerator")

_ZERO = Decimal(0)


# ═══════════════════════════════════════════════════════════════════════════
# 🧮 GRID WALK
# ═══════════════════════════════════════════════════════════════════════════


def iter_tile_anchors(spec: ZoneSpec) -> Iterator[Tuple[int, ExactCoordinate]]:
    """Yield (id, lower-left corner) for every tile in row-major order."""
    step = spec.tile_coarseness.decimal
    upper = spec.upper_right
    feature_id = 0

    lat = spec.origin.latitude
    while lat < upper.latitude:
        lon = spec.origin.longitude
        while lon < upper.longitude:
            yield feature_id, ExactCoordinate(lon, lat)
            feature_id += 1
            lon = add(lon, step)
        lat = add(lat, step)


def tile_ring(anchor: ExactCoordinate, step: Decimal) -> Tuple[ExactCoordinate, ...]:
    """Closed 5-point ring of the tile whose lower-left corner is `anchor`."""
    lower_right = anchor.offset(step, _ZERO)
    upper_right = anchor.offset(step, step)
    upper_left = anchor.offset(_ZERO, step)
    return (lower_right, upper_right, upper_left, anchor, lower_right)


def write_zone_features(spec: ZoneSpec, writer: FeatureCollectionWriter) -> int:
    """Write every tile feature. Returns the number of punched holes."""
    step = spec.tile_coarseness.decimal
    holes = frozenset(spec.holes)
    properties_text = format_properties(spec.properties)
    punched = 0

    for feature_id, anchor in iter_tile_anchors(spec):
        if anchor in holes:
            ring: Optional[Tuple[ExactCoordinate, ...]] = None
            punched += 1
        else:
            ring = tile_ring(anchor, step)
        writer.write_feature(zone_feature(feature_id, ring, properties_text))

    return punched


# ═══════════════════════════════════════════════════════════════════════════
# 🚀 ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════


def generate_zone_document(
    spec: ZoneSpec, app_config: Optional[AppConfig] = None
) -> GenerationResult:
    """
    Validate a ZoneSpec and write its FeatureCollection.

    Args:
        spec: Resolved zone parameters.
        app_config: Output / advisory settings (defaults to CONFIG).

    Returns:
        GenerationResult with feature count, hole count and advisories.

    Raises:
        FogMachineError: Any validation, path or I/O failure. The file may
            hold partial content after an I/O failure.
    """
    app_config = app_config or default_app_config()
    notices = validate_zone_spec(spec, app_config.advisories)

    start = time.perf_counter()
    path, stream = open_sink(spec.path, app_config.output)
    logger.info(
        f"🗺️ Generating Zone: {spec.feature_count} tiles "
        f"({spec.tile_coarseness.name} over {spec.zone_coarseness.name}) -> {path}"
    )

    with FeatureCollectionWriter(stream) as writer:
        punched = write_zone_features(spec, writer)

    logger.info(
        f"   ✅ Wrote {writer.feature_count} features ({punched} holes) "
        f"in {time.perf_counter() - start:.2f}s"
    )
    return GenerationResult(
        path=path,
        feature_count=writer.feature_count,
        hole_count=punched,
        warnings=list(notices),
    )


__all__ = [
    "iter_tile_anchors",
    "tile_ring",
    "write_zone_features",
    "generate_zone_document",
]
