"""
Myst Generator - world-covering mask with rectangular holes.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Emit a FeatureCollection with exactly one feature whose
MultiPolygon holds a single polygon: the fixed world ring followed by one
inner ring per hole.

Hole rings run lower-right -> lower-left -> upper-left -> upper-right ->
lower-right, the opposite winding of a Zone tile, so renderers treat them
as exclusions from the world ring. Holes carry no ids.

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from Fog_Machine.config_types import AppConfig, default_app_config
from Fog_Machine.document_writer import (
    FeatureCollectionWriter,
    format_properties,
    myst_feature,
    open_sink,
)
from Fog_Machine.models.data_models import ExactCoordinate, GenerationResult, MystSpec
from Fog_Machine.validator import validate_myst_spec

logger = logging.getLogger("FogMachine.MystGenerator")

_ZERO = Decimal(0)


def _point(lon: int, lat: int) -> ExactCoordinate:
    return ExactCoordinate(Decimal(lon), Decimal(lat))


# North pole midpoint, west edge, south edge, east edge, back to start.
WORLD_RING: Tuple[ExactCoordinate, ...] = (
    _point(0, 90),
    _point(-180, 90),
    _point(-180, 0),
    _point(-180, -90),
    _point(0, -90),
    _point(180, -90),
    _point(180, 90),
    _point(0, 90),
)


def hole_ring(anchor: ExactCoordinate, side: Decimal) -> Tuple[ExactCoordinate, ...]:
    """Closed 5-point ring of the hole square with lower-left `anchor`."""
    lower_right = anchor.offset(side, _ZERO)
    upper_right = anchor.offset(side, side)
    upper_left = anchor.offset(_ZERO, side)
    return (lower_right, anchor, upper_left, upper_right, lower_right)


def myst_rings(spec: MystSpec) -> List[Tuple[ExactCoordinate, ...]]:
    """World ring followed by one ring per hole, in hole order."""
    rings = [WORLD_RING]
    if spec.holes:
        side = spec.zone_coarseness.decimal
        rings.extend(hole_ring(hole, side) for hole in spec.holes)
    return rings


def generate_myst_document(
    spec: MystSpec, app_config: Optional[AppConfig] = None
) -> GenerationResult:
    """
    Validate a MystSpec and write its single-feature FeatureCollection.

    Raises:
        FogMachineError: Any validation, path or I/O failure.
    """
    app_config = app_config or default_app_config()
    notices = validate_myst_spec(spec)

    path, stream = open_sink(spec.path, app_config.output)
    logger.info(f"🌫️ Generating Myst with {len(spec.holes)} holes -> {path}")

    with FeatureCollectionWriter(stream) as writer:
        writer.write_feature(
            myst_feature(myst_rings(spec), format_properties(spec.properties))
        )

    logger.info(f"   ✅ Wrote Myst ({len(spec.holes)} inner rings)")
    return GenerationResult(
        path=path,
        feature_count=writer.feature_count,
        hole_count=len(spec.holes),
        warnings=list(notices),
    )


__all__ = [
    "WORLD_RING",
    "hole_ring",
    "myst_rings",
    "generate_myst_document",
]
