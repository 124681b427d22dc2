"""
Spec validation run before any output is written.

Architectural Overview:
    Responsibility: Fail-fast invariant checks for ZoneSpec / MystSpec plus
        the non-fatal large-output advisory.
    Check order (first failure wins):
        1. tile coarseness <= zone coarseness              (Zone)
        2. origin scale <= tile coarseness scale            (Zone)
        3. no duplicate hole anchors                        (both)
        4. hole anchors inside [origin, origin + zone)      (Zone)
           hole anchor scale <= zone coarseness scale       (Myst)
        5. zone coarseness set iff holes are present        (Myst)
    Advisories are returned as strings and logged at WARNING; they never
    stop generation.
    For Navigation: Use Ctrl+Shift+O → validate_zone_spec / validate_myst_spec
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from Fog_Machine.config_types import AdvisoryConfig
from Fog_Machine.errors import (
    DuplicateHole,
    OutOfBoundsHole,
    ParameterError,
    ScaleMismatch,
)
from Fog_Machine.models.data_models import ExactCoordinate, MystSpec, ZoneSpec
from Fog_Machine.scale_table import Coarseness

logger = logging.getLogger("FogMachine.Validator")

LARGE_OUTPUT_WARNING = (
    "Warning: With these Coarseness settings, the generated GeoJSON file "
    "may be extremely large."
)


# ═══════════════════════════════════════════════════════════════════════════
# ⚠️ ADVISORIES
# ═══════════════════════════════════════════════════════════════════════════


def large_output_advisories(
    tile_coarseness: Coarseness,
    zone_coarseness: Coarseness,
    advisories: Optional[AdvisoryConfig] = None,
) -> List[str]:
    """Return the output-size notice when the combination is known to be huge."""
    advisories = advisories or AdvisoryConfig()
    if not advisories.is_large_output(tile_coarseness, zone_coarseness):
        return []
    tiles = (zone_coarseness.decimal / tile_coarseness.decimal) ** 2
    logger.warning(f"⚠️ {LARGE_OUTPUT_WARNING} ({int(tiles):,} tiles)")
    return [LARGE_OUTPUT_WARNING]


# ═══════════════════════════════════════════════════════════════════════════
# 🗺️ ZONE CHECKS
# ═══════════════════════════════════════════════════════════════════════════


def validate_zone_parameters(
    origin: ExactCoordinate,
    tile_coarseness: Coarseness,
    zone_coarseness: Coarseness,
) -> None:
    """Checks that do not need resolved holes."""
    if tile_coarseness > zone_coarseness:
        raise ParameterError(
            f"Tile coarseness {tile_coarseness.name} ({tile_coarseness.decimal}) "
            f"cannot be larger than zone coarseness {zone_coarseness.name} "
            f"({zone_coarseness.decimal})!"
        )
    for axis, scale in (
        ("Longitude", origin.longitude_scale),
        ("Latitude", origin.latitude_scale),
    ):
        if scale > tile_coarseness.scale:
            raise ScaleMismatch(
                f"{axis} scale {scale} cannot be larger than tile coarseness "
                f"scale {tile_coarseness.scale} ({tile_coarseness.name})!"
            )


def check_duplicate_holes(holes: Iterable[ExactCoordinate]) -> None:
    """Raise DuplicateHole if two anchors have the same decimal value."""
    counts = Counter(holes)
    duplicates = [str(anchor) for anchor, count in counts.items() if count > 1]
    if duplicates:
        raise DuplicateHole(
            f"Duplicate holes are not allowed! {', '.join(duplicates)}"
        )


def check_zone_hole_bounds(
    holes: Sequence[ExactCoordinate],
    origin: ExactCoordinate,
    zone_coarseness: Coarseness,
) -> None:
    """Every anchor must satisfy origin <= anchor < origin + zone on both axes."""
    upper = origin.offset(zone_coarseness.decimal, zone_coarseness.decimal)
    for hole in holes:
        inside = (
            origin.longitude <= hole.longitude < upper.longitude
            and origin.latitude <= hole.latitude < upper.latitude
        )
        if not inside:
            raise OutOfBoundsHole(
                f"Hole {hole} is out of bounds of generated area "
                f"[{origin}, {upper})!"
            )


def validate_zone_spec(
    spec: ZoneSpec, advisories: Optional[AdvisoryConfig] = None
) -> List[str]:
    """Run every Zone check in order. Returns advisory notices."""
    validate_zone_parameters(spec.origin, spec.tile_coarseness, spec.zone_coarseness)
    check_duplicate_holes(spec.holes)
    check_zone_hole_bounds(spec.holes, spec.origin, spec.zone_coarseness)
    return large_output_advisories(
        spec.tile_coarseness, spec.zone_coarseness, advisories
    )


# ═══════════════════════════════════════════════════════════════════════════
# 🌫️ MYST CHECKS
# ═══════════════════════════════════════════════════════════════════════════


def check_myst_hole_scales(
    holes: Sequence[ExactCoordinate], zone_coarseness: Coarseness
) -> None:
    for hole in holes:
        for axis, scale in (
            ("Longitude", hole.longitude_scale),
            ("Latitude", hole.latitude_scale),
        ):
            if scale > zone_coarseness.scale:
                raise ScaleMismatch(
                    f"{axis} scale {scale} of hole {hole} cannot be larger than "
                    f"zone coarseness scale {zone_coarseness.scale} "
                    f"({zone_coarseness.name})!"
                )


def check_myst_coarseness(
    holes: Sequence[ExactCoordinate], zone_coarseness: Optional[Coarseness]
) -> None:
    if holes and zone_coarseness is None:
        raise ParameterError("Zone Coarseness is required when holes are specified!")
    if not holes and zone_coarseness is not None:
        raise ParameterError(
            "Zone Coarseness should only be defined if holes are specified!"
        )


def validate_myst_spec(spec: MystSpec) -> List[str]:
    """Run every Myst check in order. Myst generation has no advisories."""
    check_duplicate_holes(spec.holes)
    if spec.zone_coarseness is not None:
        check_myst_hole_scales(spec.holes, spec.zone_coarseness)
    check_myst_coarseness(spec.holes, spec.zone_coarseness)
    return []


__all__ = [
    "LARGE_OUTPUT_WARNING",
    "large_output_advisories",
    "validate_zone_parameters",
    "check_duplicate_holes",
    "check_zone_hole_bounds",
    "validate_zone_spec",
    "check_myst_hole_scales",
    "check_myst_coarseness",
    "validate_myst_spec",
]
