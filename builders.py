"""
Zone / Myst builders - raw caller parameters to validated specs.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: The caller-facing construction layer. Takes loose Python
values (numbers, strings, tuples, lists, Hole records, property mappings),
validates them up front and returns an immutable ZoneSpec / MystSpec with
every hole already resolved to its anchor.

Every field is a single keyword argument, so a field cannot be assigned
twice; property names are checked for repeats after lower-casing.

Key Entry Points:
- build_zone_spec() / build_myst_spec(): validated specs
- generate_zone() / generate_myst(): build + write in one call
- build_properties(): property mapping / pairs -> Property tuple

Example:
    from Fog_Machine import generate_zone, Hole

    result = generate_zone(
        "out/zone",
        longitude=0, latitude=0,
        tile_coarseness="MEDIUM", zone_coarseness="COARSE",
        properties={"Name": "harbour", "visited": False},
        holes=[Hole(ids=[55, 56]), "0.009,0.009"],
    )

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from Fog_Machine.config_types import AppConfig, default_app_config
from Fog_Machine.document_writer import normalize_output_path
from Fog_Machine.errors import ParameterError
from Fog_Machine.hole_resolver import MystHoleContext, ZoneHoleContext, resolve_holes
from Fog_Machine.models.data_models import (
    ExactCoordinate,
    GenerationResult,
    Hole,
    MystSpec,
    Property,
    ZoneSpec,
    hole_spec_from_value,
)
from Fog_Machine.myst_generator import generate_myst_document
from Fog_Machine.scale_table import Coarseness, level_of
from Fog_Machine.validator import (
    check_duplicate_holes,
    check_zone_hole_bounds,
    validate_myst_spec,
    validate_zone_parameters,
)
from Fog_Machine.zone_generator import generate_zone_document

logger = logging.getLogger("FogMachine.Builders")

PropertiesInput = Union[None, Mapping[str, Any], Iterable[Any]]


# ═══════════════════════════════════════════════════════════════════════════
# 🔧 HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def to_coarseness(value: Any) -> Coarseness:
    """Accept a Coarseness, its name ("fine") or its decimal value ("0.0001")."""
    if isinstance(value, Coarseness):
        return value
    if isinstance(value, str) and value.strip().replace("_", "").isalpha():
        return Coarseness.from_name(value)
    return level_of(value)


def build_properties(properties: PropertiesInput) -> Tuple[Property, ...]:
    """
    Normalize properties into an ordered tuple of Property.

    Args:
        properties: None, a mapping name -> value, or an iterable of Property
            objects / (name, value) pairs. Order is preserved.

    Raises:
        ParameterError: On unsupported values or a name given twice
            (names compare case-insensitively).
    """
    if properties is None:
        return ()
    items = properties.items() if isinstance(properties, Mapping) else properties

    built: List[Property] = []
    seen = set()
    for item in items:
        if isinstance(item, Property):
            prop = item
        elif isinstance(item, tuple) and len(item) == 2:
            prop = Property.from_value(item[0], item[1])
        else:
            raise ParameterError(f"Unsupported property entry: {item!r}")

        if prop.name in seen:
            raise ParameterError(
                f"Error: Property name should not be set more than once! {prop.name}"
            )
        seen.add(prop.name)
        built.append(prop)
        logger.debug(f"   🏷️ Property built: {prop.name}: {prop.literal}")
    return tuple(built)


def _hole_entries(holes: Any) -> List[Any]:
    """Flatten the holes argument into resolvable entries."""
    if holes is None:
        return []
    entries = holes if isinstance(holes, list) else [holes]

    flattened: List[Any] = []
    for entry in entries:
        if isinstance(entry, Hole):
            flattened.extend(entry.specs())
        else:
            flattened.append(hole_spec_from_value(entry))
    return flattened


def _output_path(path: Union[str, Path], app_config: AppConfig) -> Path:
    return normalize_output_path(path, app_config.output.suffix)


# ═══════════════════════════════════════════════════════════════════════════
# 🗺️ ZONE
# ═══════════════════════════════════════════════════════════════════════════


def build_zone_spec(
    path: Union[str, Path],
    longitude: Any,
    latitude: Any,
    tile_coarseness: Any,
    zone_coarseness: Any,
    properties: PropertiesInput = None,
    holes: Any = None,
    app_config: Optional[AppConfig] = None,
) -> ZoneSpec:
    """
    Validate Zone parameters and resolve its holes.

    Args:
        path: Output path; the configured suffix is appended if missing.
        longitude, latitude: Lower-left corner of the zone.
        tile_coarseness: Side of each tile (Coarseness, name or decimal).
        zone_coarseness: Side of the whole zone.
        properties: Properties copied into every tile.
        holes: A Hole, a hole value, or a list of them. Coordinates must
            fit the tile coarseness; IDs are row-major tile indices.

    Returns:
        ZoneSpec with hole anchors at tile precision.
    """
    app_config = app_config or default_app_config()
    origin = ExactCoordinate.parse(longitude, latitude)
    tile = to_coarseness(tile_coarseness)
    zone = to_coarseness(zone_coarseness)
    validate_zone_parameters(origin, tile, zone)

    context = ZoneHoleContext(origin=origin, tile_coarseness=tile, zone_coarseness=zone)
    anchors = resolve_holes(_hole_entries(holes), context)
    check_duplicate_holes(anchors)
    check_zone_hole_bounds(anchors, origin, zone)

    return ZoneSpec(
        path=_output_path(path, app_config),
        origin=origin,
        tile_coarseness=tile,
        zone_coarseness=zone,
        properties=build_properties(properties),
        holes=tuple(anchors),
    )


def generate_zone(
    path: Union[str, Path],
    longitude: Any,
    latitude: Any,
    tile_coarseness: Any,
    zone_coarseness: Any,
    properties: PropertiesInput = None,
    holes: Any = None,
    app_config: Optional[AppConfig] = None,
) -> GenerationResult:
    """Build a ZoneSpec and write its GeoJSON file."""
    app_config = app_config or default_app_config()
    spec = build_zone_spec(
        path,
        longitude,
        latitude,
        tile_coarseness,
        zone_coarseness,
        properties=properties,
        holes=holes,
        app_config=app_config,
    )
    return generate_zone_document(spec, app_config)


# ═══════════════════════════════════════════════════════════════════════════
# 🌫️ MYST
# ═══════════════════════════════════════════════════════════════════════════


def build_myst_spec(
    path: Union[str, Path],
    zone_coarseness: Any = None,
    properties: PropertiesInput = None,
    holes: Any = None,
    app_config: Optional[AppConfig] = None,
) -> MystSpec:
    """
    Validate Myst parameters and resolve its holes.

    zone_coarseness is the side of every hole square. It is required when
    holes are given and must be omitted otherwise. Hole IDs are decoded with
    the inverse Cantor pairing function onto a 0.1° grid.
    """
    app_config = app_config or default_app_config()
    zone = None if zone_coarseness is None else to_coarseness(zone_coarseness)

    anchors = resolve_holes(_hole_entries(holes), MystHoleContext(zone_coarseness=zone))
    spec = MystSpec(
        path=_output_path(path, app_config),
        zone_coarseness=zone,
        properties=build_properties(properties),
        holes=tuple(anchors),
    )
    validate_myst_spec(spec)
    return spec


def generate_myst(
    path: Union[str, Path],
    zone_coarseness: Any = None,
    properties: PropertiesInput = None,
    holes: Any = None,
    app_config: Optional[AppConfig] = None,
) -> GenerationResult:
    """Build a MystSpec and write its GeoJSON file."""
    app_config = app_config or default_app_config()
    spec = build_myst_spec(
        path,
        zone_coarseness=zone_coarseness,
        properties=properties,
        holes=holes,
        app_config=app_config,
    )
    return generate_myst_document(spec, app_config)


__all__ = [
    "to_coarseness",
    "build_properties",
    "build_zone_spec",
    "generate_zone",
    "build_myst_spec",
    "generate_myst",
]
