"""
Hole Resolver - hole specifications to canonical anchors.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Normalize every supported hole specification into
ExactCoordinate anchors (the lower-left corner of the excluded square).

Supported forms (see models.data_models):
- SingleCoordinate / CoordinateList: (lon, lat) pairs
- DelimitedString: "lon,lat", "lon lat", "lon_lat" or "lon/lat"
- SingleIndex / IndexList: integer (or numeric string) indices

Coordinate forms are checked against the governing coarseness (tile
coarseness for a Zone, zone coarseness for a Myst) and rescaled to it.

Index forms depend on the document type:
- Zone: row-major raster index over the tile grid, counted from the
  lower-left tile. With n = zone / tile tiles per side,
  x = id mod n, y = id div n, anchor = origin + (x, y) * tile.
- Myst: inverse Cantor pairing. For v >= 1,
      t  = floor((-1 + sqrt(1 + 8v)) / 2)
      px = t(t + 3) / 2 - v
      py = v - t(t + 1) / 2
  and the anchor is (px * 0.1 - 180, py * 0.1 - 90). t is computed with an
  integer square root, so the result is exact for every natural number.

Resolution has no side effects; duplicates are kept so that the validator
can report them.

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Tuple, Union

from Fog_Machine.errors import (
    IndexOutOfBounds,
    InvalidFormat,
    InvalidIndex,
    ParameterError,
    ScaleMismatch,
    UnsupportedElement,
)
from Fog_Machine.models.data_models import (
    CoordinateList,
    DelimitedString,
    ExactCoordinate,
    HoleSpec,
    IndexList,
    SingleCoordinate,
    SingleIndex,
    hole_spec_from_value,
)
from Fog_Machine.scale_table import (
    Coarseness,
    add,
    multiply,
    parse_decimal,
    rescale,
)

logger = logging.getLogger("FogMachine.HoleResolver")

# Myst index plane: 0.1° steps from the south-west corner of the globe.
MYST_INDEX_STEP = Decimal("0.1")
MYST_LONGITUDE_ORIGIN = Decimal(-180)
MYST_LATITUDE_ORIGIN = Decimal(-90)

# First delimiter wins; whitespace around ",", "_" and "/" is ignored.
_COORDINATE_SPLIT = re.compile(r"\s*[,_/]\s*|\s+")


# ═══════════════════════════════════════════════════════════════════════════
# 🧭 RESOLUTION CONTEXTS
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ZoneHoleContext:
    """Zone holes: coordinates use tile precision, indices walk the tile grid."""

    origin: ExactCoordinate
    tile_coarseness: Coarseness
    zone_coarseness: Coarseness

    @property
    def governing(self) -> Coarseness:
        return self.tile_coarseness

    def index_anchor(self, raw_index: Union[int, str]) -> ExactCoordinate:
        return zone_index_anchor(
            raw_index, self.origin, self.tile_coarseness, self.zone_coarseness
        )


@dataclass(frozen=True)
class MystHoleContext:
    """Myst holes: coordinates use zone precision, indices use inverse Cantor."""

    zone_coarseness: Optional[Coarseness] = None

    @property
    def governing(self) -> Coarseness:
        if self.zone_coarseness is None:
            raise ParameterError(
                "Zone Coarseness is required when holes are specified!"
            )
        return self.zone_coarseness

    def index_anchor(self, raw_index: Union[int, str]) -> ExactCoordinate:
        return myst_index_anchor(raw_index)


HoleContext = Union[ZoneHoleContext, MystHoleContext]


# ═══════════════════════════════════════════════════════════════════════════
# 📍 COORDINATE FORMS
# ═══════════════════════════════════════════════════════════════════════════


def resolve_coordinate(
    longitude: Any, latitude: Any, coarseness: Coarseness
) -> ExactCoordinate:
    """Parse a coordinate pair and express it at the coarseness scale.

    Raises:
        InvalidFormat: If a component is not a finite number.
        UnsupportedElement: If a component has an unsupported type.
        ScaleMismatch: If a component has more fractional digits than the
            coarseness allows.
    """
    coordinate = ExactCoordinate.parse(longitude, latitude)
    if coordinate.scale > coarseness.scale:
        lon, lat = coordinate.as_text()
        raise ScaleMismatch(
            f"Scale of coordinates ({lon}, {lat}) must match "
            f"{coarseness.name} scale {coarseness.scale} ({coarseness.decimal})!"
        )
    return ExactCoordinate(
        rescale(coordinate.longitude, coarseness.scale),
        rescale(coordinate.latitude, coarseness.scale),
    )


def split_delimited(text: str) -> Tuple[str, str]:
    """Split "lon,lat" style text into its two components.

    Raises:
        InvalidFormat: If the text does not contain exactly two components.
    """
    atoms = _COORDINATE_SPLIT.split(text.strip(), maxsplit=1)
    if len(atoms) != 2 or not atoms[0] or not atoms[1]:
        raise InvalidFormat(f"Invalid hole format! {text!r}")
    return atoms[0], atoms[1].replace(" ", "")


# ═══════════════════════════════════════════════════════════════════════════
# 🔢 INDEX FORMS
# ═══════════════════════════════════════════════════════════════════════════


def parse_index(raw_index: Union[int, str]) -> int:
    """Convert an int or numeric string index to int.

    Raises:
        InvalidFormat: If the string is not an integral number.
        UnsupportedElement: For any other type.
    """
    if isinstance(raw_index, bool):
        raise UnsupportedElement(f"Unsupported hole ID: {raw_index!r}")
    if isinstance(raw_index, int):
        return raw_index
    if isinstance(raw_index, str):
        value = parse_decimal(raw_index, "hole ID")
        if value != value.to_integral_value():
            raise InvalidFormat(f"Invalid ID format! {raw_index!r}")
        return int(value)
    raise UnsupportedElement(f"Unsupported hole ID: {type(raw_index).__name__} ({raw_index!r})")


def tiles_per_side(tile_coarseness: Coarseness, zone_coarseness: Coarseness) -> int:
    """Number of tiles along one side of a zone (zone / tile).

    Raises:
        InvalidFormat: If the ratio is not a positive integer.
    """
    ratio = zone_coarseness.decimal / tile_coarseness.decimal
    if ratio < 1 or ratio != ratio.to_integral_value():
        raise InvalidFormat(
            f"Zone coarseness {zone_coarseness.decimal} is not a whole multiple "
            f"of tile coarseness {tile_coarseness.decimal}"
        )
    return int(ratio)


def zone_index_anchor(
    raw_index: Union[int, str],
    origin: ExactCoordinate,
    tile_coarseness: Coarseness,
    zone_coarseness: Coarseness,
) -> ExactCoordinate:
    """Lower-left corner of the tile with the given row-major raster index.

    Raises:
        IndexOutOfBounds: If the index is outside [0, n² - 1].
    """
    index = parse_index(raw_index)
    num_length = tiles_per_side(tile_coarseness, zone_coarseness)
    max_id = num_length * num_length - 1
    if index < 0 or index > max_id:
        raise IndexOutOfBounds(
            f"ID out of bounds! Range: [0, {max_id}]  ID: {raw_index}"
        )

    x, y = index % num_length, index // num_length
    step = tile_coarseness.decimal
    return origin.offset(multiply(step, x), multiply(step, y))


def inverse_cantor(value: int) -> Tuple[int, int]:
    """Inverse of the Cantor pairing function for natural numbers (v >= 1).

    Returns:
        (px, py) with px = t(t+3)/2 - v and py = v - t(t+1)/2.

    Raises:
        InvalidIndex: If value < 1.
    """
    if value < 1:
        raise InvalidIndex(
            f"Inverse Cantor pairing function may only use natural numbers! {value}"
        )
    t = (math.isqrt(1 + 8 * value) - 1) // 2
    px = t * (t + 3) // 2 - value
    py = value - t * (t + 1) // 2
    return px, py


def myst_index_anchor(raw_index: Union[int, str]) -> ExactCoordinate:
    """Myst hole anchor for a pairing index: (px·0.1 − 180, py·0.1 − 90)."""
    px, py = inverse_cantor(parse_index(raw_index))
    return ExactCoordinate(
        add(multiply(MYST_INDEX_STEP, px), MYST_LONGITUDE_ORIGIN),
        add(multiply(MYST_INDEX_STEP, py), MYST_LATITUDE_ORIGIN),
    )


# ═══════════════════════════════════════════════════════════════════════════
# 🕳️ DISPATCH
# ═══════════════════════════════════════════════════════════════════════════


def resolve_hole_spec(spec: HoleSpec, context: HoleContext) -> List[ExactCoordinate]:
    """Resolve one hole specification to zero or more anchors."""
    if isinstance(spec, SingleCoordinate):
        return [resolve_coordinate(spec.longitude, spec.latitude, context.governing)]
    if isinstance(spec, CoordinateList):
        return [
            anchor
            for item in spec.coordinates
            for anchor in resolve_hole_spec(item, context)
        ]
    if isinstance(spec, DelimitedString):
        longitude, latitude = split_delimited(spec.text)
        return [resolve_coordinate(longitude, latitude, context.governing)]
    if isinstance(spec, SingleIndex):
        return [context.index_anchor(spec.index)]
    if isinstance(spec, IndexList):
        return [context.index_anchor(index) for index in spec.indices]
    raise UnsupportedElement(f"Unsupported hole specification: {spec!r}")


def resolve_holes(holes: Iterable[Any], context: HoleContext) -> List[ExactCoordinate]:
    """Resolve every hole entry, in order, keeping duplicates.

    Args:
        holes: Tagged specifications or raw values accepted by
            hole_spec_from_value().
        context: ZoneHoleContext or MystHoleContext.

    Returns:
        Anchors in input order.
    """
    anchors: List[ExactCoordinate] = []
    for hole in holes:
        spec = hole_spec_from_value(hole)
        if spec is None:
            continue
        resolved = resolve_hole_spec(spec, context)
        for anchor in resolved:
            logger.debug(f"   🕳️ Hole resolved: {anchor}")
        anchors.extend(resolved)
    return anchors


__all__ = [
    "MYST_INDEX_STEP",
    "ZoneHoleContext",
    "MystHoleContext",
    "resolve_coordinate",
    "split_delimited",
    "parse_index",
    "tiles_per_side",
    "zone_index_anchor",
    "inverse_cantor",
    "myst_index_anchor",
    "resolve_hole_spec",
    "resolve_holes",
]
