"""
Typed data models for Zone and Myst generation.

Architectural Overview:
=======================
Immutable dataclasses that carry validated generation parameters from the
builders to the generators. Caller input is loose (numbers, strings, tuples,
lists); everything here is already normalized:

- ExactCoordinate: exact-decimal (longitude, latitude) pair
- Property: lower-cased name + already formatted JSON literal
- Hole specification variants: tagged union consumed once by hole_resolver
- ZoneSpec / MystSpec: the complete, resolved input of one generation run
- GenerationResult: what a generation run reports back

Key Interactions:
-----------------
- builders.py constructs specs from raw caller parameters
- hole_resolver.py turns hole specifications into ExactCoordinate anchors
- validator.py checks ZoneSpec / MystSpec invariants before any byte is written
- zone_generator.py / myst_generator.py consume the specs

Navigation: Use VS Code outline (Ctrl+Shift+O) for quick navigation
"""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from Fog_Machine.errors import ParameterError, UnsupportedElement
from Fog_Machine.scale_table import (
    Coarseness,
    add,
    format_decimal,
    parse_decimal,
    scale_of,
)


# ═══════════════════════════════════════════════════════════════════════════
# 📍 EXACT COORDINATE
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ExactCoordinate:
    """Exact-decimal (longitude, latitude) pair.

    Equality and hashing use the decimal values, so Decimal("0.10") and
    Decimal("0.1") produce equal coordinates. Scale differences alone never
    make two coordinates distinct.
    """

    longitude: Decimal
    latitude: Decimal

    @classmethod
    def parse(cls, longitude: Any, latitude: Any) -> "ExactCoordinate":
        """Build from caller values (str, int, float or Decimal)."""
        return cls(
            parse_decimal(longitude, "longitude"),
            parse_decimal(latitude, "latitude"),
        )

    @property
    def longitude_scale(self) -> int:
        return scale_of(self.longitude)

    @property
    def latitude_scale(self) -> int:
        return scale_of(self.latitude)

    @property
    def scale(self) -> int:
        """Larger of the two axis scales."""
        return max(self.longitude_scale, self.latitude_scale)

    def offset(self, d_lon: Decimal, d_lat: Decimal) -> "ExactCoordinate":
        """Exact translation by (d_lon, d_lat)."""
        return ExactCoordinate(add(self.longitude, d_lon), add(self.latitude, d_lat))

    def as_text(self) -> Tuple[str, str]:
        """Minimal decimal literals for both axes."""
        return format_decimal(self.longitude), format_decimal(self.latitude)

    def __str__(self) -> str:
        lon, lat = self.as_text()
        return f"({lon}, {lat})"


# ═══════════════════════════════════════════════════════════════════════════
# 🏷️ PROPERTIES
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Property:
    """One feature property: lower-cased name and its JSON literal text.

    The literal is inserted verbatim by the document writer, so it must
    already be valid JSON (see document_writer.format_property_literal).
    """

    name: str
    literal: str = "null"

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ParameterError(f"Property name must be a non-empty string: {self.name!r}")
        for what, text in (("name", self.name), ("value", self.literal)):
            try:
                text.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise ParameterError(
                    f"Property {what} is not encodable as UTF-8: {text!r}"
                ) from exc
        object.__setattr__(self, "name", self.name.lower())

    @classmethod
    def from_value(cls, name: str, value: Any = None) -> "Property":
        """Create a property from a typed value (str/number/bool/list/dict/None)."""
        from Fog_Machine.document_writer import format_property_literal

        return cls(name=name, literal=format_property_literal(value, name=name))


# ═══════════════════════════════════════════════════════════════════════════
# 🕳️ HOLE SPECIFICATIONS (tagged union)
# ═══════════════════════════════════════════════════════════════════════════

_COORDINATE_COMPONENT_TYPES = (str, int, float, Decimal)
_INDEX_TYPES = (int, str)


def _check_component(value: Any, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, _COORDINATE_COMPONENT_TYPES):
        raise UnsupportedElement(
            f"Unsupported {what} in hole coordinates: {type(value).__name__} ({value!r})"
        )


def _check_index(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, _INDEX_TYPES):
        raise UnsupportedElement(
            f"Unsupported hole ID: {type(value).__name__} ({value!r})"
        )


@dataclass(frozen=True)
class SingleCoordinate:
    """One hole given as a (longitude, latitude) pair."""

    longitude: Any
    latitude: Any

    def __post_init__(self) -> None:
        _check_component(self.longitude, "longitude")
        _check_component(self.latitude, "latitude")


@dataclass(frozen=True)
class CoordinateList:
    coordinates: Tuple[SingleCoordinate, ...]


@dataclass(frozen=True)
class DelimitedString:
    """One hole given as text: "lon,lat", "lon lat", "lon_lat" or "lon/lat"."""

    text: str


@dataclass(frozen=True)
class SingleIndex:
    """One hole given by raster index (Zone) or pairing index (Myst)."""

    index: Union[int, str]

    def __post_init__(self) -> None:
        _check_index(self.index)


@dataclass(frozen=True)
class IndexList:
    indices: Tuple[Union[int, str], ...]

    def __post_init__(self) -> None:
        for index in self.indices:
            _check_index(index)


HoleSpec = Union[SingleCoordinate, CoordinateList, DelimitedString, SingleIndex, IndexList]

_HOLE_SPEC_TYPES = (SingleCoordinate, CoordinateList, DelimitedString, SingleIndex, IndexList)


def _as_single_coordinate(value: Any) -> SingleCoordinate:
    if isinstance(value, SingleCoordinate):
        return value
    if isinstance(value, ExactCoordinate):
        return SingleCoordinate(value.longitude, value.latitude)
    if isinstance(value, tuple) and len(value) == 2:
        return SingleCoordinate(value[0], value[1])
    raise UnsupportedElement(f"Unsupported item in coordinate list: {value!r}")


def coordinates_spec(value: Any) -> Optional[HoleSpec]:
    """Classify a value given as hole *coordinates*.

    str -> DelimitedString, (lon, lat) -> SingleCoordinate,
    list of pairs -> CoordinateList, None -> None.
    """
    if value is None:
        return None
    if isinstance(value, (SingleCoordinate, CoordinateList, DelimitedString)):
        return value
    if isinstance(value, str):
        return DelimitedString(value)
    if isinstance(value, (tuple, ExactCoordinate)):
        return _as_single_coordinate(value)
    if isinstance(value, list):
        return CoordinateList(tuple(_as_single_coordinate(item) for item in value))
    raise UnsupportedElement(f"Invalid coordinates format: {value!r}")


def ids_spec(value: Any) -> Optional[HoleSpec]:
    """Classify a value given as hole *IDs*.

    int or numeric str -> SingleIndex, list -> IndexList, None -> None.
    """
    if value is None:
        return None
    if isinstance(value, (SingleIndex, IndexList)):
        return value
    if isinstance(value, (list, tuple)):
        return IndexList(tuple(value))
    if isinstance(value, bool) or not isinstance(value, _INDEX_TYPES):
        raise UnsupportedElement(f"Invalid IDs format: {value!r}")
    return SingleIndex(value)


def hole_spec_from_value(value: Any) -> Optional[HoleSpec]:
    """Classify an untyped hole entry into one of the tagged variants.

    Strings are treated as delimited coordinates, ints as indices, pairs as
    coordinates. Lists are classified by their elements: all pairs give a
    CoordinateList, all ints / strings give an IndexList.

    Raises:
        UnsupportedElement: For any other shape, including mixed lists.
    """
    if value is None or isinstance(value, _HOLE_SPEC_TYPES):
        return value
    if isinstance(value, Hole):
        raise UnsupportedElement("Use Hole.specs() to expand a Hole record")
    if isinstance(value, str):
        return DelimitedString(value)
    if isinstance(value, bool):
        raise UnsupportedElement(f"Unsupported hole value: {value!r}")
    if isinstance(value, int):
        return SingleIndex(value)
    if isinstance(value, (tuple, ExactCoordinate)):
        return _as_single_coordinate(value)
    if isinstance(value, list):
        if not value:
            return None
        if all(isinstance(item, (tuple, ExactCoordinate, SingleCoordinate)) for item in value):
            return coordinates_spec(value)
        if all(isinstance(item, _INDEX_TYPES) and not isinstance(item, bool) for item in value):
            return IndexList(tuple(value))
        raise UnsupportedElement(f"Unsupported item(s) in list! {value!r}")
    raise UnsupportedElement(f"Unsupported hole value: {type(value).__name__} ({value!r})")


@dataclass(frozen=True)
class Hole:
    """A hole block: coordinates, IDs, or both.

    Both fields are classified when the record is created, so a bad
    value fails at construction rather than at generation.
    """

    coordinates: Any = None
    ids: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", coordinates_spec(self.coordinates))
        object.__setattr__(self, "ids", ids_spec(self.ids))

    def specs(self) -> List[HoleSpec]:
        return [spec for spec in (self.coordinates, self.ids) if spec is not None]


# ═══════════════════════════════════════════════════════════════════════════
# 🗺️ GENERATION SPECS
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ZoneSpec:
    """Resolved parameters for one Zone document.

    Attributes:
        path: Normalized output path (ends with the configured suffix).
        origin: Lower-left corner of the zone.
        tile_coarseness: Side length of each tile.
        zone_coarseness: Side length of the whole zone.
        properties: Properties inserted into every tile.
        holes: Resolved tile anchors (lower-left corners) to leave empty.
    """

    path: Path
    origin: ExactCoordinate
    tile_coarseness: Coarseness
    zone_coarseness: Coarseness
    properties: Tuple[Property, ...] = ()
    holes: Tuple[ExactCoordinate, ...] = ()

    @property
    def tiles_per_side(self) -> int:
        ratio = self.zone_coarseness.decimal / self.tile_coarseness.decimal
        return int(ratio)

    @property
    def feature_count(self) -> int:
        return self.tiles_per_side**2

    @property
    def upper_right(self) -> ExactCoordinate:
        """Exclusive upper corner: origin + zone side on both axes."""
        side = self.zone_coarseness.decimal
        return self.origin.offset(side, side)


@dataclass(frozen=True)
class MystSpec:
    """Resolved parameters for one Myst document.

    zone_coarseness is the side of every hole square; it is None exactly
    when there are no holes.
    """

    path: Path
    zone_coarseness: Optional[Coarseness] = None
    properties: Tuple[Property, ...] = ()
    holes: Tuple[ExactCoordinate, ...] = ()


@dataclass
class GenerationResult:
    """Outcome of one generation run.

    Attributes:
        path: File that was written.
        feature_count: Number of features in the FeatureCollection.
        hole_count: Number of resolved holes.
        warnings: Advisory notices (never fatal), e.g. large output size.
    """

    path: Path
    feature_count: int
    hole_count: int
    warnings: List[str] = field(default_factory=list)
