"""Data models package for typed Zone / Myst generation parameters."""

from Fog_Machine.scale_table import Coarseness

from .data_models import (
    ExactCoordinate,
    Property,
    # Hole specification variants
    SingleCoordinate,
    CoordinateList,
    DelimitedString,
    SingleIndex,
    IndexList,
    HoleSpec,
    Hole,
    # Classification helpers
    coordinates_spec,
    ids_spec,
    hole_spec_from_value,
    # Generation specs
    ZoneSpec,
    MystSpec,
    GenerationResult,
)

__all__ = [
    "Coarseness",
    "ExactCoordinate",
    "Property",
    # Hole specification variants
    "SingleCoordinate",
    "CoordinateList",
    "DelimitedString",
    "SingleIndex",
    "IndexList",
    "HoleSpec",
    "Hole",
    # Classification helpers
    "coordinates_spec",
    "ids_spec",
    "hole_spec_from_value",
    # Generation specs
    "ZoneSpec",
    "MystSpec",
    "GenerationResult",
]
