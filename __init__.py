"""
Fog Machine

Exact-decimal GeoJSON generator for Zones (uniform grids of square tiles
with optional holes) and Myst (a world-covering mask with optional holes).
"""

from Fog_Machine.builders import (
    build_myst_spec,
    build_zone_spec,
    generate_myst,
    generate_zone,
)
from Fog_Machine.errors import FogMachineError
from Fog_Machine.models.data_models import ExactCoordinate, Hole, Property
from Fog_Machine.scale_table import Coarseness

__all__ = [
    "generate_zone",
    "generate_myst",
    "build_zone_spec",
    "build_myst_spec",
    "Coarseness",
    "ExactCoordinate",
    "Hole",
    "Property",
    "FogMachineError",
]
