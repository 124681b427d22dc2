"""
Fog Machine read-back helpers - generated GeoJSON to shapely / geopandas.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Load documents written by the generators into GIS objects so
that downstream tooling (and the tests) can work with real geometries.

Key Entry Points:
- load_feature_collection(): raw GeoJSON dict
- zone_to_geodataframe(): one row per tile, hole tiles with empty geometry
- myst_to_geometry(): the Myst mask as a shapely MultiPolygon
- summarize_fog(): kind, feature / hole counts and bounds of a document

Coordinates are read with parse_float=Decimal in load_feature_collection(),
so callers can compare exact values; geometry helpers convert to float for
shapely.

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Union

import geopandas as gpd
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("FogMachine.Exporters")

CRS_WGS84 = "EPSG:4326"

# Columns owned by zone_to_geodataframe; properties may not reuse them.
RESERVED_COLUMNS = ("id", "geometry")


# ═══════════════════════════════════════════════════════════════════════════
# 🔧 HELPER FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════


def load_feature_collection(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a generated document.

    Args:
        path: GeoJSON file written by generate_zone / generate_myst.

    Returns:
        FeatureCollection dict. Non-integer numbers are Decimal.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f, parse_float=Decimal)
    if data.get("type") != "FeatureCollection":
        raise ValueError(f"{path} is not a GeoJSON FeatureCollection")
    return data


def _ring_to_floats(ring: List[List[Any]]) -> List[tuple]:
    return [(float(lon), float(lat)) for lon, lat in ring]


def _polygon_from_rings(rings: List[List[List[Any]]]) -> Polygon:
    if not rings:
        return Polygon()
    shell, *holes = rings
    return Polygon(_ring_to_floats(shell), [_ring_to_floats(hole) for hole in holes])


# ═══════════════════════════════════════════════════════════════════════════
# 🗺️ ZONE
# ═══════════════════════════════════════════════════════════════════════════


def zone_to_geodataframe(path: Union[str, Path]) -> gpd.GeoDataFrame:
    """
    Load a Zone document as a GeoDataFrame (EPSG:4326).

    Columns: "id" (int), one column per property, "geometry". Hole tiles
    keep their row with an empty Polygon.

    Raises:
        ValueError: If the document is not a Zone, or a property is named
            "id" or "geometry".
    """
    collection = load_feature_collection(path)

    records: List[Dict[str, Any]] = []
    geometries: List[BaseGeometry] = []
    for feature in collection["features"]:
        geometry = feature["geometry"]
        if geometry["type"] != "Polygon":
            raise ValueError(f"{path} is not a Zone document ({geometry['type']})")
        properties = feature.get("properties") or {}
        clashes = [name for name in RESERVED_COLUMNS if name in properties]
        if clashes:
            raise ValueError(
                f"{path}: property name(s) {clashes} collide with reserved columns"
            )
        record = {"id": int(feature["id"])}
        record.update(properties)
        records.append(record)
        geometries.append(_polygon_from_rings(geometry["coordinates"]))

    logger.debug(f"📥 Loaded {len(records)} tiles from {path}")
    return gpd.GeoDataFrame(records, geometry=geometries, crs=CRS_WGS84)


# ═══════════════════════════════════════════════════════════════════════════
# 🌫️ MYST
# ═══════════════════════════════════════════════════════════════════════════


def myst_to_geometry(path: Union[str, Path]) -> MultiPolygon:
    """Load a Myst document as a MultiPolygon (world shell, holes as interiors)."""
    collection = load_feature_collection(path)
    features = collection["features"]
    if len(features) != 1 or features[0]["geometry"]["type"] != "MultiPolygon":
        raise ValueError(f"{path} is not a Myst document")

    polygons = [_polygon_from_rings(rings) for rings in features[0]["geometry"]["coordinates"]]
    return MultiPolygon(polygons)


# ═══════════════════════════════════════════════════════════════════════════
# 📊 SUMMARY
# ═══════════════════════════════════════════════════════════════════════════


def summarize_fog(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Describe a generated document.

    Returns:
        {"kind": "zone" | "myst", "feature_count": int, "hole_count": int,
         "bounds": (minx, miny, maxx, maxy)}
    """
    collection = load_feature_collection(path)
    features = collection["features"]
    if features and features[0]["geometry"]["type"] == "MultiPolygon":
        geometry = myst_to_geometry(path)
        hole_count = sum(len(polygon.interiors) for polygon in geometry.geoms)
        return {
            "kind": "myst",
            "feature_count": len(features),
            "hole_count": hole_count,
            "bounds": geometry.bounds,
        }

    tiles = zone_to_geodataframe(path)
    filled = tiles[~tiles.geometry.is_empty]
    return {
        "kind": "zone",
        "feature_count": len(tiles),
        "hole_count": int(tiles.geometry.is_empty.sum()),
        "bounds": tuple(filled.total_bounds) if len(filled) else None,
    }


__all__ = [
    "CRS_WGS84",
    "RESERVED_COLUMNS",
    "load_feature_collection",
    "zone_to_geodataframe",
    "myst_to_geometry",
    "summarize_fog",
]
