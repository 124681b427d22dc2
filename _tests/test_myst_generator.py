"""
Tests for Myst generation.

Tests:
1. Byte-exact world mask without holes
2. Hole rings from coordinates and from pairing indices
3. Winding and area as seen by shapely
4. Coarseness / hole consistency errors

Run with: python -m pytest Fog_Machine/_tests/test_myst_generator.py -v
"""

import json

import pytest
from shapely.geometry import Polygon, shape

from Fog_Machine.builders import build_myst_spec, generate_myst
from Fog_Machine.errors import DuplicateHole, ParameterError, ScaleMismatch
from Fog_Machine.models.data_models import Hole
from Fog_Machine.myst_generator import WORLD_RING, hole_ring, myst_rings

WORLD_TEXT = "[[0,90],[-180,90],[-180,0],[-180,-90],[0,-90],[180,-90],[180,90],[0,90]]"


def _rings(path):
    document = json.loads(path.read_text(encoding="utf-8"))
    assert len(document["features"]) == 1
    geometry = document["features"][0]["geometry"]
    assert geometry["type"] == "MultiPolygon"
    assert len(geometry["coordinates"]) == 1
    return geometry["coordinates"][0]


# ============================================================================
# DOCUMENT SHAPE
# ============================================================================


class TestMystDocument:
    """One feature, one polygon, world ring first."""

    def test_world_mask_without_holes(self, tmp_path):
        result = generate_myst(tmp_path / "world")
        assert result.path.read_text(encoding="utf-8") == (
            '{"type":"FeatureCollection","features":[{"type":"Feature",'
            '"geometry":{"type":"MultiPolygon","coordinates":[['
            + WORLD_TEXT
            + ']]},"properties":{}}]}'
        )
        assert result.feature_count == 1
        assert result.hole_count == 0

    def test_world_ring_is_closed_and_ccw(self):
        assert len(WORLD_RING) == 8
        assert WORLD_RING[0] == WORLD_RING[-1]
        polygon = Polygon([(float(p.longitude), float(p.latitude)) for p in WORLD_RING])
        assert polygon.exterior.is_ccw
        assert polygon.area == pytest.approx(360 * 180)

    def test_properties_written(self, tmp_path):
        result = generate_myst(tmp_path / "world", properties={"Owner": "me", "level": 3})
        document = json.loads(result.path.read_text(encoding="utf-8"))
        assert document["features"][0]["properties"] == {"owner": "me", "level": 3}
        assert "id" not in document["features"][0]


# ============================================================================
# HOLES
# ============================================================================


class TestMystHoles:
    """Inner rings: exact squares, clockwise."""

    def test_index_hole_ring(self, tmp_path):
        result = generate_myst(tmp_path / "world", zone_coarseness="SUPER_COARSE", holes=[1])
        rings = _rings(result.path)
        assert len(rings) == 2
        assert rings[1] == [
            [-179.8, -90],
            [-179.9, -90],
            [-179.9, -89.9],
            [-179.8, -89.9],
            [-179.8, -90],
        ]
        assert result.hole_count == 1

    def test_coordinate_holes_in_input_order(self, tmp_path):
        result = generate_myst(
            tmp_path / "world",
            zone_coarseness="COARSE",
            holes=["10.25,20.5", (0, 0), Hole(ids=["2"])],
        )
        rings = _rings(result.path)
        assert [ring[1] for ring in rings[1:]] == [[10.25, 20.5], [0, 0], [-180, -89.9]]
        assert rings[1][3] == [10.26, 20.51]

    def test_inner_rings_are_clockwise(self, tmp_path):
        result = generate_myst(
            tmp_path / "world", zone_coarseness="SUPER_COARSE", holes=[4, "5,5", "-10.3,7.2"]
        )
        rings = _rings(result.path)
        polygon = Polygon(rings[0], rings[1:])
        assert polygon.is_valid
        assert polygon.exterior.is_ccw
        assert all(not interior.is_ccw for interior in polygon.interiors)
        assert polygon.area == pytest.approx(64800 - 3 * 0.01)

    def test_shapely_reads_multipolygon(self, tmp_path):
        result = generate_myst(tmp_path / "world", zone_coarseness="COARSE", holes=[3])
        document = json.loads(result.path.read_text(encoding="utf-8"))
        geometry = shape(document["features"][0]["geometry"])
        assert geometry.geom_type == "MultiPolygon"
        assert len(geometry.geoms[0].interiors) == 1

    def test_hole_ring_order(self):
        spec = build_myst_spec("unused", "SUPER_DUPER_COARSE", holes="3 4")
        ring = hole_ring(spec.holes[0], spec.zone_coarseness.decimal)
        assert [point.as_text() for point in ring] == [
            ("4", "4"),
            ("3", "4"),
            ("3", "5"),
            ("4", "5"),
            ("4", "4"),
        ]
        assert len(myst_rings(spec)) == 2


# ============================================================================
# VALIDATION
# ============================================================================


class TestMystValidation:
    """Zone coarseness present iff holes are; hole scales fit it."""

    def test_coarseness_without_holes(self, tmp_path):
        with pytest.raises(ParameterError, match="only be defined"):
            generate_myst(tmp_path / "world", zone_coarseness="COARSE")
        assert list(tmp_path.iterdir()) == []

    def test_index_holes_without_coarseness(self, tmp_path):
        with pytest.raises(ParameterError, match="required"):
            generate_myst(tmp_path / "world", holes=[1])
        assert list(tmp_path.iterdir()) == []

    def test_coordinate_holes_without_coarseness(self):
        with pytest.raises(ParameterError, match="required"):
            build_myst_spec("unused", holes=["0,0"])

    def test_index_anchor_finer_than_coarseness(self):
        with pytest.raises(ScaleMismatch):
            build_myst_spec("unused", "SUPER_DUPER_COARSE", holes=[1])

    def test_coordinate_finer_than_coarseness(self):
        with pytest.raises(ScaleMismatch):
            build_myst_spec("unused", "SUPER_COARSE", holes=["0.05,0"])

    def test_duplicate_via_coordinates_and_index(self):
        with pytest.raises(DuplicateHole):
            build_myst_spec(
                "unused", "SUPER_COARSE", holes=Hole(coordinates=(-179.9, -90), ids=1)
            )
