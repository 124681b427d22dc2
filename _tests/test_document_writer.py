"""
Unit tests for the streaming FeatureCollection writer.

Tests:
1. Envelope and comma placement
2. Sink is closed exactly once on success and on failure
3. I/O errors surface as IOFailure; no closing brackets after a failure
4. Output path normalization

Run with: python -m pytest Fog_Machine/_tests/test_document_writer.py -v
"""

import io
from decimal import Decimal

import pytest

from Fog_Machine.document_writer import (
    FeatureCollectionWriter,
    format_ring,
    myst_feature,
    normalize_output_path,
    zone_feature,
)
from Fog_Machine.errors import IOFailure, ParameterError
from Fog_Machine.models.data_models import ExactCoordinate


class RecordingSink(io.StringIO):
    """StringIO that counts close() calls and stays readable afterwards."""

    def __init__(self, fail_on_write: int = 0, error=None):
        super().__init__()
        self.close_calls = 0
        self._fail_on_write = fail_on_write
        self._error = error
        self._writes = 0

    def write(self, text):
        self._writes += 1
        if self._writes == self._fail_on_write:
            raise self._error or OSError("disk full")
        return super().write(text)

    def close(self):
        self.close_calls += 1


# ============================================================================
# ENVELOPE
# ============================================================================


class TestEnvelope:
    """Header, separators, footer."""

    def test_empty_collection(self):
        sink = RecordingSink()
        with FeatureCollectionWriter(sink) as writer:
            pass
        assert sink.getvalue() == '{"type":"FeatureCollection","features":[]}'
        assert writer.feature_count == 0
        assert sink.close_calls == 1

    def test_commas_between_features_only(self):
        sink = RecordingSink()
        with FeatureCollectionWriter(sink) as writer:
            writer.write_feature("A")
            writer.write_feature("B")
            writer.write_feature("C")
        assert sink.getvalue() == '{"type":"FeatureCollection","features":[A,B,C]}'
        assert writer.feature_count == 3


# ============================================================================
# FAILURES
# ============================================================================


class TestFailures:
    """Scoped release of the sink."""

    def test_header_failure_still_closes(self):
        sink = RecordingSink(fail_on_write=1)
        with pytest.raises(IOFailure):
            with FeatureCollectionWriter(sink):
                pass
        assert sink.close_calls == 1

    def test_feature_failure_closes_without_footer(self):
        sink = RecordingSink(fail_on_write=3)
        with pytest.raises(IOFailure) as excinfo:
            with FeatureCollectionWriter(sink) as writer:
                writer.write_feature("A")
                writer.write_feature("B")
        assert isinstance(excinfo.value.__cause__, OSError)
        assert not sink.getvalue().endswith("]}")
        assert sink.close_calls == 1

    def test_unencodable_text_becomes_io_failure(self):
        error = UnicodeEncodeError("ascii", "\u00fc", 0, 1, "ordinal not in range(128)")
        sink = RecordingSink(fail_on_write=2, error=error)
        with pytest.raises(IOFailure) as excinfo:
            with FeatureCollectionWriter(sink) as writer:
                writer.write_feature("A")
        assert excinfo.value.__cause__ is error
        assert sink.close_calls == 1

    def test_non_utf8_sink_fails_cleanly(self, tmp_path):
        stream = open(tmp_path / "x.geojson", "w", encoding="ascii")
        with pytest.raises(IOFailure):
            with FeatureCollectionWriter(stream) as writer:
                writer.write_feature('{"name":"\u00fc"}')
        assert stream.closed

    def test_error_in_body_propagates_unchanged(self):
        sink = RecordingSink()
        with pytest.raises(RuntimeError, match="boom"):
            with FeatureCollectionWriter(sink) as writer:
                writer.write_feature("A")
                raise RuntimeError("boom")
        assert sink.getvalue() == '{"type":"FeatureCollection","features":[A'
        assert sink.close_calls == 1


# ============================================================================
# FEATURE TEXT
# ============================================================================


class TestFeatureText:
    """Compact feature fragments."""

    def test_hole_tile(self):
        assert zone_feature(7, None, "{}") == (
            '{"type":"Feature","id":"7",'
            '"geometry":{"type":"Polygon","coordinates":[]},"properties":{}}'
        )

    def test_ring_uses_minimal_decimals(self):
        ring = [
            ExactCoordinate(Decimal("1.500"), Decimal("-0.000")),
            ExactCoordinate(Decimal("10"), Decimal("0.0001")),
        ]
        assert format_ring(ring) == "[[1.5,0],[10,0.0001]]"

    def test_myst_feature_nesting(self):
        ring = [ExactCoordinate(Decimal(0), Decimal(0))]
        assert myst_feature([ring, ring], '{"a":1}') == (
            '{"type":"Feature","geometry":{"type":"MultiPolygon",'
            '"coordinates":[[[[0,0]],[[0,0]]]]},"properties":{"a":1}}'
        )


class TestOutputPath:
    """Suffix handling."""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("zone", "zone.geojson"),
            ("zone.geojson", "zone.geojson"),
            ("zone.json", "zone.json.geojson"),
            ("out/dir/zone", "out/dir/zone.geojson"),
        ],
    )
    def test_suffix(self, path, expected):
        assert normalize_output_path(path).as_posix() == expected

    def test_custom_suffix(self):
        assert normalize_output_path("zone", ".json").as_posix() == "zone.json"

    @pytest.mark.parametrize("path", ["", "   "])
    def test_empty_path(self, path):
        with pytest.raises(ParameterError):
            normalize_output_path(path)
