"""
GeoJSON Document Writer - streaming FeatureCollection output.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Turn generated features into GeoJSON text and stream it to
the output file without building the whole document in memory.

Output shape:
    {"type":"FeatureCollection","features":[<feature>,<feature>,...]}

Text is written compactly with a fixed key order. Coordinates are printed
as minimal exact decimals (scale_table.format_decimal); property values are
inserted as pre-formatted JSON literals.

Key Entry Points:
- normalize_output_path() / open_sink(): path suffix + directory creation
- FeatureCollectionWriter: context manager that owns the sink
- zone_feature() / myst_feature(): feature text builders
- format_property_literal(): typed value -> JSON literal text

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

import json
import logging
import math
import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Sequence, TextIO, Tuple, Union

from Fog_Machine.config_types import OutputConfig
from Fog_Machine.errors import IOFailure, ParameterError, PathError
from Fog_Machine.models.data_models import ExactCoordinate, Property

logger = logging.getLogger("FogMachine.DocumentWriter")

_COLLECTION_OPEN = '{"type":"FeatureCollection","features":['
_COLLECTION_CLOSE = "]}"


# ═══════════════════════════════════════════════════════════════════════════
# 📁 SINK PROVIDER
# ═══════════════════════════════════════════════════════════════════════════


def normalize_output_path(path: Union[str, Path], suffix: str = ".geojson") -> Path:
    """Append `suffix` unless the path already ends with it."""
    text = str(path)
    if not text.strip():
        raise ParameterError("Output path must not be empty")
    if not text.endswith(suffix):
        text = f"{text}{suffix}"
    return Path(text)


def open_sink(
    path: Union[str, Path], output: Optional[OutputConfig] = None
) -> Tuple[Path, TextIO]:
    """
    Create parent directories and open the output file for writing.

    Existing files are overwritten.

    Args:
        path: Requested output path (suffix added if missing).
        output: Output settings (suffix, encoding).

    Returns:
        (normalized path, open text stream)

    Raises:
        PathError: If the directory or file cannot be created or written.
    """
    output = output or OutputConfig()
    target = normalize_output_path(path, output.suffix)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PathError(f"Error: Access denied to create directory {target.parent}") from exc

    if target.exists() and (target.is_dir() or not os.access(target, os.W_OK)):
        raise PathError(f"Error: Access denied to write file at {target}")

    try:
        stream = open(target, "w", encoding=output.encoding, newline="")
    except OSError as exc:
        raise PathError(f"Error: Access denied to create file at {target}") from exc

    logger.debug(f"📁 Opened sink: {target}")
    return target, stream


# ═══════════════════════════════════════════════════════════════════════════
# ✍️ STREAMING WRITER
# ═══════════════════════════════════════════════════════════════════════════


class FeatureCollectionWriter:
    """
    Streams one FeatureCollection to a text sink.

    The sink is closed exactly once when the context exits, whether or not
    generation succeeded. The closing brackets are only written on success.

    Usage:
        with FeatureCollectionWriter(stream) as writer:
            writer.write_feature(text)
    """

    def __init__(self, sink: TextIO):
        self._sink = sink
        self._first = True
        self.feature_count = 0

    def __enter__(self) -> "FeatureCollectionWriter":
        try:
            self._write(_COLLECTION_OPEN)
        except IOFailure:
            self._close(raise_errors=False)
            raise
        return self

    def write_feature(self, feature_text: str) -> None:
        if self._first:
            self._first = False
        else:
            self._write(",")
        self._write(feature_text)
        self.feature_count += 1

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self._write(_COLLECTION_CLOSE)
                self._flush()
        finally:
            self._close(raise_errors=exc_type is None)

    def _write(self, text: str) -> None:
        try:
            self._sink.write(text)
        except (OSError, UnicodeEncodeError) as error:
            raise IOFailure("ERROR: An error occurred while generating GeoJSON file.") from error

    def _flush(self) -> None:
        try:
            self._sink.flush()
        except OSError as error:
            raise IOFailure("ERROR: An error occurred while flushing GeoJSON file.") from error

    def _close(self, raise_errors: bool) -> None:
        try:
            self._sink.close()
        except OSError as error:
            if raise_errors:
                raise IOFailure("ERROR: An error occurred while closing GeoJSON file.") from error
            logger.error(f"❌ Failed to close sink after an earlier error: {error}")


# ═══════════════════════════════════════════════════════════════════════════
# 🧱 FEATURE TEXT
# ═══════════════════════════════════════════════════════════════════════════


def format_point(point: ExactCoordinate) -> str:
    lon, lat = point.as_text()
    return f"[{lon},{lat}]"


def format_ring(points: Sequence[ExactCoordinate]) -> str:
    return "[" + ",".join(format_point(point) for point in points) + "]"


def format_properties(properties: Sequence[Property]) -> str:
    members = (
        f"{json.dumps(prop.name, ensure_ascii=False)}:{prop.literal}"
        for prop in properties
    )
    return "{" + ",".join(members) + "}"


def zone_feature(
    feature_id: int,
    ring: Optional[Sequence[ExactCoordinate]],
    properties_text: str,
) -> str:
    """Zone tile feature. A ring of None writes empty coordinates (a hole)."""
    coordinates = "" if ring is None else format_ring(ring)
    return (
        f'{{"type":"Feature","id":"{feature_id}",'
        f'"geometry":{{"type":"Polygon","coordinates":[{coordinates}]}},'
        f'"properties":{properties_text}}}'
    )


def myst_feature(rings: Sequence[Sequence[ExactCoordinate]], properties_text: str) -> str:
    """Myst feature: one polygon (outer ring first, then hole rings)."""
    coordinates = ",".join(format_ring(ring) for ring in rings)
    return (
        '{"type":"Feature",'
        f'"geometry":{{"type":"MultiPolygon","coordinates":[[{coordinates}]]}},'
        f'"properties":{properties_text}}}'
    )


# ═══════════════════════════════════════════════════════════════════════════
# 🏷️ PROPERTY LITERALS
# ═══════════════════════════════════════════════════════════════════════════


def format_property_literal(value: Any, name: str = "") -> str:
    """
    Convert a typed property value to its exact JSON literal text.

    Supported: None, bool, int, float (finite), Decimal (finite), str,
    list / tuple and dict (JSON-serializable contents).

    Raises:
        ParameterError: For unsupported types or non-finite numbers.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParameterError(f"Property: {name} has a non-finite value: {value}")
        return json.dumps(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ParameterError(f"Property: {name} has a non-finite value: {value}")
        return format(value, "f")
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(
                value, ensure_ascii=False, allow_nan=False, separators=(",", ":")
            )
        except (TypeError, ValueError) as exc:
            raise ParameterError(
                f"Property: {name} has an unsupported value: {value!r}"
            ) from exc
    raise ParameterError(f"Property: {name} has an unsupported value: {value!r}")


__all__ = [
    "normalize_output_path",
    "open_sink",
    "FeatureCollectionWriter",
    "format_point",
    "format_ring",
    "format_properties",
    "zone_feature",
    "myst_feature",
    "format_property_literal",
]
