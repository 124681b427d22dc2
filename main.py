#!/usr/bin/env python3
"""
Fog Machine - Main Entry Point

Generates Zone (grid of square tiles) and Myst (world mask with holes)
GeoJSON documents from the command line.

Usage:
    fog-machine zone out/harbour --origin 0 0 --tile MEDIUM --zone COARSE \\
        --hole-id 55 --property name=harbour
    fog-machine myst out/world --zone SUPER_COARSE --hole=-179.9,-90 --hole-id 2

    Or:
    python -m Fog_Machine.main myst out/world
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple

from Fog_Machine.builders import generate_myst, generate_zone
from Fog_Machine.config import CONFIG
from Fog_Machine.config_types import AppConfig
from Fog_Machine.errors import FogMachineError
from Fog_Machine.models.data_models import Hole
from Fog_Machine.scale_table import Coarseness

# ═══════════════════════════════════════════════════════════════════════════
# 🎯 MODULE-LEVEL CONFIG (Single Source of Truth)
# ═══════════════════════════════════════════════════════════════════════════
APP_CONFIG = AppConfig.from_dict(CONFIG)

LOGGER_NAME = "FogMachine"


# ═══════════════════════════════════════════════════════════════════════════
# 📋 LOGGING SETUP
# ═══════════════════════════════════════════════════════════════════════════


def setup_logging(
    level: Optional[int] = None,
    log_to_file: Optional[bool] = None,
    app_config: AppConfig = APP_CONFIG,
) -> Tuple[logging.Logger, Optional[Path]]:
    """Configure the FogMachine logger with console and optional file handlers.

    Returns:
        Tuple of (logger, log_path); log_path is None without a file handler.

    File naming convention:
        run_{MMDD}_{HHMMSS}.log inside the configured log directory.
    """
    level = app_config.logging.level_number if level is None else level
    if log_to_file is None:
        log_to_file = app_config.logging.log_to_file

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    # Console handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(ch)

    log_path = None
    if log_to_file:
        log_dir = app_config.logging.log_path
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"run_{datetime.now().strftime('%m%d_%H%M%S')}.log"

        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(fh)

    return logger, log_path


# ═══════════════════════════════════════════════════════════════════════════
# 🧾 ARGUMENT PARSING
# ═══════════════════════════════════════════════════════════════════════════


def parse_property(text: str) -> Tuple[str, Any]:
    """Parse "name=value"; value is JSON when it parses, else a plain string."""
    name, sep, raw = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Property must look like name=value: {text!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return name.strip(), value


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Output file (.geojson is appended if missing)")
    parser.add_argument(
        "--hole",
        action="append",
        default=[],
        metavar="LON,LAT",
        help='Hole coordinates, e.g. "0.005,0.002" (repeatable)',
    )
    parser.add_argument(
        "--hole-id",
        action="append",
        type=int,
        default=[],
        metavar="N",
        help="Hole index (repeatable)",
    )
    parser.add_argument(
        "--property",
        action="append",
        type=parse_property,
        default=[],
        metavar="NAME=VALUE",
        help="Feature property; VALUE is parsed as JSON when possible (repeatable)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    parser.add_argument("--log-file", action="store_true", help="Also write a run log")


def build_parser() -> argparse.ArgumentParser:
    levels = ", ".join(level.name for level in Coarseness)
    parser = argparse.ArgumentParser(
        prog="fog-machine",
        description="Generate Zone / Myst GeoJSON documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Coarseness levels: {levels}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    zone = subparsers.add_parser("zone", help="Grid of square tiles")
    _add_common_arguments(zone)
    zone.add_argument(
        "--origin",
        nargs=2,
        required=True,
        metavar=("LON", "LAT"),
        help="Lower-left corner of the zone",
    )
    zone.add_argument("--tile", required=True, help="Tile coarseness")
    zone.add_argument("--zone", required=True, help="Zone coarseness")

    myst = subparsers.add_parser("myst", help="World mask with holes")
    _add_common_arguments(myst)
    myst.add_argument("--zone", default=None, help="Hole side (required with holes)")

    return parser


def _holes_from_args(args: argparse.Namespace) -> List[Any]:
    holes: List[Any] = []
    if args.hole:
        holes.extend(args.hole)
    if args.hole_id:
        holes.append(Hole(ids=list(args.hole_id)))
    return holes


# ═══════════════════════════════════════════════════════════════════════════
# 🚀 CLI ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    args = build_parser().parse_args(argv)
    logger, _ = setup_logging(
        level=logging.DEBUG if args.verbose else None,
        log_to_file=True if args.log_file else None,
    )

    try:
        if args.command == "zone":
            result = generate_zone(
                args.path,
                longitude=args.origin[0],
                latitude=args.origin[1],
                tile_coarseness=args.tile,
                zone_coarseness=args.zone,
                properties=args.property,
                holes=_holes_from_args(args),
                app_config=APP_CONFIG,
            )
        else:
            result = generate_myst(
                args.path,
                zone_coarseness=args.zone,
                properties=args.property,
                holes=_holes_from_args(args),
                app_config=APP_CONFIG,
            )
    except FogMachineError as e:
        logger.error(f"❌ GENERATION FAILED: {e}")
        return 1

    logger.info(f"📁 {result.path} ({result.feature_count} features)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
