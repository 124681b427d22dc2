"""
═══════════════════════════════════════════════════════════════════════════════
📋 CONFIGURATION TYPES
═══════════════════════════════════════════════════════════════════════════════

ARCHITECTURAL OVERVIEW
----------------------
Responsibility: Typed, validated views of the CONFIG dictionary.

Usage:
    from Fog_Machine.config import CONFIG
    from Fog_Machine.config_types import AppConfig

    app_config = AppConfig.from_dict(CONFIG)
    suffix = app_config.output.suffix

NAVIGATION GUIDE
----------------
# ═════ 1. OUTPUT CONFIGURATION
# ═════ 2. LOGGING CONFIGURATION
# ═════ 3. ADVISORY CONFIGURATION
# ═════ 4. APP CONFIG (MASTER FACADE)

═══════════════════════════════════════════════════════════════════════════════
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

from Fog_Machine.scale_table import Coarseness


# ═══════════════════════════════════════════════════════════════════════════════
# 📤 1. OUTPUT CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class OutputConfig:
    """
    Output document settings.

    Attributes:
        suffix: Appended to output paths that do not already end with it.
        encoding: Text encoding of the generated file.
    """

    suffix: str = ".geojson"
    encoding: str = "utf-8"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OutputConfig":
        """Create OutputConfig from CONFIG['output'] dictionary."""
        return cls(
            suffix=d.get("suffix", ".geojson"),
            encoding=d.get("encoding", "utf-8"),
        )

    def __post_init__(self) -> None:
        if not self.suffix.startswith(".") or len(self.suffix) < 2:
            raise ValueError(f"suffix must look like '.geojson', got '{self.suffix}'")


# ═══════════════════════════════════════════════════════════════════════════════
# 📋 2. LOGGING CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class LoggingConfig:
    """Console / file logging settings."""

    level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LoggingConfig":
        """Create LoggingConfig from CONFIG['logging'] dictionary."""
        return cls(
            level=str(d.get("level", "INFO")).upper(),
            log_dir=d.get("log_dir", "logs"),
            log_to_file=d.get("log_to_file", False),
        )

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Unknown log level '{self.level}'")

    @property
    def level_number(self) -> int:
        return logging.getLevelName(self.level)

    @property
    def log_path(self) -> Path:
        return Path(self.log_dir)


# ═══════════════════════════════════════════════════════════════════════════════
# ⚠️ 3. ADVISORY CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class AdvisoryConfig:
    """
    Non-fatal notices emitted before generation.

    Attributes:
        large_output_warning: Master toggle for the output size notice.
        large_output_tile: Tile coarseness that triggers the notice.
        large_output_zones: Zone coarseness levels that trigger the notice
            together with large_output_tile.
    """

    large_output_warning: bool = True
    large_output_tile: Coarseness = Coarseness.FINE
    large_output_zones: Tuple[Coarseness, ...] = (
        Coarseness.SUPER_COARSE,
        Coarseness.SUPER_DUPER_COARSE,
    )

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AdvisoryConfig":
        """Create AdvisoryConfig from CONFIG['advisories'] dictionary."""
        zones = d.get("large_output_zones", ["SUPER_COARSE", "SUPER_DUPER_COARSE"])
        return cls(
            large_output_warning=d.get("large_output_warning", True),
            large_output_tile=Coarseness.from_name(d.get("large_output_tile", "FINE")),
            large_output_zones=tuple(Coarseness.from_name(name) for name in zones),
        )

    def is_large_output(self, tile: Coarseness, zone: Coarseness) -> bool:
        return (
            self.large_output_warning
            and tile == self.large_output_tile
            and zone in self.large_output_zones
        )


# ═══════════════════════════════════════════════════════════════════════════════
# 🏛️ 4. APP CONFIG (MASTER FACADE)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class AppConfig:
    """
    Master configuration facade.

    Create once from CONFIG and pass down to generation functions.
    """

    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    advisories: AdvisoryConfig = field(default_factory=AdvisoryConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """
        Create AppConfig from the CONFIG dictionary.

        Example:
            from Fog_Machine.config import CONFIG
            app_config = AppConfig.from_dict(CONFIG)
        """
        return cls(
            output=OutputConfig.from_dict(config_dict.get("output", {})),
            logging=LoggingConfig.from_dict(config_dict.get("logging", {})),
            advisories=AdvisoryConfig.from_dict(config_dict.get("advisories", {})),
        )


def default_app_config() -> AppConfig:
    """AppConfig built from the module-level CONFIG."""
    from Fog_Machine.config import CONFIG

    return AppConfig.from_dict(CONFIG)
