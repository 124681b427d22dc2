#!/usr/bin/env python3
"""
Fog Machine - Configuration

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Centralized configuration for Zone / Myst generation.
Single source of truth for output naming, logging and advisory notices.

Configuration Sections:
1. output: File suffix and encoding of generated documents
2. logging: Console / file logging settings
3. advisories: Non-fatal notices (large output size)

Navigation Guide:
- Use VS Code outline (Ctrl+Shift+O) to jump between sections
"""

import os
from typing import Any, Callable, Dict, Optional, TypeVar

T = TypeVar("T")


def _env_or_default(
    key: str, default: T, type_fn: Optional[Callable[[str], T]] = None
) -> T:
    """
    Get value from environment variable or use default.

    Args:
        key: Environment variable name (e.g., "FOG_LOG_LEVEL")
        default: Default value if env var not set
        type_fn: Optional type conversion function (e.g., float, int)

    Returns:
        Value from environment (converted) or default

    Example:
        >>> _env_or_default("FOG_LOG_DIR", "logs")
        'logs'  # If env var not set
    """
    val = os.getenv(key)
    if val is not None:
        if type_fn is not None:
            return type_fn(val)
        return val  # type: ignore
    return default


def _env_bool(key: str, default: bool) -> bool:
    """
    Get boolean value from environment variable.

    Treats "true", "1", "yes" as True (case-insensitive).
    Any other value or unset returns default.
    """
    val = os.getenv(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes")


# ═══════════════════════════════════════════════════════════════════════════
# 🔧 ENVIRONMENT VARIABLE OVERRIDES
# ═══════════════════════════════════════════════════════════════════════════
#
# FOG_OUTPUT_SUFFIX          - suffix appended to output paths (default: ".geojson")
# FOG_LOG_LEVEL              - "DEBUG", "INFO", "WARNING", ... (default: "INFO")
# FOG_LOG_DIR                - directory for run logs (default: "logs")
# FOG_LOG_TO_FILE            - "true" or "false" (default: "false")
# FOG_LARGE_OUTPUT_WARNING   - "true" or "false" (default: "true")
#
# Example usage:
#   export FOG_LOG_LEVEL=DEBUG
#   fog-machine zone out/zone --origin 0 0 --tile MEDIUM --zone COARSE
# ═══════════════════════════════════════════════════════════════════════════

# ═══════════════════════════════════════════════════════════════════════════
# ⚙️ MASTER CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════

CONFIG: Dict[str, Any] = {
    # ═══════════════════════════════════════════════════════════════════════
    # 📤 OUTPUT
    # ═══════════════════════════════════════════════════════════════════════
    "output": {
        # Appended to the output path when missing
        "suffix": _env_or_default("FOG_OUTPUT_SUFFIX", ".geojson"),
        "encoding": "utf-8",
    },
    # ═══════════════════════════════════════════════════════════════════════
    # 📋 LOGGING
    # ═══════════════════════════════════════════════════════════════════════
    "logging": {
        "level": _env_or_default("FOG_LOG_LEVEL", "INFO"),
        "log_dir": _env_or_default("FOG_LOG_DIR", "logs"),
        "log_to_file": _env_bool("FOG_LOG_TO_FILE", False),
    },
    # ═══════════════════════════════════════════════════════════════════════
    # ⚠️ ADVISORIES
    # ═══════════════════════════════════════════════════════════════════════
    "advisories": {
        "large_output_warning": _env_bool("FOG_LARGE_OUTPUT_WARNING", True),
        # FINE tiles over one of these zone sizes produce very large files
        "large_output_tile": "FINE",
        "large_output_zones": ["SUPER_COARSE", "SUPER_DUPER_COARSE"],
    },
}
