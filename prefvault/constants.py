"""Application-wide constants: paths, metadata, and supported setting types."""

from __future__ import annotations

import os
import pathlib

APP_NAME = "PrefVault"
APP_VERSION = "1.0.0"
DATA_DIR = pathlib.Path(
    os.environ.get("PREFVAULT_HOME") or pathlib.Path.home() / ".prefvault"
)
LOGS_DIR = DATA_DIR / "logs"

# Namespace used when the host does not pick one (file stem on disk)
DEFAULT_NAMESPACE = "settings"

# ---------------------------------------------------------------------------
# Scalar types a setting may hold
# ---------------------------------------------------------------------------
SCALAR_TYPES: tuple[type, ...] = (bool, int, float, str)

# Textual booleans accepted when a medium hands back strings (INI files)
TRUE_WORDS: frozenset[str] = frozenset({"true", "1", "yes", "on"})
FALSE_WORDS: frozenset[str] = frozenset({"false", "0", "no", "off"})

# Console log level; the rotating log file always records DEBUG
CONSOLE_LOG_LEVEL = os.environ.get("PREFVAULT_LOG_LEVEL", "INFO").upper()
