"""Logging for the settings layer.

Every module takes its logger from here::

    log = get_logger(__name__)

What gets logged: backend construction (INFO, store handle), file writes
and syncs (DEBUG, backends), fallbacks to the default value (DEBUG,
accessor) and failed writes (WARNING, backends and accessor).

Handlers hang off the ``prefvault`` logger and are attached once, unless
the host application has already configured that logger itself:

- ``<DATA_DIR>/logs/prefvault.log``, DEBUG, rotated at 5 MiB with three
  backups; skipped when the directory cannot be created;
- stderr, at ``PREFVAULT_LOG_LEVEL`` (default INFO).
"""

from __future__ import annotations

import logging
import logging.handlers
import pathlib

_configured = False
_LOGS_DIR: pathlib.Path | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a named logger under the 'prefvault' hierarchy."""
    _configure_once()
    if not name.startswith("prefvault"):
        name = f"prefvault.{name}"
    return logging.getLogger(name)


def console_level(name: str) -> int:
    """Map a level name to a logging level; unknown names give INFO."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def logs_dir() -> pathlib.Path | None:
    """Return the logs directory path (None until first call to get_logger)."""
    return _LOGS_DIR


def _configure_once() -> None:
    global _configured, _LOGS_DIR
    if _configured:
        return
    _configured = True

    from prefvault.constants import CONSOLE_LOG_LEVEL, LOGS_DIR  # noqa: PLC0415

    root = logging.getLogger("prefvault")
    if root.handlers:
        return  # host already attached its own handlers

    root.setLevel(logging.DEBUG)

    _fmt = logging.Formatter(
        "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # ── Rotating file handler ─────────────────────────────────────────
    try:
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            LOGS_DIR / "prefvault.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
    except OSError as exc:
        # Read-only home: settings still work, only the log file is lost
        logging.getLogger(__name__).debug("file logging disabled: %s", exc)
    else:
        _LOGS_DIR = LOGS_DIR
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(_fmt)
        root.addHandler(fh)

    # ── Console handler ───────────────────────────────────────────────
    ch = logging.StreamHandler()
    ch.setLevel(console_level(CONSOLE_LOG_LEVEL))
    ch.setFormatter(logging.Formatter("%(levelname)-8s  %(name)s  %(message)s"))
    root.addHandler(ch)
