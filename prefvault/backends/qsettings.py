"""Qt ``QSettings`` adapter – INI file per namespace (~/.prefvault/<ns>.ini).

INI files keep everything as text, so numbers and booleans come back as
strings; the accessor's coercion turns them back into the declared type.
QSettings applies ``setValue`` to its in-memory cache immediately, so this
adapter remembers the previous value of every staged key and restores it
when the write is discarded or ``sync()`` fails.  ``commit`` parks the
other staged keys at their previous values around its ``sync()``, so a
single-key save neither publishes nor loses them.
"""

from __future__ import annotations

import os
import pathlib
import threading

from prefvault.backends.base import BackendAdapter, Scalar
from prefvault.errors import BackendError
from prefvault.managers.logger import get_logger

try:
    from PySide6.QtCore import QSettings
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False

log = get_logger(__name__)

_MISSING = object()


class QSettingsBackend(BackendAdapter):
    """Adapter over an INI-format :class:`QSettings` store."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        if not PYSIDE6_AVAILABLE:
            raise RuntimeError(
                "PySide6 is not installed.  Run: pip install PySide6"
            )
        self._path = pathlib.Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._settings = QSettings(str(self._path), QSettings.Format.IniFormat)
        # key → value before the first staged write (or _MISSING)
        self._undo: dict[str, object] = {}
        self._lock = threading.Lock()

    @property
    def path(self) -> pathlib.Path:
        return self._path

    # ------------------------------------------------------------------
    # Adapter API
    # ------------------------------------------------------------------

    def read(self, key: str) -> Scalar | None:
        with self._lock:
            try:
                if not self._settings.contains(key):
                    return None
                return self._settings.value(key)
            except Exception as exc:  # noqa: BLE001
                log.debug("QSettings read of %r failed: %s", key, exc)
                return None

    def write(self, key: str, value: Scalar) -> None:
        with self._lock:
            if not self._settings.isWritable():
                raise BackendError(f"{self._path} is not writable")
            if key not in self._undo:
                self._undo[key] = (
                    self._settings.value(key)
                    if self._settings.contains(key)
                    else _MISSING
                )
            self._settings.setValue(key, value)

    def flush(self) -> None:
        with self._lock:
            self._settings.sync()
            status = self._settings.status()
            if status != QSettings.Status.NoError:
                self._rollback()
                log.warning("QSettings sync of %s failed: %s", self._path, status)
                raise BackendError(f"syncing {self._path} failed: {status}")
            self._undo.clear()
        log.debug("Settings synced to %s", self._path)

    def discard(self) -> None:
        with self._lock:
            self._rollback()

    def commit(self, key: str, value: Scalar) -> None:
        with self._lock:
            if not self._settings.isWritable():
                raise BackendError(f"{self._path} is not writable")
            # sync() writes the whole cache: park other staged keys first
            staged = {k: self._settings.value(k) for k in self._undo}
            self._restore(self._undo)
            prior = (
                self._settings.value(key)
                if self._settings.contains(key)
                else _MISSING
            )
            self._settings.setValue(key, value)
            self._settings.sync()
            status = self._settings.status()
            if status == QSettings.Status.NoError:
                # this value supersedes anything staged for the same key
                staged.pop(key, None)
                self._undo.pop(key, None)
            else:
                self._restore({key: prior})
            for k, v in staged.items():
                self._settings.setValue(k, v)
        if status != QSettings.Status.NoError:
            log.warning("QSettings sync of %s failed: %s", self._path, status)
            raise BackendError(f"syncing {self._path} failed: {status}")
        log.debug("Setting %r synced to %s", key, self._path)

    def _restore(self, values: dict[str, object]) -> None:
        for key, old in values.items():
            if old is _MISSING:
                self._settings.remove(key)
            else:
                self._settings.setValue(key, old)

    def _rollback(self) -> None:
        """Restore staged keys to their previous values (caller holds lock)."""
        self._restore(self._undo)
        self._undo.clear()
