"""JSON file adapter (~/.prefvault/<namespace>.json).

The whole namespace lives in one JSON object.  ``write`` only stages; readers
see a value once ``flush`` has rewritten the file.  The file is replaced
atomically, so a failed flush leaves both the file and the in-memory view
as they were.
"""

from __future__ import annotations

import json
import os
import pathlib
import tempfile
import threading

from prefvault.backends.base import BackendAdapter, Scalar
from prefvault.errors import BackendError
from prefvault.managers.logger import get_logger

log = get_logger(__name__)


class JsonFileBackend(BackendAdapter):
    """Key-value store persisted as a single JSON document."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = pathlib.Path(path)
        self._data: dict[str, Scalar] = {}
        self._pending: dict[str, Scalar] = {}
        self._lock = threading.Lock()
        self._load()

    @property
    def path(self) -> pathlib.Path:
        return self._path

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path, "r", encoding="utf-8") as fh:
                stored = json.load(fh)
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable settings file %s: %s", self._path, exc)
            return
        if isinstance(stored, dict):
            self._data.update(stored)
        else:
            log.warning("Ignoring settings file %s: top level is not an object", self._path)

    def _dump(self, data: dict[str, Scalar]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
            os.replace(tmp, self._path)
        except BaseException:
            pathlib.Path(tmp).unlink(missing_ok=True)
            raise

    # ------------------------------------------------------------------
    # Adapter API
    # ------------------------------------------------------------------

    def read(self, key: str) -> Scalar | None:
        with self._lock:
            return self._data.get(key)

    def write(self, key: str, value: Scalar) -> None:
        with self._lock:
            self._pending[key] = value

    def flush(self) -> None:
        with self._lock:
            if not self._pending:
                return
            merged = {**self._data, **self._pending}
            keys = sorted(self._pending)
            self._pending.clear()
            try:
                self._dump(merged)
            except (OSError, TypeError, ValueError) as exc:
                log.warning("Could not write %s: %s", self._path, exc)
                raise BackendError(f"writing {self._path} failed: {exc}") from exc
            self._data = merged
        log.debug("Settings saved to %s: %s", self._path, ", ".join(keys))

    def discard(self) -> None:
        with self._lock:
            self._pending.clear()

    def commit(self, key: str, value: Scalar) -> None:
        # Only published data plus this key goes to disk; staged keys of
        # other callers are neither saved early nor dropped.
        with self._lock:
            merged = {**self._data, key: value}
            try:
                self._dump(merged)
            except (OSError, TypeError, ValueError) as exc:
                log.warning("Could not write %s: %s", self._path, exc)
                raise BackendError(f"writing {self._path} failed: {exc}") from exc
            self._data = merged
        log.debug("Setting %r saved to %s", key, self._path)
