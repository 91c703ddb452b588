"""Volatile dict-backed adapter (tests, and hosts that want no files)."""

from __future__ import annotations

import threading

from prefvault.backends.base import BackendAdapter, Scalar


class MemoryBackend(BackendAdapter):
    """Keeps values in a dict for the life of the process."""

    def __init__(self, initial: dict[str, Scalar] | None = None) -> None:
        self._data: dict[str, Scalar] = dict(initial or {})
        self._lock = threading.Lock()

    def read(self, key: str) -> Scalar | None:
        with self._lock:
            return self._data.get(key)

    def write(self, key: str, value: Scalar) -> None:
        with self._lock:
            self._data[key] = value

    def flush(self) -> None:
        pass

    def snapshot(self) -> dict[str, Scalar]:
        with self._lock:
            return dict(self._data)
