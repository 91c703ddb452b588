"""Store handle – owns the single backend adapter of an application.

The host builds one handle during its setup phase and hands it to every
accessor::

    store = StoreHandle(json_backend_factory("settings"))
    theme = Accessor("Light", store=store)

The backend is constructed on the first :meth:`StoreHandle.get` call, exactly
once, even when several threads race on that first call.
"""

from __future__ import annotations

import pathlib
import threading
from typing import Callable, Optional

from prefvault.backends.base import BackendAdapter
from prefvault.constants import DATA_DIR, DEFAULT_NAMESPACE
from prefvault.managers.logger import get_logger

log = get_logger(__name__)

BackendFactory = Callable[[], BackendAdapter]


class StoreHandle:
    """Lazily-initialized, process-lifetime owner of one backend adapter."""

    def __init__(self, factory: BackendFactory) -> None:
        self._factory = factory
        self._backend: Optional[BackendAdapter] = None
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._backend is not None

    def get(self) -> BackendAdapter:
        """Return the shared backend, building it on first use."""
        backend = self._backend
        if backend is not None:
            return backend
        with self._lock:
            if self._backend is None:
                backend = self._factory()
                log.info("Settings backend ready: %s", type(backend).__name__)
                self._backend = backend
            return self._backend


# ---------------------------------------------------------------------------
# Factories for the bundled adapters
# ---------------------------------------------------------------------------

def memory_backend_factory(
    namespace: str = DEFAULT_NAMESPACE, data_dir=None
) -> BackendFactory:
    """Factory for a volatile store; *namespace* and *data_dir* are unused."""
    from prefvault.backends.memory import MemoryBackend  # noqa: PLC0415
    return MemoryBackend


def json_backend_factory(
    namespace: str = DEFAULT_NAMESPACE, data_dir=None
) -> BackendFactory:
    """Factory for ``<data_dir>/<namespace>.json``."""
    from prefvault.backends.json_file import JsonFileBackend  # noqa: PLC0415

    def _build() -> BackendAdapter:
        return JsonFileBackend(pathlib.Path(data_dir or DATA_DIR) / f"{namespace}.json")

    return _build


def qsettings_backend_factory(
    namespace: str = DEFAULT_NAMESPACE, data_dir=None
) -> BackendFactory:
    """Factory for ``<data_dir>/<namespace>.ini`` through QSettings."""
    from prefvault.backends.qsettings import QSettingsBackend  # noqa: PLC0415

    def _build() -> BackendAdapter:
        return QSettingsBackend(pathlib.Path(data_dir or DATA_DIR) / f"{namespace}.ini")

    return _build


BACKEND_FACTORIES: dict[str, Callable[..., BackendFactory]] = {
    "memory":    memory_backend_factory,
    "json":      json_backend_factory,
    "qsettings": qsettings_backend_factory,
}
