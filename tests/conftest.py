from __future__ import annotations

import os
import tempfile

# Keep log files and default data out of the real home directory; must run
# before any prefvault module reads its constants.
os.environ.setdefault("PREFVAULT_HOME", tempfile.mkdtemp(prefix="prefvault-test-"))

import pytest  # noqa: E402

from prefvault.backends.memory import MemoryBackend  # noqa: E402
from prefvault.managers.store import StoreHandle  # noqa: E402


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(memory_backend: MemoryBackend) -> StoreHandle:
    return StoreHandle(lambda: memory_backend)
