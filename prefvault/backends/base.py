"""Backend adapter contract – the opaque key-value medium behind a store.

Adapters hold scalars (``bool``, ``int``, ``float``, ``str``) by string key.

Contract
--------
``read``    never raises; a missing key and a failed read both give ``None``.
``write``   stages a value; raises :class:`BackendError` on failure.
``flush``   makes staged values durable; raises :class:`BackendError` on
            failure and rolls the staged values back first, so readers keep
            seeing the state from before the write.
``discard`` drops staged values without persisting them.
``commit``  writes and persists one key as a unit.  On failure only that key
            is rolled back; values other callers have staged stay staged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from prefvault.managers.logger import get_logger

Scalar = Union[bool, int, float, str]

log = get_logger(__name__)


class BackendAdapter(ABC):
    """Minimal capability a persistence medium must offer."""

    @abstractmethod
    def read(self, key: str) -> Scalar | None:
        """Return the stored value, or None when absent or unreadable."""

    @abstractmethod
    def write(self, key: str, value: Scalar) -> None:
        """Stage *value* under *key*."""

    @abstractmethod
    def flush(self) -> None:
        """Commit staged writes to durable storage."""

    def discard(self) -> None:
        """Forget staged writes.  Media that write in place need nothing."""

    def commit(self, key: str, value: Scalar) -> None:
        """Write *value* and flush it.

        Media that stage writes override this so a failure cannot touch
        other staged keys.  The fallback suits media without staging.
        """
        try:
            self.write(key, value)
            self.flush()
        except Exception:
            try:
                self.discard()
            except Exception as exc:  # noqa: BLE001
                log.warning("Discarding %r after a failed write failed: %s", key, exc)
            raise
