"""Exception types raised by PrefVault."""

from __future__ import annotations


class PrefVaultError(Exception):
    """Base exception; catch this for any error the package raises."""


class BackendError(PrefVaultError):
    """A backend could not write or persist a value."""


class PersistenceError(PrefVaultError):
    """Raised by ``Accessor.set`` when the write or the flush failed.

    ``key`` names the setting, ``cause`` carries the underlying exception
    (also chained as ``__cause__``).
    """

    def __init__(self, key: str, cause: BaseException) -> None:
        super().__init__(f"could not persist setting {key!r}: {cause}")
        self.key = key
        self.cause = cause
