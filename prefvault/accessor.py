"""Typed get/set access to named settings.

An :class:`Accessor` is bound to a scalar type and a default value.  Reads
are total: a missing key, a value of the wrong type or a failing backend all
resolve to the default.  Writes go through to durable storage immediately and
raise :class:`PersistenceError` when they cannot.

    store = StoreHandle(json_backend_factory())
    theme = Accessor("Light", store=store)
    theme.get("Theme")            # → "Light"
    theme.set("Theme", "Dark")
    theme.get("Theme")            # → "Dark"
"""

from __future__ import annotations

import enum
import math
from typing import Any, Callable, Generic, Optional, TypeVar

from prefvault.constants import FALSE_WORDS, SCALAR_TYPES, TRUE_WORDS
from prefvault.errors import PersistenceError
from prefvault.managers.logger import get_logger
from prefvault.managers.store import StoreHandle

log = get_logger(__name__)

T = TypeVar("T", bool, int, float, str)


class FallbackReason(enum.Enum):
    """Why a read resolved to the default."""

    ABSENT = "absent"
    TYPE_MISMATCH = "type_mismatch"
    READ_ERROR = "read_error"


FallbackHook = Callable[[str, FallbackReason], None]


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

def coerce(raw: Any, value_type: type) -> Any:
    """Return *raw* as *value_type*; raise ValueError when it cannot be.

    Exact matches pass through; ints widen to float; text (INI media) is
    parsed strictly into numbers and booleans: no digit separators
    (``"1_000"``) and no ``nan`` or ``inf``.  ``bool`` never counts as a
    number and numbers never count as text.
    """
    if type(raw) is value_type:
        return raw
    if value_type is float and type(raw) is int:
        return float(raw)
    if isinstance(raw, str) and value_type is not str:
        text = raw.strip()
        if value_type is bool:
            word = text.lower()
            if word in TRUE_WORDS:
                return True
            if word in FALSE_WORDS:
                return False
            raise ValueError(f"not a boolean: {raw!r}")
        if "_" in text:
            raise ValueError(f"digit separators not accepted: {raw!r}")
        number = value_type(text)
        if not math.isfinite(number):
            raise ValueError(f"not a finite number: {raw!r}")
        return number
    raise ValueError(f"{type(raw).__name__} is not {value_type.__name__}")


# ---------------------------------------------------------------------------
# Accessor
# ---------------------------------------------------------------------------

class Accessor(Generic[T]):
    """Typed get/set surface over a :class:`StoreHandle`.

    *value_type* defaults to ``type(default)``; pass it explicitly when the
    default alone is ambiguous (``Accessor(0, value_type=float, ...)``).
    *on_fallback* is called with ``(key, reason)`` whenever a read returns
    the default.
    """

    def __init__(
        self,
        default: T,
        *,
        store: StoreHandle,
        value_type: Optional[type] = None,
        on_fallback: Optional[FallbackHook] = None,
    ) -> None:
        value_type = value_type or type(default)
        if value_type not in SCALAR_TYPES:
            raise TypeError(f"unsupported setting type: {value_type.__name__}")
        self._type = value_type
        self._default: T = self._checked("default", default)
        self._store = store
        self._on_fallback = on_fallback

    @property
    def default(self) -> T:
        return self._default

    @property
    def value_type(self) -> type:
        return self._type

    def get(self, name: str) -> T:
        """Return the stored value of *name*, or the default."""
        key = name
        try:
            raw = self._store.get().read(key)
        except Exception as exc:  # noqa: BLE001
            log.debug("Reading %r failed: %s", key, exc)
            return self._fallback(key, FallbackReason.READ_ERROR)
        if raw is None:
            return self._fallback(key, FallbackReason.ABSENT)
        try:
            return coerce(raw, self._type)
        except (TypeError, ValueError, OverflowError):
            log.debug("Setting %r holds %r, expected %s", key, raw, self._type.__name__)
            return self._fallback(key, FallbackReason.TYPE_MISMATCH)

    def set(self, name: str, value: T) -> None:
        """Persist *value* under *name* and flush it to storage.

        Raises :class:`PersistenceError` when the backend cannot write or
        flush; the previous value stays in place.
        """
        value = self._checked(f"setting {name!r}", value)
        key = name
        try:
            backend = self._store.get()
        except Exception as exc:
            log.warning("No backend for setting %r: %s", key, exc)
            raise PersistenceError(key, exc) from exc
        try:
            backend.commit(key, value)
        except Exception as exc:
            log.warning("Persisting setting %r failed: %s", key, exc)
            raise PersistenceError(key, exc) from exc

    def bind(self, name: str) -> "BoundSetting[T]":
        """Return a handle on the single setting *name*."""
        return BoundSetting(self, name)

    def _checked(self, what: str, value: Any) -> T:
        # ints widen to float; bool is never accepted as a number
        if type(value) is self._type:
            return value
        if self._type is float and type(value) is int:
            return float(value)
        raise TypeError(
            f"{what} takes {self._type.__name__}, got {type(value).__name__}"
        )

    def _fallback(self, key: str, reason: FallbackReason) -> T:
        if self._on_fallback is not None:
            try:
                self._on_fallback(key, reason)
            except Exception as exc:  # noqa: BLE001
                log.debug("Fallback hook error for %r: %s", key, exc)
        return self._default

    def __repr__(self) -> str:
        return f"Accessor({self._default!r}, value_type={self._type.__name__})"


class BoundSetting(Generic[T]):
    """An accessor tied to one logical setting name."""

    def __init__(self, accessor: Accessor[T], name: str) -> None:
        self._accessor = accessor
        self.name = name

    @property
    def default(self) -> T:
        return self._accessor.default

    def get(self) -> T:
        return self._accessor.get(self.name)

    def set(self, value: T) -> None:
        self._accessor.set(self.name, value)

    def __repr__(self) -> str:
        return f"BoundSetting({self.name!r}, default={self.default!r})"
