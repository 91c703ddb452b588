"""Accessor get/set semantics: fallback, coercion, write-through, failures."""

from __future__ import annotations

import pytest

from fakes import BrokenReadBackend, FlakyBackend
from prefvault.accessor import Accessor, FallbackReason, coerce
from prefvault.backends.memory import MemoryBackend
from prefvault.errors import BackendError, PersistenceError, PrefVaultError
from prefvault.managers.store import StoreHandle


def _store_for(backend) -> StoreHandle:
    return StoreHandle(lambda: backend)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def test_construction_does_not_touch_backend():
    built = []
    store = StoreHandle(lambda: built.append(1) or MemoryBackend())
    Accessor("Light", store=store)
    assert built == []
    assert not store.is_initialized


def test_value_type_inferred_from_default(store):
    assert Accessor(3, store=store).value_type is int
    assert Accessor(True, store=store).value_type is bool
    assert Accessor(0, store=store, value_type=float).default == 0.0


@pytest.mark.parametrize("default", [None, b"x", [1], {"a": 1}])
def test_unsupported_type_rejected(store, default):
    with pytest.raises(TypeError):
        Accessor(default, store=store)


def test_default_must_match_declared_type(store):
    with pytest.raises(TypeError):
        Accessor("1", store=store, value_type=int)
    with pytest.raises(TypeError):
        Accessor(True, store=store, value_type=int)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def test_unwritten_key_returns_default(store):
    assert Accessor("Light", store=store).get("Theme") == "Light"


@pytest.mark.parametrize(
    "default, value",
    [("Light", "Dark"), (0, -42), (1.5, 2.25), (False, True), ("", "ünïcödé ✓")],
)
def test_round_trip(store, default, value):
    acc = Accessor(default, store=store)
    acc.set("key", value)
    result = acc.get("key")
    assert result == value
    assert type(result) is type(default)


@pytest.mark.parametrize(
    "stored, default",
    [
        (42, "fallback"),
        ("abc", 7),
        ("1.5", 7),
        (True, 7),
        (1, False),
        ("maybe", False),
        (3.5, 1),
        ([1, 2], "x"),
    ],
)
def test_type_mismatch_returns_default(stored, default):
    backend = MemoryBackend({"k": stored})
    assert Accessor(default, store=_store_for(backend)).get("k") == default


@pytest.mark.parametrize(
    "stored, default, expected",
    [
        ("42", 0, 42),
        (" 7 ", 0, 7),
        ("2.5", 0.0, 2.5),
        (3, 0.0, 3.0),
        ("true", False, True),
        ("Off", True, False),
        ("1", False, True),
    ],
)
def test_text_and_int_values_are_coerced(stored, default, expected):
    backend = MemoryBackend({"k": stored})
    result = Accessor(default, store=_store_for(backend)).get("k")
    assert result == expected
    assert type(result) is type(expected)


def test_read_failure_returns_default():
    acc = Accessor(5, store=_store_for(BrokenReadBackend()))
    assert acc.get("anything") == 5


def test_backend_construction_failure_returns_default():
    def _boom():
        raise OSError("no home directory")

    assert Accessor("Light", store=StoreHandle(_boom)).get("Theme") == "Light"


def test_fallback_hook_reports_reason():
    seen = []
    backend = MemoryBackend({"bad": "not a number"})
    acc = Accessor(1, store=_store_for(backend), on_fallback=lambda k, r: seen.append((k, r)))
    acc.get("missing")
    acc.get("bad")
    assert seen == [
        ("missing", FallbackReason.ABSENT),
        ("bad", FallbackReason.TYPE_MISMATCH),
    ]

    seen.clear()
    broken = Accessor(1, store=_store_for(BrokenReadBackend()),
                      on_fallback=lambda k, r: seen.append((k, r)))
    broken.get("x")
    assert seen == [("x", FallbackReason.READ_ERROR)]


def test_fallback_hook_errors_do_not_escape(store):
    def _hook(key, reason):
        raise RuntimeError("hook bug")

    assert Accessor("d", store=store, on_fallback=_hook).get("nope") == "d"


def test_hook_not_called_on_hit(memory_backend, store):
    seen = []
    memory_backend.write("k", "v")
    Accessor("d", store=store, on_fallback=lambda k, r: seen.append(k)).get("k")
    assert seen == []


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def test_set_flushes_every_write():
    backend = FlakyBackend()
    acc = Accessor(0, store=_store_for(backend))
    acc.set("a", 1)
    acc.set("b", 2)
    assert backend.flush_count == 2
    assert backend.data == {"a": 1, "b": 2}


def test_set_rejects_wrong_type(store, memory_backend):
    acc = Accessor(0, store=store)
    with pytest.raises(TypeError):
        acc.set("count", "3")
    with pytest.raises(TypeError):
        acc.set("count", True)
    assert memory_backend.snapshot() == {}


def test_int_widens_for_float_setting(store):
    acc = Accessor(0.5, store=store)
    acc.set("scale", 2)
    assert acc.get("scale") == 2.0
    assert type(acc.get("scale")) is float


@pytest.mark.parametrize("failure", ["fail_write", "fail_flush"])
def test_write_failure_raises_and_keeps_previous_value(failure):
    backend = FlakyBackend()
    acc = Accessor("Light", store=_store_for(backend))
    acc.set("Theme", "Dark")

    setattr(backend, failure, True)
    with pytest.raises(PersistenceError) as excinfo:
        acc.set("Theme", "Blue")

    err = excinfo.value
    assert err.key == "Theme"
    assert isinstance(err.cause, BackendError)
    assert err.__cause__ is err.cause
    assert isinstance(err, PrefVaultError)

    setattr(backend, failure, False)
    assert acc.get("Theme") == "Dark"


def test_failed_write_is_not_persisted_by_a_later_flush():
    backend = FlakyBackend()
    acc = Accessor(0, store=_store_for(backend))
    backend.fail_flush = True
    with pytest.raises(PersistenceError):
        acc.set("a", 1)
    backend.fail_flush = False
    acc.set("b", 2)
    assert backend.data == {"b": 2}


def test_set_without_backend_raises_persistence_error():
    def _boom():
        raise OSError("read-only filesystem")

    with pytest.raises(PersistenceError) as excinfo:
        Accessor("x", store=StoreHandle(_boom)).set("k", "v")
    assert excinfo.value.key == "k"
    assert isinstance(excinfo.value.cause, OSError)


def test_theme_scenario():
    backend = FlakyBackend()
    theme = Accessor("Light", store=_store_for(backend))

    assert theme.get("Theme") == "Light"
    theme.set("Theme", "Dark")
    assert theme.get("Theme") == "Dark"

    backend.fail_write = True
    with pytest.raises(PersistenceError) as excinfo:
        theme.set("Theme", "Blue")
    assert excinfo.value.key == "Theme"
    assert theme.get("Theme") == "Dark"


def test_accessors_sharing_a_store_see_the_same_data(store):
    writer = Accessor(0, store=store)
    reader = Accessor(-1, store=store)
    writer.set("volume", 7)
    assert reader.get("volume") == 7


# ---------------------------------------------------------------------------
# Bound settings
# ---------------------------------------------------------------------------

def test_bound_setting_forwards(store):
    font = Accessor(11, store=store).bind("font_size")
    assert font.name == "font_size"
    assert font.default == 11
    assert font.get() == 11
    font.set(14)
    assert font.get() == 14


# ---------------------------------------------------------------------------
# coerce()
# ---------------------------------------------------------------------------

def test_coerce_is_strict():
    assert coerce("5", int) == 5
    with pytest.raises(ValueError):
        coerce("5.0", int)
    with pytest.raises(ValueError):
        coerce(5, str)
    with pytest.raises(ValueError):
        coerce("yep", bool)


def test_discard_failure_still_raises_persistence_error():
    backend = FlakyBackend()
    backend.fail_flush = True
    backend.fail_discard = True
    with pytest.raises(PersistenceError) as excinfo:
        Accessor(0, store=_store_for(backend)).set("a", 1)
    assert isinstance(excinfo.value.cause, BackendError)
    assert str(excinfo.value.cause) == "sync failed"


@pytest.mark.parametrize(
    "text, value_type",
    [("1_000", int), ("1_000.5", float), ("nan", float), ("inf", float), ("-Infinity", float)],
)
def test_coerce_rejects_separators_and_non_finite(text, value_type):
    with pytest.raises(ValueError):
        coerce(text, value_type)
    backend = MemoryBackend({"k": text})
    assert Accessor(value_type(7), store=_store_for(backend)).get("k") == 7
