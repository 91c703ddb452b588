"""Host-side preference model built on accessors."""

from __future__ import annotations

from typing import Any

from prefvault.accessor import Accessor, BoundSetting
from prefvault.managers.store import StoreHandle


class AppPreferences:
    """Application-wide preferences, one bound setting per attribute.

    Each property forwards to the stored value; assigning persists it
    immediately and may raise :class:`~prefvault.errors.PersistenceError`.
    """

    _DEFAULTS: dict[str, Any] = {
        "theme":                      "Catppuccin Mocha",
        "font_size_terminal":         11,
        "autotype_delay_ms":          50,
        "plugins_enabled":            True,
        "clipboard_clear_timeout_s":  15,
        "ui_scale":                   1.0,
    }

    def __init__(self, store: StoreHandle) -> None:
        self._settings: dict[str, BoundSetting] = {
            name: Accessor(default, store=store).bind(name)
            for name, default in self._DEFAULTS.items()
        }

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def theme(self) -> str:
        return self._settings["theme"].get()

    @theme.setter
    def theme(self, value: str) -> None:
        self._settings["theme"].set(value)

    @property
    def font_size_terminal(self) -> int:
        return self._settings["font_size_terminal"].get()

    @font_size_terminal.setter
    def font_size_terminal(self, value: int) -> None:
        self._settings["font_size_terminal"].set(value)

    @property
    def autotype_delay_ms(self) -> int:
        return self._settings["autotype_delay_ms"].get()

    @autotype_delay_ms.setter
    def autotype_delay_ms(self, value: int) -> None:
        self._settings["autotype_delay_ms"].set(value)

    @property
    def plugins_enabled(self) -> bool:
        return self._settings["plugins_enabled"].get()

    @plugins_enabled.setter
    def plugins_enabled(self, value: bool) -> None:
        self._settings["plugins_enabled"].set(value)

    @property
    def clipboard_clear_timeout_s(self) -> int:
        return self._settings["clipboard_clear_timeout_s"].get()

    @clipboard_clear_timeout_s.setter
    def clipboard_clear_timeout_s(self, value: int) -> None:
        self._settings["clipboard_clear_timeout_s"].set(value)

    @property
    def ui_scale(self) -> float:
        return self._settings["ui_scale"].get()

    @ui_scale.setter
    def ui_scale(self, value: float) -> None:
        self._settings["ui_scale"].set(value)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def as_dict(self) -> dict[str, Any]:
        return {name: setting.get() for name, setting in self._settings.items()}
