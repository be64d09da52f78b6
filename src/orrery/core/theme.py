"""Light/dark presentation mode."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Protocol

from .config import THEME_CFG, ThemeCfg, ThemePalette


logger = logging.getLogger(__name__)


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"

    @property
    def other(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


class Store(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class ThemeState:
    """Current theme, loaded from and written back to ``store``."""

    def __init__(self, store: Store, cfg: ThemeCfg = THEME_CFG) -> None:
        self._store = store
        self._cfg = cfg
        stored = store.get(cfg.storage_key)
        try:
            self._theme = Theme(stored or cfg.default)
        except ValueError:
            logger.warning("Unknown stored theme %r, using %s", stored, cfg.default)
            self._theme = Theme(cfg.default)
        self._persist()

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def is_dark(self) -> bool:
        return self._theme is Theme.DARK

    @property
    def palette(self) -> ThemePalette:
        return self._cfg.dark if self.is_dark else self._cfg.light

    def toggle_label(self) -> str:
        return "Light Mode" if self.is_dark else "Dark Mode"

    def toggle(self) -> Theme:
        self._theme = self._theme.other
        self._persist()
        return self._theme

    def _persist(self) -> None:
        # The in-memory theme stays authoritative when the store can't be written.
        try:
            self._store.set(self._cfg.storage_key, self._theme.value)
        except OSError as exc:
            logger.warning("Could not save theme preference: %s", exc)


__all__ = ["Theme", "ThemeState"]
