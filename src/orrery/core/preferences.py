"""JSON-file backed preference storage."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_PREFERENCES_PATH = Path.home() / ".orrery" / "preferences.json"


class PreferenceStore:
    """Tiny string key/value store persisted as a JSON object."""

    def __init__(self, path: str | Path = DEFAULT_PREFERENCES_PATH) -> None:
        self.path = Path(path)
        self._values: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable preference file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring preference file %s: expected a JSON object", self.path)
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(self._values, fh, indent=2, sort_keys=True)


__all__ = ["DEFAULT_PREFERENCES_PATH", "PreferenceStore"]
