"""JSON-backed user settings for CLI defaults."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from dirsize.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "dirsize"
_SETTINGS_FILE = "settings.json"


class Settings:
    """User settings read from ``$XDG_CONFIG_HOME/dirsize/settings.json``.

    Uses dot-notation keys for nested access::

        {"scan": {"max_workers": 8, "follow_symlinks": false},
         "output": {"color": null}}

        settings.get("scan.max_workers")  # -> 8

    Command-line options always take precedence over these values.
    """

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @classmethod
    def instance(cls) -> Settings:
        """Return the singleton settings instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    @property
    def max_workers(self) -> int | None:
        value = self.get("scan.max_workers")
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            log.warning("Ignoring invalid scan.max_workers in %s: %r", self._path, value)
            return None
        return value

    @property
    def follow_symlinks(self) -> bool:
        return bool(self.get("scan.follow_symlinks", False))

    @property
    def color(self) -> bool | None:
        value = self.get("output.color")
        return None if value is None else bool(value)

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings in %s: expected a JSON object", self._path)
            return
        self._data = data
