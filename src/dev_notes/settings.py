"""Settings backed by a JSON file in the config directory."""

from __future__ import annotations

import json
from typing import Any

from .paths import Paths

DEFAULTS: dict[str, Any] = {
    "date_format": "%x",
    "ws_host": "127.0.0.1",
    "ws_port": 8765,
}


class Settings:
    """Settings backed by a JSON file.

    Usage:
        settings = Settings(paths)
        fmt = settings.get("date_format")
        settings.set("ws_port", 9000)
    """

    def __init__(self, paths: Paths) -> None:
        self.paths = paths

    def load(self) -> dict[str, Any]:
        """Read settings from disk, filling missing keys from defaults."""
        settings = dict(DEFAULTS)
        try:
            raw = self.paths.settings_file.read_text(encoding="utf-8")
            stored = json.loads(raw)
            if isinstance(stored, dict):
                settings.update(stored)
        except (FileNotFoundError, json.JSONDecodeError):
            pass
        return settings

    def save(self, settings: dict[str, Any]) -> None:
        """Write settings to disk."""
        self.paths.settings_file.parent.mkdir(parents=True, exist_ok=True)
        self.paths.settings_file.write_text(
            json.dumps(settings, indent=4) + "\n", encoding="utf-8",
        )

    def get(self, key: str) -> Any:
        """Return a single setting value."""
        return self.load().get(key, DEFAULTS.get(key))

    def set(self, key: str, value: Any) -> None:
        """Update a single setting and persist."""
        if not self.is_valid_key(key):
            raise KeyError(f"unknown setting: {key}")
        settings = self.load()
        settings[key] = value
        self.save(settings)

    @staticmethod
    def is_valid_key(key: str) -> bool:
        """Return True if *key* is a recognised setting name."""
        return key in DEFAULTS
