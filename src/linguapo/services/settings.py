"""Settings service — load/save ~/.config/linguapo/settings.json."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

log = logging.getLogger(__name__)

_SETTINGS_FILE = Path.home() / ".config" / "linguapo" / "settings.json"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULTS: dict[str, Any] = {
    # Composer
    "wrap_width": 0,  # 0 keeps the stored string fragments

    # Command line
    "log_level": "WARNING",
}


class Settings:
    """Settings backed by a JSON file."""

    _instance: Settings | None = None

    def __init__(self):
        self._data: dict[str, Any] = dict(DEFAULTS)
        self._load()

    @classmethod
    def get(cls) -> Settings:
        if cls._instance is None:
            cls._instance = Settings()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        cls._instance = None

    # ── Public API ────────────────────────────────────────────────

    def __getitem__(self, key: str) -> Any:
        return self._data.get(key, DEFAULTS.get(key))

    def __setitem__(self, key: str, value: Any):
        self._data[key] = value

    def get_value(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default if default is not None else DEFAULTS.get(key))

    def set_value(self, key: str, value: Any):
        self._data[key] = value

    @property
    def exists(self) -> bool:
        return _SETTINGS_FILE.exists()

    def save(self):
        _SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        _SETTINGS_FILE.write_text(
            json.dumps(self._data, ensure_ascii=False, indent=2), "utf-8"
        )

    # ── Convenience properties ────────────────────────────────────

    @property
    def wrap_width(self) -> Optional[int]:
        """Composer wrap width, or ``None`` to keep stored fragments."""
        try:
            width = int(self._data.get("wrap_width") or 0)
        except (TypeError, ValueError):
            log.warning("ignoring invalid wrap_width %r", self._data.get("wrap_width"))
            return None
        return width if width > 0 else None

    @property
    def log_level(self) -> str:
        level = str(self._data.get("log_level", "WARNING")).upper()
        return level if level in LOG_LEVELS else "WARNING"

    # ── Private ───────────────────────────────────────────────────

    def _load(self):
        if not _SETTINGS_FILE.exists():
            return
        try:
            stored = json.loads(_SETTINGS_FILE.read_text("utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("could not read %s: %s", _SETTINGS_FILE, exc)
            return
        if isinstance(stored, dict):
            self._data.update(stored)
        else:
            log.warning("ignoring %s: expected a JSON object", _SETTINGS_FILE)
