"""User settings persisted as JSON, overridable from the environment."""

import copy
import json
import logging
import os
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Tuple

from .settings import Config

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")


class SettingsManager:
    """
    Process-wide settings store.

    Precedence, lowest first: DEFAULTS, the JSON file, environment
    variables named like the keys. Every value is coerced to the type of its
    default, and keys listed in CHOICES only accept the listed values, so a
    hand-edited file cannot put the app in an unknown state.

    Usage:
        settings = SettingsManager()
        if settings.get("MEDIA_LIBRARY_PERMISSION") == "granted":
            ...
        settings.set("THEME_MODE", "dark")
    """

    _instance: Optional["SettingsManager"] = None
    _lock: Lock = Lock()

    DEFAULTS: Dict[str, Any] = {
        "STORAGE_BACKEND": "csv",
        "LOOKUP_DEBOUNCE_MS": Config.LOOKUP_DEBOUNCE_MS,
        "TTS_FALLBACK": Config.TTS_FALLBACK,
        "MEDIA_LIBRARY_PERMISSION": "undetermined",
        "THEME_MODE": "light",
    }

    CHOICES: Dict[str, Tuple[str, ...]] = {
        "STORAGE_BACKEND": ("csv", "sqlite"),
        "MEDIA_LIBRARY_PERMISSION": ("undetermined", "granted", "denied"),
        "THEME_MODE": ("light", "dark"),
    }

    def __new__(cls, settings_file: Optional[str] = None) -> "SettingsManager":
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._ready = False
        return cls._instance

    def __init__(self, settings_file: Optional[str] = None) -> None:
        """
        Args:
            settings_file: JSON file to read and write, Config.SETTINGS_FILE
                by default. Ignored once the singleton exists.
        """
        if self._ready:
            return

        self.path = Path(settings_file or Config.SETTINGS_FILE)
        self._values: Dict[str, Any] = {}
        self._write_lock = Lock()

        self._load_settings()
        self._ready = True

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _read_file(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self.path)
            return {}
        return data

    def _coerce(self, key: str, value: Any) -> Any:
        """Convert a raw value to the type of its default; fall back to the default."""
        default = self.DEFAULTS.get(key)
        if key not in self.DEFAULTS:
            return value

        try:
            if isinstance(default, bool):
                if isinstance(value, str):
                    return value.strip().lower() in _TRUE_VALUES
                return bool(value)
            if isinstance(default, int):
                return int(value)
        except (TypeError, ValueError):
            logger.warning("Invalid value %r for %s, using %r", value, key, default)
            return default

        value = str(value).strip().lower() if key in self.CHOICES else value
        if key in self.CHOICES and value not in self.CHOICES[key]:
            logger.warning("Invalid value %r for %s, using %r", value, key, default)
            return default
        return value

    def _load_settings(self) -> None:
        values = dict(self.DEFAULTS)
        for key, value in self._read_file().items():
            values[key] = self._coerce(key, value)

        for key in self.DEFAULTS:
            env_value = os.environ.get(key)
            if env_value is not None:
                values[key] = self._coerce(key, env_value)

        self._values = values
        self._save_settings()

    def _save_settings(self) -> None:
        """Write the current values; a failed write keeps the previous file intact."""
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with self._write_lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(self._values, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.path)
            except OSError as e:
                logger.warning("Could not save settings to %s: %s", self.path, e)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        value = self._values.get(key, default)
        return copy.deepcopy(value) if isinstance(value, (dict, list)) else value

    def set(self, key: str, value: Any, persist: bool = True) -> None:
        """Store a value (coerced like loaded ones) and write the file unless persist is False."""
        self._values[key] = self._coerce(key, value)
        if persist:
            self._save_settings()

    def get_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._values)

    def reset(self, key: Optional[str] = None) -> None:
        """Restore one key, or every key when key is None, to its default."""
        if key is None:
            self._values = dict(self.DEFAULTS)
        elif key in self.DEFAULTS:
            self._values[key] = self.DEFAULTS[key]
        self._save_settings()

    def reload(self) -> None:
        self._load_settings()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the singleton so the next SettingsManager() reads from scratch."""
        with cls._lock:
            cls._instance = None
