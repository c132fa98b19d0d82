from typing import Any, Optional
import json
import os
from pydantic import BaseModel, Field, ValidationError
from loguru import logger
from .events import Signal


# --- Settings Models ---
class GeneralSettings(BaseModel):
    app_name: str = "navext"
    debug_mode: bool = True


class LoggingSettings(BaseModel):
    log_dir: Optional[str] = None  # None disables the file sink
    rotation: str = "10 MB"
    retention: str = "1 week"


class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# --- Manager ---
class ConfigManager:
    """
    Manages application configuration with persistence and reactivity.

    Settings are validated by pydantic on load and on every update.
    Subscribers to ``on_changed`` receive ``(section, key, value)``.
    """
    def __init__(self, filepath: str = "config.json"):
        self.filepath = filepath
        self._data = AppConfig()
        self.on_changed = Signal("ConfigChanged")
        self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any) -> None:
        """Update a setting, validate it, autosave and emit ``on_changed``."""
        if section not in AppConfig.model_fields:
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if key not in type(section_obj).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        # Validate through the model so bad values never reach the live config
        candidate = section_obj.model_dump()
        candidate[key] = value
        validated = type(section_obj).model_validate(candidate)

        setattr(self._data, section, validated)
        self._save()
        self.on_changed.emit(section, key, getattr(validated, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self) -> None:
        """Load settings from JSON or TOML if present; otherwise write defaults."""
        if not os.path.isfile(self.filepath):
            self._save()
            return

        try:
            if self.filepath.endswith(".toml"):
                import tomllib
                with open(self.filepath, "rb") as f:
                    raw = tomllib.load(f)
            else:
                with open(self.filepath, "r", encoding="utf-8") as f:
                    raw = json.load(f)
            self._data = AppConfig.model_validate(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Failed to load config from {self.filepath}: {e}")

    def _save(self) -> None:
        if self.filepath.endswith(".toml"):
            # TOML files are treated as read-only input
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
