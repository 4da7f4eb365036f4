"""Viewer settings stored in settings.yaml."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from .theme import Theme

DEFAULT_SETTINGS_PATH = Path("~/.mdview/settings.yaml").expanduser()

MIN_WIDTH = 20


@dataclass
class ViewerSettings:
    """User preferences for rendering."""

    theme: Theme = Theme.SYSTEM
    show_raw_markdown: bool = False
    width: int = 80

    def __post_init__(self) -> None:
        if not isinstance(self.theme, Theme):
            self.theme = Theme(self.theme)
        if not isinstance(self.show_raw_markdown, bool):
            raise ValueError(f"show_raw_markdown must be a boolean: {self.show_raw_markdown!r}")
        if isinstance(self.width, bool) or not isinstance(self.width, int):
            raise ValueError(f"width must be an integer: {self.width!r}")
        if self.width < MIN_WIDTH:
            raise ValueError(f"width must be at least {MIN_WIDTH}: {self.width}")

    def to_dict(self) -> dict:
        """Serialize to dict for YAML storage."""
        return {
            "theme": self.theme.value,
            "show_raw_markdown": self.show_raw_markdown,
            "width": self.width,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ViewerSettings:
        """Deserialize from dict. Missing keys keep their defaults.

        Raises:
            ValueError: If a value is invalid.
        """
        defaults = cls()
        return cls(
            theme=data.get("theme", defaults.theme),
            show_raw_markdown=data.get("show_raw_markdown", defaults.show_raw_markdown),
            width=data.get("width", defaults.width),
        )


def _parse_value(key: str, raw: str) -> object:
    """Convert a command-line string into the type of setting ``key``."""
    if key == "theme":
        return Theme(raw)
    if key == "show_raw_markdown":
        lowered = raw.lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
        raise ValueError(f"Not a boolean: {raw}")
    if key == "width":
        return int(raw)
    raise KeyError(f"Unknown setting: {key}")


class SettingsManager:
    """Loads and saves ViewerSettings as YAML with atomic writes."""

    def __init__(self, settings_path: Path = DEFAULT_SETTINGS_PATH) -> None:
        """Initialize with path to settings.yaml file.

        Args:
            settings_path: Path to the YAML settings file.
        """
        self._settings_path = settings_path

    @property
    def settings_path(self) -> Path:
        """Return the settings file path."""
        return self._settings_path

    def load(self) -> ViewerSettings:
        """Load settings from the YAML file.

        Returns:
            ViewerSettings. Defaults if the file doesn't exist or is empty.

        Raises:
            ValueError: If the file is not valid YAML or holds an invalid value.
        """
        if not self._settings_path.exists():
            return ViewerSettings()

        try:
            with open(self._settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self._settings_path}: {e}") from e

        if data is None:
            return ViewerSettings()
        if not isinstance(data, dict):
            raise ValueError(f"Settings file must hold a mapping: {self._settings_path}")

        return ViewerSettings.from_dict(data)

    def save(self, settings: ViewerSettings) -> None:
        """Save settings to the YAML file.

        Uses atomic write (temp file + rename) to prevent corruption.

        Args:
            settings: Settings to persist.
        """
        self._settings_path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory keeps the rename on one filesystem
        fd, temp_path = tempfile.mkstemp(
            dir=self._settings_path.parent,
            prefix=".settings_",
            suffix=".yaml.tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(settings.to_dict(), f, default_flow_style=False)
            os.replace(temp_path, self._settings_path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def set_value(self, key: str, raw: str) -> ViewerSettings:
        """Parse ``raw`` for setting ``key``, save, and return the new settings.

        Raises:
            KeyError: If ``key`` is not a setting.
            ValueError: If ``raw`` is not a valid value.
        """
        known = {f.name for f in fields(ViewerSettings)}
        if key not in known:
            raise KeyError(f"Unknown setting: {key}")
        settings = replace(self.load(), **{key: _parse_value(key, raw)})
        self.save(settings)
        return settings
