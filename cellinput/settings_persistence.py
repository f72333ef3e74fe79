"""Settings persistence for input control preferences.

Settings are stored as JSON in an OS-appropriate config directory and
survive application restarts.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import InputConstants

logger = logging.getLogger(__name__)


@dataclass
class InputSettings:
    """User preferences for an input control."""
    start_in_overwrite: bool = False
    mask_symbol: Optional[str] = None
    enter_loses_focus: bool = True
    strip_paste_newlines: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InputSettings":
        """Build settings from a dict, skipping unknown keys and wrong types."""
        settings = cls()
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name == 'mask_symbol':
                if value is None or (isinstance(value, str) and len(value) == 1):
                    settings.mask_symbol = value
                else:
                    logger.warning(f"Ignoring invalid mask_symbol {value!r}")
            elif isinstance(value, bool):
                setattr(settings, f.name, value)
            else:
                logger.warning(f"Ignoring non-boolean value for {f.name}: {value!r}")
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SettingsPersistence:
    """Loads and saves InputSettings in the user's config directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir(InputConstants.APP_NAME,
                                                           InputConstants.APP_AUTHOR))
        self._config_dir = Path(config_dir)
        self._settings_file = self._config_dir / InputConstants.SETTINGS_FILENAME

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def load(self) -> InputSettings:
        """Load settings from disk.

        Returns:
            Stored settings, or defaults if the file is missing or unreadable.
        """
        if not self._settings_file.exists():
            return InputSettings()

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return InputSettings()

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return InputSettings()
        return InputSettings.from_dict(data)

    def save(self, settings: InputSettings) -> bool:
        """Save settings to disk atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")
            return False

        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings.to_dict(), f, indent=2)
            temp_file.replace(self._settings_file)
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False
