"""
Settings management for pocketrocket.

Handles loading, saving, and accessing application configuration.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import logging

from .defaults import DEFAULT_SETTINGS, ENV_OVERRIDES

logger = logging.getLogger(__name__)


class Settings:
    """
    Application settings manager.

    Settings are stored as JSON and layered: defaults, then the
    config file, then environment overrides.

    Path:
        Linux/macOS: ~/.config/pocketrocket/settings.json
        Windows: %APPDATA%\\pocketrocket\\settings.json
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            config_file: Explicit settings file; defaults to the user config dir
            environ: Environment used for overrides (defaults to os.environ)
        """
        if config_file:
            self.config_file = Path(config_file).expanduser()
            self.config_dir = self.config_file.parent
        else:
            self.config_dir = self._get_config_dir()
            self.config_file = self.config_dir / "settings.json"
        self._environ = os.environ if environ is None else environ
        self._settings: Dict[str, Any] = {}
        self.load()

    @staticmethod
    def _get_config_dir() -> Path:
        """
        Get platform-specific configuration directory.

        Returns:
            Path to configuration directory
        """
        if os.name == 'nt':  # Windows
            base = os.environ.get('APPDATA', os.path.expanduser('~'))
        else:  # Linux/macOS
            base = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(base) / 'pocketrocket'

    def load(self):
        """
        Load settings from file, then apply environment overrides.

        If the file doesn't exist or is invalid, uses default settings.
        """
        self._settings = copy.deepcopy(DEFAULT_SETTINGS)

        if not self.config_file.exists():
            logger.info("No config file found, using defaults")
        else:
            try:
                with open(self.config_file, 'r') as f:
                    loaded_settings = json.load(f)
                if not isinstance(loaded_settings, dict):
                    raise ValueError("settings root must be an object")
                self._deep_update(self._settings, loaded_settings)
                logger.info(f"Loaded settings from {self.config_file}")
            except (json.JSONDecodeError, ValueError, IOError) as e:
                logger.error(f"Failed to load settings: {e}, using defaults")
                self._settings = copy.deepcopy(DEFAULT_SETTINGS)

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        for env_name, key in ENV_OVERRIDES.items():
            value = self._environ.get(env_name)
            if value:
                logger.debug(f"Setting {key} from ${env_name}")
                self.set(key, value)

    def save(self):
        """
        Save current settings to file.

        Creates parent directories if needed.
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)

            with open(self.config_file, 'w') as f:
                json.dump(self._settings, f, indent=2)

            logger.info(f"Saved settings to {self.config_file}")

        except IOError as e:
            logger.error(f"Failed to save settings: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get setting value.

        Supports nested keys with dot notation: "stack.default_name"

        Args:
            key: Setting key (use dots for nested values)
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        value = self._settings

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set setting value.

        Supports nested keys with dot notation: "stack.default_name"
        """
        keys = key.split('.')
        target = self._settings

        for k in keys[:-1]:
            if k not in target or not isinstance(target[k], dict):
                target[k] = {}
            target = target[k]

        target[keys[-1]] = value

    @staticmethod
    def _deep_update(base: dict, updates: dict):
        """Recursively update base dict with values from updates dict."""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                Settings._deep_update(base[key], value)
            else:
                base[key] = value
