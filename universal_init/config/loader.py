"""YAML settings loader."""
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from universal_init.core.errors import SettingsError
from universal_init.core.logger import get_logger
from universal_init.models.settings import InitSettings

logger = get_logger(__name__)

CONFIG_ENV_VAR = "UNIVERSAL_INIT_CONFIG"

# Default settings search paths (ordered by proximity to current run)
CONFIG_PATHS = [
    "./universal-init.yml",
    str(Path.home() / ".config" / "universal-init" / "config.yml"),
]


def find_config(config_path: Optional[str] = None) -> Optional[str]:
    """Locate the active settings file, or None when running on defaults."""
    if config_path:
        return config_path

    if env_config := os.environ.get(CONFIG_ENV_VAR):
        return env_config

    for path in CONFIG_PATHS:
        if Path(path).exists():
            return path

    return None


class SettingsLoader:
    """Loads and validates universal-init settings files."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path) if config_path else None
        self.raw_config = None

    def load(self) -> InitSettings:
        """Load settings from the file, or built-in defaults without one."""
        if self.config_path is None:
            logger.debug("No settings file found, using built-in defaults")
            return InitSettings()

        if not self.config_path.exists():
            raise SettingsError(f"Settings file not found: {self.config_path}")

        try:
            with open(self.config_path) as f:
                self.raw_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise SettingsError(f"Cannot read settings file {self.config_path}: {e}") from e

        # Empty file means defaults
        if not self.raw_config:
            return InitSettings()

        if not isinstance(self.raw_config, dict):
            raise SettingsError(
                f"Settings file {self.config_path} must contain a mapping at the top level"
            )

        try:
            settings = InitSettings.model_validate(self.raw_config)
        except ValidationError as e:
            raise SettingsError(f"Invalid settings in {self.config_path}:\n{e}") from e

        logger.debug(f"Loaded settings from {self.config_path}")
        return settings


def load_settings(config_path: Optional[str] = None) -> InitSettings:
    """Resolve the settings file and load it."""
    return SettingsLoader(find_config(config_path)).load()
