"""Settings management."""
from universal_init.config.loader import SettingsLoader, find_config, load_settings
from universal_init.core.errors import SettingsError

__all__ = ['SettingsLoader', 'SettingsError', 'find_config', 'load_settings']
