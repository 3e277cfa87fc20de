"""Config – client settings and their loaders."""
from truevault.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from truevault.config.settings import TrueVaultSettings
from truevault.kernel.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SettingsLoader",
    "TrueVaultSettings",
]
