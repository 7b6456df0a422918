"""Config – settings and their loaders."""
from policy_engine.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    PolicyEngineSettings,
    Settings,
    SettingsLoader,
)
from policy_engine.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "PolicyEngineSettings",
    "Settings",
    "SettingsLoader",
]
