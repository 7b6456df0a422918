"""Config settings – Settings, PolicyEngineSettings, loaders."""
from policy_engine.config.settings.base import PolicyEngineSettings, Settings
from policy_engine.config.settings.loaders import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SettingsLoader,
)

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "PolicyEngineSettings",
    "Settings",
    "SettingsLoader",
]
