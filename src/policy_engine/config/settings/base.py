"""Config settings – Settings base class and PolicyEngineSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from policy_engine.config.validation.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class PolicyEngineSettings(Settings):
    """Runtime knobs for the policy manager.

    Read from ``POLICY_ENGINE_*`` environment variables by
    :class:`~policy_engine.config.settings.loaders.EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "POLICY_ENGINE"

    allow_partial_success: bool = True
    log_level: str = "INFO"
    policy_file: str = ""
    max_error_summary: int = 3

    def _validate(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")
        if self.max_error_summary < 1:
            raise InvalidSettingValueError(
                "max_error_summary", self.max_error_summary, "must be at least 1"
            )


__all__ = ["PolicyEngineSettings", "Settings"]
