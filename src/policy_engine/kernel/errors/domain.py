"""Domain errors – malformed policy input."""

from __future__ import annotations

from typing import Any, Mapping

from policy_engine.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when policy data breaks a model rule."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """A single policy entry has the wrong shape.

    ``key`` names the offending entry (role name) when there is one;
    ``errors`` lists field-level failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.key = key
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        if self.key is not None:
            base["key"] = self.key
        base["errors"] = self.errors
        return base


class DecodeError(DomainError):
    """A whole policy batch was rejected.

    ``errors`` maps every failing key to its message.
    """

    default_code = "decode_error"

    def __init__(
        self,
        message: str,
        *,
        errors: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: dict[str, str] = dict(errors or {})

    @property
    def failed_keys(self) -> list[str]:
        return list(self.errors)

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


__all__ = [
    "DecodeError",
    "DomainError",
    "ValidationError",
]
