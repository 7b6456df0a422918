"""Application-layer errors – misuse of the policy manager API."""

from __future__ import annotations

from typing import Any

from policy_engine.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UsageError(ApplicationError):
    """The caller invoked an operation with structurally invalid arguments."""

    default_code = "usage_error"

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation


class PolicyNotInitializedError(UsageError):
    """An operation that needs a loaded policy ran before ``initialize``."""

    default_code = "policy_not_initialized"

    def __init__(self, message: str = "Policy manager is not initialized", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "ApplicationError",
    "PolicyNotInitializedError",
    "UsageError",
]
