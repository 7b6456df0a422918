"""Infrastructure errors – policy store and serialization failures."""

from __future__ import annotations

from typing import Any

from policy_engine.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a policy rule violation."""

    default_code = "infrastructure_error"


class PersistenceError(InfrastructureError):
    """A policy store failed to load, save or clear."""

    default_code = "persistence_error"

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation


class SerializationError(InfrastructureError):
    """Failed to parse or render a policy document."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


__all__ = [
    "InfrastructureError",
    "PersistenceError",
    "SerializationError",
]
