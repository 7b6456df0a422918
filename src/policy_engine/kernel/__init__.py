"""Kernel – framework-agnostic building blocks."""

from policy_engine.kernel.errors import (
    ApplicationError,
    BaseError,
    DecodeError,
    DomainError,
    InfrastructureError,
    PersistenceError,
    PolicyNotInitializedError,
    SerializationError,
    UsageError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DecodeError",
    "DomainError",
    "InfrastructureError",
    "PersistenceError",
    "PolicyNotInitializedError",
    "SerializationError",
    "UsageError",
    "ValidationError",
]
