"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   └── DecodeError
    ├── ApplicationError     (application.py)
    │   └── UsageError
    │       └── PolicyNotInitializedError
    └── InfrastructureError  (infrastructure.py)
        ├── PersistenceError
        └── SerializationError
"""

from policy_engine.kernel.errors.application import (
    ApplicationError,
    PolicyNotInitializedError,
    UsageError,
)
from policy_engine.kernel.errors.base import BaseError
from policy_engine.kernel.errors.domain import DecodeError, DomainError, ValidationError
from policy_engine.kernel.errors.infrastructure import (
    InfrastructureError,
    PersistenceError,
    SerializationError,
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
