"""Kernel security – PolicyStore port and InMemoryPolicyStore."""

from __future__ import annotations

import abc
from typing import Mapping

from policy_engine.kernel.security.role import Role


class PolicyStore(abc.ABC):
    """Port – persistence for the role table.

    Each call is independent; callers that need ordering across calls (the
    :class:`~policy_engine.application.policy.PolicyManager`) serialise them.
    Implementations raise
    :class:`~policy_engine.kernel.errors.PersistenceError` on failure.
    File-backed storage lives in ``adapters/files``; use
    :class:`InMemoryPolicyStore` in unit tests.
    """

    @abc.abstractmethod
    async def load(self) -> dict[str, Role]:
        """Return a copy of the stored role table (empty when nothing is stored)."""

    @abc.abstractmethod
    async def save(self, roles: Mapping[str, Role]) -> None:
        """Replace the stored table with *roles*."""

    @abc.abstractmethod
    async def clear(self) -> None:
        """Remove every stored role."""


class InMemoryPolicyStore(PolicyStore):
    """Dict-backed store for unit tests and hosts that need no durability.

    Roles are immutable, so copying the mapping is a full structural copy:
    changes to the caller's table after :meth:`save` are not visible, and
    mutating the result of :meth:`load` does not touch stored state.
    """

    def __init__(self, roles: Mapping[str, Role] | None = None) -> None:
        self._roles: dict[str, Role] = dict(roles or {})

    async def load(self) -> dict[str, Role]:
        return dict(self._roles)

    async def save(self, roles: Mapping[str, Role]) -> None:
        self._roles = dict(roles)

    async def clear(self) -> None:
        self._roles.clear()

    def __len__(self) -> int:
        return len(self._roles)


__all__ = ["InMemoryPolicyStore", "PolicyStore"]
