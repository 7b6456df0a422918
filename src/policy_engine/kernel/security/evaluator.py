"""Kernel security – PolicyEvaluator port and RoleEvaluator."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Protocol, runtime_checkable

from policy_engine.kernel.security.role import Role


@runtime_checkable
class PolicyEvaluator(Protocol):
    """Port: answer ``may <role> access <content>?``."""

    def evaluate(self, role: str, content: str) -> bool: ...


class RoleEvaluator:
    """Exact-match evaluator over a fixed role table.

    The table is copied at construction and never mutated afterwards, so an
    instance can be shared between any number of concurrent readers.

    Example::

        evaluator = RoleEvaluator({"admin": Role("admin", ["read", "write"])})
        evaluator.evaluate("admin", "write")    # True
        evaluator.evaluate("admin", "WRITE")    # False
    """

    __slots__ = ("_roles",)

    def __init__(self, roles: Mapping[str, Role]) -> None:
        self._roles: Mapping[str, Role] = MappingProxyType(dict(roles))

    @property
    def roles(self) -> Mapping[str, Role]:
        return self._roles

    def evaluate(self, role: str, content: str) -> bool:
        if not role or not content:
            return False
        entry = self._roles.get(role)
        if entry is None:
            return False
        return entry.is_content_allowed(content)

    def __contains__(self, role: object) -> bool:
        return role in self._roles

    def __len__(self) -> int:
        return len(self._roles)

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __repr__(self) -> str:
        return f"RoleEvaluator(roles={sorted(self._roles)!r})"


__all__ = ["PolicyEvaluator", "RoleEvaluator"]
