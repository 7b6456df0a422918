"""Kernel security – Role.

A :class:`Role` is the unit of the policy table: a name plus the set of
content identifiers the role may access.
"""

from __future__ import annotations

import copy
import dataclasses
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from policy_engine.kernel.errors.domain import ValidationError

#: Keys of the persisted per-role object.
NAME_KEY = "roleName"
CONTENT_KEY = "allowedContent"
METADATA_KEY = "metadata"


def _ordered_unique(content: Iterable[str]) -> tuple[str, ...]:
    if isinstance(content, (str, bytes)):
        raise ValidationError(
            "allowed_content must be an iterable of strings, not a single string",
            errors=[{"field": "allowed_content", "actual_type": type(content).__name__}],
        )
    items = tuple(content)
    bad = [i for i, item in enumerate(items) if not isinstance(item, str)]
    if bad:
        raise ValidationError(
            "All allowed_content items must be strings",
            errors=[
                {"field": "allowed_content", "index": i, "actual_type": type(items[i]).__name__}
                for i in bad
            ],
        )
    return tuple(dict.fromkeys(items))


@dataclasses.dataclass(frozen=True)
class Role:
    """A named bundle of permitted content identifiers.

    ``allowed_content`` accepts any iterable of strings and is stored as a
    ``frozenset``; duplicates collapse.  The first-seen order is kept in
    :attr:`ordered_content` for display only.

    Two roles are equal when their names match and their content sets are
    equal.  ``metadata`` is opaque and excluded from equality and hashing;
    it is deep-copied on construction so later changes to the caller's
    nested values do not reach the role.

    Example::

        admin = Role("admin", ["read", "write", "delete"], metadata={"tier": 1})
        admin.is_content_allowed("write")   # True
    """

    name: str
    allowed_content: frozenset[str] = dataclasses.field(default_factory=frozenset)
    metadata: Mapping[str, Any] = dataclasses.field(
        default_factory=dict, compare=False
    )
    ordered_content: tuple[str, ...] = dataclasses.field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise ValidationError(
                "Role name must be a string",
                errors=[{"field": "name", "actual_type": type(self.name).__name__}],
            )
        ordered = _ordered_unique(self.allowed_content)
        object.__setattr__(self, "ordered_content", ordered)
        object.__setattr__(self, "allowed_content", frozenset(ordered))
        object.__setattr__(
            self, "metadata", MappingProxyType(copy.deepcopy(dict(self.metadata or {})))
        )

    def is_content_allowed(self, content: str) -> bool:
        """Exact, case-sensitive membership test."""
        return content in self.allowed_content

    def copy_with(
        self,
        *,
        name: str | None = None,
        allowed_content: Iterable[str] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> "Role":
        """Return a new role with the given fields replaced."""
        return Role(
            name=self.name if name is None else name,
            allowed_content=self.ordered_content if allowed_content is None else allowed_content,
            metadata=self.metadata if metadata is None else metadata,
        )

    def with_content(self, *content: str) -> "Role":
        """Return a new role that additionally allows *content*."""
        return self.copy_with(allowed_content=(*self.ordered_content, *content))

    def without_content(self, *content: str) -> "Role":
        """Return a new role with *content* removed."""
        dropped = set(content)
        return self.copy_with(
            allowed_content=[c for c in self.ordered_content if c not in dropped]
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the persisted per-role object."""
        return {
            NAME_KEY: self.name,
            CONTENT_KEY: list(self.ordered_content),
            METADATA_KEY: copy.deepcopy(dict(self.metadata)),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, default_name: str | None = None) -> "Role":
        """Build a role from a per-role object.

        ``roleName`` may be omitted when *default_name* is given (e.g. the
        table key the object was stored under).  A non-mapping ``metadata``
        is replaced by an empty mapping.

        Raises:
            ValidationError: ``roleName`` or ``allowedContent`` is missing or
                has the wrong type, or an ``allowedContent`` item is not a string.
        """
        if not isinstance(data, Mapping):
            raise ValidationError(
                "Role object must be a mapping",
                key=default_name,
                errors=[{"expected_type": "dict", "actual_type": type(data).__name__}],
            )
        name = data.get(NAME_KEY, default_name)
        if not isinstance(name, str):
            raise ValidationError(
                f"{NAME_KEY} must be a non-null string",
                key=default_name,
                errors=[{"field": NAME_KEY, "actual_type": type(name).__name__}],
            )
        content = data.get(CONTENT_KEY)
        if not isinstance(content, (list, tuple)):
            raise ValidationError(
                f"{CONTENT_KEY} must be a non-null list",
                key=default_name or name,
                errors=[{"field": CONTENT_KEY, "actual_type": type(content).__name__}],
            )
        metadata = data.get(METADATA_KEY)
        try:
            return cls(
                name=name,
                allowed_content=content,
                metadata=metadata if isinstance(metadata, Mapping) else {},
            )
        except ValidationError as exc:
            raise ValidationError(
                f"All {CONTENT_KEY} items must be strings",
                key=default_name or name,
                errors=exc.errors,
            ) from exc


__all__ = ["CONTENT_KEY", "METADATA_KEY", "NAME_KEY", "Role"]
