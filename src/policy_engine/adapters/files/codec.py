"""Files adapter – JSON policy document codec."""
from __future__ import annotations

import json
from typing import Any, Mapping

from policy_engine.kernel.errors import SerializationError
from policy_engine.kernel.security import Role

_PREVIEW_CHARS = 100


def _preview(text: str) -> str:
    return text if len(text) <= _PREVIEW_CHARS else f"{text[:_PREVIEW_CHARS]}..."


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse *text* as a JSON document whose top level is an object.

    Raises:
        SerializationError: empty text, invalid JSON, or a non-object top level.
    """
    if not text or not text.strip():
        raise SerializationError("Cannot parse empty JSON string", payload_type="json")
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(
            f"Failed to parse JSON string: {exc.msg}",
            payload_type="json",
            detail={"line": exc.lineno, "column": exc.colno, "input_preview": _preview(text)},
            cause=exc,
        ) from exc
    if not isinstance(parsed, dict):
        raise SerializationError(
            "JSON document does not represent an object, "
            f"got {type(parsed).__name__}",
            payload_type="json",
            detail={"input_preview": _preview(text)},
        )
    return parsed


def dump_roles(roles: Mapping[str, Role]) -> str:
    """Render a role table as a JSON document of per-role objects."""
    return json.dumps(
        {key: role.to_dict() for key, role in roles.items()},
        ensure_ascii=False,
        indent=2,
        sort_keys=True,
    )


__all__ = ["dump_roles", "parse_json_object"]
