"""Files adapter – JsonFilePolicyStore."""
from __future__ import annotations

import asyncio
import os
import pathlib
import tempfile
from typing import Mapping

from policy_engine.adapters.files.codec import dump_roles, parse_json_object
from policy_engine.kernel.errors import PersistenceError, SerializationError, ValidationError
from policy_engine.kernel.security import PolicyStore, Role


class JsonFilePolicyStore(PolicyStore):
    """Persist the role table as a JSON file of per-role objects.

    Layout::

        {
          "admin": {"roleName": "admin", "allowedContent": ["read"], "metadata": {}}
        }

    A missing file loads as an empty table.  Saves write a sibling temporary
    file and ``os.replace`` it over the target, so a reader never sees a
    half-written document.  File I/O runs in a worker thread.
    """

    def __init__(self, path: str | os.PathLike[str], *, encoding: str = "utf-8") -> None:
        if not str(path):
            raise ValueError("Policy file path cannot be empty")
        self._path = pathlib.Path(path)
        self._encoding = encoding

    @property
    def path(self) -> pathlib.Path:
        return self._path

    async def load(self) -> dict[str, Role]:
        return await asyncio.to_thread(self._load_sync)

    async def save(self, roles: Mapping[str, Role]) -> None:
        document = dump_roles(roles)
        await asyncio.to_thread(self._write_sync, document)

    async def clear(self) -> None:
        await asyncio.to_thread(self._clear_sync)

    def _load_sync(self) -> dict[str, Role]:
        try:
            text = self._path.read_text(encoding=self._encoding)
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise PersistenceError(
                f"Could not read policy file '{self._path}'", operation="load", cause=exc
            ) from exc

        document = parse_json_object(text)
        roles: dict[str, Role] = {}
        for key, value in document.items():
            try:
                roles[key] = Role.from_dict(value, default_name=key)
            except ValidationError as exc:
                raise SerializationError(
                    f"Policy file '{self._path}' has an invalid entry {key!r}: {exc.message}",
                    payload_type="role",
                    cause=exc,
                ) from exc
        return roles

    def _write_sync(self, document: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding=self._encoding) as fh:
                    fh.write(document)
                os.replace(tmp_name, self._path)
            except BaseException:
                pathlib.Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(
                f"Could not write policy file '{self._path}'", operation="save", cause=exc
            ) from exc

    def _clear_sync(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(
                f"Could not remove policy file '{self._path}'", operation="clear", cause=exc
            ) from exc


__all__ = ["JsonFilePolicyStore"]
