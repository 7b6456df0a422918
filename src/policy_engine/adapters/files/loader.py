"""Files adapter – PolicyAssetLoader."""
from __future__ import annotations

import asyncio
import os
import pathlib
from typing import Any

from policy_engine.adapters.files.codec import parse_json_object
from policy_engine.application.policy.decoder import DecodeReport, PolicyDecoder
from policy_engine.kernel.errors import PersistenceError
from policy_engine.observability.logging import Logger, get_logger


class PolicyAssetLoader:
    """Read a bundled policy document and normalise it to raw policy input.

    Entries may use the raw format (``"user": ["read"]``) or the per-role
    object format (``"user": {"allowedContent": ["read"]}``).  Malformed
    entries are skipped and reported by the decoder; the result is always
    ``role -> [content, ...]`` ready for
    :meth:`~policy_engine.application.policy.PolicyManager.initialize`.

    Example::

        raw = await PolicyAssetLoader("assets/policies.json").load()
        await manager.initialize(raw)
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        decoder: PolicyDecoder | None = None,
        logger: Logger | None = None,
        encoding: str = "utf-8",
    ) -> None:
        if not str(path):
            raise ValueError("Asset path cannot be empty")
        self._path = pathlib.Path(path)
        self._log: Logger = logger if logger is not None else get_logger(__name__)
        self._decoder = decoder or PolicyDecoder(logger=self._log)
        self._encoding = encoding
        self.last_report: DecodeReport | None = None

    @property
    def path(self) -> pathlib.Path:
        return self._path

    async def load(self) -> dict[str, list[str]]:
        """Return the asset as raw policy input.

        Raises:
            PersistenceError: the file cannot be read.
            SerializationError: the file is not a JSON object.
        """
        document = await self.load_document()
        report = self._decoder.decode_role_objects(document)
        self.last_report = report
        return {key: list(role.ordered_content) for key, role in report.roles.items()}

    async def load_document(self) -> dict[str, Any]:
        """Return the parsed JSON object without normalising it."""
        try:
            text = await asyncio.to_thread(self._path.read_text, encoding=self._encoding)
        except OSError as exc:
            self._log.error(
                "policy_asset.load_failed",
                operation="policy_asset_load",
                path=str(self._path),
                error=repr(exc),
            )
            raise PersistenceError(
                f"Failed to load policies from asset: {self._path}",
                operation="load",
                cause=exc,
            ) from exc
        return parse_json_object(text)


__all__ = ["PolicyAssetLoader"]
