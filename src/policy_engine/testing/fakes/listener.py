"""Testing fakes – RecordingListener."""
from __future__ import annotations

from typing import Any, Callable


class RecordingListener:
    """Zero-argument change listener that counts its calls.

    ``on_call`` (optional) runs on every call, e.g. to read manager state at
    notification time.
    """

    def __init__(self, on_call: Callable[[], Any] | None = None) -> None:
        self.count = 0
        self.observed: list[Any] = []
        self._on_call = on_call

    def __call__(self) -> None:
        self.count += 1
        if self._on_call is not None:
            self.observed.append(self._on_call())


__all__ = ["RecordingListener"]
