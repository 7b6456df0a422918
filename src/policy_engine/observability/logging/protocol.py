"""Observability – Logger protocol, LogEvent and NullLogger."""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from typing import Any, Protocol


@dataclasses.dataclass(frozen=True)
class LogEvent:
    """Structured log entry as seen by a capturing logger."""
    level: str
    message: str
    logger_name: str
    timestamp: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)


class Logger(Protocol):
    """Minimal leveled logger – satisfied by a structlog ``BoundLogger``."""

    def debug(self, event: str, **kw: Any) -> None: ...
    def info(self, event: str, **kw: Any) -> None: ...
    def warning(self, event: str, **kw: Any) -> None: ...
    def error(self, event: str, **kw: Any) -> None: ...
    def critical(self, event: str, **kw: Any) -> None: ...


class NullLogger:
    """Logger that discards every event."""

    def debug(self, event: str, **kw: Any) -> None:
        pass

    def info(self, event: str, **kw: Any) -> None:
        pass

    def warning(self, event: str, **kw: Any) -> None:
        pass

    def error(self, event: str, **kw: Any) -> None:
        pass

    def critical(self, event: str, **kw: Any) -> None:
        pass


__all__ = ["LogEvent", "Logger", "NullLogger"]
