"""Application policy – ChangeNotifier."""

from __future__ import annotations

from typing import Callable

from policy_engine.observability.logging import Logger, get_logger

#: A zero-argument change callback.
Listener = Callable[[], None]


class ChangeNotifier:
    """Ordered list of zero-argument listeners.

    Listeners are called synchronously in registration order.  The same
    callable may be registered more than once and is then called once per
    registration; :meth:`remove_listener` drops the earliest registration.
    A listener that raises is logged as ``policy_manager.listener_failed``
    and the remaining listeners are still called.
    """

    def __init__(self, *, logger: Logger | None = None) -> None:
        self._log: Logger = logger if logger is not None else get_logger(__name__)
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {type(listener).__name__}")
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister *listener* (no-op if it was never registered)."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def notify_listeners(self) -> int:
        """Call every listener; return how many of them raised."""
        failures = 0
        # Snapshot so a listener may (un)register during dispatch.
        for listener in tuple(self._listeners):
            try:
                listener()
            except Exception as exc:
                failures += 1
                self._log.error(
                    "policy_manager.listener_failed",
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=repr(exc),
                )
        return failures


__all__ = ["ChangeNotifier", "Listener"]
