"""Unit tests for application policy – ChangeNotifier."""

from __future__ import annotations

import pytest

from policy_engine.application.policy import ChangeNotifier
from policy_engine.testing.fakes import CapturingLogger


class TestChangeNotifier:
    def test_calls_in_registration_order(self) -> None:
        calls: list[str] = []
        notifier = ChangeNotifier()
        notifier.add_listener(lambda: calls.append("first"))
        notifier.add_listener(lambda: calls.append("second"))
        notifier.notify_listeners()
        assert calls == ["first", "second"]

    def test_remove_listener(self) -> None:
        calls: list[int] = []

        def listener() -> None:
            calls.append(1)

        notifier = ChangeNotifier()
        notifier.add_listener(listener)
        notifier.remove_listener(listener)
        notifier.notify_listeners()
        assert calls == []
        assert notifier.has_listeners is False

    def test_remove_unknown_is_noop(self) -> None:
        ChangeNotifier().remove_listener(lambda: None)

    def test_duplicate_registration_called_twice(self) -> None:
        calls: list[int] = []

        def listener() -> None:
            calls.append(1)

        notifier = ChangeNotifier()
        notifier.add_listener(listener)
        notifier.add_listener(listener)
        notifier.notify_listeners()
        assert len(calls) == 2

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError):
            ChangeNotifier().add_listener("nope")  # type: ignore[arg-type]

    def test_listener_may_unregister_during_dispatch(self) -> None:
        notifier = ChangeNotifier()
        calls: list[str] = []

        def once() -> None:
            calls.append("once")
            notifier.remove_listener(once)

        notifier.add_listener(once)
        notifier.add_listener(lambda: calls.append("always"))
        notifier.notify_listeners()
        notifier.notify_listeners()
        assert calls == ["once", "always", "always"]

    def test_failing_listener_does_not_stop_dispatch(self) -> None:
        logger = CapturingLogger()
        notifier = ChangeNotifier(logger=logger)
        calls: list[str] = []

        def boom() -> None:
            raise RuntimeError("listener failed")

        notifier.add_listener(boom)
        notifier.add_listener(lambda: calls.append("after"))
        assert notifier.notify_listeners() == 1
        assert calls == ["after"]
        (event,) = logger.find("policy_manager.listener_failed")
        assert event.level == "error"
        assert "listener failed" in event.extra["error"]

    def test_returns_zero_when_all_succeed(self) -> None:
        notifier = ChangeNotifier(logger=CapturingLogger())
        notifier.add_listener(lambda: None)
        assert notifier.notify_listeners() == 0
