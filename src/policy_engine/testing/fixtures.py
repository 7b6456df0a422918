"""Testing fixtures – pytest fixtures for policy engine doubles.

Enable in your ``conftest.py``::

    pytest_plugins = ["policy_engine.testing.fixtures"]
"""
from __future__ import annotations

from policy_engine.application.policy import PolicyDecoder, PolicyManager
from policy_engine.testing.fakes import CapturingLogger, FailingPolicyStore, RecordingListener

try:
    import pytest

    @pytest.fixture
    def capturing_logger() -> CapturingLogger:
        return CapturingLogger()

    @pytest.fixture
    def failing_store() -> FailingPolicyStore:
        return FailingPolicyStore()

    @pytest.fixture
    def recording_listener() -> RecordingListener:
        return RecordingListener()

    @pytest.fixture
    def policy_decoder(capturing_logger: CapturingLogger) -> PolicyDecoder:
        return PolicyDecoder(logger=capturing_logger)

    @pytest.fixture
    def policy_manager(
        failing_store: FailingPolicyStore,
        capturing_logger: CapturingLogger,
        recording_listener: RecordingListener,
    ) -> PolicyManager:
        manager = PolicyManager(failing_store, logger=capturing_logger)
        manager.add_listener(recording_listener)
        return manager

except ImportError:
    pass

__all__ = [
    "capturing_logger",
    "failing_store",
    "policy_decoder",
    "policy_manager",
    "recording_listener",
]
