"""Testing fakes – in-memory doubles for kernel ports."""
from policy_engine.testing.fakes.listener import RecordingListener
from policy_engine.testing.fakes.logger import CapturingLogger
from policy_engine.testing.fakes.store import FailingPolicyStore

__all__ = [
    "CapturingLogger",
    "FailingPolicyStore",
    "RecordingListener",
]
