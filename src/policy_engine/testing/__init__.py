"""Testing support – fakes and pytest fixtures.

Import in your ``conftest.py``::

    pytest_plugins = ["policy_engine.testing.fixtures"]
"""

from policy_engine.testing.fakes import CapturingLogger, FailingPolicyStore, RecordingListener

__all__ = [
    "CapturingLogger",
    "FailingPolicyStore",
    "RecordingListener",
]
