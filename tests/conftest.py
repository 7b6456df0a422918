"""Shared fixtures for the policy_engine test-suite."""

from __future__ import annotations

from policy_engine.testing.fixtures import (  # noqa: F401
    capturing_logger,
    failing_store,
    policy_decoder,
    policy_manager,
    recording_listener,
)
