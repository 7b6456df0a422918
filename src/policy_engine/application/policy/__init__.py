"""Application policy – decoder, change notification and the policy manager."""
from policy_engine.application.policy.decoder import (
    DecodeReport,
    PolicyDecoder,
    parse_content_list,
    parse_role_object,
)
from policy_engine.application.policy.manager import (
    EvaluatorFactory,
    PolicyManager,
    PolicyManagerState,
)
from policy_engine.application.policy.notifier import ChangeNotifier, Listener

__all__ = [
    "ChangeNotifier",
    "DecodeReport",
    "EvaluatorFactory",
    "Listener",
    "PolicyDecoder",
    "PolicyManager",
    "PolicyManagerState",
    "parse_content_list",
    "parse_role_object",
]
