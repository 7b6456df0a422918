"""Kernel security – Role, evaluator port, policy store port."""
from policy_engine.kernel.security.evaluator import PolicyEvaluator, RoleEvaluator
from policy_engine.kernel.security.role import CONTENT_KEY, METADATA_KEY, NAME_KEY, Role
from policy_engine.kernel.security.storage import InMemoryPolicyStore, PolicyStore

__all__ = [
    "CONTENT_KEY",
    "InMemoryPolicyStore",
    "METADATA_KEY",
    "NAME_KEY",
    "PolicyEvaluator",
    "PolicyStore",
    "Role",
    "RoleEvaluator",
]
