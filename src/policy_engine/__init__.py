"""
policy_engine – role-based access-control decisions.

Import path convention::

    from policy_engine.kernel.security import Role, RoleEvaluator
    from policy_engine.application.policy import PolicyManager
    from policy_engine.adapters.files import JsonFilePolicyStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
