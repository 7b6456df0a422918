"""Kernel types – Result variants."""
from policy_engine.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
