"""Files adapter – JSON file policy store and asset loader."""
from policy_engine.adapters.files.codec import dump_roles, parse_json_object
from policy_engine.adapters.files.loader import PolicyAssetLoader
from policy_engine.adapters.files.store import JsonFilePolicyStore

__all__ = [
    "JsonFilePolicyStore",
    "PolicyAssetLoader",
    "dump_roles",
    "parse_json_object",
]
