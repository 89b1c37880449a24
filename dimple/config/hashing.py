"""
dimple.config.hashing

Deterministic config hashing for reproducibility tracking.
"""

import hashlib
import json
from typing import Any, Dict

from .schema import DimpleConfig
from .load import config_to_dict

# Fields that change presentation or logging only
_NON_NUMERIC_FIELDS = ("plot", "verbose", "log_file", "device")


def hash_config(config: DimpleConfig, numeric_only: bool = False) -> str:
    """Compute deterministic hash of configuration.
    
    Args:
        config: Configuration to hash.
        numeric_only: Ignore fields that cannot change numeric artifacts.
    
    Returns:
        16-character hex string.
    """
    d = config_to_dict(config)
    if numeric_only:
        for key in _NON_NUMERIC_FIELDS:
            d.pop(key, None)
    return hash_dict(d)


def hash_dict(d: Dict[str, Any]) -> str:
    """Compute deterministic hash of dictionary.
    
    Keys are sorted for determinism.
    """
    json_str = json.dumps(d, sort_keys=True, separators=(",", ":"))
    
    # SHA256 hash, truncated to 16 chars
    h = hashlib.sha256(json_str.encode()).hexdigest()[:16]
    return h
