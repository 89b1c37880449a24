"""
dimple.config

Configuration management for dimple.

Exports:
- Config schemas
- Loading/saving utilities
- Hashing for reproducibility
"""

from .schema import (
    DimpleConfig,
    ProfileConfig,
    PlotConfig,
    DEFAULT_PDM_THRESHOLDS,
)

from .load import (
    load_config,
    save_config,
    config_from_dict,
    config_to_dict,
    apply_overrides,
)

from .hashing import (
    hash_config,
    hash_dict,
)

__all__ = [
    # Schemas
    "DimpleConfig",
    "ProfileConfig",
    "PlotConfig",
    "DEFAULT_PDM_THRESHOLDS",
    # Load/save
    "load_config",
    "save_config",
    "config_from_dict",
    "config_to_dict",
    "apply_overrides",
    # Hashing
    "hash_config",
    "hash_dict",
]
