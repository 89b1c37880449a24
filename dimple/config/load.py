"""
dimple.config.load

Config loading and validation.
"""

import yaml
from pathlib import Path
from typing import Union, Dict, Any

from .schema import DimpleConfig, ProfileConfig, PlotConfig
from ..core.exceptions import ConfigError

_TOP_LEVEL_KEYS = {"profile", "plot", "device", "verbose", "log_file"}


def load_config(path: Union[str, Path]) -> DimpleConfig:
    """Load configuration from YAML file."""
    path = Path(path)
    
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    
    return config_from_dict(raw or {})


def config_from_dict(d: Dict[str, Any]) -> DimpleConfig:
    """Create DimpleConfig from dictionary."""
    if not isinstance(d, dict):
        raise ConfigError(f"Config must be a mapping, got {type(d).__name__}")
    
    unknown = set(d) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
    
    try:
        profile_dict = dict(d.get("profile") or {})
        
        # YAML has no tuples
        if isinstance(profile_dict.get("pdm_thresholds"), list):
            profile_dict["pdm_thresholds"] = tuple(profile_dict["pdm_thresholds"])
        
        profile = ProfileConfig(**profile_dict)
        plot = PlotConfig(**(d.get("plot") or {}))
        
        return DimpleConfig(
            profile=profile,
            plot=plot,
            device=d.get("device", "cpu"),
            verbose=d.get("verbose", False),
            log_file=d.get("log_file"),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config: {e}")


def save_config(config: DimpleConfig, path: Union[str, Path]) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    
    d = config_to_dict(config)
    
    with open(path, "w") as f:
        yaml.dump(d, f, default_flow_style=False, sort_keys=False)


def config_to_dict(config: DimpleConfig) -> Dict[str, Any]:
    """Convert DimpleConfig to dictionary."""
    return {
        "profile": {
            "matrixplot_sort": config.profile.matrixplot_sort,
            "plot_transform": config.profile.plot_transform,
            "pdm_thresholds": list(config.profile.pdm_thresholds),
            "high_missingness_cutoff": config.profile.high_missingness_cutoff,
        },
        "plot": {
            "matrix_title": config.plot.matrix_title,
            "cluster_title": config.plot.cluster_title,
            "na_correlation_title": config.plot.na_correlation_title,
            "na_correlation_legend": config.plot.na_correlation_legend,
            "low_color": config.plot.low_color,
            "high_color": config.plot.high_color,
            "missing_color": config.plot.missing_color,
            "cluster_xlabel": config.plot.cluster_xlabel,
            "cluster_ylabel": config.plot.cluster_ylabel,
        },
        "device": config.device,
        "verbose": config.verbose,
        "log_file": config.log_file,
    }


def apply_overrides(config: DimpleConfig, **overrides: Any) -> DimpleConfig:
    """Return a new config with overrides applied and re-validated.
    
    Keys are top-level fields (device, verbose, log_file) or ProfileConfig
    fields. None values are ignored.
    
    Raises:
        ConfigError: If a key is unknown or a value fails validation.
    """
    d = config_to_dict(config)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in d["profile"]:
            d["profile"][key] = value
        elif key in _TOP_LEVEL_KEYS and key not in ("profile", "plot"):
            d[key] = value
        else:
            raise ConfigError(f"Unknown override: {key}")
    return config_from_dict(d)
