"""
dimple.config.schema

Configuration schemas using dataclasses.

Design: All config fields have explicit types. Defaults only at top level.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import torch

DEFAULT_PDM_THRESHOLDS = (5, 10, 20, 50, 100, 200, 500, 1000)


@dataclass
class ProfileConfig:
    """Missingness profiling configuration."""
    matrixplot_sort: bool = True        # Sort matrix-view rows by missingness
    plot_transform: bool = True         # Standardize matrix-view columns
    pdm_thresholds: Tuple[int, ...] = DEFAULT_PDM_THRESHOLDS
    high_missingness_cutoff: float = 0.5
    
    def __post_init__(self):
        self.pdm_thresholds = tuple(self.pdm_thresholds)
        if not self.pdm_thresholds:
            raise ValueError("pdm_thresholds must be non-empty")
        for t in self.pdm_thresholds:
            if isinstance(t, bool) or not isinstance(t, int):
                raise ValueError(f"pdm_thresholds must be ints, got {t!r}")
            if t <= 0:
                raise ValueError(f"pdm_thresholds must be positive, got {t}")
        for prev, cur in zip(self.pdm_thresholds, self.pdm_thresholds[1:]):
            if cur <= prev:
                raise ValueError("pdm_thresholds must be strictly increasing")
        if not (0 <= self.high_missingness_cutoff <= 1):
            raise ValueError("high_missingness_cutoff must be in [0, 1]")


@dataclass
class PlotConfig:
    """Styling handed to rendering collaborators.
    
    Never read by any numeric computation.
    """
    matrix_title: str = "Matrix plot of missing data"
    cluster_title: str = "Cluster plot of missing data"
    na_correlation_title: str = "Variable - Variable NA Correlation Matrix"
    na_correlation_legend: str = "Point-biserial correlation coefficient"
    low_color: str = "white"
    high_color: str = "blue"
    missing_color: str = "gray"
    cluster_xlabel: str = "variable"
    cluster_ylabel: str = "Height"


@dataclass
class DimpleConfig:
    """Top-level configuration.
    
    This is the ONLY place defaults are specified.
    All sub-configs receive explicit values.
    """
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)
    
    device: str = "cpu"
    verbose: bool = False
    log_file: Optional[str] = None
    
    def __post_init__(self):
        try:
            torch.device(self.device)
        except RuntimeError as e:
            raise ValueError(f"Invalid device: {self.device}") from e
    
    def get_device(self) -> torch.device:
        return torch.device(self.device)
    
    @classmethod
    def unsorted_raw(cls) -> "DimpleConfig":
        """Factory for a matrix view in original row order and scale."""
        return cls(profile=ProfileConfig(matrixplot_sort=False, plot_transform=False))
