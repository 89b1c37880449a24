"""
dimple

Missingness-structure profiling for Data Imputation Made Simple.

Quick Start:
    >>> from dimple import profile_dataset
    >>> report = profile_dataset(df)
    >>> report.md_pattern.to_frame()
    >>> report.min_pdm_thresholds.to_frame()
"""

from dimple.analysis.report import profile_dataset, MissingnessReport
from dimple.config.schema import DimpleConfig, ProfileConfig, PlotConfig
from dimple.data.dataset import MissingDataset, from_frame, from_numpy

__version__ = "0.1.0"

__all__ = [
    "profile_dataset",
    "MissingnessReport",
    "DimpleConfig",
    "ProfileConfig",
    "PlotConfig",
    "MissingDataset",
    "from_frame",
    "from_numpy",
]
