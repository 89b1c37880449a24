"""
dimple.data

Dataset construction for missingness profiling.

Quick Start:
    >>> from dimple.data import from_frame
    >>> ds = from_frame(df)
    >>> ds.missing_mask.sum(axis=0)  # missing cells per variable
"""

from dimple.core.types import MissingDataset

from dimple.data.dataset import (
    from_frame,
    from_numpy,
    as_dataset,
)

__all__ = [
    "MissingDataset",
    "from_frame",
    "from_numpy",
    "as_dataset",
]
