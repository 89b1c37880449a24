"""
dimple.analysis.summary

Descriptive missingness counts and fractions.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from dimple.core.types import MissingDataset


@dataclass(frozen=True)
class BasicStatistics:
    """Dimensions and missingness totals of a dataset."""
    rows: int
    columns: int
    complete_cases: int
    total_na: int
    fraction_missingness: float
    na_per_variable: pd.Series
    fraction_missingness_per_variable: pd.Series


def compute_basic_statistics(dataset: MissingDataset) -> BasicStatistics:
    """Count rows, columns, complete cases and missing cells."""
    mask = dataset.missing_mask
    n, d = mask.shape
    names = list(dataset.feature_names)
    
    na_per_var = mask.sum(axis=0).astype(np.int64)
    total_na = int(na_per_var.sum())
    
    return BasicStatistics(
        rows=n,
        columns=d,
        complete_cases=int((~mask.any(axis=1)).sum()),
        total_na=total_na,
        fraction_missingness=total_na / (n * d),
        na_per_variable=pd.Series(na_per_var, index=names, name="NA_per_variable"),
        fraction_missingness_per_variable=pd.Series(
            mask.mean(axis=0), index=names, name="Fraction_missingness_per_variable"
        ),
    )


def variables_above_cutoff(
    fraction_per_variable: pd.Series,
    cutoff: float = 0.5,
) -> Tuple[str, ...]:
    """Names of variables whose missing fraction is at or above cutoff."""
    return tuple(str(name) for name in fraction_per_variable.index[fraction_per_variable >= cutoff])
