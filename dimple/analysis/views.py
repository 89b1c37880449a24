"""
dimple.analysis.views

Inputs for rendering collaborators.

Nothing here feeds back into a numeric artifact: standardization and row
sorting only change what the matrix-plot sink receives.
"""

import numpy as np
import pandas as pd

from dimple.core.types import MissingDataset, MatrixView


def standardize(frame: pd.DataFrame) -> pd.DataFrame:
    """Centre each column on its observed mean and divide by its sample SD.
    
    Columns with zero SD become entirely NaN.
    """
    return (frame - frame.mean()) / frame.std(ddof=1)


def missingness_row_order(missing_mask: np.ndarray) -> np.ndarray:
    """Stable row order putting rows with missing values first.
    
    Only variables with any missingness act as sort keys; the first such
    variable is the primary key, ties fall through to the next one, and
    rows equal on every key keep their original order.
    """
    keys = missing_mask[:, missing_mask.any(axis=0)]
    if keys.shape[1] == 0:
        return np.arange(missing_mask.shape[0])
    # lexsort: last key is primary; negate so missing (True) sorts first
    return np.lexsort([~keys[:, j] for j in range(keys.shape[1] - 1, -1, -1)])


def build_matrix_view(
    dataset: MissingDataset,
    sort: bool = True,
    transform: bool = True,
) -> MatrixView:
    """Values for the matrix plot, optionally standardized and row-sorted."""
    frame = dataset.to_frame()
    if transform:
        frame = standardize(frame)
    
    if sort:
        order = missingness_row_order(dataset.missing_mask)
    else:
        order = np.arange(dataset.n)
    
    values = frame.iloc[order].reset_index(drop=True)
    return MatrixView(values=values, row_order=order, sorted=sort, transformed=transform)


def melt_matrix(frame: pd.DataFrame) -> pd.DataFrame:
    """Long Var1 / Var2 / value form of a labelled matrix, Var1 varying fastest."""
    n_rows, n_cols = frame.shape
    return pd.DataFrame({
        "Var1": np.tile(np.asarray(frame.index, dtype=object), n_cols),
        "Var2": np.repeat(np.asarray(frame.columns, dtype=object), n_rows),
        "value": frame.to_numpy(dtype=np.float64).ravel(order="F"),
    })
