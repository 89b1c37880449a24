"""
dimple.data.dataset

MissingDataset construction utilities.

Missing cells are NaN. Inputs are validated once here; everything
downstream trusts the resulting MissingDataset.
"""

import numpy as np
import pandas as pd
from typing import Optional, Sequence, Union

from dimple.core.types import MissingDataset
from dimple.core.exceptions import ValidationError
from dimple.core.validation import (
    validate_numeric_columns,
    validate_numeric_array,
    validate_unique_elements,
)


def _check_shape(n: int, d: int) -> None:
    if n == 0:
        raise ValidationError("dataset has no rows")
    if d == 0:
        raise ValidationError("dataset has no columns")


def from_frame(
    df: pd.DataFrame,
    dataset_id: str = "unnamed",
) -> MissingDataset:
    """Create MissingDataset from a DataFrame of numeric columns.
    
    Args:
        df: One column per variable. Missing cells are NaN/None/pd.NA.
        dataset_id: Identifier used in logs.
    
    Returns:
        Validated MissingDataset.
    
    Raises:
        SchemaError: If any column is not numeric.
        ValidationError: If the frame is empty or has duplicate column names.
    """
    validate_numeric_columns(df)
    _check_shape(*df.shape)
    
    names = tuple(str(c) for c in df.columns)
    validate_unique_elements(names, "column names")
    
    # Nullable integer/float dtypes hold pd.NA, which to_numpy maps to NaN
    values = df.to_numpy(dtype=np.float64, na_value=np.nan)
    
    return MissingDataset(values=values, feature_names=names, dataset_id=dataset_id)


def from_numpy(
    x: np.ndarray,
    feature_names: Optional[Sequence[str]] = None,
    dataset_id: str = "unnamed",
) -> MissingDataset:
    """Create MissingDataset from a 2D numeric array.
    
    Args:
        x: [n, d] numeric array. NaN = missing.
        feature_names: Column names. If None, auto-generated as col_0, col_1, ...
        dataset_id: Identifier used in logs.
    
    Returns:
        Validated MissingDataset.
    """
    x = np.asarray(x)
    if x.ndim != 2:
        raise ValidationError(f"x must be 2D, got {x.ndim}D")
    validate_numeric_array(x, "x")
    
    n, d = x.shape
    _check_shape(n, d)
    
    if feature_names is None:
        feature_names = tuple(f"col_{j}" for j in range(d))
    feature_names = tuple(str(f) for f in feature_names)
    if len(feature_names) != d:
        raise ValidationError(f"{len(feature_names)} feature names for {d} columns")
    validate_unique_elements(feature_names, "feature_names")
    
    return MissingDataset(
        values=x.astype(np.float64),
        feature_names=feature_names,
        dataset_id=dataset_id,
    )


def as_dataset(
    data: Union[MissingDataset, pd.DataFrame, np.ndarray],
    dataset_id: str = "unnamed",
) -> MissingDataset:
    """Coerce any supported input to a MissingDataset."""
    if isinstance(data, MissingDataset):
        return data
    if isinstance(data, pd.DataFrame):
        return from_frame(data, dataset_id=dataset_id)
    if isinstance(data, np.ndarray):
        return from_numpy(data, dataset_id=dataset_id)
    raise ValidationError(
        f"Unsupported input type {type(data).__name__}; "
        f"expected DataFrame, ndarray or MissingDataset"
    )
