"""
dimple.core.validation

Boundary validation functions.

Design: Validate at API boundaries, trust internally.
All validation functions raise ValidationError on failure.
"""

import numpy as np
import pandas as pd
from typing import List, Sequence

from .exceptions import ValidationError, SchemaError


def is_numeric_column(series: pd.Series) -> bool:
    """True for integer/float columns. Booleans are not numeric."""
    dtype = series.dtype
    if pd.api.types.is_bool_dtype(dtype):
        return False
    return pd.api.types.is_numeric_dtype(dtype)


def find_non_numeric_columns(df: pd.DataFrame) -> List[str]:
    """Return the names of all non-numeric columns, in column order."""
    return [
        str(name)
        for pos, name in enumerate(df.columns)
        if not is_numeric_column(df.iloc[:, pos])
    ]


def validate_numeric_columns(df: pd.DataFrame) -> None:
    """Validate every column of df is numeric.
    
    Raises:
        SchemaError: Listing every non-numeric column by name.
    """
    offending = find_non_numeric_columns(df)
    if offending:
        raise SchemaError(offending)


def validate_numeric_array(x: np.ndarray, name: str = "array") -> None:
    """Validate a raw array has an integer or float dtype."""
    if x.dtype.kind not in "iuf":
        raise SchemaError([f"{name}[dtype={x.dtype}]"])


def validate_unique_elements(
    seq: Sequence,
    name: str = "sequence"
) -> None:
    """Validate all elements in sequence are unique."""
    if len(seq) != len(set(seq)):
        raise ValidationError(f"{name} contains duplicate elements")

