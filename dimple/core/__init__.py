"""
dimple.core

Core infrastructure for dimple.

Exports:
- Exception and warning classes
- Core data types
- Validation utilities
"""

from .exceptions import (
    DimpleError,
    ValidationError,
    SchemaError,
    ConfigError,
    DegenerateInputError,
    UndefinedStatistic,
    HighMissingnessWarning,
)

from .types import (
    MissingDataset,
    PatternTable,
    ThresholdTable,
    Merge,
    Dendrogram,
    MatrixView,
)

from .validation import (
    is_numeric_column,
    find_non_numeric_columns,
    validate_numeric_columns,
    validate_numeric_array,
    validate_unique_elements,
)

__all__ = [
    # Exceptions
    "DimpleError",
    "ValidationError",
    "SchemaError",
    "ConfigError",
    "DegenerateInputError",
    "UndefinedStatistic",
    "HighMissingnessWarning",
    # Types
    "MissingDataset",
    "PatternTable",
    "ThresholdTable",
    "Merge",
    "Dendrogram",
    "MatrixView",
    # Validation
    "is_numeric_column",
    "find_non_numeric_columns",
    "validate_numeric_columns",
    "validate_numeric_array",
    "validate_unique_elements",
]
