"""
dimple.core.exceptions

All custom exceptions and warning categories for dimple.

Design: Fail fast on schema problems, contain undefined statistics to
their own cell.
"""

from typing import Sequence


class DimpleError(Exception):
    """Base exception for all dimple errors."""
    pass


class ValidationError(DimpleError):
    """Input validation failed.
    
    Raised when data or parameters fail boundary checks.
    """
    pass


class SchemaError(ValidationError):
    """One or more columns are not numeric.
    
    Attributes:
        columns: Names of every offending column, in column order.
    """
    
    def __init__(self, columns: Sequence[str]):
        self.columns = tuple(str(c) for c in columns)
        super().__init__(
            f"Variable(s) {', '.join(self.columns)} is/are not numeric. "
            f"Convert these variables to numeric and repeat until no errors are shown."
        )


class ConfigError(DimpleError):
    """Configuration invalid or missing.
    
    Raised when config files are malformed or fields hold invalid values.
    """
    pass


class DegenerateInputError(DimpleError):
    """Input cannot support the requested structure.
    
    Raised when fewer than 2 variables carry missingness, so no
    co-missingness tree exists.
    """
    pass


class UndefinedStatistic(RuntimeWarning):
    """An artifact contains mathematically undefined entries (reported as NaN)."""
    pass


class HighMissingnessWarning(UserWarning):
    """One or more variables reach the high-missingness cutoff."""
    pass
