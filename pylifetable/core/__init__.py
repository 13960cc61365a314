"""
Core infrastructure for PyLifeTable.

Shared abstractions used by the survival subpackage.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Named-column access to tabular input
    compute: Timing utilities
"""

from pylifetable.core.result import Result
from pylifetable.core.datasource import DataSource
from pylifetable.core.exceptions import (
    PyLifeTableError,
    ValidationError,
    DimensionError,
    StructuralError,
    StratumMismatchError,
)

__all__ = [
    # Result
    "Result",
    # Data access
    "DataSource",
    # Exceptions
    "PyLifeTableError",
    "ValidationError",
    "DimensionError",
    "StructuralError",
    "StratumMismatchError",
]
