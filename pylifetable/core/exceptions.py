"""
Exception hierarchy for PyLifeTable.

All exceptions inherit from PyLifeTableError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLifeTableError(Exception):
    """Base exception for all PyLifeTable errors."""
    pass


class ValidationError(PyLifeTableError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks, including
    references to columns the input table does not have.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class StructuralError(PyLifeTableError):
    """
    An intermediate table does not have the structure the next stage needs.

    No partial result is ever returned once this is raised.
    """
    pass


class StratumMismatchError(StructuralError):
    """
    Stratum blocks and stratum labels cannot be matched one-to-one.

    Attributes:
        n_blocks: Number of contiguous row blocks detected or supplied
        n_levels: Number of distinct stratum labels available
    """

    def __init__(
        self,
        message: str,
        n_blocks: int | None = None,
        n_levels: int | None = None,
    ):
        super().__init__(message)
        self.n_blocks = n_blocks
        self.n_levels = n_levels
