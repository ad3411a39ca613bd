"""
Core infrastructure for pymlr.

Shared abstractions used by the regression engine and its collaborators.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Data container and text/CSV loaders
    compute: Timing, tolerances, linear algebra kernels
"""

from pymlr.core.protocols import Backend
from pymlr.core.result import Result
from pymlr.core.datasource import DataSource
from pymlr.core.exceptions import (
    PyMLRError,
    ValidationError,
    DimensionError,
    NotSquareError,
    DegenerateInputError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Data
    "DataSource",
    # Exceptions
    "PyMLRError",
    "ValidationError",
    "DimensionError",
    "NotSquareError",
    "DegenerateInputError",
    "NumericalError",
    "SingularMatrixError",
]
