"""
Exception hierarchy for pymlr.

All exceptions inherit from PyMLRError so callers can catch any
library-specific failure in one place, or handle each documented failure
kind separately:

    DimensionError        operand shapes are incompatible
    NotSquareError        decomposition/inversion given a non-square matrix
    DegenerateInputError  too few observations or a zero-variance denominator
    SingularMatrixError   the cross-product matrix has no inverse

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyMLRError(Exception):
    """Base exception for all pymlr errors."""
    pass


class ValidationError(PyMLRError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when vector lengths differ, when a matrix product is requested
    for incompatible shapes, or when rows of a matrix have different lengths.
    """
    pass


class NotSquareError(DimensionError):
    """
    A square matrix was required.

    Attributes:
        shape: The (rows, cols) shape that was received
    """

    def __init__(self, message: str, shape: tuple[int, int] | None = None):
        super().__init__(message)
        self.shape = shape


class DegenerateInputError(ValidationError):
    """
    The data cannot support the requested fit.

    Raised before any matrix work when there are no more observations than
    parameters, or when a variance used as a denominator is exactly zero
    (constant response, constant predictor in the simple model).

    Attributes:
        n: Number of observations
        p: Number of parameters, if relevant
        reason: Short machine-readable tag ('n_le_p', 'constant_y', 'constant_x')
    """

    def __init__(
        self,
        message: str,
        n: int | None = None,
        p: int | None = None,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.n = n
        self.p = p
        self.reason = reason


class NumericalError(PyMLRError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Detected after inversion: any non-finite entry in the computed inverse
    means the Cholesky recurrence hit a zero or negative pivot.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        n_nonfinite: Number of non-finite entries found in the inverse
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        n_nonfinite: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.n_nonfinite = n_nonfinite
