"""
pymlr: multiple linear regression by the normal equations.

Fits y = b0 + b1 x1 + ... + bk xk by ordinary least squares, reports the
usual goodness-of-fit statistics and, on request, per-observation
diagnostics.

Submodules:
    regression: Fitting functions and the solution type
    core: Exceptions, validation, data loading, linear algebra kernels
    formatters: Text, JSON and Python-source renderers
    cli: The ``mlr`` command
"""

__version__ = "0.1.0"

from pymlr import regression
from pymlr.regression import (
    fit,
    multiple_linear_regression,
    simple_linear_regression,
    calculate_rmse,
    LinearSolution,
)
from pymlr.core import (
    DataSource,
    PyMLRError,
    ValidationError,
    DimensionError,
    NotSquareError,
    DegenerateInputError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    "__version__",
    "regression",
    "fit",
    "multiple_linear_regression",
    "simple_linear_regression",
    "calculate_rmse",
    "LinearSolution",
    "DataSource",
    "PyMLRError",
    "ValidationError",
    "DimensionError",
    "NotSquareError",
    "DegenerateInputError",
    "NumericalError",
    "SingularMatrixError",
]
