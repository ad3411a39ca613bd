"""
Ordinary least squares regression.

Public API:
    multiple_linear_regression(y, X, ...) -> LinearSolution
    simple_linear_regression(y, x) -> LinearSolution
    fit(X, y, ...) -> LinearSolution
    calculate_rmse(predicted, measured) -> float

Each fit function handles:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from pymlr.regression import multiple_linear_regression
    >>> result = multiple_linear_regression(y, X)
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from pymlr.regression.design import Design
from pymlr.regression.solution import LinearSolution, LinearParams
from pymlr.regression.solvers import (
    fit,
    multiple_linear_regression,
    simple_linear_regression,
    calculate_rmse,
)

__all__ = [
    "fit",
    "multiple_linear_regression",
    "simple_linear_regression",
    "calculate_rmse",
    "Design",
    "LinearSolution",
    "LinearParams",
]
