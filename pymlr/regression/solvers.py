"""
Solver dispatch for regression.

Public entry points:
    multiple_linear_regression(y, X, ...)  normal equations, any k
    simple_linear_regression(y, x)         closed form, one predictor
    fit(X, y, ...)                         X-first alias of the multiple fit
    calculate_rmse(predicted, measured)    root-mean-squared error
"""

from typing import Literal
import numpy as np
from numpy.typing import ArrayLike

from pymlr.core.validation import (
    check_array,
    check_1d,
    check_consistent_length,
    check_min_samples,
)
from pymlr.regression.design import Design
from pymlr.regression.solution import LinearSolution
from pymlr.regression.backends.cpu import CPUCholeskyBackend
from pymlr.regression.backends.closed_form import ClosedFormBackend


BackendChoice = Literal['auto', 'cpu', 'cpu_cholesky']


def multiple_linear_regression(
    y: ArrayLike,
    X: ArrayLike,
    *,
    compute_advanced_stats: bool = False,
    add_constant: bool = True,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit y = X b by ordinary least squares.

    Args:
        y: Response (n,)
        X: Predictors (n x k). Do not include a column of 1.0 when
           add_constant is True.
        compute_advanced_stats: Also compute predictions, residuals,
            standardized residuals, leverage, Cook's distance, the F
            statistic, and keep copies of y and X
        add_constant: Prepend a column of 1.0 so the first coefficient
            is the constant term
        backend: 'auto', 'cpu' or 'cpu_cholesky' (all the same solver)

    Returns:
        LinearSolution

    Raises:
        ValidationError: Non-numeric or non-finite input
        DimensionError: len(y) != rows(X)
        DegenerateInputError: n <= p, or y is constant
        SingularMatrixError: X'X is not invertible (collinear or constant
            predictor columns)

    Example:
        >>> x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        >>> sol = multiple_linear_regression(2 + 3 * x, x)
        >>> sol.coefficients
        array([2., 3.])
    """
    design = Design.from_arrays(X, y, add_constant=add_constant)
    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design, advanced=compute_advanced_stats)
    return LinearSolution(_result=result, _design=design)


def fit(
    X: ArrayLike | Design,
    y: ArrayLike | None = None,
    *,
    add_constant: bool = True,
    advanced: bool = False,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit a linear regression model.

    Accepts either arrays (X, y) or a prebuilt Design, in which case the
    Design's own add_constant setting is used.

    Example:
        >>> result = fit(X, y)
        >>> print(result.summary())
    """
    if isinstance(X, Design):
        design = X
    else:
        if y is None:
            raise ValueError("y required when X is not a Design")
        design = Design.from_arrays(X, y, add_constant=add_constant)

    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design, advanced=advanced)
    return LinearSolution(_result=result, _design=design)


def simple_linear_regression(y: ArrayLike, x: ArrayLike) -> LinearSolution:
    """
    Fit y = intercept + slope * x in closed form.

    Returns:
        LinearSolution with coefficients [intercept, slope]

    Raises:
        DimensionError: If len(y) != len(x), or x is not 1D
        DegenerateInputError: If n <= 2, or x or y is constant
    """
    x_arr = check_array(x, 'x')
    check_1d(x_arr, 'x')
    design = Design.from_arrays(x_arr, y, add_constant=True)
    result = ClosedFormBackend().solve(design)
    return LinearSolution(_result=result, _design=design)


def calculate_rmse(predicted: ArrayLike, measured: ArrayLike) -> float:
    """
    Root-mean-squared error sqrt(sum (p_i - m_i)^2 / n).

    Raises:
        DimensionError: If the inputs differ in length
        ValidationError: If the inputs are empty or non-numeric
    """
    p_arr = check_array(predicted, 'predicted')
    m_arr = check_array(measured, 'measured')
    check_1d(p_arr, 'predicted')
    check_1d(m_arr, 'measured')
    check_consistent_length(p_arr, m_arr, names=('predicted', 'measured'))
    check_min_samples(m_arr, 1, 'measured')

    diff = p_arr - m_arr
    return float(np.sqrt(diff @ diff / m_arr.shape[0]))


def _get_backend(choice: BackendChoice) -> CPUCholeskyBackend:
    """
    Select and instantiate the backend.

    Raises:
        ValueError: If an unknown backend is specified
    """
    if choice in ('auto', 'cpu', 'cpu_cholesky'):
        return CPUCholeskyBackend()
    raise ValueError(f"Unknown backend: {choice!r}")
