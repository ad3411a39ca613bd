"""
Input validation utilities for pymlr.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pymlr.core.exceptions import (
    ValidationError,
    DimensionError,
    DegenerateInputError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like. Rejects inputs that result in object dtype
    (mixed types, ragged nested lists) or a non-numeric dtype.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64

    Raises:
        ValidationError: If input cannot be converted to a numeric array
        DimensionError: If nested sequences have unequal lengths
    """
    try:
        result = np.asarray(array)
    except ValueError as e:
        # NumPy refuses ragged nested sequences outright
        raise DimensionError(f"{name}: rows have inconsistent lengths: {e}") from e
    except TypeError as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number) and result.dtype != np.bool_:
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_degrees_of_freedom(n: int, p: int) -> None:
    """
    Verify there are more observations than parameters.

    With n <= p the residual degrees of freedom n - p are zero or negative,
    so the standard error, adjusted R-squared and F statistic are undefined.

    Raises:
        DegenerateInputError: If n <= p
    """
    if n <= p:
        raise DegenerateInputError(
            f"Need more observations than parameters: n={n}, p={p}. "
            f"Residual degrees of freedom would be {n - p}.",
            n=n,
            p=p,
            reason='n_le_p',
        )


def check_not_constant(
    array: NDArray[np.floating[Any]],
    name: str,
    reason: str,
) -> None:
    """
    Verify a vector whose centered sum of squares is used as a denominator
    is not constant.

    Values are compared exactly; the sum of squares is not consulted, as
    the mean of identical values can differ from them in the last bit.

    Args:
        array: 1D array to check
        name: Variable name for the error message
        reason: Tag stored on the raised error

    Raises:
        DegenerateInputError: If every value equals the first
    """
    n = array.shape[0]
    if n > 0 and np.all(array == array[0]):
        raise DegenerateInputError(
            f"{name}: all {n} values are identical (zero variance)",
            n=n,
            reason=reason,
        )
