"""
Cholesky decomposition and inversion by triangular substitution.

The factorization never raises for a matrix that is not positive definite.
A pivot that is negative, or zero to within a few machine epsilons, is
recorded as NaN; the NaN spreads through substitution into the inverse,
and check_invertible() turns it into a SingularMatrixError. This is the
only singularity detection in the package: there is no column pivoting.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymlr.core.exceptions import DimensionError, NotSquareError, SingularMatrixError
from pymlr.core.compute.tolerances import singular_pivot_rtol
from pymlr.core.compute.linalg.matrix import Matrix
from pymlr.core.compute.linalg.ops import transpose


def _require_square(a: Matrix, name: str) -> None:
    if not a.is_square:
        raise NotSquareError(
            f"{name} must be square, got {a.rows}x{a.cols}",
            shape=a.shape,
        )


def cholesky_decompose(s: Matrix, *, pivot_rtol: float | None = None) -> Matrix:
    """
    Lower-triangular L with L L' = S.

    Column-by-column recurrence over rows k = 0..n-1:
        L[k, i] = (S[k, i] - sum_j<i L[i, j] L[k, j]) / L[i, i]     for i < k
        L[k, k] = sqrt(S[k, k] - sum_j<k L[k, j]^2)

    S is assumed symmetric; only its lower triangle is read.

    Args:
        s: Symmetric positive-definite matrix (k x k)
        pivot_rtol: A diagonal residual not above pivot_rtol * |S[k, k]|
            is treated as zero and L[k, k] is set to NaN. Defaults to
            singular_pivot_rtol(k); pass 0.0 to reject only residuals that
            are not positive.

    Returns:
        Lower-triangular factor L (k x k). Contains NaN when S is singular
        or not positive definite.

    Raises:
        NotSquareError: If S is not square
    """
    _require_square(s, 'S')

    sv = s.values
    k = s.rows
    L = np.zeros((k, k), dtype=np.float64)
    if pivot_rtol is None:
        pivot_rtol = singular_pivot_rtol(k)

    with np.errstate(divide='ignore', invalid='ignore'):
        for row in range(k):
            for i in range(row):
                L[row, i] = (sv[row, i] - L[i, :i] @ L[row, :i]) / L[i, i]

            radicand = sv[row, row] - L[row, :row] @ L[row, :row]
            if radicand > pivot_rtol * abs(sv[row, row]):
                L[row, row] = np.sqrt(radicand)
            else:
                L[row, row] = np.nan

    return Matrix(L)


def substitute_forward_backward(
    lower: Matrix,
    upper: Matrix,
    b: ArrayLike,
) -> NDArray[np.float64]:
    """
    Solve L U x = b with L lower- and U upper-triangular.

    Forward substitution solves L d = b, then back substitution solves
    U x = d. Each sweep is O(k^2). Works for Cholesky (U = L') or LU factors.

    A zero or NaN on either diagonal produces Inf/NaN in x rather than an
    exception; callers detect singularity from the result.

    Args:
        lower: Lower-triangular factor (k x k)
        upper: Upper-triangular factor (k x k)
        b: Right-hand side (k,)

    Returns:
        Solution vector x (k,)

    Raises:
        NotSquareError: If a factor is not square
        DimensionError: If factor shapes or len(b) disagree
    """
    _require_square(lower, 'lower')
    _require_square(upper, 'upper')
    if lower.shape != upper.shape:
        raise DimensionError(
            f"Triangular factors differ in shape: {lower.shape} vs {upper.shape}"
        )

    rhs = np.asarray(b, dtype=np.float64)
    k = lower.rows
    if rhs.shape != (k,):
        raise DimensionError(f"b must have shape ({k},), got {rhs.shape}")

    lv = lower.values
    uv = upper.values
    d = np.empty(k, dtype=np.float64)
    x = np.empty(k, dtype=np.float64)

    with np.errstate(divide='ignore', invalid='ignore'):
        for i in range(k):
            d[i] = (rhs[i] - lv[i, :i] @ d[:i]) / lv[i, i]

        for i in range(k - 1, -1, -1):
            x[i] = (d[i] - uv[i, i + 1:] @ x[i + 1:]) / uv[i, i]

    return x


def invert(s: Matrix, lower: Matrix) -> Matrix:
    """
    Inverse of S from its Cholesky factor.

    Solves L L' x = e_i for each unit basis vector e_i and stores x as
    column i of the inverse: k solves of O(k^2) each.

    Args:
        s: The original matrix (k x k)
        lower: Its Cholesky factor from cholesky_decompose()

    Returns:
        S^-1 (k x k). May contain NaN/Inf if S is singular; see
        check_invertible().

    Raises:
        NotSquareError: If S is not square
        DimensionError: If L does not match S in shape
    """
    _require_square(s, 'S')
    if lower.shape != s.shape:
        raise DimensionError(
            f"Cholesky factor shape {lower.shape} does not match S {s.shape}"
        )

    k = s.rows
    upper = transpose(lower)
    inverse = np.empty((k, k), dtype=np.float64)
    basis = np.zeros(k, dtype=np.float64)
    for i in range(k):
        basis[:] = 0.0
        basis[i] = 1.0
        inverse[:, i] = substitute_forward_backward(lower, upper, basis)

    return Matrix(inverse)


def check_invertible(inverse: Matrix, name: str = "X'X") -> None:
    """
    Verify every entry of a computed inverse is finite.

    Raises:
        SingularMatrixError: If any entry is NaN or Inf
    """
    bad = ~np.isfinite(inverse.values)
    if np.any(bad):
        raise SingularMatrixError(
            f"Matrix inverse of {name} not defined; check for a constant or "
            f"collinear predictor column",
            matrix_name=name,
            n_nonfinite=int(np.sum(bad)),
        )


def cholesky_inverse(s: Matrix, *, name: str = "X'X") -> tuple[Matrix, Matrix]:
    """
    Factor, invert and check S in one call.

    Returns:
        (S^-1, L)

    Raises:
        NotSquareError: If S is not square
        SingularMatrixError: If S is singular or not positive definite
    """
    lower = cholesky_decompose(s)
    inverse = invert(s, lower)
    check_invertible(inverse, name)
    return inverse, lower
