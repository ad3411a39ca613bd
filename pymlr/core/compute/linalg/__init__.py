"""
Linear algebra kernels for pymlr.

Dense matrix primitives with no knowledge of regression:

    Matrix: immutable, shape-checked float64 container
    transpose, multiply: elementary operations
    cholesky_decompose: L L' factorization of an SPD matrix
    substitute_forward_backward: solve L U x = b
    invert: inverse from a Cholesky factor
    check_invertible: NaN/Inf scan that raises SingularMatrixError

Conventions:
    - Every function takes and returns Matrix (vectors are 1D arrays)
    - Shape errors are raised before any arithmetic
    - Singularity is reported after inversion, never during factorization
"""

from pymlr.core.compute.linalg.matrix import Matrix
from pymlr.core.compute.linalg.ops import transpose, multiply
from pymlr.core.compute.linalg.cholesky import (
    cholesky_decompose,
    substitute_forward_backward,
    invert,
    check_invertible,
    cholesky_inverse,
)

__all__ = [
    "Matrix",
    "transpose",
    "multiply",
    "cholesky_decompose",
    "substitute_forward_backward",
    "invert",
    "check_invertible",
    "cholesky_inverse",
]
