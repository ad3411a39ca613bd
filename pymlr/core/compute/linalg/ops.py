"""
Elementary matrix operations: transpose and multiply.
"""

import numpy as np

from pymlr.core.exceptions import DimensionError
from pymlr.core.compute.linalg.matrix import Matrix


def transpose(a: Matrix) -> Matrix:
    """
    Swap row and column indexing.

    transpose(transpose(A)) == A for every A.
    """
    result = np.empty((a.cols, a.rows), dtype=np.float64)
    values = a.values
    for i in range(a.rows):
        result[:, i] = values[i, :]
    return Matrix(result)


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """
    Matrix product C = A B.

    Standard triple-loop accumulation: for each row i of A and each shared
    index k, row i of C accumulates A[i, k] * B[k, :]. The innermost loop
    over the columns of B runs as a vector update. No sparsity shortcuts.

    Args:
        a: Left operand (m x k)
        b: Right operand (k x n)

    Returns:
        Product (m x n)

    Raises:
        DimensionError: If cols(A) != rows(B)
    """
    if a.cols != b.rows:
        raise DimensionError(
            f"Cannot multiply {a.rows}x{a.cols} by {b.rows}x{b.cols}: "
            f"inner dimensions {a.cols} and {b.rows} differ"
        )

    av = a.values
    bv = b.values
    result = np.zeros((a.rows, b.cols), dtype=np.float64)
    for i in range(a.rows):
        row = result[i]
        for k in range(a.cols):
            row += av[i, k] * bv[k]
    return Matrix(result)
