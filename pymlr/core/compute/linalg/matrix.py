"""
Dense matrix container.

Matrix wraps a read-only float64 NumPy array and validates its shape once,
at construction. Every binary operation in this package takes Matrix
operands, so the row/column bookkeeping is checked in one place instead of
being trusted from raw arrays.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymlr.core.exceptions import DimensionError


class Matrix:
    """
    Rectangular, immutable matrix of real numbers.

    Construction:
        Matrix(np.array([[1.0, 2.0], [3.0, 4.0]]))
        Matrix.from_rows([[1, 2], [3, 4]])
        Matrix.zeros(3, 2)
        Matrix.identity(3)
        Matrix.column([1.0, 2.0, 3.0])      # 3 x 1

    The backing array is copied and marked read-only, so a Matrix never
    shares writable storage with its caller.
    """

    __slots__ = ('_data',)

    def __init__(self, data: ArrayLike):
        try:
            arr = np.array(data, dtype=np.float64)
        except (ValueError, TypeError) as e:
            raise DimensionError(f"Matrix data must be a rectangular array of numbers: {e}") from e

        if arr.ndim != 2:
            raise DimensionError(
                f"Matrix requires 2D data, got {arr.ndim}D with shape {arr.shape}"
            )
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise DimensionError(f"Matrix dimensions must be positive, got {arr.shape}")

        arr.setflags(write=False)
        self._data = arr

    # === Constructors ===

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[float]]) -> Matrix:
        """
        Build from a sequence of rows.

        Raises:
            DimensionError: If rows differ in length or there are none
        """
        rows = [list(row) for row in rows]
        if not rows:
            raise DimensionError("Matrix requires at least one row")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise DimensionError(
                    f"Matrix row {i} has {len(row)} columns, expected {width}"
                )
        return cls(rows)

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        return cls(np.zeros((rows, cols)))

    @classmethod
    def identity(cls, k: int) -> Matrix:
        return cls(np.eye(k))

    @classmethod
    def column(cls, vector: ArrayLike) -> Matrix:
        """Build an n x 1 matrix from a 1D vector."""
        vec = np.asarray(vector, dtype=np.float64)
        if vec.ndim != 1:
            raise DimensionError(
                f"column() requires a 1D vector, got {vec.ndim}D with shape {vec.shape}"
            )
        return cls(vec.reshape(-1, 1))

    # === Properties ===

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    @property
    def values(self) -> NDArray[np.float64]:
        """Read-only view of the backing array."""
        return self._data

    def to_numpy(self) -> NDArray[np.float64]:
        """Writable copy of the data."""
        return self._data.copy()

    def diagonal(self) -> NDArray[np.float64]:
        return self._data.diagonal().copy()

    def column_vector(self, j: int = 0) -> NDArray[np.float64]:
        """Column j as a writable 1D array."""
        return self._data[:, j].copy()

    # === Comparison ===

    def allclose(self, other: Matrix, rtol: float = 1e-9, atol: float = 0.0) -> bool:
        """Elementwise comparison within tolerance; False on shape mismatch."""
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __getitem__(self, index):
        return self._data[index]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    def __repr__(self) -> str:
        return f"Matrix({self.rows}x{self.cols})"
