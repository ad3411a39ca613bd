"""
Regression Design.

Design wraps the raw observations and builds the design matrix: the
predictor matrix, optionally with a leading column of 1.0 for the
constant term. It knows it is building a regression; DataSource doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymlr.core.datasource import DataSource
from pymlr.core.exceptions import DimensionError
from pymlr.core.compute.linalg import Matrix
from pymlr.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_min_samples,
)


@dataclass(frozen=True)
class Design:
    """
    Regression design specification.

    Immutable after construction and built fresh for every fit.

    Construction:
        Design.from_arrays(X, y)                       # constant added
        Design.from_arrays(X, y, add_constant=False)
        Design.from_datasource(ds)                     # uses ds['X'], ds['y']
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _matrix: Matrix
    _add_constant: bool
    _source: DataSource | None = None

    @classmethod
    def from_arrays(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        *,
        add_constant: bool = True,
    ) -> Design:
        """
        Build Design directly from arrays.

        Args:
            X: Predictor observations (n x k), or a 1D vector for k = 1.
               Must NOT already contain a constant column when
               add_constant is True. May have zero columns when
               add_constant is True, giving the constant-only model.
            y: Response observations (n,)
            add_constant: Prepend a column of 1.0

        Raises:
            ValidationError: Non-numeric or non-finite input
            DimensionError: Wrong dimensionality, len(y) != rows(X), or no
                columns at all
        """
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')
        return cls._build(X_arr, y_arr, add_constant=add_constant, source=None)

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        add_constant: bool = True,
    ) -> Design:
        """Build Design from a DataSource holding 'X' and 'y'."""
        X_arr = check_array(source['X'], 'X')
        y_arr = check_array(source['y'], 'y')
        return cls._build(X_arr, y_arr, add_constant=add_constant, source=source)

    @classmethod
    def _build(
        cls,
        X: NDArray,
        y: NDArray,
        *,
        add_constant: bool,
        source: DataSource | None,
    ) -> Design:
        """Internal builder with validation."""
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_2d(X, 'X')
        check_1d(y, 'y')
        # Length check comes first: a mismatch is reported before anything else
        check_consistent_length(y, X, names=('y', 'X'))
        check_min_samples(y, 1, 'y')
        check_finite(X, 'X')
        check_finite(y, 'y')

        if not add_constant and X.shape[1] == 0:
            raise DimensionError(
                "X: no predictor columns and no constant term; nothing to fit"
            )

        if add_constant:
            full = np.column_stack([np.ones(X.shape[0]), X])
        else:
            full = X

        X = X.copy()
        y = y.copy()
        X.setflags(write=False)
        y.setflags(write=False)

        return cls(
            _X=X,
            _y=y,
            _matrix=Matrix(full),
            _add_constant=add_constant,
            _source=source,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Raw predictor observations (n x k), without the constant column."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def matrix(self) -> Matrix:
        """Design matrix (n x p), with the constant column if requested."""
        return self._matrix

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._matrix.rows

    @property
    def p(self) -> int:
        """Number of parameters (columns of the design matrix)."""
        return self._matrix.cols

    @property
    def k(self) -> int:
        """Number of predictors, excluding the constant."""
        return self._X.shape[1]

    @property
    def add_constant(self) -> bool:
        return self._add_constant

    @property
    def source(self) -> DataSource | None:
        """Original DataSource, if available."""
        return self._source
