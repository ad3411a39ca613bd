"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats

from pymlr.core.result import Result
from pymlr.core.exceptions import DimensionError
from pymlr.core.validation import check_array, check_finite
from pymlr.core.compute.linalg import Matrix, multiply

if TYPE_CHECKING:
    from pymlr.regression.design import Design


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends. The advanced fields
    are None unless the fit was asked for them.
    """
    coefficients: NDArray[np.floating[Any]]
    coefficient_standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]
    r_squared: float
    adjusted_r_squared: float
    standard_error: float
    coefficient_of_variation: float
    ss_regression: float
    ss_error: float
    ss_total: float
    y_mean: float
    n: int
    p: int
    df_residual: int
    # NMBE of an OLS fit with a constant is zero up to round-off
    normalized_mean_bias_error: float = 0.0

    predictions: NDArray[np.floating[Any]] | None = None
    residuals: NDArray[np.floating[Any]] | None = None
    standardized_residuals: NDArray[np.floating[Any]] | None = None
    leverage: NDArray[np.floating[Any]] | None = None
    cooks_distance: NDArray[np.floating[Any]] | None = None
    f_statistic: float | None = None
    y_data: NDArray[np.floating[Any]] | None = None
    x_data: NDArray[np.floating[Any]] | None = None


@dataclass
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides accessors for every reported
    statistic, plus p-values, confidence intervals and prediction.
    """
    _result: Result[LinearParams]
    _design: 'Design'

    # === Coefficients ===

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Coefficients (p,), constant first when the design has one."""
        return self._result.params.coefficients

    @property
    def coefficient_standard_errors(self) -> NDArray[np.floating[Any]]:
        """SE(b_i) = standard_error * sqrt(C[i, i]), C = (X'X)^-1."""
        return self._result.params.coefficient_standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        return self._result.params.t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values of the t statistics on n - p degrees of freedom."""
        t = self.t_statistics
        return 2.0 * stats.t.sf(np.abs(t), self.df_residual)

    def conf_int(self, alpha: float = 0.05) -> NDArray[np.floating[Any]]:
        """
        Confidence intervals for the coefficients.

        Args:
            alpha: Significance level (0.05 gives 95% intervals)

        Returns:
            Array of shape (p, 2) with lower and upper bounds
        """
        if not 0.0 < alpha < 1.0:
            raise ValueError(f"alpha must be in (0, 1), got {alpha}")
        t_crit = stats.t.ppf(1.0 - alpha / 2.0, self.df_residual)
        half = t_crit * self.coefficient_standard_errors
        return np.column_stack([self.coefficients - half, self.coefficients + half])

    # === Fit quality ===

    @property
    def r_squared(self) -> float:
        return self._result.params.r_squared

    @property
    def adjusted_r_squared(self) -> float:
        return self._result.params.adjusted_r_squared

    @property
    def standard_error(self) -> float:
        """sqrt(SSE / (n - p)), the RMSE of the model on its own data."""
        return self._result.params.standard_error

    @property
    def coefficient_of_variation(self) -> float:
        """standard_error / mean(y); a fraction, not a percentage."""
        return self._result.params.coefficient_of_variation

    @property
    def normalized_mean_bias_error(self) -> float:
        return self._result.params.normalized_mean_bias_error

    @property
    def ss_regression(self) -> float:
        return self._result.params.ss_regression

    @property
    def ss_error(self) -> float:
        return self._result.params.ss_error

    @property
    def ss_total(self) -> float:
        return self._result.params.ss_total

    @property
    def y_mean(self) -> float:
        return self._result.params.y_mean

    @property
    def n(self) -> int:
        return self._result.params.n

    @property
    def p(self) -> int:
        return self._result.params.p

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def has_constant(self) -> bool:
        return self._design.add_constant

    # === Advanced statistics ===

    @property
    def has_advanced_stats(self) -> bool:
        return self._result.params.residuals is not None

    @property
    def predictions(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.predictions

    @property
    def residuals(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.residuals

    @property
    def standardized_residuals(self) -> NDArray[np.floating[Any]] | None:
        """Residuals divided by their standard deviation (divisor n - 1)."""
        return self._result.params.standardized_residuals

    @property
    def leverage(self) -> NDArray[np.floating[Any]] | None:
        """Diagonal of the hat matrix X (X'X)^-1 X'."""
        return self._result.params.leverage

    @property
    def cooks_distance(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.cooks_distance

    @property
    def f_statistic(self) -> float | None:
        return self._result.params.f_statistic

    @property
    def f_p_value(self) -> float | None:
        """Upper-tail p-value of the F statistic on (p - 1, n - p) DF."""
        f = self.f_statistic
        if f is None:
            return None
        if np.isnan(f):
            return float('nan')
        return float(stats.f.sf(f, self.p - 1, self.df_residual))

    @property
    def y_data(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.y_data

    @property
    def x_data(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.x_data

    # === Envelope ===

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # === Use ===

    def predict(self, X_new: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Predict the response for new observations.

        Args:
            X_new: Predictor values (m x k) without a constant column. A 1D
                   input is read as m observations when k == 1, otherwise as
                   a single observation.

        Returns:
            Predictions (m,)

        Raises:
            DimensionError: If the number of predictor columns differs from the fit
        """
        X_arr = check_array(X_new, 'X_new')
        k = self._design.k
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1) if k == 1 else X_arr.reshape(1, -1)
        if X_arr.ndim != 2 or X_arr.shape[1] != k:
            raise DimensionError(
                f"X_new: expected {k} predictor column(s), got shape {X_arr.shape}"
            )
        check_finite(X_arr, 'X_new')

        if self.has_constant:
            X_arr = np.column_stack([np.ones(X_arr.shape[0]), X_arr])
        fitted = multiply(Matrix(X_arr), Matrix.column(self.coefficients))
        return fitted.column_vector()

    def to_dict(self) -> dict[str, Any]:
        """
        Plain-Python view of every statistic, for serialization.

        Arrays become lists; advanced fields are None when not computed.
        """
        def _list(arr):
            return None if arr is None else [float(v) for v in arr]

        def _float(v):
            return None if v is None else float(v)

        result: dict[str, Any] = {
            'coefficients': _list(self.coefficients),
            'coefficient_standard_errors': _list(self.coefficient_standard_errors),
            't_statistics': _list(self.t_statistics),
            'p_values': _list(self.p_values),
            'r_squared': float(self.r_squared),
            'adjusted_r_squared': float(self.adjusted_r_squared),
            'standard_error': float(self.standard_error),
            'coefficient_of_variation': float(self.coefficient_of_variation),
            'normalized_mean_bias_error': float(self.normalized_mean_bias_error),
            'ss_regression': float(self.ss_regression),
            'ss_error': float(self.ss_error),
            'ss_total': float(self.ss_total),
            'y_mean': float(self.y_mean),
            'n': int(self.n),
            'p': int(self.p),
            'df_residual': int(self.df_residual),
            'has_constant': self.has_constant,
            'f_statistic': _float(self.f_statistic),
            'f_p_value': _float(self.f_p_value),
            'predictions': _list(self.predictions),
            'residuals': _list(self.residuals),
            'standardized_residuals': _list(self.standardized_residuals),
            'leverage': _list(self.leverage),
            'cooks_distance': _list(self.cooks_distance),
            'backend': self.backend_name,
            'warnings': list(self.warnings),
        }
        return result

    def summary(self) -> str:
        """Generate a tabular summary of the fit."""
        names = _coefficient_names(self.p, self.has_constant)
        lines = [
            "Linear Regression Results",
            "=" * 68,
            f"Observations: {self.n}",
            f"Parameters: {self.p}" + (" (including constant)" if self.has_constant else ""),
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"Standard Error: {self.standard_error:.6f} on {self.df_residual} DF",
            f"CV (%): {100.0 * self.coefficient_of_variation:.4f}",
        ]
        if self.f_statistic is not None:
            lines.append(
                f"F-statistic: {self.f_statistic:.4f} on {self.p - 1} and "
                f"{self.df_residual} DF, p-value: {self.f_p_value:.4g}"
            )
        lines += [
            "",
            "Coefficients:",
            "-" * 68,
            f"{'':<10} {'Estimate':>14} {'Std.Error':>14} {'t value':>12} {'Pr(>|t|)':>12}",
            "-" * 68,
        ]
        for name, coef, se, t, pv in zip(
            names, self.coefficients, self.coefficient_standard_errors,
            self.t_statistics, self.p_values,
        ):
            lines.append(f"{name:<10} {coef:14.6f} {se:14.6f} {t:12.3f} {pv:12.4g}")

        lines.append("-" * 68)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self.n}, p={self.p}, "
            f"r_squared={self.r_squared:.4f})"
        )


def _coefficient_names(p: int, has_constant: bool) -> list[str]:
    """'const', 'x1', 'x2', ... in design-matrix column order."""
    if has_constant:
        return ['const'] + [f'x{i}' for i in range(1, p)]
    return [f'x{i}' for i in range(1, p + 1)]
