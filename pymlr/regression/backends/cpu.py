"""
CPU backend for multiple linear regression.

Solves the normal equations (X'X) b = X'y through an explicit inverse
C = (X'X)^-1 obtained from the Cholesky factor of X'X. The inverse is
kept because its diagonal gives the coefficient standard errors and the
leverage values.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pymlr.core.result import Result
from pymlr.core.compute.timing import Timer
from pymlr.core.compute.linalg import Matrix, transpose, multiply, cholesky_inverse
from pymlr.core.validation import check_degrees_of_freedom, check_not_constant
from pymlr.regression.design import Design
from pymlr.regression.solution import LinearParams


class CPUCholeskyBackend:
    """
    CPU backend using the Cholesky-based inverse of X'X.

    Implements the Backend protocol for Design -> LinearParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_cholesky'

    def solve(self, design: Design, *, advanced: bool = False) -> Result[LinearParams]:
        """
        Fit OLS by the normal equations.

        Algorithm:
            1. X'X and X'y by matrix multiplication
            2. C = (X'X)^-1 via Cholesky and forward/back substitution
            3. b = C X'y
            4. SSE = y'y - b'X'y (clamped at zero), SST, SSR, R-squared, ...
            5. If advanced: fitted values, residuals, standardized residuals,
               F statistic, leverage and Cook's distance

        Args:
            design: Validated regression design
            advanced: Compute the per-observation statistics

        Returns:
            Result containing LinearParams

        Raises:
            DegenerateInputError: If n <= p or y is constant
            SingularMatrixError: If X'X cannot be inverted
        """
        n, p = design.n, design.p
        check_degrees_of_freedom(n, p)
        check_not_constant(design.y, 'y', reason='constant_y')

        timer = Timer()
        timer.start()
        warnings: list[str] = []

        X = design.matrix
        y = design.y
        Y = Matrix.column(y)

        # === Normal equations ===
        with timer.section('cross_products'):
            Xt = transpose(X)
            XtX = multiply(Xt, X)
            XtY = multiply(Xt, Y)

        with timer.section('cholesky_inverse'):
            C, _ = cholesky_inverse(XtX)

        with timer.section('coefficients'):
            beta = multiply(C, XtY)
            coefficients = beta.column_vector()

        # === Basic statistics ===
        with timer.section('statistics'):
            yty = multiply(transpose(Y), Y)[0, 0]
            b_xty = multiply(transpose(beta), XtY)[0, 0]
            sse = float(yty - b_xty)
            if sse < 0.0:
                # Round-off on a (near) perfect fit
                warnings.append(f"SSE of {sse:.3e} clamped to zero")
                sse = 0.0

            y_mean = float(np.mean(y))
            sst = float(np.sum((y - y_mean) ** 2))
            ssr = sst - sse
            df = n - p

            r_squared = 1.0 - sse / sst
            adjusted_r_squared = 1.0 - ((n - 1) / df) * (1.0 - r_squared)
            standard_error = float(np.sqrt(sse / df))

            if y_mean == 0.0:
                warnings.append("mean of y is zero; coefficient of variation undefined")
                cv = float('nan')
            else:
                cv = standard_error / y_mean

            with np.errstate(divide='ignore', invalid='ignore'):
                coef_se = standard_error * np.sqrt(C.diagonal())
                t_statistics = coefficients / coef_se

        params_kwargs: dict[str, Any] = {}
        if advanced:
            with timer.section('advanced_statistics'):
                params_kwargs = _advanced_statistics(
                    design, beta, C, sse, r_squared, warnings,
                )

        timer.stop()

        params = LinearParams(
            coefficients=coefficients,
            coefficient_standard_errors=coef_se,
            t_statistics=t_statistics,
            r_squared=r_squared,
            adjusted_r_squared=adjusted_r_squared,
            standard_error=standard_error,
            coefficient_of_variation=cv,
            ss_regression=ssr,
            ss_error=sse,
            ss_total=sst,
            y_mean=y_mean,
            n=n,
            p=p,
            df_residual=df,
            **params_kwargs,
        )

        info: dict[str, Any] = {
            'method': 'cholesky',
            'add_constant': design.add_constant,
            'advanced': advanced,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings),
        )


def _advanced_statistics(
    design: Design,
    beta: Matrix,
    C: Matrix,
    sse: float,
    r_squared: float,
    warnings: list[str],
) -> dict[str, Any]:
    """Per-observation diagnostics and the F statistic."""
    n, p = design.n, design.p
    X = design.matrix
    y = design.y

    predictions = multiply(X, beta).column_vector()
    residuals = y - predictions

    resid_mean = float(np.mean(residuals))
    resid_sd = float(np.sqrt(np.sum((residuals - resid_mean) ** 2) / (n - 1)))
    if resid_sd == 0.0:
        warnings.append("residuals have zero spread; standardized residuals set to 0")
        standardized = np.zeros(n, dtype=np.float64)
    else:
        standardized = residuals / resid_sd

    leverage = _hat_diagonal(X.values, C.values)
    mse = sse / (n - p)

    with np.errstate(divide='ignore', invalid='ignore'):
        cooks = (residuals ** 2 * leverage) / (p * mse * (1.0 - leverage) ** 2)
        if p > 1:
            f_statistic = float(
                np.divide(r_squared / (p - 1), (1.0 - r_squared) / (n - p))
            )
        else:
            f_statistic = float('nan')

    return {
        'predictions': predictions,
        'residuals': residuals,
        'standardized_residuals': standardized,
        'leverage': leverage,
        'cooks_distance': cooks,
        'f_statistic': f_statistic,
        'y_data': y.copy(),
        'x_data': design.X.copy(),
    }


def _hat_diagonal(X: NDArray[np.float64], C: NDArray[np.float64]) -> NDArray[np.float64]:
    """h_ii = x_i' C x_i without forming the n x n hat matrix."""
    return np.einsum('ij,jk,ik->i', X, C, X)
