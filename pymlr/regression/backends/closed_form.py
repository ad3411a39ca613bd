"""
Closed-form backend for simple (one-predictor) linear regression.

Uses the centered sums
    Sxx = sum (x - x_mean)^2
    Syy = sum (y - y_mean)^2
    Sxy = sum (x - x_mean)(y - y_mean)
so no matrix is formed.
"""

from typing import Any
import numpy as np

from pymlr.core.result import Result
from pymlr.core.compute.timing import Timer
from pymlr.core.exceptions import DegenerateInputError
from pymlr.core.validation import check_not_constant
from pymlr.regression.design import Design
from pymlr.regression.solution import LinearParams


class ClosedFormBackend:
    """
    y = intercept + slope * x by means and centered sums of squares.

    Requires a design with a constant column and exactly one predictor.
    """

    @property
    def name(self) -> str:
        return 'closed_form'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Fit the one-predictor model.

        Returns:
            Result containing LinearParams with coefficients [intercept, slope]

        Raises:
            ValueError: If the design is not constant + one predictor
            DegenerateInputError: If n <= 2, or x or y is constant
        """
        if not design.add_constant or design.k != 1:
            raise ValueError(
                f"Closed-form fit needs a constant and one predictor, "
                f"got add_constant={design.add_constant}, k={design.k}"
            )

        n = design.n
        if n <= 2:
            raise DegenerateInputError(
                f"Simple regression needs at least 3 observations, got {n}",
                n=n,
                p=2,
                reason='n_le_p',
            )

        y = design.y
        x = design.X[:, 0]
        check_not_constant(x, 'x', reason='constant_x')
        check_not_constant(y, 'y', reason='constant_y')

        timer = Timer()
        timer.start()
        warnings: list[str] = []

        with timer.section('sums_of_squares'):
            x_mean = float(np.mean(x))
            y_mean = float(np.mean(y))
            dx = x - x_mean
            dy = y - y_mean
            ss_xx = float(dx @ dx)
            ss_yy = float(dy @ dy)
            ss_xy = float(dx @ dy)

        with timer.section('statistics'):
            slope = ss_xy / ss_xx
            intercept = y_mean - slope * x_mean

            sse = ss_yy - slope * ss_xy
            if sse < 0.0:
                warnings.append(f"SSE of {sse:.3e} clamped to zero")
                sse = 0.0

            df = n - 2
            standard_error = float(np.sqrt(sse / df))
            r_squared = 1.0 - sse / ss_yy
            adjusted_r_squared = 1.0 - ((n - 1) / df) * (1.0 - r_squared)

            if y_mean == 0.0:
                warnings.append("mean of y is zero; coefficient of variation undefined")
                cv = float('nan')
            else:
                cv = standard_error / y_mean

            coefficients = np.array([intercept, slope], dtype=np.float64)
            coef_se = np.array([
                standard_error * np.sqrt(1.0 / n + x_mean ** 2 / ss_xx),
                standard_error / np.sqrt(ss_xx),
            ])
            with np.errstate(divide='ignore', invalid='ignore'):
                t_statistics = coefficients / coef_se

        timer.stop()

        params = LinearParams(
            coefficients=coefficients,
            coefficient_standard_errors=coef_se,
            t_statistics=t_statistics,
            r_squared=r_squared,
            adjusted_r_squared=adjusted_r_squared,
            standard_error=standard_error,
            coefficient_of_variation=cv,
            ss_regression=ss_yy - sse,
            ss_error=sse,
            ss_total=ss_yy,
            y_mean=y_mean,
            n=n,
            p=2,
            df_residual=df,
        )

        info: dict[str, Any] = {
            'method': 'closed_form',
            'add_constant': True,
            'advanced': False,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings),
        )
