"""
Tests for simple_linear_regression() and the closed-form backend.
"""

import pytest
import numpy as np

from pymlr.regression import (
    Design,
    multiple_linear_regression,
    simple_linear_regression,
)
from pymlr.regression.backends import ClosedFormBackend
from pymlr.core.exceptions import DegenerateInputError, DimensionError


class TestSimpleRegression:

    def test_exact_line(self, line_data):
        x, y = line_data
        result = simple_linear_regression(y, x)
        np.testing.assert_allclose(result.coefficients, [2.0, 3.0], rtol=1e-12)
        assert result.r_squared == pytest.approx(1.0)
        assert result.p == 2
        assert result.has_constant

    def test_agrees_with_multiple_regression(self, noisy_line_data):
        x, y = noisy_line_data
        simple = simple_linear_regression(y, x)
        multiple = multiple_linear_regression(y, x)

        np.testing.assert_allclose(simple.coefficients, multiple.coefficients, rtol=1e-8)
        np.testing.assert_allclose(
            simple.coefficient_standard_errors,
            multiple.coefficient_standard_errors,
            rtol=1e-8,
        )
        np.testing.assert_allclose(simple.t_statistics, multiple.t_statistics, rtol=1e-8)
        assert simple.r_squared == pytest.approx(multiple.r_squared, rel=1e-9)
        assert simple.adjusted_r_squared == pytest.approx(multiple.adjusted_r_squared, rel=1e-9)
        assert simple.standard_error == pytest.approx(multiple.standard_error, rel=1e-8)
        assert simple.ss_error == pytest.approx(multiple.ss_error, rel=1e-8)
        assert simple.ss_total == pytest.approx(multiple.ss_total, rel=1e-12)

    def test_backend_and_basic_only(self, noisy_line_data):
        x, y = noisy_line_data
        result = simple_linear_regression(y, x)
        assert result.backend_name == 'closed_form'
        assert not result.has_advanced_stats

    def test_two_points_rejected(self):
        with pytest.raises(DegenerateInputError) as exc_info:
            simple_linear_regression([1.0, 2.0], [1.0, 2.0])
        assert exc_info.value.reason == 'n_le_p'
        assert exc_info.value.n == 2

    def test_constant_x_rejected(self):
        with pytest.raises(DegenerateInputError) as exc_info:
            simple_linear_regression([1.0, 2.0, 3.0], [5.0, 5.0, 5.0])
        assert exc_info.value.reason == 'constant_x'

    def test_constant_y_rejected(self):
        with pytest.raises(DegenerateInputError) as exc_info:
            simple_linear_regression([7.0, 7.0, 7.0], [1.0, 2.0, 3.0])
        assert exc_info.value.reason == 'constant_y'

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            simple_linear_regression([1.0, 2.0, 3.0], [1.0, 2.0, 3.0, 4.0])

    def test_2d_x_rejected(self):
        with pytest.raises(DimensionError):
            simple_linear_regression([1.0, 2.0, 3.0], [[1.0], [2.0], [3.0]])


class TestClosedFormBackend:

    def test_requires_one_predictor(self, rng):
        design = Design.from_arrays(rng.standard_normal((10, 2)), rng.standard_normal(10))
        with pytest.raises(ValueError, match="one predictor"):
            ClosedFormBackend().solve(design)

    def test_requires_constant(self, noisy_line_data):
        x, y = noisy_line_data
        design = Design.from_arrays(x, y, add_constant=False)
        with pytest.raises(ValueError):
            ClosedFormBackend().solve(design)
