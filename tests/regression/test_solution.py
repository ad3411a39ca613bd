"""
Tests for LinearSolution: inference, prediction and reporting.
"""

import pytest
import numpy as np
from scipy import stats

from pymlr.regression import multiple_linear_regression
from pymlr.core.exceptions import DimensionError


@pytest.fixture
def solution(simple_regression_data):
    X, y, _ = simple_regression_data
    return multiple_linear_regression(y, X)


class TestInference:

    def test_p_values_in_zero_one(self, solution):
        assert np.all(solution.p_values >= 0.0)
        assert np.all(solution.p_values <= 1.0)

    def test_p_values_two_sided(self, solution):
        expected = 2.0 * stats.t.sf(np.abs(solution.t_statistics), solution.df_residual)
        np.testing.assert_allclose(solution.p_values, expected)

    def test_conf_int_contains_coefficients(self, solution):
        ci = solution.conf_int()
        assert ci.shape == (4, 2)
        assert np.all(ci[:, 0] < solution.coefficients)
        assert np.all(ci[:, 1] > solution.coefficients)

    def test_conf_int_narrows_with_alpha(self, solution):
        wide = solution.conf_int(alpha=0.01)
        narrow = solution.conf_int(alpha=0.10)
        assert np.all(wide[:, 1] - wide[:, 0] > narrow[:, 1] - narrow[:, 0])

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1])
    def test_conf_int_rejects_bad_alpha(self, solution, alpha):
        with pytest.raises(ValueError, match="alpha"):
            solution.conf_int(alpha=alpha)

    def test_f_p_value_absent_without_advanced(self, solution):
        assert solution.f_p_value is None


class TestPredict:

    def test_predict_line(self, line_data):
        x, y = line_data
        result = multiple_linear_regression(y, x)
        np.testing.assert_allclose(result.predict([6.0, 7.0]), [20.0, 23.0], rtol=1e-9)

    def test_predict_matches_fitted_values(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = multiple_linear_regression(y, X, compute_advanced_stats=True)
        np.testing.assert_allclose(result.predict(X), result.predictions, rtol=1e-12, atol=1e-12)

    def test_predict_single_observation(self, solution):
        row = np.array([1.0, 0.0, -1.0])
        expected = solution.coefficients[0] + row @ solution.coefficients[1:]
        assert solution.predict(row)[0] == pytest.approx(expected)

    def test_predict_without_constant(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        y = np.array([2.1, 3.9, 6.1, 7.9])
        result = multiple_linear_regression(y, x, add_constant=False)
        assert result.predict([10.0])[0] == pytest.approx(10.0 * result.coefficients[0])

    def test_predict_wrong_columns(self, solution):
        with pytest.raises(DimensionError, match="expected 3"):
            solution.predict(np.ones((2, 2)))


class TestReporting:

    def test_to_dict_basic(self, solution):
        d = solution.to_dict()
        assert len(d['coefficients']) == 4
        assert d['n'] == 100
        assert d['p'] == 4
        assert d['has_constant'] is True
        assert d['backend'] == 'cpu_cholesky'
        assert d['residuals'] is None
        assert d['f_statistic'] is None

    def test_to_dict_advanced(self, simple_regression_data):
        X, y, _ = simple_regression_data
        d = multiple_linear_regression(y, X, compute_advanced_stats=True).to_dict()
        assert len(d['residuals']) == 100
        assert len(d['leverage']) == 100
        assert isinstance(d['f_statistic'], float)

    def test_summary(self, solution):
        text = solution.summary()
        assert "Linear Regression Results" in text
        assert "R-squared" in text
        assert "const" in text
        assert "x3" in text
        assert "Pr(>|t|)" in text
        assert "F-statistic" not in text

    def test_summary_with_f(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = multiple_linear_regression(y, X, compute_advanced_stats=True)
        assert "F-statistic" in result.summary()

    def test_repr(self, solution):
        assert repr(solution).startswith("LinearSolution(n=100, p=4")
