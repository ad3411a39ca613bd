"""
Tests for the text, JSON and Python-source renderers.
"""

import json

import pytest
import numpy as np

from pymlr.formatters import format_coefficient, render
from pymlr.regression import multiple_linear_regression


@pytest.fixture
def line_solution(line_data):
    x, y = line_data
    return multiple_linear_regression(y, x)


class TestFormatCoefficient:

    @pytest.mark.parametrize("value, expected", [
        (2.0, '2'),
        (-2.5, '-2.5'),
        (100.0, '100'),
        (0.0, '0'),
        (1234.56789, '1234.57'),
        (123456.7, '123457'),
        (0.000123456789, '0.000123457'),
        (1e-12, '0'),
        (3.0000000000004, '3'),
    ])
    def test_values(self, value, expected):
        assert format_coefficient(value) == expected

    def test_non_finite(self):
        assert format_coefficient(float('nan')) == 'nan'


class TestRenderText:

    def test_one_coefficient_per_line(self, line_solution):
        assert render(line_solution) == "2\n3\n"

    def test_stats_block(self, line_solution):
        lines = render(line_solution, 'text', stats=True).splitlines()
        assert lines[:2] == ['2', '3']
        labels = [line.split(':')[0] for line in lines[2:]]
        assert labels == [
            'CV (%)', 'n', 'R2', 'R2 adj', 't-stats',
            'SSR Σ(y_pred - y_ave)²', 'SSE Σ(y_meas - y_pred)²', 'SST Σ(y_meas - y_ave)²',
            'Average Y', 'Standard Error',
        ]
        assert 'n: 5' in lines


class TestRenderJson:

    def test_round_trips_through_json(self, simple_regression_data):
        X, y, _ = simple_regression_data
        solution = multiple_linear_regression(y, X, compute_advanced_stats=True)
        payload = json.loads(render(solution, 'json'))
        np.testing.assert_allclose(payload['coefficients'], solution.coefficients)
        assert payload['n'] == 100
        assert len(payload['cooks_distance']) == 100

    def test_nan_becomes_null(self):
        x = np.array([1.0, 2.0, 3.0, 4.0, 6.0])
        y = np.array([-2.0, -1.0, 0.0, 1.0, 2.0])
        payload = json.loads(render(multiple_linear_regression(y, x), 'json'))
        assert payload['coefficient_of_variation'] is None
        assert payload['warnings']


class TestRenderPython:

    def test_generated_class_predicts(self, line_solution):
        source = render(line_solution, 'python')
        namespace = {}
        exec(source, namespace)
        model = namespace['LinearModel']
        assert model.HAS_CONSTANT is True
        assert model.predict(6.0) == pytest.approx(20.0)

    def test_generated_class_checks_arity(self, line_solution):
        namespace = {}
        exec(render(line_solution, 'python'), namespace)
        with pytest.raises(ValueError, match="expected 1"):
            namespace['LinearModel'].predict(1.0, 2.0)

    def test_without_constant(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        y = np.array([2.1, 3.9, 6.1, 7.9])
        solution = multiple_linear_regression(y, x, add_constant=False)
        namespace = {}
        exec(render(solution, 'python'), namespace)
        model = namespace['LinearModel']
        assert len(model.COEFFICIENTS) == 1
        assert model.predict(2.0) == pytest.approx(2.0 * solution.coefficients[0])


def test_unknown_format(line_solution):
    with pytest.raises(ValueError, match="Unknown output format"):
        render(line_solution, 'xml')
