"""
Renderers for fitted models.

    render(solution, 'text')     coefficients one per line (mlr output)
    render(solution, 'json')     every statistic as a JSON object
    render(solution, 'python')   source of a class that evaluates the model
"""

from __future__ import annotations

import json
import math
from typing import Any, Literal

from pymlr.regression.solution import LinearSolution, _coefficient_names


OutputFormat = Literal['text', 'json', 'python']

FORMATS: tuple[str, ...] = ('text', 'json', 'python')


def render(solution: LinearSolution, fmt: OutputFormat = 'text', *, stats: bool = False) -> str:
    """
    Render a fitted model.

    Args:
        solution: Fitted model
        fmt: 'text', 'json' or 'python'
        stats: For 'text', append the goodness-of-fit block

    Returns:
        Rendered output, newline-terminated

    Raises:
        ValueError: If fmt is not a known format
    """
    if fmt == 'text':
        return render_text(solution, stats=stats)
    if fmt == 'json':
        return render_json(solution)
    if fmt == 'python':
        return render_python(solution)
    raise ValueError(f"Unknown output format: {fmt!r}. Choose from {FORMATS}")


# =============================================================================
# Text
# =============================================================================

def format_coefficient(value: float) -> str:
    """
    Format a coefficient to about six significant figures.

    Decimals are min(10, max(0, 5 - floor(log10|value|))); trailing zeros
    after the decimal point are then dropped.

    Examples:
        >>> format_coefficient(2.0)
        '2'
        >>> format_coefficient(1234.56789)
        '1234.57'
        >>> format_coefficient(0.000123456789)
        '0.000123457'
    """
    if not math.isfinite(value):
        return str(value)
    if value == 0.0:
        return '0'

    decimals = min(10, max(0, 5 - math.floor(math.log10(abs(value)))))
    text = f"{value:.{decimals}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text == '-0':
        text = '0'
    return text


def render_text(solution: LinearSolution, *, stats: bool = False) -> str:
    lines = [format_coefficient(float(c)) for c in solution.coefficients]

    if stats:
        t_stats = ", ".join(str(float(t)) for t in solution.t_statistics)
        lines += [
            f"CV (%): {solution.coefficient_of_variation * 100}",
            f"n: {solution.n}",
            f"R2: {solution.r_squared}",
            f"R2 adj: {solution.adjusted_r_squared}",
            f"t-stats: {t_stats}",
            f"SSR Σ(y_pred - y_ave)²: {solution.ss_regression}",
            f"SSE Σ(y_meas - y_pred)²: {solution.ss_error}",
            f"SST Σ(y_meas - y_ave)²: {solution.ss_total}",
            f"Average Y: {solution.y_mean}",
            f"Standard Error: {solution.standard_error}",
        ]

    return "\n".join(lines) + "\n"


# =============================================================================
# JSON
# =============================================================================

def render_json(solution: LinearSolution) -> str:
    """Serialize solution.to_dict(); NaN and infinities become null."""
    payload = _finite_or_none(solution.to_dict())
    return json.dumps(payload, indent=2, allow_nan=False) + "\n"


def _finite_or_none(obj: Any) -> Any:
    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if isinstance(obj, dict):
        return {k: _finite_or_none(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_finite_or_none(v) for v in obj]
    return obj


# =============================================================================
# Python source
# =============================================================================

_PYTHON_TEMPLATE = '''\
class LinearModel:
    """
    Fitted linear model: {equation}

    n = {n}, R-squared = {r_squared!r}, standard error = {standard_error!r}
    """

    COEFFICIENTS = ({coefficients})
    HAS_CONSTANT = {has_constant}

    @classmethod
    def predict(cls, *x):
        """Evaluate the model at predictor values x1, x2, ..."""
        if len(x) != {k}:
            raise ValueError(f"expected {k} predictor value(s), got {{len(x)}}")
        terms = (1.0,) + x if cls.HAS_CONSTANT else x
        return sum(c * v for c, v in zip(cls.COEFFICIENTS, terms))
'''


def render_python(solution: LinearSolution) -> str:
    """
    Source of a standalone class that evaluates the fitted model.

    Coefficients are written with repr() so they round-trip exactly.
    """
    coefficients = [float(c) for c in solution.coefficients]
    names = _coefficient_names(solution.p, solution.has_constant)
    k = solution.p - 1 if solution.has_constant else solution.p

    terms = [
        repr(c) if name == 'const' else f"{c!r}*{name}"
        for name, c in zip(names, coefficients)
    ]

    return _PYTHON_TEMPLATE.format(
        equation="y = " + " + ".join(terms),
        n=solution.n,
        r_squared=float(solution.r_squared),
        standard_error=float(solution.standard_error),
        coefficients=", ".join(repr(c) for c in coefficients) + ("," if len(coefficients) == 1 else ""),
        has_constant=solution.has_constant,
        k=k,
    )
