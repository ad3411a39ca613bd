"""
Regression backends.

Available backends:
    CPUCholeskyBackend: normal equations with a Cholesky-based inverse
    ClosedFormBackend: one-predictor fit from centered sums of squares
"""

from pymlr.regression.backends.cpu import CPUCholeskyBackend
from pymlr.regression.backends.closed_form import ClosedFormBackend

__all__ = [
    "CPUCholeskyBackend",
    "ClosedFormBackend",
]
