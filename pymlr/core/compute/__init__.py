"""
Shared compute infrastructure for pymlr.

Numeric building blocks that know nothing about regression.

Submodules:
    timing: Execution timing utilities
    tolerances: Comparison tolerances and the singular-pivot threshold
    linalg: Matrix type and Cholesky-based kernels
"""

from pymlr.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
