"""
Numerical tolerances.

Two kinds of thresholds live here:
- ToleranceTier: rtol/atol pairs for comparing computed results, used by
  the test suite and by callers validating reconstructions.
- singular_pivot_rtol(): the relative size, a few machine epsilons per
  factored row, at or below which a Cholesky diagonal residual is treated
  as zero. Exactly singular cross-product matrices then surface as NaN
  instead of as huge-but-finite inverses, while merely ill-conditioned
  ones still factor.
"""

import numpy as np
from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Well-conditioned problems in double precision
CPU_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-10,
    name='cpu_fp64',
    description='CPU double precision, well-conditioned',
)

# Ill-conditioned problems (cond(X'X) > 1e8)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned',
)

# Machine epsilons per factored row allowed as round-off in a Cholesky
# diagonal residual before the pivot counts as zero.
SINGULAR_PIVOT_EPS_MULTIPLE = 8


def singular_pivot_rtol(k: int) -> float:
    """
    Relative pivot threshold for a k x k factorization.

    A residual S[i,i] - sum(L[i,:i]**2) at or below this fraction of
    S[i,i] is indistinguishable from zero in double precision.
    """
    return SINGULAR_PIVOT_EPS_MULTIPLE * max(k, 1) * float(np.finfo(np.float64).eps)


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select appropriate tolerance tier for a problem."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
