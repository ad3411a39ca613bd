"""
Generic result container for pymlr computations.

Every backend returns its parameter payload wrapped in a Result. The
envelope carries the metadata that is common to all fits (timing, backend
name, non-fatal warnings) so that the payload types only hold statistics.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, rank, diagnostics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Attributes:
        params: Domain-specific parameters (coefficients, sums of squares, ...)
        info: Structured metadata (method, add_constant, ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LinearParams(...),
        ...     info={'method': 'cholesky'},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_cholesky'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
