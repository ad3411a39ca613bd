"""
Core protocols for pymlr.

Structural interfaces that backends must satisfy. Protocol (structural
typing) rather than ABC so that a backend needs no import from here.
"""

from typing import Protocol, TypeVar, runtime_checkable

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)      # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a domain-specific design and produces a Result wrapping
    a parameter payload. Backends are stateless: everything they need is in
    the design or passed to solve().
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_cholesky'.
        """
        ...

    def solve(self, design: D, **options) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            NumericalError: If numerical issues prevent a solution
            ValidationError: If the design is invalid for this backend
        """
        ...
