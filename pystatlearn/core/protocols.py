"""
Core protocols for pystatlearn.

These define structural interfaces that domain-specific implementations must
satisfy. We use Protocol (structural typing) rather than ABC (nominal typing)
so a new backend only has to provide the right attributes.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, runtime_checkable

from pystatlearn.core.result import Result

D = TypeVar('D')  # Design type
P = TypeVar('P')  # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend knows how to take a domain-specific Design and produce
    a domain-specific parameter payload wrapped in a Result.

    Backends are stateless: all configuration is passed via the Design
    or at construction time. This makes them easy to test and swap.

    Type Parameters:
        D: The Design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_qr', 'cpu_inverse', 'cpu_loess', 'cpu_knn'
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the computation.

        Raises:
            NumericalError: If numerical issues prevent solution (singularity, etc.)
        """
        ...
