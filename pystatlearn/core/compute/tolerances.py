"""
Tolerance tiers for numerical validation.

Defines precision expectations for the different solution paths and the
threshold at which a normal-equation matrix is treated as singular.

Used by the linear algebra kernels and by the test suite.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerances for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Normal-equation inverse vs QR: the inverse path squares the condition
# number, so agreement is only expected to ~1e-8
METHOD_AGREEMENT = ToleranceTier(
    rtol=1e-8,
    atol=1e-10,
    name='method_agreement',
    description='inverse and QR coefficients on the same problem',
)

# Column j of X is aliased when |R[j, j]| < QR_RANK_TOLERANCE * ||X[:, j]||.
# Same relative tolerance as R's lm().
QR_RANK_TOLERANCE = 1e-7

# A Gram matrix (X'X, X'WX) squares the condition number of X, so the
# QR tolerance above corresponds to cond(X'X) of 1 / QR_RANK_TOLERANCE**2.
SINGULAR_CONDITION_THRESHOLD = 1.0 / QR_RANK_TOLERANCE ** 2
