"""
Shared compute infrastructure for pystatlearn.

This module provides timing utilities, tolerance tiers and linear algebra
kernels that are shared across all domain-specific backends.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical tolerance tiers and singularity thresholds
    linalg: Linear algebra kernels (QR, back-substitution, Gram solves)
"""

from pystatlearn.core.compute.timing import Timer

__all__ = [
    # Timing
    "Timer",
]
