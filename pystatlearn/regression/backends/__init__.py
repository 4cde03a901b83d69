"""
Regression backends.

Available backends:
    CPUInverseBackend: explicit (X'X)⁻¹ from the normal equations
    CPUQRBackend: QR decomposition with back-substitution
"""

from pystatlearn.regression.backends.cpu import CPUInverseBackend, CPUQRBackend

__all__ = [
    "CPUInverseBackend",
    "CPUQRBackend",
]
