"""
Local regression backends.

Available backends:
    CPULoessBackend: per-point weighted least squares on the CPU
"""

from pystatlearn.smoothing.backends.cpu import CPULoessBackend

__all__ = [
    "CPULoessBackend",
]
