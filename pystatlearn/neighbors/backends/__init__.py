"""
Nearest-neighbor backends.

Available backends:
    CPUKNNBackend: full distance matrix plus per-row voting on the CPU
"""

from pystatlearn.neighbors.backends.cpu import CPUKNNBackend

__all__ = [
    "CPUKNNBackend",
]
