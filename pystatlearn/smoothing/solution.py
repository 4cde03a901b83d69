"""
LOESS solution type.

Read-only wrapper around Result[LoessParams] with accessors and an
R-style text summary.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pystatlearn.core.result import Result
from pystatlearn.smoothing._common import LoessParams

if TYPE_CHECKING:
    from pystatlearn.smoothing.design import LoessDesign


@dataclass
class LoessSolution:
    """
    User-facing local regression results.

    Everything a plotting consumer needs: the smoothed curve at each
    observed x (in input order), residuals and error metrics.
    """
    _result: Result[LoessParams]
    _design: 'LoessDesign'

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._design.x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        return self._design.y

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def sse(self) -> float:
        return self._result.params.sse

    @property
    def mse(self) -> float:
        return self._result.params.mse

    @property
    def rmse(self) -> float:
        return float(np.sqrt(self.mse))

    @property
    def span(self) -> float:
        return self._result.params.span

    @property
    def degree(self) -> int:
        return self._result.params.degree

    @property
    def window_size(self) -> int:
        return self._result.params.window_size

    @property
    def bandwidth(self) -> int:
        return self._result.params.bandwidth

    @property
    def local_coefficients(self) -> NDArray[np.floating[Any]]:
        """Per-point local β, centered on each query point (n x (degree+1))."""
        return self._result.params.local_coefficients

    @property
    def local_slopes(self) -> NDArray[np.floating[Any]]:
        """Derivative of the local polynomial at each observed x."""
        return self._result.params.local_coefficients[:, 1]

    @property
    def zero_weight_neighbors(self) -> NDArray[np.integer[Any]]:
        return self._result.params.zero_weight_neighbors

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def sorted_curve(self) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
        """(x, fitted) ordered by x, ready for drawing as a line."""
        order = np.argsort(self.x, kind='stable')
        return self.x[order], self.fitted_values[order]

    def summary(self) -> str:
        """Generate R-style summary output."""
        lines = [
            "Local Polynomial Regression (LOESS)",
            "=" * 60,
            f"Number of Observations: {self._design.n}",
            f"Span: {self.span:g}",
            f"Degree: {self.degree}",
            f"Window Size: {self.window_size}",
            f"Bandwidth: {self.bandwidth}",
            f"Kernel: {self.info.get('kernel', 'tricube')}",
            "-" * 60,
            f"SSE: {self.sse:.6f}",
            f"MSE: {self.mse:.6f}",
            f"RMSE: {self.rmse:.6f}",
            f"Zero-weight neighbors: {int(self.zero_weight_neighbors.sum())}",
            "-" * 60,
            f"Backend: {self.backend_name}",
        ]
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LoessSolution(n={self._design.n}, span={self.span:g}, "
            f"degree={self.degree}, mse={self.mse:.4g})"
        )
