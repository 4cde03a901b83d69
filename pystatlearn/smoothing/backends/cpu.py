"""
CPU backend for LOESS.

Each query point gets its own weighted polynomial fit. The per-point work
lives in a pure function (_fit_point) that is mapped over all indices;
nothing is shared between points except the read-only design.
"""

from typing import Any, NamedTuple
import numpy as np
from numpy.typing import NDArray

from pystatlearn.core.result import Result
from pystatlearn.core.compute.timing import Timer
from pystatlearn.core.compute.linalg.solve import solve_gram
from pystatlearn.smoothing._common import LoessParams
from pystatlearn.smoothing._kernels import tricube
from pystatlearn.smoothing.design import LoessDesign


class LocalFit(NamedTuple):
    """Outcome of one local weighted fit."""
    coefficients: NDArray[np.floating[Any]]
    n_zero_weight: int


def nearest_window(
    x: NDArray[np.floating[Any]],
    i: int,
    window_size: int,
) -> NDArray[np.intp]:
    """
    Indices of the window_size points closest to x[i].

    Stable sort on |x[j] - x[i]|: equal distances keep their original
    index order, so ties at the window boundary go to the lower index.
    """
    distances = np.abs(x - x[i])
    order = np.argsort(distances, kind='stable')
    return order[:window_size]


def _fit_point(
    i: int,
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    window_size: int,
    bandwidth: int,
    degree: int,
) -> LocalFit:
    """
    Weighted local polynomial fit centered on x[i].

    The design uses local coordinates t = x[j] - x[i], so the fitted value
    at x[i] is the intercept β₀.

    Raises:
        SingularMatrixError: If X'WX is singular for this point
    """
    idx = nearest_window(x, i, window_size)
    t = x[idx] - x[i]
    weights = tricube(t / bandwidth)

    X_local = np.vander(t, degree + 1, increasing=True)
    Xw = X_local * weights[:, None]
    XtWX = X_local.T @ Xw
    XtWy = Xw.T @ y[idx]

    beta = solve_gram(XtWX, XtWy, "X'WX", point_index=i)
    return LocalFit(
        coefficients=beta,
        n_zero_weight=int(np.count_nonzero(weights == 0.0)),
    )


class CPULoessBackend:
    """
    CPU backend for locally weighted polynomial regression.

    Implements the Backend protocol for LoessDesign -> LoessParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_loess'

    def solve(self, design: LoessDesign) -> Result[LoessParams]:
        """
        Fit a local polynomial at every observed x.

        Algorithm (per point i):
            1. Select the window_size nearest points (stable order)
            2. Tri-cube weights on (x[j] - x[i]) / bandwidth
            3. Solve (X'WX)β = X'Wy
            4. fitted[i] = local polynomial at x[i]

        Raises:
            SingularMatrixError: If any local system is singular. The
                whole fit is aborted; there are no partial results.
        """
        timer = Timer()
        timer.start()

        x, y = design.x, design.y
        n = design.n

        with timer.section('local_fits'):
            fits = [
                _fit_point(i, x, y, design.window_size, design.bandwidth, design.degree)
                for i in range(n)
            ]

        with timer.section('statistics'):
            local_coefficients = np.vstack([f.coefficients for f in fits])
            zero_weight = np.array([f.n_zero_weight for f in fits], dtype=np.int64)
            fitted_values = local_coefficients[:, 0].copy()
            residuals = y - fitted_values
            sse = float(residuals @ residuals)
            mse = sse / n

        timer.stop()

        params = LoessParams(
            fitted_values=fitted_values,
            residuals=residuals,
            sse=sse,
            mse=mse,
            span=design.span,
            degree=design.degree,
            window_size=design.window_size,
            bandwidth=design.bandwidth,
            local_coefficients=local_coefficients,
            zero_weight_neighbors=zero_weight,
        )

        info: dict[str, Any] = {
            'method': 'loess',
            'kernel': 'tricube',
            'window_size': design.window_size,
            'bandwidth': design.bandwidth,
            'zero_weight_neighbors': int(zero_weight.sum()),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
