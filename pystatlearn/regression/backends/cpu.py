"""
CPU backends for single-predictor linear regression.

Two ways to get β and (X'X)⁻¹ out of the same design:
    CPUInverseBackend: invert the normal equations directly
    CPUQRBackend: QR decomposition of X, then back-substitution

Both hand off to the same inference code, so everything downstream of
the coefficients is identical between them.
"""

from typing import Any
import numpy as np

from pystatlearn.core.result import Result
from pystatlearn.core.compute.timing import Timer
from pystatlearn.core.compute.linalg import invert_gram, qr_solve, triangular_inverse
from pystatlearn.regression._common import LinearParams
from pystatlearn.regression._inference import build_linear_params
from pystatlearn.regression.design import Design


class CPUInverseBackend:
    """
    CPU backend using the explicit inverse of X'X.

    Implements the Backend protocol for Design -> LinearParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_inverse'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Solve OLS via the normal equations.

        Algorithm:
            1. Form X'X and X'y
            2. Check cond(X'X) and invert
            3. β = (X'X)⁻¹ X'y

        Raises:
            SingularMatrixError: If X'X is singular (constant predictor)
        """
        timer = Timer()
        timer.start()

        with timer.section('gram'):
            XtX = design.XtX()
            Xty = design.Xty()

        with timer.section('solve'):
            xtx_inv, cond = invert_gram(XtX, "X'X")
            coefficients = xtx_inv @ Xty

        with timer.section('statistics'):
            params, warnings_list = build_linear_params(
                design, coefficients, xtx_inv, rank=design.p
            )

        timer.stop()

        info: dict[str, Any] = {
            'method': 'inverse',
            'rank': design.p,
            'condition_number': cond,
            'interval': design.interval,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


class CPUQRBackend:
    """
    CPU backend using QR decomposition.

    Implements the Backend protocol for Design -> LinearParams.

    Never forms X'X for the coefficients, so it loses half as many
    digits as the inverse method on badly scaled predictors.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Solve OLS via QR decomposition.

        Algorithm:
            1. X = QR
            2. Rβ = Q'y by back-substitution
            3. (X'X)⁻¹ = R⁻¹R⁻ᵀ

        Raises:
            SingularMatrixError: If X is rank-deficient (constant predictor)
        """
        timer = Timer()
        timer.start()

        with timer.section('qr_solve'):
            coefficients, qr_result = qr_solve(design.X, design.y)

        with timer.section('covariance'):
            R = qr_result.R[:design.p, :design.p]
            R_inv = triangular_inverse(R)
            xtx_inv = R_inv @ R_inv.T

        with timer.section('statistics'):
            params, warnings_list = build_linear_params(
                design, coefficients, xtx_inv, rank=qr_result.rank
            )

        timer.stop()

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': qr_result.rank,
            'interval': design.interval,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
