"""
Nearest-neighbor solution type.

KNNSolution wraps Result[KNNParams]. Metric accessors return None when
they do not apply (wrong task, or no true test labels supplied).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pystatlearn.core.result import Result
from pystatlearn.neighbors._common import (
    ClassificationMetrics,
    ConfusionMatrix,
    KNNParams,
    RegressionMetrics,
)

if TYPE_CHECKING:
    from pystatlearn.neighbors.design import KNNDesign


@dataclass
class KNNSolution:
    """
    User-facing k-nearest-neighbor results.

    Classification and regression share one type; `task` says which.
    """
    _result: Result[KNNParams]
    _design: 'KNNDesign'

    # --- Predictions ---

    @property
    def predictions(self) -> NDArray[Any]:
        """One predicted label or value per test point."""
        return self._result.params.predictions

    @property
    def task(self) -> str:
        return self._result.params.task

    @property
    def k(self) -> int:
        return self._result.params.k

    @property
    def weighted(self) -> bool:
        return self._result.params.weighted

    @property
    def neighbor_indices(self) -> NDArray[np.intp]:
        """Training indices of each test point's neighbors, nearest first."""
        return self._result.params.neighbor_indices

    @property
    def neighbor_distances(self) -> NDArray[np.floating[Any]]:
        return self._result.params.neighbor_distances

    @property
    def classes(self) -> tuple[Any, ...] | None:
        """Canonical class order (classification only)."""
        return self._result.params.classes

    @property
    def class_probabilities(self) -> NDArray[np.floating[Any]] | None:
        """Vote share per class, columns in `classes` order (classification only)."""
        return self._result.params.class_probabilities

    # --- Held-out metrics ---

    @property
    def metrics(self) -> ClassificationMetrics | RegressionMetrics | None:
        return self._result.params.metrics

    @property
    def accuracy(self) -> float | None:
        m = self.metrics
        return m.accuracy if isinstance(m, ClassificationMetrics) else None

    @property
    def error_rate(self) -> float | None:
        m = self.metrics
        return m.error_rate if isinstance(m, ClassificationMetrics) else None

    @property
    def confusion_matrix(self) -> ConfusionMatrix | None:
        m = self.metrics
        return m.confusion_matrix if isinstance(m, ClassificationMetrics) else None

    @property
    def residuals(self) -> NDArray[np.floating[Any]] | None:
        m = self.metrics
        return m.residuals if isinstance(m, RegressionMetrics) else None

    @property
    def sse(self) -> float | None:
        m = self.metrics
        return m.sse if isinstance(m, RegressionMetrics) else None

    @property
    def mse(self) -> float | None:
        m = self.metrics
        return m.mse if isinstance(m, RegressionMetrics) else None

    @property
    def rmse(self) -> float | None:
        m = self.metrics
        return m.rmse if isinstance(m, RegressionMetrics) else None

    # --- Metadata ---

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

    def summary(self) -> str:
        """Generate a text summary of the prediction run."""
        mode = "distance-weighted" if self.weighted else "unweighted"
        lines = [
            f"k-Nearest Neighbors ({self.task}, {mode})",
            "=" * 60,
            f"Training points: {self._design.n_train}",
            f"Test points: {self._design.n_test}",
            f"Features: {self._design.n_features}",
            f"k: {self.k}",
            "-" * 60,
        ]

        m = self.metrics
        if isinstance(m, ClassificationMetrics):
            lines.append(f"Accuracy: {m.accuracy:.4f}")
            lines.append(f"Error rate: {m.error_rate:.4f}")
            lines.append("")
            lines.append("Confusion matrix (rows = predicted, columns = true):")
            labels = [str(lab) for lab in m.confusion_matrix.labels]
            width = max(8, max(len(lab) for lab in labels) + 1)
            lines.append(" " * width + "".join(f"{lab:>{width}}" for lab in labels))
            for lab, row in zip(labels, m.confusion_matrix.counts):
                lines.append(f"{lab:<{width}}" + "".join(f"{c:>{width}d}" for c in row))
        elif isinstance(m, RegressionMetrics):
            lines.append(f"SSE: {m.sse:.6f}")
            lines.append(f"MSE: {m.mse:.6f}")
            lines.append(f"RMSE: {m.rmse:.6f}")
        else:
            lines.append("No true test labels supplied; metrics not computed.")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"KNNSolution(task={self.task!r}, k={self.k}, "
            f"weighted={self.weighted}, n_test={self._design.n_test})"
        )
