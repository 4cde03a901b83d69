"""
CPU backend for k-nearest-neighbor prediction.

The distance matrix is computed once and shared read-only; each test
point is then predicted by a pure function of its own row.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pystatlearn.core.result import Result
from pystatlearn.core.compute.timing import Timer
from pystatlearn.core.exceptions import NumericalError
from pystatlearn.neighbors._common import KNNParams
from pystatlearn.neighbors._distance import nearest_neighbors, pairwise_distances
from pystatlearn.neighbors._metrics import classification_metrics, regression_metrics
from pystatlearn.neighbors.design import KNNDesign


def neighbor_weights(
    distances: NDArray[np.floating[Any]],
    weighted: bool,
    eps: float,
) -> NDArray[np.floating[Any]]:
    """
    Vote weight of each neighbor.

    Weighted: 1 / (d + eps), with any non-finite weight set to 0.
    Unweighted: every neighbor counts 1.
    """
    if not weighted:
        return np.ones_like(distances)
    with np.errstate(divide='ignore', over='ignore', invalid='ignore'):
        w = 1.0 / (distances + eps)
    return np.where(np.isfinite(w), w, 0.0)


def _check_weights(w: NDArray[np.floating[Any]], row: int) -> None:
    if not w.sum() > 0.0:
        raise NumericalError(
            f"All neighbor weights are zero for test point {row}; "
            f"distances overflowed"
        )


def _regress_row(
    row: int,
    labels: NDArray[np.floating[Any]],
    w: NDArray[np.floating[Any]],
) -> float:
    """Weighted mean of the neighbor labels."""
    _check_weights(w, row)
    return float(w @ labels / w.sum())


def _vote_row(
    row: int,
    codes: NDArray[np.intp],
    w: NDArray[np.floating[Any]],
    n_classes: int,
) -> NDArray[np.floating[Any]]:
    """
    Summed weight per class, in canonical class order.

    argmax over the result returns the first maximum, so ties go to the
    class that sorts first.
    """
    _check_weights(w, row)
    return np.bincount(codes, weights=w, minlength=n_classes)


class CPUKNNBackend:
    """
    CPU backend for distance-weighted k-nearest neighbors.

    Implements the Backend protocol for KNNDesign -> KNNParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_knn'

    def solve(self, design: KNNDesign) -> Result[KNNParams]:
        """
        Predict every test point from its k nearest training points.

        Algorithm:
            1. Full Euclidean distance matrix (n_test x n_train)
            2. Per test point: k nearest by stable sort (ties by index)
            3. Weights 1/(d + eps) or 1
            4. Classification: label with the largest summed weight
               Regression: weighted mean of neighbor labels
            5. Held-out metrics if true test labels are available

        Raises:
            NumericalError: If every neighbor weight of a test point is zero
        """
        timer = Timer()
        timer.start()

        with timer.section('distances'):
            D = pairwise_distances(design.test_X, design.train_X)

        with timer.section('neighbors'):
            idx, dist = nearest_neighbors(D, design.k)
            W = neighbor_weights(dist, design.weighted, design.eps)

        classes = None
        probabilities = None

        with timer.section('predict'):
            if design.task == 'classification':
                class_values, codes = np.unique(design.train_y, return_inverse=True)
                codes = codes.ravel()
                scores = np.vstack([
                    _vote_row(r, codes[idx[r]], W[r], class_values.size)
                    for r in range(design.n_test)
                ])
                predictions = class_values[np.argmax(scores, axis=1)]
                probabilities = scores / scores.sum(axis=1, keepdims=True)
                classes = tuple(class_values.tolist())
            else:
                labels = design.train_y
                predictions = np.array([
                    _regress_row(r, labels[idx[r]], W[r])
                    for r in range(design.n_test)
                ], dtype=np.float64)

        metrics = None
        if design.test_y is not None:
            with timer.section('metrics'):
                if design.task == 'classification':
                    metrics = classification_metrics(predictions, design.test_y)
                else:
                    metrics = regression_metrics(predictions, design.test_y)

        timer.stop()

        params = KNNParams(
            predictions=predictions,
            task=design.task,
            k=design.k,
            weighted=design.weighted,
            eps=design.eps,
            neighbor_indices=idx,
            neighbor_distances=dist,
            classes=classes,
            class_probabilities=probabilities,
            metrics=metrics,
        )

        warnings_list: list[str] = []
        n_boundary_ties = _count_boundary_ties(D, dist, design.k)
        if n_boundary_ties:
            warnings_list.append(
                f"{n_boundary_ties} test point(s) had distance ties at the k-th "
                f"neighbor; the lower training index was kept"
            )

        info: dict[str, Any] = {
            'method': 'knn',
            'task': design.task,
            'k': design.k,
            'weighted': design.weighted,
            'metric': 'euclidean',
            'n_train': design.n_train,
            'n_test': design.n_test,
            'boundary_ties': n_boundary_ties,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _count_boundary_ties(
    D: NDArray[np.floating[Any]],
    dist: NDArray[np.floating[Any]],
    k: int,
) -> int:
    """Test points where more training points share the k-th distance than fit."""
    if k >= D.shape[1]:
        return 0
    kth = dist[:, -1:]
    n_at_or_below = np.sum(D <= kth, axis=1)
    return int(np.sum(n_at_or_below > k))
