"""
Solver dispatch for nearest-neighbor prediction.

This module provides the knn() function (public API) and backend selection.
"""

from typing import Literal
from numpy.typing import ArrayLike

from pystatlearn.core.exceptions import InvalidParameterError
from pystatlearn.neighbors._common import DEFAULT_EPSILON, TaskChoice
from pystatlearn.neighbors.design import KNNDesign
from pystatlearn.neighbors.solution import KNNSolution
from pystatlearn.neighbors.backends.cpu import CPUKNNBackend


BackendChoice = Literal['auto', 'cpu']


def knn(
    train_X: ArrayLike | KNNDesign,
    test_X: ArrayLike | None = None,
    train_y: ArrayLike | None = None,
    *,
    k: int = 5,
    weighted: bool = True,
    test_y: ArrayLike | None = None,
    task: TaskChoice = 'auto',
    eps: float = DEFAULT_EPSILON,
    backend: BackendChoice = 'auto',
) -> KNNSolution:
    """
    Predict test points from their k nearest training points.

    Distances are Euclidean over all feature columns, unscaled; scale the
    features beforehand if they are on different units.

    Args:
        train_X: Training features (n_train x p, or n_train for one
            feature), or a prepared KNNDesign
        test_X: Query points (n_test x p)
        train_y: Training labels (n_train,). Numeric labels mean
            regression, non-numeric labels classification (see `task`).
        k: Number of neighbors, 1 <= k <= n_train
        weighted: Inverse-distance weights 1/(d + eps) if True, plain
            vote/mean if False
        test_y: True labels for the query points. When given, accuracy,
            error rate and confusion matrix (classification) or residuals,
            SSE, MSE and RMSE (regression) are computed.
        task: 'auto', 'classification' or 'regression'. 'auto' picks
            classification for non-numeric labels; pass 'classification'
            explicitly for integer class codes.
        eps: Positive offset in the inverse-distance weights
        backend: 'auto' or 'cpu'

    Returns:
        KNNSolution with predictions, neighbor sets and metrics

    Raises:
        InvalidParameterError: k outside [1, n_train], unknown task, bad eps
        DimensionMismatchError: feature/label row counts or feature counts differ
        NumericalError: every neighbor weight of a test point is zero

    Example:
        >>> result = knn([[0], [1], [2], [10]], [[1.5]], [0, 1, 2, 10], k=2)
        >>> result.predictions
        array([1.5])
    """
    if isinstance(train_X, KNNDesign):
        design = train_X
    else:
        if test_X is None or train_y is None:
            raise ValueError("test_X and train_y required when train_X is not a KNNDesign")
        design = KNNDesign.from_arrays(
            train_X,
            test_X,
            train_y,
            k=k,
            weighted=weighted,
            test_y=test_y,
            task=task,
            eps=eps,
        )

    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design)
    return KNNSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice) -> CPUKNNBackend:
    """Select and instantiate the appropriate backend."""
    if choice in ('auto', 'cpu'):
        return CPUKNNBackend()
    raise InvalidParameterError(
        f"Unknown backend: {choice!r}", parameter='backend', value=choice
    )
