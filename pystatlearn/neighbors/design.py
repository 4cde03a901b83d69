"""
KNNDesign: validated inputs for nearest-neighbor prediction.

Holds the training features and labels, the query points, optional true
labels for the query points, and the prediction settings. Immutable after
construction; the backend trusts it.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pystatlearn.core.datasource import DataSource
from pystatlearn.core.exceptions import DimensionMismatchError, InvalidParameterError
from pystatlearn.core.validation import (
    check_2d,
    check_array,
    check_choice,
    check_consistent_length,
    check_finite,
    check_int_in_range,
    check_labels,
    check_min_samples,
)
from pystatlearn.neighbors._common import DEFAULT_EPSILON, VALID_TASKS


def _features(X: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """Numeric, finite, 2D feature matrix; a 1D input is one feature column."""
    arr = check_array(X, name)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    check_2d(arr, name)
    check_finite(arr, name)
    return arr


def _is_categorical(labels: NDArray) -> bool:
    """Non-numeric labels (strings, objects, booleans) are class labels."""
    return labels.dtype == bool or not np.issubdtype(labels.dtype, np.number)


def _resolve_task(task: str, train_y: NDArray) -> str:
    check_choice(task, VALID_TASKS, 'task')
    if task != 'auto':
        return task
    return 'classification' if _is_categorical(train_y) else 'regression'


def _numeric_labels(labels: NDArray, name: str) -> NDArray[np.floating[Any]]:
    if _is_categorical(labels):
        raise InvalidParameterError(
            f"{name}: regression needs numeric labels, got dtype {labels.dtype}",
            parameter='task',
            value='regression',
        )
    arr = labels.astype(np.float64)
    check_finite(arr, name)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class KNNDesign:
    """
    Nearest-neighbor prediction setup.

    Construction:
        KNNDesign.from_arrays(train_X, test_X, train_y, k=5)
        KNNDesign.from_datasource(train_ds, test_ds, features=['a', 'b'],
                                  label='species', k=5)
    """
    _train_X: NDArray[np.floating[Any]]
    _test_X: NDArray[np.floating[Any]]
    _train_y: NDArray[Any]
    _test_y: NDArray[Any] | None
    _k: int
    _weighted: bool
    _task: str
    _eps: float

    @classmethod
    def from_arrays(
        cls,
        train_X: ArrayLike,
        test_X: ArrayLike,
        train_y: ArrayLike,
        *,
        k: int,
        weighted: bool = True,
        test_y: ArrayLike | None = None,
        task: str = 'auto',
        eps: float = DEFAULT_EPSILON,
    ) -> KNNDesign:
        """Build KNNDesign directly from arrays."""
        train_X_arr = _features(train_X, 'train_X')
        test_X_arr = _features(test_X, 'test_X')
        check_min_samples(test_X_arr, 1, 'test_X')
        train_y_arr = check_labels(train_y, 'train_y')
        test_y_arr = check_labels(test_y, 'test_y') if test_y is not None else None

        check_consistent_length(train_X_arr, train_y_arr, names=('train_X', 'train_y'))
        if test_y_arr is not None:
            check_consistent_length(test_X_arr, test_y_arr, names=('test_X', 'test_y'))

        if train_X_arr.shape[1] != test_X_arr.shape[1]:
            raise DimensionMismatchError(
                f"train_X has {train_X_arr.shape[1]} features but "
                f"test_X has {test_X_arr.shape[1]}"
            )

        n_train = train_X_arr.shape[0]
        k = check_int_in_range(k, 1, n_train, 'k')

        if not isinstance(weighted, (bool, np.bool_)):
            raise InvalidParameterError(
                f"weighted must be a bool, got {weighted!r}",
                parameter='weighted',
                value=weighted,
            )

        valid_eps = (
            isinstance(eps, numbers.Real) and not isinstance(eps, bool)
            and math.isfinite(eps) and eps > 0
        )
        if not valid_eps:
            raise InvalidParameterError(
                f"eps must be a positive finite number, got {eps!r}",
                parameter='eps',
                value=eps,
            )

        resolved = _resolve_task(task, train_y_arr)
        if resolved == 'regression':
            train_y_arr = _numeric_labels(train_y_arr, 'train_y')
            if test_y_arr is not None:
                test_y_arr = _numeric_labels(test_y_arr, 'test_y')

        return cls(
            _train_X=train_X_arr,
            _test_X=test_X_arr,
            _train_y=train_y_arr,
            _test_y=test_y_arr,
            _k=k,
            _weighted=bool(weighted),
            _task=resolved,
            _eps=float(eps),
        )

    @classmethod
    def from_datasource(
        cls,
        train: DataSource,
        test: DataSource,
        *,
        features: list[str],
        label: str,
        k: int,
        weighted: bool = True,
        task: str = 'auto',
        eps: float = DEFAULT_EPSILON,
    ) -> KNNDesign:
        """
        Build KNNDesign from a training and a test DataSource.

        The label column is required in `train`; if `test` has it too, it
        is used as the true test labels for held-out metrics.
        """
        test_y = test[label] if label in test else None
        return cls.from_arrays(
            train.columns(features),
            test.columns(features),
            train[label],
            k=k,
            weighted=weighted,
            test_y=test_y,
            task=task,
            eps=eps,
        )

    # === Properties ===

    @property
    def train_X(self) -> NDArray[np.floating[Any]]:
        """Training features (n_train x p)."""
        return self._train_X

    @property
    def test_X(self) -> NDArray[np.floating[Any]]:
        """Query points (n_test x p)."""
        return self._test_X

    @property
    def train_y(self) -> NDArray[Any]:
        """Training labels (n_train,)."""
        return self._train_y

    @property
    def test_y(self) -> NDArray[Any] | None:
        """True labels of the query points, if supplied."""
        return self._test_y

    @property
    def n_train(self) -> int:
        return self._train_X.shape[0]

    @property
    def n_test(self) -> int:
        return self._test_X.shape[0]

    @property
    def n_features(self) -> int:
        return self._train_X.shape[1]

    @property
    def k(self) -> int:
        return self._k

    @property
    def weighted(self) -> bool:
        return self._weighted

    @property
    def task(self) -> str:
        """'classification' or 'regression' (never 'auto')."""
        return self._task

    @property
    def eps(self) -> float:
        return self._eps
