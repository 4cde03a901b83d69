"""
Universal DataSource for pystatlearn.

DataSource is the "I have data" abstraction. It doesn't know or care
which routine consumes it. It just provides named columns.

Like a lumber yard: provides raw logs. Doesn't care if you're making
a smoother, a neighbor classifier, or a regression line.

Usage:
    from pystatlearn import DataSource

    ds = DataSource.from_arrays(x=x, y=y)
    ds = DataSource.from_file("data.csv")
    ds = DataSource.from_dataframe(df)

    # Access arrays
    ds.keys()  # frozenset({'x', 'y'})
    x = ds['x']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pystatlearn.core.exceptions import ValidationError, DimensionMismatchError

if TYPE_CHECKING:
    import pandas as pd


def _as_column(values: ArrayLike) -> NDArray:
    """Numeric columns become float64; anything else keeps its values."""
    arr = np.asarray(values)
    if np.issubdtype(arr.dtype, np.number):
        return arr.astype(np.float64)
    return arr


@dataclass
class DataSource:
    """
    Universal data container. Domain-agnostic.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, Any]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Array Access ===

    def keys(self) -> frozenset[str]:
        """
        Return the names of all available arrays.

        Example:
            >>> ds = DataSource.from_arrays(x=x, y=y)
            >>> ds.keys()
            frozenset({'x', 'y'})
        """
        return frozenset(k for k in self._data.keys() if not k.startswith('_'))

    def __getitem__(self, key: str) -> Any:
        """
        Access a named array.

        Raises:
            KeyError: If key not found, with helpful message listing available keys
        """
        if key not in self._data:
            available = self.keys()
            raise KeyError(
                f"DataSource has no array '{key}'. Available: {available}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        """Check if a key exists."""
        return key in self._data

    def columns(self, names: list[str]) -> NDArray[np.floating[Any]]:
        """
        Stack several numeric columns into an (n x len(names)) matrix.

        Raises:
            ValidationError: If any requested column is non-numeric
        """
        arrays = []
        for name in names:
            arr = np.asarray(self[name])
            if not np.issubdtype(arr.dtype, np.number):
                raise ValidationError(
                    f"column '{name}' is non-numeric ({arr.dtype}) and cannot be a feature"
                )
            if arr.ndim == 1:
                arr = arr.reshape(-1, 1)
            arrays.append(arr.astype(np.float64))
        return np.hstack(arrays)

    # === Properties ===

    @property
    def metadata(self) -> dict[str, Any]:
        """Domain-agnostic metadata."""
        return self._metadata.copy()

    # === Factory Methods ===

    @classmethod
    def from_arrays(
        cls,
        *,
        data: NDArray | None = None,
        columns: list[str] | None = None,
        **named_arrays: ArrayLike,
    ) -> DataSource:
        """
        Construct from NumPy arrays.

        Either pass named 1D/2D arrays as keywords, or a 2D ``data`` matrix
        with matching ``columns`` names. Every array must have the same
        number of rows.
        """
        storage: dict[str, Any] = {}

        if data is not None:
            data = np.asarray(data, dtype=np.float64)
            if columns is not None:
                if len(columns) != data.shape[1]:
                    raise DimensionMismatchError(
                        f"columns has {len(columns)} names but data has {data.shape[1]} columns"
                    )
                for i, col in enumerate(columns):
                    storage[col] = data[:, i]
            else:
                storage['_data'] = data

        for name, arr in named_arrays.items():
            storage[name] = _as_column(arr)

        return cls._build(storage, {'source': 'arrays'})

    @classmethod
    def from_file(cls, path: str | Path, *, columns: list[str] | None = None) -> DataSource:
        """Construct from file (CSV, TSV, NPY)."""
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in ('.csv', '.tsv'):
            import pandas as pd
            sep = '\t' if suffix == '.tsv' else ','
            df = pd.read_csv(path, usecols=columns, sep=sep)
            return cls.from_dataframe(df, source_path=str(path))
        elif suffix == '.npy':
            data = np.load(path)
            return cls.from_arrays(data=data, columns=columns)
        else:
            raise ValidationError(f"Unknown file format: {suffix}")

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, source_path: str | None = None) -> DataSource:
        """Construct from pandas DataFrame."""
        storage: dict[str, Any] = {}

        for col in df.columns:
            storage[str(col)] = _as_column(df[col].to_numpy())

        metadata: dict[str, Any] = {
            'source': 'dataframe',
            'columns': [str(c) for c in df.columns],
        }
        if source_path:
            metadata['source_path'] = source_path

        return cls._build(storage, metadata)

    @classmethod
    def _build(cls, storage: dict[str, Any], metadata: dict[str, Any]) -> DataSource:
        """Check that every column has the same number of rows."""
        lengths = {name: arr.shape[0] for name, arr in storage.items()}
        if len(set(lengths.values())) > 1:
            details = ", ".join(f"{k}={v}" for k, v in lengths.items())
            raise DimensionMismatchError(f"Inconsistent column lengths: {details}")

        return cls(
            _data=storage,
            _metadata=metadata,
        )
