"""
Tests for DataSource.

Validates:
    - from_arrays with named columns and with a data matrix
    - Numeric columns stored as float64, categorical columns kept as-is
    - Row-count checks
    - columns() feature matrix assembly
    - from_file / from_dataframe (pandas required)
"""

import numpy as np
import pytest

from pystatlearn import DataSource
from pystatlearn.core.exceptions import DimensionMismatchError, ValidationError


class TestFromArrays:

    def test_named_arrays(self):
        ds = DataSource.from_arrays(x=[1, 2, 3], y=[4.0, 5.0, 6.0])
        assert ds.keys() == frozenset({"x", "y"})
        assert ds["x"].dtype == np.float64

    def test_data_matrix_with_columns(self):
        data = np.arange(6.0).reshape(3, 2)
        ds = DataSource.from_arrays(data=data, columns=["a", "b"])
        np.testing.assert_array_equal(ds["b"], [1.0, 3.0, 5.0])

    def test_column_name_count_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            DataSource.from_arrays(data=np.zeros((3, 2)), columns=["a"])

    def test_inconsistent_lengths(self):
        with pytest.raises(DimensionMismatchError, match="Inconsistent"):
            DataSource.from_arrays(x=[1, 2, 3], y=[1, 2])

    def test_categorical_column_kept(self):
        ds = DataSource.from_arrays(x=[1.0, 2.0], label=["a", "b"])
        assert list(ds["label"]) == ["a", "b"]

    def test_missing_key_lists_available(self):
        ds = DataSource.from_arrays(x=[1.0])
        with pytest.raises(KeyError, match="Available"):
            ds["y"]

    def test_contains(self):
        ds = DataSource.from_arrays(x=[1.0])
        assert "x" in ds
        assert "y" not in ds

    def test_metadata_records_source(self):
        ds = DataSource.from_arrays(x=[1.0, 2.0])
        assert ds.metadata["source"] == "arrays"


class TestColumns:

    def test_stacks_in_requested_order(self):
        ds = DataSource.from_arrays(a=[1, 2], b=[3, 4])
        np.testing.assert_array_equal(ds.columns(["b", "a"]), [[3.0, 1.0], [4.0, 2.0]])

    def test_rejects_categorical_feature(self):
        ds = DataSource.from_arrays(a=[1, 2], label=["x", "y"])
        with pytest.raises(ValidationError, match="non-numeric"):
            ds.columns(["a", "label"])


class TestFromFile:

    def test_npy(self, tmp_path):
        path = tmp_path / "data.npy"
        np.save(path, np.arange(6.0).reshape(3, 2))
        ds = DataSource.from_file(path, columns=["x", "y"])
        np.testing.assert_array_equal(ds["y"], [1.0, 3.0, 5.0])

    def test_unknown_suffix(self, tmp_path):
        with pytest.raises(ValidationError, match="Unknown file format"):
            DataSource.from_file(tmp_path / "data.parquet")

    def test_csv(self, tmp_path):
        pytest.importorskip("pandas")
        path = tmp_path / "data.csv"
        path.write_text("speed,dist,kind\n4,2,a\n7,4,b\n8,16,a\n")
        ds = DataSource.from_file(path)
        assert ds.keys() == frozenset({"speed", "dist", "kind"})
        np.testing.assert_array_equal(ds["dist"], [2.0, 4.0, 16.0])
        assert ds.metadata["source_path"] == str(path)

    def test_tsv_with_usecols(self, tmp_path):
        pytest.importorskip("pandas")
        path = tmp_path / "data.tsv"
        path.write_text("a\tb\tc\n1\t2\t3\n4\t5\t6\n")
        ds = DataSource.from_file(path, columns=["a", "c"])
        assert ds.keys() == frozenset({"a", "c"})


class TestFromDataFrame:

    def test_columns_and_metadata(self):
        pd = pytest.importorskip("pandas")
        df = pd.DataFrame({"x": [1, 2, 3], "group": ["a", "b", "a"]})
        ds = DataSource.from_dataframe(df)
        assert ds["x"].dtype == np.float64
        assert ds.metadata["columns"] == ["x", "group"]
        assert list(ds["group"]) == ["a", "b", "a"]
