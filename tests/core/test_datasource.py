"""
Tests for DataSource construction and the text/CSV loaders.
"""

import warnings

import pytest
import numpy as np
import pandas as pd

from pymlr.core.datasource import DataSource
from pymlr.core.exceptions import ValidationError


# ═══════════════════════════════════════════════════════════════════════
# Arrays and access
# ═══════════════════════════════════════════════════════════════════════


class TestFromArrays:

    def test_keys_and_access(self):
        ds = DataSource.from_arrays(X=[[1.0], [2.0]], y=[3.0, 4.0])
        assert ds.keys() == frozenset({'X', 'y'})
        assert 'X' in ds
        assert ds['X'].shape == (2, 1)
        assert ds.n_observations == 2

    def test_1d_X_becomes_column(self):
        ds = DataSource.from_arrays(X=[1.0, 2.0, 3.0], y=[1.0, 2.0, 3.0])
        assert ds['X'].shape == (3, 1)

    def test_missing_key_lists_available(self):
        ds = DataSource.from_arrays(X=[1.0], y=[1.0])
        with pytest.raises(KeyError, match="Available"):
            ds['weights']

    def test_build_dispatches_to_arrays(self):
        ds = DataSource.build(X=[1.0, 2.0], y=[3.0, 4.0])
        assert ds.metadata['source'] == 'arrays'


# ═══════════════════════════════════════════════════════════════════════
# Whitespace text
# ═══════════════════════════════════════════════════════════════════════


class TestFromText:

    def test_first_column_is_y(self):
        ds = DataSource.from_text("5 1 2\n8 2 3\n11 3 4\n")
        np.testing.assert_array_equal(ds['y'], [5.0, 8.0, 11.0])
        np.testing.assert_array_equal(ds['X'], [[1, 2], [2, 3], [3, 4]])
        assert ds.metadata['n_columns'] == 3

    def test_mixed_line_breaks_and_whitespace(self):
        ds = DataSource.from_text("1\t2\r\n3   4\r5 6\n")
        np.testing.assert_array_equal(ds['y'], [1.0, 3.0, 5.0])

    def test_trailing_blank_line_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            ds = DataSource.from_text("1 2\n2 4\n3 6\n")
        assert ds.n_observations == 3
        assert ds.metadata['n_discarded'] == 1

    def test_malformed_lines_discarded_with_warning(self):
        text = "y x\n1 2\n2 4\n3 6 9\n4 abc\n5 10\n"
        with pytest.warns(UserWarning, match="Discarded 3 malformed"):
            ds = DataSource.from_text(text)
        np.testing.assert_array_equal(ds['y'], [1.0, 2.0, 5.0])
        assert ds.metadata['n_discarded'] == 4

    def test_empty_text(self):
        with pytest.raises(ValidationError, match="No input"):
            DataSource.from_text("")

    def test_no_clean_records(self):
        with pytest.raises(ValidationError, match="None of the original 3 lines"):
            DataSource.from_text("a b\nc d\n")

    @pytest.mark.parametrize("token", ["nan", "NaN", "inf", "-Infinity", "1_000"])
    def test_non_finite_and_grouped_tokens_discarded(self, token):
        text = f"5 1\n8 2\n11 3.1\n14 4\n{token} 5\n"
        with pytest.warns(UserWarning, match="Discarded 1 malformed"):
            ds = DataSource.from_text(text)
        np.testing.assert_array_equal(ds['y'], [5.0, 8.0, 11.0, 14.0])
        assert np.all(np.isfinite(ds['X']))
        assert ds.metadata['n_discarded'] == 2

    def test_exponent_notation_accepted(self):
        ds = DataSource.from_text("1e3 2.5E-1\n-4 +3\n")
        np.testing.assert_array_equal(ds['y'], [1000.0, -4.0])
        np.testing.assert_array_equal(ds['X'], [[0.25], [3.0]])

    def test_single_column_is_response_only(self):
        ds = DataSource.from_text("1\n2\n3\n")
        np.testing.assert_array_equal(ds['y'], [1.0, 2.0, 3.0])
        assert ds['X'].shape == (3, 0)
        assert ds.metadata['n_columns'] == 1


# ═══════════════════════════════════════════════════════════════════════
# DataFrames and files
# ═══════════════════════════════════════════════════════════════════════


class TestFromDataFrame:

    def test_first_column_default(self):
        df = pd.DataFrame({'price': [1.0, 2.0], 'size': [3.0, 4.0], 'age': [5.0, 6.0]})
        ds = DataSource.from_dataframe(df)
        np.testing.assert_array_equal(ds['y'], [1.0, 2.0])
        assert ds.metadata['x_names'] == ['size', 'age']

    def test_named_response(self):
        df = pd.DataFrame({'size': [3.0, 4.0], 'price': [1.0, 2.0]})
        ds = DataSource.from_dataframe(df, y='price')
        np.testing.assert_array_equal(ds['y'], [1.0, 2.0])
        np.testing.assert_array_equal(ds['X'], [[3.0], [4.0]])

    def test_non_numeric_rejected(self):
        df = pd.DataFrame({'y': [1.0, 2.0], 'x': ['a', 'b']})
        with pytest.raises(ValidationError, match="non-numeric"):
            DataSource.from_dataframe(df)

    def test_single_column_is_response_only(self):
        ds = DataSource.from_dataframe(pd.DataFrame({'y': [1.0, 2.0]}))
        np.testing.assert_array_equal(ds['y'], [1.0, 2.0])
        assert ds['X'].shape == (2, 0)
        assert ds.metadata['x_names'] == []

    def test_no_columns_rejected(self):
        with pytest.raises(ValidationError, match="no columns"):
            DataSource.from_dataframe(pd.DataFrame())


class TestFromFile:

    def test_text_file(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("5 1\n8 2\n11 3\n")
        ds = DataSource.from_file(path)
        np.testing.assert_array_equal(ds['X'], [[1.0], [2.0], [3.0]])
        assert ds.metadata['source_path'] == str(path)

    def test_csv_file(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("y,x1,x2\n1,2,3\n4,5,6\n")
        ds = DataSource.from_file(path)
        np.testing.assert_array_equal(ds['y'], [1.0, 4.0])
        assert ds['X'].shape == (2, 2)

    def test_build_dispatches_to_file(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("5 1\n8 2\n")
        assert DataSource.build(str(path)).n_observations == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="Could not find the file"):
            DataSource.from_file(tmp_path / "nope.txt")
