"""
DataSource for pymlr.

DataSource is the "I have data" abstraction. It holds named float64 arrays
and knows nothing about regression; Design decides which array is the
response and which are predictors.

Usage:
    from pymlr import DataSource

    ds = DataSource.from_arrays(X=X, y=y)
    ds = DataSource.from_file("data.txt")      # whitespace-delimited
    ds = DataSource.from_file("data.csv")      # pandas
    ds = DataSource.from_dataframe(df, y='price')
    ds = DataSource.from_text(sys.stdin.read())

    ds.keys()  # frozenset({'X', 'y'})
    X = ds['X']
    y = ds['y']

Text input follows the mlr convention: one record per line, the first
column is y and the remaining columns are X1, X2, ... Lines whose token
count differs from the most common count, or that contain a token that is
not a finite decimal number, are discarded. A file with a single column
holds y only; X then has no columns and only the constant can be fitted.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TYPE_CHECKING
import math
import re
import warnings

import numpy as np
from numpy.typing import NDArray

from pymlr.core.exceptions import ValidationError

if TYPE_CHECKING:
    import pandas as pd


_LINE_BREAK = re.compile(r'\r\n|\r|\n')


@dataclass
class DataSource:
    """
    Universal data container.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, Any]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Array Access ===

    def keys(self) -> frozenset[str]:
        """
        Return the names of all available arrays.

        Example:
            >>> ds = DataSource.from_arrays(X=X, y=y)
            >>> ds.keys()
            frozenset({'X', 'y'})
        """
        return frozenset(self._data.keys())

    def __getitem__(self, key: str) -> Any:
        """
        Access a named array.

        Raises:
            KeyError: If key not found, with a message listing available keys
        """
        if key not in self._data:
            available = self.keys()
            raise KeyError(
                f"DataSource has no array '{key}'. Available: {available}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of statistical units (rows)."""
        return self._metadata.get('n_observations', 0)

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    # === Factory Methods ===

    @classmethod
    def from_arrays(
        cls,
        *,
        X: NDArray | None = None,
        y: NDArray | None = None,
        **named_arrays: NDArray,
    ) -> DataSource:
        """Construct from NumPy arrays (or anything np.asarray accepts)."""
        storage: dict[str, Any] = {}
        n_obs: int | None = None

        if X is not None:
            X = np.asarray(X, dtype=np.float64)
            if X.ndim == 1:
                X = X.reshape(-1, 1)
            storage['X'] = X
            n_obs = X.shape[0]

        if y is not None:
            y = np.asarray(y, dtype=np.float64)
            if y.ndim == 2 and y.shape[1] == 1:
                y = y.ravel()
            storage['y'] = y
            n_obs = n_obs or y.shape[0]

        for name, arr in named_arrays.items():
            storage[name] = np.asarray(arr, dtype=np.float64)
            n_obs = n_obs or storage[name].shape[0]

        return cls(
            _data=storage,
            _metadata={'n_observations': n_obs or 0, 'source': 'arrays'},
        )

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        y: str | None = None,
        source_path: str | None = None,
    ) -> DataSource:
        """
        Construct from a pandas DataFrame.

        Args:
            df: Numeric DataFrame
            y: Response column. Defaults to the first column; all other
               columns, in order, become X.
            source_path: Recorded in metadata when the frame came from a file
        """
        if df.shape[1] < 1:
            raise ValidationError("DataFrame has no columns")

        y_name = y if y is not None else df.columns[0]
        if y_name not in df.columns:
            raise KeyError(f"DataFrame has no column '{y_name}'. Available: {list(df.columns)}")
        x_names = [c for c in df.columns if c != y_name]

        try:
            y_arr = df[y_name].to_numpy(dtype=np.float64)
            X_arr = df[x_names].to_numpy(dtype=np.float64)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"DataFrame contains non-numeric data: {e}") from e

        metadata = {
            'n_observations': len(df),
            'source': 'dataframe',
            'y_name': str(y_name),
            'x_names': [str(c) for c in x_names],
        }
        if source_path:
            metadata['source_path'] = source_path

        return cls(_data={'X': X_arr, 'y': y_arr}, _metadata=metadata)

    @classmethod
    def from_text(cls, text: str, *, source_path: str | None = None) -> DataSource:
        """
        Construct from whitespace-delimited text.

        The column count is the most common token count over all lines
        (blank lines included, so a file of mostly blank lines yields no
        data). Only lines with exactly that many tokens, all numeric, are
        kept. The first column is y, the rest X.

        Raises:
            ValidationError: If the text is empty or no line survives
        """
        if not text:
            raise ValidationError("No input to read")

        split_lines = [line.split() for line in _LINE_BREAK.split(text)]
        counts = Counter(len(tokens) for tokens in split_lines)
        n_columns = counts.most_common(1)[0][0]

        records = []
        for tokens in split_lines:
            if n_columns and len(tokens) == n_columns:
                values = _parse_numbers(tokens)
                if values is not None:
                    records.append(values)

        if not records:
            raise ValidationError(
                f"None of the original {len(split_lines)} lines contained "
                f"records of completely clean data."
            )
        n_discarded = len(split_lines) - len(records)
        n_blank = sum(1 for tokens in split_lines if not tokens)
        if n_discarded > n_blank:
            warnings.warn(
                f"Discarded {n_discarded - n_blank} malformed line(s); "
                f"expected {n_columns} numeric columns"
            )

        data = np.array(records, dtype=np.float64)
        metadata: dict[str, Any] = {
            'n_observations': data.shape[0],
            'source': 'text',
            'n_columns': n_columns,
            'n_discarded': n_discarded,
        }
        if source_path:
            metadata['source_path'] = source_path

        return cls(_data={'y': data[:, 0], 'X': data[:, 1:]}, _metadata=metadata)

    @classmethod
    def from_file(cls, path: str | Path) -> DataSource:
        """
        Construct from a file.

        '.csv' files are read with pandas (header row expected, first
        column is y). Anything else is treated as whitespace-delimited
        text without a header.

        Raises:
            ValidationError: If the file does not exist
        """
        path = Path(path)
        if not path.is_file():
            raise ValidationError(f"Could not find the file '{path.resolve()}'")

        if path.suffix.lower() == '.csv':
            import pandas as pd
            df = pd.read_csv(path)
            return cls.from_dataframe(df, source_path=str(path))

        return cls.from_text(path.read_text(), source_path=str(path))

    @classmethod
    def build(cls, *args, **kwargs) -> DataSource:
        """
        Convenience factory that dispatches to the appropriate from_* method.

        Examples:
            DataSource.build(X=X, y=y)     # from_arrays
            DataSource.build("data.txt")   # from_file
        """
        if args and isinstance(args[0], (str, Path)):
            return cls.from_file(args[0], **kwargs)
        return cls.from_arrays(**kwargs)


def _parse_numbers(tokens: list[str]) -> list[float] | None:
    """
    Parse every token as a finite float, or return None if any token is not one.

    float() also accepts "nan", "inf" and digit groups such as "1_000"; those
    tokens make the line unclean.
    """
    values = []
    for token in tokens:
        if "_" in token:
            return None
        try:
            value = float(token)
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        values.append(value)
    return values
