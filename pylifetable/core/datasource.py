"""
DataSource: named-column access to a subject-level table.

DataSource is the "I have data" abstraction. It doesn't know what the
columns mean; the survival solvers ask it for the columns they were told
to use and it fails fast, by name, when one is missing.

Columns keep their own dtype. A stratifying column of strings stays a
column of strings; numeric conversion is the consumer's job.

Usage:
    from pylifetable.core import DataSource

    ds = DataSource.from_dataframe(df)
    ds = DataSource.from_mapping({"time": t, "status": e, "trt": g})

    ds.require("time", "status")   # ValidationError naming the first missing
    t = ds["time"]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

import numpy as np

from pylifetable.core.exceptions import DimensionError, ValidationError

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class DataSource:
    """
    Column container. Domain-agnostic.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, np.ndarray]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Column Access ===

    def keys(self) -> list[str]:
        """Column names, in input order."""
        return list(self._data.keys())

    def __getitem__(self, key: str) -> np.ndarray:
        """
        Access a named column.

        Raises:
            ValidationError: If the column does not exist, listing the
                available columns
        """
        if key not in self._data:
            raise ValidationError(
                f"data has no column '{key}'. Available: {self.keys()}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def require(self, *names: str | None) -> None:
        """
        Check that every named column exists.

        None entries are skipped so optional arguments can be passed
        through unchanged.

        Raises:
            ValidationError: Naming the first missing column
        """
        for name in names:
            if name is not None and name not in self._data:
                raise ValidationError(
                    f"data has no column '{name}'. Available: {self.keys()}"
                )

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of rows (subjects)."""
        return self._metadata.get('n_observations', 0)

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    # === Factory Methods ===

    @classmethod
    def from_mapping(cls, columns: Mapping[str, Any]) -> DataSource:
        """Construct from a mapping of column name to array-like."""
        storage: dict[str, np.ndarray] = {}
        n_obs: int | None = None

        for name, values in columns.items():
            arr = np.asarray(values).ravel()
            if n_obs is None:
                n_obs = len(arr)
            elif len(arr) != n_obs:
                raise DimensionError(
                    f"column '{name}' has {len(arr)} rows, expected {n_obs}"
                )
            storage[str(name)] = arr

        return cls(
            _data=storage,
            _metadata={'n_observations': n_obs or 0, 'source': 'mapping'},
        )

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame') -> DataSource:
        """Construct from a pandas DataFrame."""
        storage: dict[str, np.ndarray] = {}

        for col in df.columns:
            storage[str(col)] = df[col].to_numpy()

        return cls(
            _data=storage,
            _metadata={
                'n_observations': len(df),
                'source': 'dataframe',
                'columns': [str(c) for c in df.columns],
            },
        )

    @classmethod
    def build(cls, data: Any) -> DataSource:
        """
        Dispatch to the appropriate from_* method.

        Accepts a DataSource (returned as-is), a pandas DataFrame, or any
        mapping of column name to array-like.
        """
        if isinstance(data, DataSource):
            return data
        if hasattr(data, 'columns') and hasattr(data, 'to_numpy'):
            return cls.from_dataframe(data)
        if isinstance(data, Mapping):
            return cls.from_mapping(data)
        raise ValidationError(
            f"data must be a DataFrame or a mapping of columns, "
            f"got {type(data).__name__}"
        )
