"""The factor, an ordered set of levels and a code for each value"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Sequence

import numpy as np
import polars as pl
from datar.apis.base import as_factor as _as_factor

from .utils import (
    NA_CODE,
    as_labels,
    check_levels,
    codes_to_series,
    encode,
    physical_codes,
    sort_levels,
)


class Factor:
    """A categorical vector, like R's factor

    The levels are the allowed labels in their display order, and each
    value is stored as a code, the index of its label in the levels, or
    NA_CODE for missing values.

    Factors are immutable, every transformation returns a new one.

    Args:
        values: The labels of the values. None or NaN is a missing value.
        levels: The levels. Values not in the levels are turned into
            missing values. If not given, the distinct values, sorted by
            their Unicode codepoints, are used.
        name: The name of the factor, used when turned into a series

    Raises:
        InvalidLevelsError: When the levels have duplicates
    """

    __slots__ = ("_codes", "_levels", "_name")

    def __init__(
        self,
        values: Iterable[Any] = (),
        levels: Iterable[Any] = None,
        name: str = None,
    ):
        if isinstance(values, pl.Series) and name is None:
            name = values.name

        if isinstance(values, Factor):
            name = values.name if name is None else name
            levels = values.levels if levels is None else levels

        labels = as_labels(values)
        if levels is None:
            levels = sort_levels(lbl for lbl in labels if lbl is not None)
        else:
            levels = check_levels(levels)

        self._init(encode(labels, levels), levels, name)

    def _init(self, codes: np.ndarray, levels: Sequence[str], name: str):
        codes = np.array(codes, dtype=np.int32)
        codes.flags.writeable = False
        self._codes = codes
        self._levels = tuple(levels)
        self._name = name

    @classmethod
    def _new(
        cls,
        codes: np.ndarray,
        levels: Sequence[str],
        name: str = None,
    ) -> Factor:
        """Create a factor from trusted codes and levels"""
        out = cls.__new__(cls)
        out._init(codes, levels, name)
        return out

    @classmethod
    def from_codes(
        cls,
        codes: Iterable[int | None],
        levels: Iterable[Any],
        name: str = None,
    ) -> Factor:
        """Create a factor from codes and levels

        Args:
            codes: The codes, None or NA_CODE for missing values
            levels: The levels
            name: The name of the factor

        Raises:
            InvalidLevelsError: When the levels have duplicates
            ValueError: When the codes are out of the range of the levels
        """
        levels = check_levels(levels)
        codes = np.array(
            [NA_CODE if code is None else code for code in codes],
            dtype=np.int64,
        )
        if ((codes < NA_CODE) | (codes >= len(levels))).any():
            raise ValueError(
                f"Codes must be in the range of [0, {len(levels)}) "
                f"or {NA_CODE} for missing values."
            )
        return cls._new(codes, levels, name)

    @classmethod
    def from_polars(cls, series: pl.Series) -> Factor:
        """Create a factor from a polars series

        The categories of an Enum series are taken as the levels, other
        series get the levels from their distinct values.
        """
        if isinstance(series.dtype, pl.Enum):
            levels = series.dtype.categories.to_list()
            return cls._new(physical_codes(series), levels, series.name)
        return cls(series, name=series.name)

    @property
    def levels(self) -> List[str]:
        return list(self._levels)

    @property
    def nlevels(self) -> int:
        return len(self._levels)

    @property
    def codes(self) -> pl.Series:
        """The codes as an Int32 series, with nulls for missing values"""
        return codes_to_series(self._codes, self.name or "")

    @property
    def name(self) -> str:
        return self._name

    def rename(self, name: str) -> Factor:
        return Factor._new(self._codes, self._levels, name)

    def copy(self) -> Factor:
        return Factor._new(self._codes, self._levels, self._name)

    def is_missing(self) -> np.ndarray:
        """Which values are missing"""
        return self._codes == NA_CODE

    def equals(self, other: Factor, check_name: bool = False) -> bool:
        """Do the factors have the same levels and codes?"""
        if not isinstance(other, Factor):
            return False
        if check_name and self._name != other._name:
            return False
        return self._levels == other._levels and np.array_equal(
            self._codes, other._codes
        )

    def to_list(self) -> List[str | None]:
        """The labels of the values, with None for missing values"""
        labels = np.array(self._levels + (None,), dtype=object)
        return labels[self._codes].tolist()

    def to_series(self) -> pl.Series:
        """The labels of the values as a String series"""
        return pl.Series(self._name or "", self.to_list(), dtype=pl.String)

    def to_polars(self) -> pl.Series:
        """The factor as a polars Enum series, keeping the levels"""
        return self.to_series().cast(pl.Enum(self.levels))

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[str | None]:
        return iter(self.to_list())

    def __getitem__(self, key: int | slice) -> str | None | Factor:
        if isinstance(key, slice):
            return Factor._new(self._codes[key], self._levels, self._name)

        code = self._codes[key]
        return None if code == NA_CODE else self._levels[code]

    def __repr__(self) -> str:
        values = ", ".join(
            "null" if lbl is None else repr(lbl) for lbl in self.to_list()
        )
        return f"Factor([{values}])\nLevels: {' '.join(self._levels)}"


def as_factor(x: Any) -> Factor:
    return _as_factor(x, __ast_fallback="normal", __backend="polars")
