"""Utilities for forcats_polars"""
from __future__ import annotations

from collections import Counter
from functools import singledispatch
from typing import Any, Iterable, List, Mapping, Sequence

import numpy as np
from polars import Enum, Int32, Series, String, col, when
from datar.apis.base import union as _union
from datar.core.utils import logger
from datar_numpy.utils import is_scalar
from datar_numpy.api import sets as _  # noqa: F401

from .errors import InvalidLevelsError, UnknownLevelError

# The code marking a missing value
NA_CODE = -1


def union(x: Any, y: Any) -> np.ndarray:
    return _union(x, y, __ast_fallback="normal", __backend="numpy")


def is_null(x: Any) -> bool | Sequence[bool]:
    """Is x a null value?

    Args:
        x: The object to check

    Returns:
        True if x is a null value, False otherwise
    """
    if isinstance(x, (float, np.floating)):
        return bool(np.isnan(x))

    if is_scalar(x):
        return x is None

    return [is_null(i) for i in x]


@singledispatch
def as_labels(x: Any) -> List[str | None]:
    """Turn the raw values into a list of labels, with None for the nulls

    Raises:
        TypeError: When a value is not a scalar, for example a tuple
    """
    if isinstance(x, (str, bytes)) or not isinstance(x, Iterable):
        x = [x]

    out = []
    for elt in x:
        if not is_scalar(elt):
            raise TypeError(
                f"Labels must be scalars, got {type(elt).__name__}: {elt!r}"
            )
        out.append(None if is_null(elt) else str(elt))
    return out


@as_labels.register(Series)
def _as_labels_series(x: Series) -> List[str | None]:
    return x.cast(String).to_list()


@as_labels.register(np.ndarray)
def _as_labels_ndarray(x: np.ndarray) -> List[str | None]:
    return as_labels.dispatch(object)(x.tolist())


def check_levels(levels: Iterable[Any]) -> List[str]:
    """Make sure the levels are distinct labels

    Args:
        levels: The levels to check

    Returns:
        The levels as a list of strings

    Raises:
        InvalidLevelsError: When there are duplicated labels or nulls
    """
    levels = as_labels(levels)
    if any(lvl is None for lvl in levels):
        raise InvalidLevelsError("Levels can't contain missing values.")

    dups = [lvl for lvl, n in Counter(levels).items() if n > 1]
    if dups:
        raise InvalidLevelsError(
            f"Levels must be unique, got duplicated: `{', '.join(dups)}`"
        )
    return levels


def check_known(labels: Iterable[str], pool: Sequence[str]) -> None:
    """Make sure all labels exist in the pool of levels

    Raises:
        UnknownLevelError: When some of the labels are not levels
    """
    pool = set(pool)
    unknown = [lbl for lbl in labels if lbl not in pool]
    if unknown:
        raise UnknownLevelError(
            f"Unknown levels: `{', '.join(map(str, unknown))}`"
        )


def sort_levels(labels: Iterable[str]) -> List[str]:
    """Distinct labels in Unicode codepoint order"""
    return sorted(set(labels))


def union_levels(*levels: Sequence[str]) -> List[str]:
    """Union of the level lists, earlier lists taking priority

    >>> union_levels(["a", "b"], ["c", "b"])
    ['a', 'b', 'c']
    """
    # object arrays, so that empty lists don't turn into floats
    out = np.array([], dtype=object)
    for lvls in levels:
        out = union(out, np.array(list(lvls), dtype=object))
    return out.tolist()


def recode_table(
    old_levels: Sequence[str],
    new_levels: Sequence[str] | Mapping[str, str],
) -> np.ndarray:
    """Where each old level goes to in the new levels

    Args:
        old_levels: The current levels
        new_levels: The new levels. If a mapping is given, the old levels
            are looked up as its keys, and the values are taken as the
            new levels, in the order of the old levels they come from. Old
            levels mapped to None, or not in the mapping, are dropped.

    Returns:
        An array with the new code of each old level, NA_CODE for the
        old levels absent in the new ones.
    """
    if isinstance(new_levels, Mapping):
        targets = [new_levels.get(lvl) for lvl in old_levels]
        targets = [lvl for lvl in targets if lvl is not None]
        index = {lvl: i for i, lvl in enumerate(union_levels(targets))}
        return np.array(
            [
                index.get(new_levels.get(lvl), NA_CODE)
                for lvl in old_levels
            ],
            dtype=np.int32,
        )

    index = {lvl: i for i, lvl in enumerate(new_levels)}
    return np.array(
        [index.get(lvl, NA_CODE) for lvl in old_levels],
        dtype=np.int32,
    )


def remap_codes(codes: np.ndarray, table: np.ndarray) -> np.ndarray:
    """Map the codes with a recode table

    The missing codes stay missing.
    """
    # codes of NA_CODE (-1) pick up the appended NA_CODE
    table = np.append(np.asarray(table, dtype=np.int32), NA_CODE)
    return table[codes]


def physical_codes(series: Series) -> np.ndarray:
    """The codes of an Enum series, with NA_CODE for the nulls"""
    return (
        series.to_physical()
        .cast(Int32)
        .fill_null(NA_CODE)
        .to_numpy()
    )


def encode(
    labels: Sequence[str | None],
    levels: Sequence[str],
) -> np.ndarray:
    """Get the codes of the labels in the levels

    Labels not in the levels get NA_CODE.
    """
    labels = Series("labels", labels, dtype=String)
    if not levels:
        return np.full(len(labels), NA_CODE, dtype=np.int32)

    enum = labels.cast(Enum(levels), strict=False)
    dropped = enum.null_count() - labels.null_count()
    if dropped:
        logger.debug(
            "%s value(s) not in levels turned into missing values.",
            dropped,
        )
    return physical_codes(enum)


def codes_to_series(codes: np.ndarray, name: str = "") -> Series:
    """Turn the codes into an Int32 series, with nulls for missing values"""
    out = Series("codes", codes, dtype=Int32).to_frame()
    return out.select(
        when(col("codes") >= 0).then(col("codes")).alias(name)
    ).to_series()


def count_codes(codes: np.ndarray, nlevels: int) -> np.ndarray:
    """Count the values of each level, missing values not counted"""
    return np.bincount(codes[codes != NA_CODE], minlength=nlevels)
