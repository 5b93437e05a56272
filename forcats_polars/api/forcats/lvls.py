"""Lower-level functions for manipulating levels

See source https://github.com/tidyverse/forcats/blob/main/R/lvls.R
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence

import numpy as np
import polars as pl
from datar.apis.forcats import (
    lvls_expand,
    lvls_reorder,
    lvls_revalue,
    lvls_union,
)
from datar.core.utils import logger

from ...errors import LengthMismatchError, UnknownLevelError
from ...factor import Factor, as_factor
from ...utils import (
    as_labels,
    check_known,
    check_levels,
    recode_table,
    remap_codes,
    union_levels,
)


def levels_of(x: Any) -> List[str]:
    """The levels of a factor, or the distinct labels in order of
    appearance for other values
    """
    if isinstance(x, Factor):
        return list(x._levels)
    if isinstance(x, pl.Series) and isinstance(x.dtype, pl.Enum):
        return x.dtype.categories.to_list()
    return union_levels(lbl for lbl in as_labels(x) if lbl is not None)


@lvls_reorder.register(object, backend="polars")
def _lvls_reorder(
    _f: Any,
    new_levels: Iterable[Any] = None,
    idx: Sequence[int] = None,
) -> Factor:
    """Change the order of the levels

    The values keep their labels, only the codes are changed.

    Args:
        _f: A factor or labels
        new_levels: The levels in the new order. Levels that are left
            out are dropped, with their values becoming missing values.
        idx: The new order as 0-based positions in the current levels,
            instead of `new_levels`

    Returns:
        The factor with levels reordered

    Raises:
        UnknownLevelError: When a label is not one of the levels, or a
            position is out of the range of the levels
        InvalidLevelsError: When the new order has duplicates
    """
    _f = as_factor(_f)
    if (new_levels is None) == (idx is None):
        raise ValueError("Must supply exactly one of `new_levels` and `idx`.")

    if idx is not None:
        idx = np.asarray(idx, dtype=np.int64)
        bad = idx[(idx < 0) | (idx >= _f.nlevels)]
        if bad.size:
            raise UnknownLevelError(
                f"Level positions out of range [0, {_f.nlevels}): "
                f"`{', '.join(map(str, bad.tolist()))}`"
            )
        new_levels = [_f._levels[i] for i in idx]

    new_levels = check_levels(new_levels)
    check_known(new_levels, _f._levels)

    if len(new_levels) < _f.nlevels:
        kept = set(new_levels)
        logger.debug(
            "Levels dropped by lvls_reorder(): %s",
            [lvl for lvl in _f._levels if lvl not in kept],
        )

    codes = remap_codes(_f._codes, recode_table(_f._levels, new_levels))
    return Factor._new(codes, new_levels, _f.name)


@lvls_revalue.register(object, backend="polars")
def _lvls_revalue(_f: Any, new_levels: Iterable[Any]) -> Factor:
    """Change the labels of the levels, but not their order

    Args:
        _f: A factor or labels
        new_levels: The new labels, paired with the current levels
            by position

    Returns:
        The factor with the new labels, with the same codes

    Raises:
        LengthMismatchError: When the number of new labels is not the
            number of levels
        InvalidLevelsError: When the new labels have duplicates
    """
    _f = as_factor(_f)
    new_levels = as_labels(new_levels)
    if len(new_levels) != _f.nlevels:
        raise LengthMismatchError(
            f"`new_levels` must be the same length as levels of `_f`: "
            f"expected {_f.nlevels} new levels, got {len(new_levels)}."
        )

    return Factor._new(_f._codes, check_levels(new_levels), _f.name)


@lvls_expand.register(object, backend="polars")
def _lvls_expand(_f: Any, new_levels: Iterable[Any]) -> Factor:
    """Expand the levels to a superset, in the given order

    Args:
        _f: A factor or labels
        new_levels: The new levels, containing all the current ones

    Raises:
        UnknownLevelError: When a current level is missing from the
            new levels
    """
    _f = as_factor(_f)
    new_levels = check_levels(new_levels)
    check_known(_f._levels, new_levels)
    codes = remap_codes(_f._codes, recode_table(_f._levels, new_levels))
    return Factor._new(codes, new_levels, _f.name)


@lvls_union.register(object, backend="polars")
def _lvls_union(fs: Iterable[Any]) -> List[str]:
    """The union of the levels of the factors

    Levels of earlier factors come first, in their own order, then the new
    levels of each following factor. Plain labels count in the order they
    appear.
    """
    return union_levels(*(levels_of(fct) for fct in fs))
