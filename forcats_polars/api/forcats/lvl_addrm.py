"""Add or remove levels

See source https://github.com/tidyverse/forcats/blob/main/R/expand.R,
https://github.com/tidyverse/forcats/blob/main/R/drop.R and
https://github.com/tidyverse/forcats/blob/main/R/na.R
"""
from __future__ import annotations

from typing import Any, Iterable

import numpy as np
from datar import get_option
from datar.apis.forcats import (
    fct_drop,
    fct_expand,
    fct_explicit_na,
    lvls_reorder,
)

from ...factor import Factor, as_factor
from ...utils import (
    NA_CODE,
    as_labels,
    count_codes,
    is_scalar,
    recode_table,
    remap_codes,
)


@fct_expand.register(object, backend="polars")
def _fct_expand(
    _f: Any,
    *additional_levels: str | Iterable[str],
    after: int = None,
) -> Factor:
    """Add new levels to a factor

    Args:
        _f: A factor or labels
        *additional_levels: The levels to add. Existing levels are ignored.
        after: Where to put the new levels. None (default) puts them at
            the end, 0 in front.

    Returns:
        The factor with the levels added
    """
    _f = as_factor(_f)
    lvls = list(additional_levels)
    if len(lvls) == 1 and not is_scalar(lvls[0]):
        lvls = lvls[0]

    existing = set(_f._levels)
    new_levels = [
        lvl for lvl in dict.fromkeys(as_labels(lvls)) if lvl not in existing
    ]
    if after is None:
        after = _f.nlevels

    levels = _f.levels
    levels = levels[:after] + new_levels + levels[after:]
    codes = remap_codes(_f._codes, recode_table(_f._levels, levels))
    return Factor._new(codes, levels, _f.name)


@fct_drop.register(object, backend="polars")
def _fct_drop(_f: Any, only: Iterable[str] = None) -> Factor:
    """Drop the levels without values

    Args:
        _f: A factor or labels
        only: If given, only drop these levels when they are unused

    Returns:
        The factor with the unused levels dropped
    """
    _f = as_factor(_f)
    counts = count_codes(_f._codes, _f.nlevels)
    droppable = None if only is None else set(as_labels(only))
    keep = [
        lvl
        for lvl, n in zip(_f._levels, counts)
        if n > 0 or (droppable is not None and lvl not in droppable)
    ]
    return lvls_reorder(
        _f,
        new_levels=keep,
        __ast_fallback="normal",
        __backend="polars",
    )


@fct_explicit_na.register(object, backend="polars")
def _fct_explicit_na(_f: Any, na_level: str = None) -> Factor:
    """Turn missing values into a level

    Args:
        _f: A factor or labels
        na_level: The label for the missing values. Defaults to the
            `na_level` option. If it's already a level, the missing values
            are merged into it, otherwise it is added at the end.

    Returns:
        The factor without missing values
    """
    _f = as_factor(_f)
    if na_level is None:
        na_level = get_option("na_level")

    levels = _f.levels
    if na_level not in levels:
        levels.append(na_level)

    codes = np.where(
        _f._codes == NA_CODE,
        levels.index(na_level),
        _f._codes,
    )
    return Factor._new(codes, levels, _f.name)
