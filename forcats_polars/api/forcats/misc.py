"""Count, find and match the values of factors

See source https://github.com/tidyverse/forcats/blob/main/R/count.R,
https://github.com/tidyverse/forcats/blob/main/R/unique.R and
https://github.com/tidyverse/forcats/blob/main/R/match.R
"""
from __future__ import annotations

from typing import Any, Iterable, List, NamedTuple

import numpy as np
import polars as pl
from pipda import register_verb
from datar.apis.forcats import fct_count, fct_match, fct_unique

from ...factor import Factor, as_factor
from ...utils import NA_CODE, as_labels, check_known, count_codes


class LevelCounts(NamedTuple):
    """The result of fct_count()"""

    # columns f and n, (and p), a row for each level
    table: pl.DataFrame
    missing: int


@fct_count.register(object, backend="polars")
def _fct_count(
    _f: Any,
    sort: bool = False,
    prop: bool = False,
) -> LevelCounts:
    """Count the values of each level

    Args:
        _f: A factor or labels
        sort: Whether to sort the levels by their counts, the most
            frequent first. Otherwise they are in the order of the levels.
        prop: Whether to add a column `p` with the proportions of the
            values, missing values included in the total.

    Returns:
        The counts of the levels, unused levels included, and the number
        of missing values
    """
    _f = as_factor(_f)
    counts = count_codes(_f._codes, _f.nlevels)
    table = pl.DataFrame(
        [
            pl.Series("f", _f.levels, dtype=pl.String),
            pl.Series("n", counts, dtype=pl.Int64),
        ]
    )
    if sort:
        table = table.sort("n", descending=True, maintain_order=True)
    if prop:
        # 0/0 gives NaN for an empty factor
        table = table.with_columns((pl.col("n") / len(_f)).alias("p"))

    return LevelCounts(table, int((_f._codes == NA_CODE).sum()))


@fct_unique.register(object, backend="polars")
def _fct_unique(_f: Any) -> Factor:
    """The levels used by the values, in the order of the levels

    Args:
        _f: A factor or labels

    Returns:
        A factor with the levels of `_f` and a value for each level in
        use, missing values excluded
    """
    _f = as_factor(_f)
    codes = np.unique(_f._codes[_f._codes != NA_CODE])
    return Factor._new(codes, _f._levels, _f.name)


@register_verb(object, ast_fallback="normal_warning")
def unique_inorder(x: Any) -> List[str | None]:
    """The distinct values, in the order they first appear

    Unlike fct_unique(), levels play no part in the order.

    Args:
        x: A factor or labels

    Returns:
        The distinct labels, with None if there are missing values
    """
    return list(dict.fromkeys(as_labels(x)))


@fct_match.register(object, backend="polars")
def _fct_match(_f: Any, lvls: Iterable[str]) -> pl.Series:
    """Test which values are in the given levels

    Args:
        _f: A factor or labels
        lvls: The levels to look for. None matches missing values.

    Returns:
        A boolean series, True for the values in `lvls`

    Raises:
        UnknownLevelError: When a label in `lvls` is not a level
    """
    _f = as_factor(_f)
    lvls = as_labels(lvls)
    check_known([lvl for lvl in lvls if lvl is not None], _f._levels)
    codes = [_f._levels.index(lvl) for lvl in lvls if lvl is not None]
    matched = np.isin(_f._codes, codes)
    if None in lvls:
        matched |= _f._codes == NA_CODE
    return pl.Series(_f.name or "", matched, dtype=pl.Boolean)
