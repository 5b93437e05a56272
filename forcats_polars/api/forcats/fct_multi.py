"""Functions working on multiple factors

See source https://github.com/tidyverse/forcats/blob/main/R/c.R,
https://github.com/tidyverse/forcats/blob/main/R/unify.R and
https://github.com/tidyverse/forcats/blob/main/R/cross.R
"""
from __future__ import annotations

from itertools import product
from typing import Any, Iterable, List, Sequence

import numpy as np
from datar import get_option
from datar.apis.forcats import (
    fct_c,
    fct_cross,
    fct_drop,
    fct_unify,
    lvls_expand,
    lvls_union,
)

from ...errors import LengthMismatchError
from ...factor import Factor, as_factor
from ...utils import NA_CODE, as_labels, check_levels, union_levels


def _with_levels(x: Any, levels: Sequence[str]) -> Factor:
    """Encode a factor, or labels, with a superset of their levels"""
    if isinstance(x, Factor):
        return lvls_expand(
            x,
            levels,
            __ast_fallback="normal",
            __backend="polars",
        )
    return Factor(x, levels=levels)


def _union(fs: Sequence[Any]) -> List[str]:
    return lvls_union(fs, __ast_fallback="normal", __backend="polars")


@fct_c.register(object, backend="polars")
def _fct_c(*fs: Any) -> Factor:
    """Concatenate factors, combining the levels

    The levels of the result are the levels of the first factor, followed
    by the new levels of the second one, and so on, each in its own order.
    Plain labels bring their levels in the order they appear.

    Args:
        *fs: Factors or labels

    Returns:
        The combined factor
    """
    levels = _union(fs)
    codes = [_with_levels(fct, levels)._codes for fct in fs]
    codes = np.concatenate(codes) if codes else []
    return Factor._new(codes, levels)


@fct_unify.register(object, backend="polars")
def _fct_unify(
    fs: Iterable[Any],
    levels: Iterable[str] = None,
) -> List[Factor]:
    """Give factors the same levels

    Args:
        fs: Factors or labels
        levels: Extra levels to add after the combined levels of `fs`

    Returns:
        The factors with the same levels, in the order they are given
    """
    fs = list(fs)
    all_levels = _union(fs)
    if levels is not None:
        all_levels = union_levels(all_levels, as_labels(levels))

    return [_with_levels(fct, all_levels) for fct in fs]


@fct_cross.register(object, backend="polars")
def _fct_cross(
    *fs: Any,
    sep: str = None,
    keep_empty: bool = False,
) -> Factor:
    """Combine the values of factors into a new factor

    >>> fct_cross(["apple", "kiwi"], ["green", "green"])
    >>> # apple:green kiwi:green

    Args:
        *fs: Factors or labels, of the same length
        sep: The separator to join the labels. Defaults to the `cross_sep`
            option.
        keep_empty: Whether to keep the combinations without values

    Returns:
        The factor of the combinations. A value is missing if it is
        missing in any of the factors. The levels are all the combinations
        of the levels, with the first factor varying the slowest.

    Raises:
        LengthMismatchError: When the factors are of different lengths
        InvalidLevelsError: When different combinations are joined into
            the same label
    """
    if not fs:
        return Factor()

    if sep is None:
        sep = get_option("cross_sep")

    fs = [as_factor(fct) for fct in fs]
    lengths = {len(fct) for fct in fs}
    if len(lengths) > 1:
        raise LengthMismatchError(
            f"Factors to cross must be the same length, got lengths: "
            f"{sorted(lengths)}"
        )

    levels = check_levels(
        [sep.join(combo) for combo in product(*(f._levels for f in fs))]
    )
    # codes in a mixed-radix number, the first factor the most significant
    codes = np.zeros(len(fs[0]), dtype=np.int64)
    missing = np.zeros(len(fs[0]), dtype=bool)
    for fct in fs:
        codes = codes * fct.nlevels + fct._codes
        missing |= fct._codes == NA_CODE
    codes[missing] = NA_CODE

    out = Factor._new(codes, levels)
    if keep_empty:
        return out
    return fct_drop(out, __ast_fallback="normal", __backend="polars")
