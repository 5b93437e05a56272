"""Change the order of the levels

See source https://github.com/tidyverse/forcats/blob/main/R/lvls.R and
https://github.com/tidyverse/forcats/blob/main/R/reorder.R
"""
from __future__ import annotations

from typing import Any, Callable, Sequence

import numpy as np
from datar.apis.forcats import (
    fct_inorder,
    fct_infreq,
    fct_inseq,
    fct_relevel,
    fct_reorder,
    fct_rev,
    fct_shift,
    fct_shuffle,
    lvls_reorder,
)
from datar.core.utils import logger

from ...errors import LengthMismatchError
from ...factor import Factor, as_factor
from ...utils import NA_CODE, as_labels, check_known, count_codes, is_scalar


def _reorder(_f: Factor, **kwargs: Any) -> Factor:
    return lvls_reorder(
        _f,
        __ast_fallback="normal",
        __backend="polars",
        **kwargs,
    )


@fct_relevel.register(object, backend="polars")
def _fct_relevel(
    _f: Any,
    *lvls: str | Sequence[str] | Callable,
    after: int = 0,
) -> Factor:
    """Move the given levels to a new position

    The other levels keep their relative order.

    Args:
        _f: A factor or labels
        *lvls: The levels to move. Either labels, a single list of
            labels, or a function that takes the current levels and
            returns the levels to move.
        after: Where to put the moved levels, counted in the levels
            that are not moved. 0 puts them in front, -1 or None puts
            them at the end.

    Returns:
        The factor with levels reordered

    Raises:
        UnknownLevelError: When a label is not one of the levels
    """
    _f = as_factor(_f)
    if len(lvls) == 1 and callable(lvls[0]):
        lvls = lvls[0](_f.levels)
    elif len(lvls) == 1 and not is_scalar(lvls[0]):
        lvls = lvls[0]

    lvls = list(dict.fromkeys(as_labels(list(lvls))))
    check_known(lvls, _f._levels)

    moved = set(lvls)
    rest = [lvl for lvl in _f._levels if lvl not in moved]
    if after is None:
        after = len(rest)
    elif after < 0:
        after = max(len(rest) + after + 1, 0)

    return _reorder(_f, new_levels=rest[:after] + lvls + rest[after:])


@fct_inorder.register(object, backend="polars")
def _fct_inorder(_f: Any) -> Factor:
    """Order the levels by the first appearance of each level in the data

    Levels that don't appear in the data are put at the end, in their
    existing order.

    Args:
        _f: A factor or labels

    Returns:
        The factor with levels reordered
    """
    _f = as_factor(_f)
    codes = _f._codes[_f._codes != NA_CODE]
    used, first = np.unique(codes, return_index=True)
    order = used[np.argsort(first, kind="stable")].tolist()
    seen = set(order)
    order.extend(i for i in range(_f.nlevels) if i not in seen)
    return _reorder(_f, idx=order)


@fct_infreq.register(object, backend="polars")
def _fct_infreq(_f: Any, descending: bool = True) -> Factor:
    """Order the levels by their frequency

    Levels with the same frequency keep their existing order.

    Args:
        _f: A factor or labels
        descending: Whether the most frequent level comes first

    Returns:
        The factor with levels reordered
    """
    _f = as_factor(_f)
    counts = count_codes(_f._codes, _f.nlevels)
    if descending:
        counts = -counts
    return _reorder(_f, idx=np.argsort(counts, kind="stable"))


@fct_inseq.register(object, backend="polars")
def _fct_inseq(_f: Any) -> Factor:
    """Order the levels by their numeric values

    Levels that can't be turned into numbers are put at the end.

    Args:
        _f: A factor or labels

    Returns:
        The factor with levels reordered

    Raises:
        ValueError: When no level is numeric
    """
    _f = as_factor(_f)
    numbers = []
    for i, lvl in enumerate(_f._levels):
        try:
            numbers.append((float(lvl), i))
        except ValueError:
            pass

    if not numbers:
        raise ValueError(
            "At least one existing level must be coercible to numeric."
        )

    order = [i for _, i in sorted(numbers)]
    numeric = set(order)
    order.extend(i for i in range(_f.nlevels) if i not in numeric)
    return _reorder(_f, idx=order)


@fct_rev.register(object, backend="polars")
def _fct_rev(_f: Any) -> Factor:
    """Reverse the order of the levels"""
    _f = as_factor(_f)
    return _reorder(_f, idx=np.arange(_f.nlevels)[::-1])


@fct_shift.register(object, backend="polars")
def _fct_shift(_f: Any, n: int = -1) -> Factor:
    """Shift the levels left or right, wrapping around at the end

    Args:
        _f: A factor or labels
        n: Positive values shift to the right, negative values to the
            left.

    Returns:
        The factor with levels shifted
    """
    _f = as_factor(_f)
    return _reorder(_f, idx=np.roll(np.arange(_f.nlevels), n))


@fct_shuffle.register(object, backend="polars")
def _fct_shuffle(_f: Any, random_state: Any = None) -> Factor:
    """Randomly permute the levels

    Args:
        _f: A factor or labels
        random_state: Anything `numpy.random.default_rng()` takes, for
            example an integer seed or a `numpy.random.Generator`.

    Returns:
        The factor with levels shuffled
    """
    _f = as_factor(_f)
    rng = np.random.default_rng(random_state)
    return _reorder(_f, idx=rng.permutation(_f.nlevels))


@fct_reorder.register(object, backend="polars")
def _fct_reorder(
    _f: Any,
    _x: Sequence[float],
    *args: Any,
    _fun: Callable = None,
    _desc: bool = False,
    **kwargs: Any,
) -> Factor:
    """Order the levels by a summary of another variable

    Args:
        _f: A factor or labels
        _x: The values to summarise for each level, one per value of `_f`
        *args: and
        **kwargs: Other arguments for `_fun`
        _fun: The function to summarise the values of each level.
            Defaults to `numpy.median`.
        _desc: Whether to put the levels in descending order

    Returns:
        The factor with levels reordered. Levels without values are
        put at the end.

    Raises:
        LengthMismatchError: When `_x` doesn't have a value for each value
            of `_f`
    """
    _f = as_factor(_f)
    _x = np.asarray(_x, dtype=float)
    if len(_x) != len(_f):
        raise LengthMismatchError(
            f"`_f` and `_x` must be the same length: "
            f"got {len(_f)} and {len(_x)}."
        )

    if _fun is None:
        _fun = np.median

    summary = np.full(_f.nlevels, np.nan)
    for i in range(_f.nlevels):
        values = _x[_f._codes == i]
        if len(values):
            summary[i] = _fun(values, *args, **kwargs)

    if _desc:
        summary = -summary
    logger.debug("fct_reorder() summary of levels: %s", summary)
    # NaN goes last
    return _reorder(_f, idx=np.argsort(summary, kind="stable"))
