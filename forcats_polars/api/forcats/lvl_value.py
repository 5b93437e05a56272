"""Change the values of the levels

See source https://github.com/tidyverse/forcats/blob/main/R/recode.R,
https://github.com/tidyverse/forcats/blob/main/R/collapse.R,
https://github.com/tidyverse/forcats/blob/main/R/other.R and
https://github.com/tidyverse/forcats/blob/main/R/lump.R
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence

import numpy as np
from datar import get_option
from datar.apis.forcats import (
    fct_collapse,
    fct_lump_min,
    fct_lump_n,
    fct_other,
    fct_recode,
    fct_relabel,
    fct_relevel,
)

from ...errors import LengthMismatchError
from ...factor import Factor, as_factor
from ...utils import (
    NA_CODE,
    as_labels,
    check_known,
    count_codes,
    is_scalar,
    recode_table,
    remap_codes,
)


def refactor(_f: Factor, mapping: Mapping[str, str | None]) -> Factor:
    """Map the levels to new labels

    Levels mapped to the same label are merged, at the position of the
    first of them. Levels mapped to None, or not in the mapping, are
    dropped and their values become missing.
    """
    table = recode_table(_f._levels, mapping)
    new_levels = list(
        dict.fromkeys(
            mapping[lvl] for lvl in _f._levels
            if mapping.get(lvl) is not None
        )
    )
    return Factor._new(remap_codes(_f._codes, table), new_levels, _f.name)


def _as_groups(groups: Mapping[str, Any]) -> Mapping[str, list]:
    return {
        new: [old] if is_scalar(old) else list(old)
        for new, old in groups.items()
    }


def _level_weights(_f: Factor, w: Sequence[float] = None) -> np.ndarray:
    """The number of values, or the sum of the weights, of each level"""
    if w is None:
        return count_codes(_f._codes, _f.nlevels)

    w = np.asarray(w, dtype=float)
    if len(w) != len(_f):
        raise LengthMismatchError(
            f"`w` must be the same length as `_f`: "
            f"got {len(w)} and {len(_f)}."
        )
    used = _f._codes != NA_CODE
    return np.bincount(
        _f._codes[used],
        weights=w[used],
        minlength=_f.nlevels,
    )


@fct_recode.register(object, backend="polars")
def _fct_recode(
    _f: Any,
    *args: Mapping[str, str | Iterable[str]],
    **kwargs: str | Iterable[str],
) -> Factor:
    """Change the labels of some levels by hand

    >>> fct_recode(["apple", "bear", "banana"], fruit=["apple", "banana"])

    Args:
        _f: A factor or labels
        *args: Mappings of new labels to old ones
        **kwargs: The new labels as names, the old ones (one label or
            a list of labels) as values. Several old labels mapped to the
            same new one are merged.

    Returns:
        The recoded factor

    Raises:
        UnknownLevelError: When an old label is not one of the levels
    """
    _f = as_factor(_f)
    recodes = {}
    for arg in args:
        recodes.update(arg)
    recodes.update(kwargs)

    mapping = {lvl: lvl for lvl in _f._levels}
    for new, olds in _as_groups(recodes).items():
        olds = as_labels(olds)
        check_known(olds, _f._levels)
        mapping.update((old, new) for old in olds)

    return refactor(_f, mapping)


@fct_collapse.register(object, backend="polars")
def _fct_collapse(
    _f: Any,
    other_level: str = None,
    **groups: str | Iterable[str],
) -> Factor:
    """Collapse levels into manually defined groups

    Args:
        _f: A factor or labels
        other_level: The label for the levels in no group. If not given,
            those levels are kept as they are.
        **groups: The new labels as names, and the levels to put into
            each as values

    Returns:
        The collapsed factor

    Raises:
        UnknownLevelError: When a level in a group is not one of the levels
    """
    _f = as_factor(_f)
    out = _fct_recode(_f, **groups)
    if other_level is None:
        return out

    grouped = set(groups)
    others = [lvl for lvl in out._levels if lvl not in grouped]
    if not others:
        return out

    out = _fct_recode(out, **{other_level: others})
    return fct_relevel(
        out,
        other_level,
        after=None,
        __ast_fallback="normal",
        __backend="polars",
    )


@fct_relabel.register(object, backend="polars")
def _fct_relabel(
    _f: Any,
    _fun: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> Factor:
    """Relabel the levels with a function

    Args:
        _f: A factor or labels
        _fun: A function called with each level to get its new label.
            Levels getting the same label are merged.
        *args: and
        **kwargs: Other arguments for `_fun`

    Returns:
        The relabeled factor
    """
    _f = as_factor(_f)
    mapping = {lvl: str(_fun(lvl, *args, **kwargs)) for lvl in _f._levels}
    return refactor(_f, mapping)


def _lump(_f: Factor, keep: np.ndarray, other_level: str) -> Factor:
    """Put the levels not kept into the other level, at the end"""
    if other_level is None:
        other_level = get_option("other_level")

    if keep.all():
        return _f

    mapping = {
        lvl: lvl if kept else other_level
        for lvl, kept in zip(_f._levels, keep)
    }
    return fct_relevel(
        refactor(_f, mapping),
        other_level,
        after=None,
        __ast_fallback="normal",
        __backend="polars",
    )


@fct_other.register(object, backend="polars")
def _fct_other(
    _f: Any,
    keep: Iterable[str] = None,
    drop: Iterable[str] = None,
    other_level: str = None,
) -> Factor:
    """Replace levels with "other"

    Args:
        _f: A factor or labels
        keep: The levels to keep, the others are replaced
        drop: The levels to replace, the others are kept
        other_level: The label of the other level. Defaults to the
            `other_level` option.

    Returns:
        The factor with the other level at the end

    Raises:
        ValueError: When both or neither of `keep` and `drop` are given
        UnknownLevelError: When a label is not one of the levels
    """
    if (keep is None) == (drop is None):
        raise ValueError("Must supply exactly one of `keep` and `drop`.")

    _f = as_factor(_f)
    labels = as_labels(keep if keep is not None else drop)
    check_known(labels, _f._levels)
    labels = set(labels)
    listed = np.array([lvl in labels for lvl in _f._levels], dtype=bool)
    return _lump(_f, listed if keep is not None else ~listed, other_level)


@fct_lump_n.register(object, backend="polars")
def _fct_lump_n(
    _f: Any,
    n: int,
    w: Sequence[float] = None,
    other_level: str = None,
) -> Factor:
    """Lump all but the most frequent `n` levels into "other"

    Levels tied with the `n`th most frequent one are kept as well.

    Args:
        _f: A factor or labels
        n: The number of levels to keep. A negative number keeps the
            `-n` least frequent levels instead.
        w: Weights of the values, summed up for each level instead of
            counting the values
        other_level: The label of the other level. Defaults to the
            `other_level` option.

    Returns:
        The lumped factor
    """
    _f = as_factor(_f)
    counts = _level_weights(_f, w)
    if n >= 0:
        # minimum rank in descending order
        rank = (counts[None, :] > counts[:, None]).sum(axis=1) + 1
        keep = rank <= n
    else:
        rank = (counts[None, :] < counts[:, None]).sum(axis=1) + 1
        keep = rank <= -n
    return _lump(_f, keep, other_level)


@fct_lump_min.register(object, backend="polars")
def _fct_lump_min(
    _f: Any,
    min_: float,
    w: Sequence[float] = None,
    other_level: str = None,
) -> Factor:
    """Lump the levels appearing less than `min_` times into "other"

    Args:
        _f: A factor or labels
        min_: The minimum number of values (or sum of the weights)
            for a level to be kept
        w: Weights of the values
        other_level: The label of the other level. Defaults to the
            `other_level` option.

    Returns:
        The lumped factor
    """
    _f = as_factor(_f)
    return _lump(_f, _level_weights(_f, w) >= min_, other_level)
