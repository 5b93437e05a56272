"""Tools for working with categorical variables (factors)

The functions are datar's, with the implementations for factors
registered for the `polars` backend.

See https://forcats.tidyverse.org/reference/index.html
"""
from datar.apis.forcats import (  # noqa: F401
    fct_c,
    fct_collapse,
    fct_count,
    fct_cross,
    fct_drop,
    fct_expand,
    fct_explicit_na,
    fct_infreq,
    fct_inorder,
    fct_inseq,
    fct_lump_min,
    fct_lump_n,
    fct_match,
    fct_other,
    fct_recode,
    fct_relabel,
    fct_relevel,
    fct_reorder,
    fct_rev,
    fct_shift,
    fct_shuffle,
    fct_unify,
    fct_unique,
    lvls_expand,
    lvls_reorder,
    lvls_revalue,
    lvls_union,
)

from . import (  # noqa: F401
    fct_multi,
    lvl_addrm,
    lvl_order,
    lvl_value,
    lvls,
)
from .misc import LevelCounts, unique_inorder

__all__ = [
    "LevelCounts",
    "fct_c",
    "fct_collapse",
    "fct_count",
    "fct_cross",
    "fct_drop",
    "fct_expand",
    "fct_explicit_na",
    "fct_infreq",
    "fct_inorder",
    "fct_inseq",
    "fct_lump_min",
    "fct_lump_n",
    "fct_match",
    "fct_other",
    "fct_recode",
    "fct_relabel",
    "fct_relevel",
    "fct_reorder",
    "fct_rev",
    "fct_shift",
    "fct_shuffle",
    "fct_unify",
    "fct_unique",
    "lvls_expand",
    "lvls_reorder",
    "lvls_revalue",
    "lvls_union",
    "unique_inorder",
]
