"""Create factors and get their levels

See https://stat.ethz.ch/R-manual/R-devel/library/base/html/factor.html
"""
from __future__ import annotations

from typing import Any, List

import polars as pl
from datar.apis.base import (
    as_factor,
    droplevels,
    is_factor,
    levels,
    nlevels,
)
from datar.apis.forcats import fct_drop

from ...factor import Factor, as_factor as _coerce


@as_factor.register(object, backend="polars")
def _as_factor(x: Any) -> Factor:
    return Factor(x)


@as_factor.register(Factor, backend="polars")
def _as_factor_factor(x: Factor) -> Factor:
    return x


@as_factor.register(pl.Series, backend="polars")
def _as_factor_series(x: pl.Series) -> Factor:
    return Factor.from_polars(x)


@levels.register(object, backend="polars")
def _levels(x: Any) -> List[str]:
    return _coerce(x).levels


@nlevels.register(object, backend="polars")
def _nlevels(x: Any) -> int:
    return _coerce(x).nlevels


@is_factor.register(object, backend="polars")
def _is_factor(x: Any) -> bool:
    return isinstance(x, Factor)


@droplevels.register(object, backend="polars")
def _droplevels(x: Any) -> Factor:
    return fct_drop(x, __ast_fallback="normal", __backend="polars")
