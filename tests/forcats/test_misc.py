# https://github.com/tidyverse/forcats/blob/main/tests/testthat/test-count.R
import pytest

import polars as pl
from polars.testing import assert_frame_equal
from forcats_polars import (
    Factor,
    UnknownLevelError,
    fct_count,
    fct_match,
    fct_unique,
    unique_inorder,
)

from ..conftest import assert_iterable_equal

CLARITY = ["I1", "SI2", "SI1", "VS2", "VS1", "VVS2", "VVS1", "IF"]


def test_fct_count_includes_unused_levels():
    f = Factor(["SI2", "SI1", "SI2", "IF"], levels=CLARITY)
    out = fct_count(f)
    assert out.missing == 0
    assert_frame_equal(
        out.table,
        pl.DataFrame(
            {"f": CLARITY, "n": [0, 2, 1, 0, 0, 0, 0, 1]},
            schema={"f": pl.String, "n": pl.Int64},
        ),
    )


def test_fct_count_sum_is_length():
    f = Factor(["a", None, "b", "z", "a"], levels=["a", "b", "c"])
    out = fct_count(f)
    assert out.missing == 2
    assert out.table["n"].sum() + out.missing == len(f)
    # stable on repeated calls
    assert fct_count(f).table.equals(out.table)


def test_fct_count_sort_prop():
    f = Factor(["b", "a", "b", None])
    out = fct_count(f, sort=True, prop=True)
    assert out.table["f"].to_list() == ["b", "a"]
    assert out.table["n"].to_list() == [2, 1]
    assert_iterable_equal(out.table["p"], [0.5, 0.25], approx=True)


def test_fct_count_empty():
    out = fct_count(Factor())
    assert out.table.shape == (0, 2)
    assert out.missing == 0


def test_fct_unique_in_level_order():
    f = Factor(["c", "a", None, "c", "b"], levels=["b", "c", "a", "d"])
    out = fct_unique(f)
    assert out.levels == f.levels
    assert_iterable_equal(out, ["b", "c", "a"])


def test_unique_inorder():
    f = Factor(["c", "a", None, "c", "b"], levels=["b", "c", "a", "d"])
    assert unique_inorder(f) == ["c", "a", None, "b"]
    assert unique_inorder(["x", "y", "x"]) == ["x", "y"]


def test_fct_match():
    f = Factor(["a", "b", None, "c"])
    assert fct_match(f, ["a", "c"]).to_list() == [True, False, False, True]
    assert fct_match(f, [None]).to_list() == [False, False, True, False]
    assert fct_match(f, "b").to_list() == [False, True, False, False]
    with pytest.raises(UnknownLevelError):
        fct_match(f, ["z"])
