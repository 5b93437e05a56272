# https://github.com/tidyverse/forcats/blob/main/tests/testthat/test-fct_c.R
import pytest

from forcats_polars import (
    Factor,
    LengthMismatchError,
    fct_c,
    fct_cross,
    fct_unify,
    options,
)

from ..conftest import assert_iterable_equal


def test_fct_c_unions_levels():
    fa = Factor(["A", "B"])
    fb = Factor(["B", "C"])
    out = fct_c(fa, fb)
    assert out.levels == ["A", "B", "C"]
    assert_iterable_equal(out, ["A", "B", "B", "C"])
    assert_iterable_equal(out.codes, [0, 1, 1, 2])


def test_fct_c_keeps_own_orders():
    fa = Factor(["x"], levels=["z", "x"])
    fb = Factor(["y", None, "z"], levels=["y", "w", "z"])
    out = fct_c(fa, fb, ["q"])
    assert out.levels == ["z", "x", "y", "w", "q"]
    assert_iterable_equal(out, ["x", "y", None, "z", "q"])


def test_fct_c_empty():
    out = fct_c()
    assert len(out) == 0
    assert out.levels == []


def test_fct_unify():
    fa = Factor(["a", "b"])
    fb = Factor(["c", "a"], levels=["c", "a"])
    out = fct_unify([fa, fb])
    assert len(out) == 2
    assert out[0].levels == out[1].levels == ["a", "b", "c"]
    assert_iterable_equal(out[0], ["a", "b"])
    assert_iterable_equal(out[1], ["c", "a"])
    assert_iterable_equal(out[1].codes, [2, 0])
    # inputs untouched
    assert fb.levels == ["c", "a"]


def test_fct_unify_extra_levels():
    out = fct_unify([["b"], ["a"]], levels=["z", "a"])
    assert out[0].levels == ["b", "a", "z"]
    assert out[1].levels == ["b", "a", "z"]


def test_fct_unify_extra_levels_keep_factor_orders():
    out = fct_unify(
        [Factor(["x"], levels=["z", "x"]), Factor(["y"], levels=["y"])],
        levels=["w"],
    )
    assert out[0].levels == ["z", "x", "y", "w"]
    assert out[1].levels == ["z", "x", "y", "w"]
    assert_iterable_equal(out[0], ["x"])
    assert_iterable_equal(out[1], ["y"])


def test_fct_c_labels_in_order_of_appearance():
    out = fct_c(Factor(["a"]), ["d", "c", "d"])
    assert out.levels == ["a", "d", "c"]
    assert_iterable_equal(out, ["a", "d", "c", "d"])


def test_fct_cross():
    fruit = Factor(["apple", "kiwi", "apple", "apple"])
    colour = Factor(["green", "green", "red", None])
    out = fct_cross(fruit, colour)
    assert out.levels == ["apple:green", "apple:red", "kiwi:green"]
    assert_iterable_equal(
        out, ["apple:green", "kiwi:green", "apple:red", None]
    )

    out = fct_cross(fruit, colour, keep_empty=True, sep="_")
    assert out.levels == ["apple_green", "apple_red", "kiwi_green", "kiwi_red"]

    options(cross_sep="/")
    assert fct_cross(["a"], ["b"]).levels == ["a/b"]


def test_fct_cross_errors():
    with pytest.raises(LengthMismatchError):
        fct_cross(["a", "b"], ["a"])
    assert len(fct_cross()) == 0
