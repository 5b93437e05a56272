import pytest  # noqa: F401

from forcats_polars import (
    Factor,
    fct_drop,
    fct_expand,
    fct_explicit_na,
    options,
)

from ..conftest import assert_iterable_equal


def test_fct_expand():
    f = Factor(["a", "b"])
    out = fct_expand(f, "c", "a")
    assert out.levels == ["a", "b", "c"]
    assert_iterable_equal(out, ["a", "b"])

    out = fct_expand(f, ["z", "y"], after=0)
    assert out.levels == ["z", "y", "a", "b"]
    assert_iterable_equal(out.codes, [2, 3])
    assert_iterable_equal(out, ["a", "b"])


def test_fct_drop():
    f = Factor(["a", "c"], levels=["a", "b", "c", "d"])
    out = fct_drop(f)
    assert out.levels == ["a", "c"]
    assert_iterable_equal(out, ["a", "c"])

    out = fct_drop(f, only=["d", "a"])
    assert out.levels == ["a", "b", "c"]


def test_fct_explicit_na():
    f = Factor(["a", None, "b"])
    out = fct_explicit_na(f)
    assert out.levels == ["a", "b", "(Missing)"]
    assert_iterable_equal(out, ["a", "(Missing)", "b"])

    out = fct_explicit_na(f, na_level="a")
    assert out.levels == ["a", "b"]
    assert_iterable_equal(out, ["a", "a", "b"])

    options(na_level="NA")
    assert fct_explicit_na(f).levels == ["a", "b", "NA"]
