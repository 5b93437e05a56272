import pytest

from forcats_polars import options

SENTINEL = 85258525.85258525


@pytest.fixture(autouse=True)
def reset_options():
    old = options()
    yield
    options(old)


def assert_iterable_equal(x, y, na=SENTINEL, approx=False):
    from forcats_polars.utils import is_null

    x = [na if is_null(elt) else elt for elt in x]
    y = [na if is_null(elt) else elt for elt in y]
    if approx is True:
        x = pytest.approx(x)
    elif approx:
        x = pytest.approx(x, rel=approx)
    assert x == y, f"{x} != {y}"


def assert_factor_equal(x, y, na=8525.8525):
    assert_iterable_equal(x, y, na=na)
    assert_iterable_equal(x.levels, y.levels, na=na)


def assert_(x):
    assert x, f"{x} is not True"


def assert_not(x):
    assert not x, f"{x} is not False"


def assert_equal(x, y, approx=False):
    if approx is True:
        x = pytest.approx(x)
    elif approx:
        x = pytest.approx(x, rel=approx)
    assert x == y, f"{x} != {y}"
