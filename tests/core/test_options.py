import pytest

from forcats_polars import get_option, options, options_context
from forcats_polars.plugin import add_options


def test_options():
    assert options()["other_level"] == "Other"

    old = options(other_level="Others", cross_sep="_", _return=True)
    assert old["other_level"] == "Other"
    assert old["cross_sep"] == ":"
    assert get_option("other_level") == "Others"
    assert get_option("cross_sep") == "_"

    options(old)
    assert get_option("other_level") == "Other"


def test_options_context():
    with options_context(na_level="NA"):
        assert get_option("na_level") == "NA"
    assert get_option("na_level") == "(Missing)"


def test_add_options_keeps_values_set():
    options(other_level="Rest")
    add_options()
    assert get_option("other_level") == "Rest"


def test_unknown_option():
    with pytest.raises(KeyError):
        options(nonexist=1)
    assert get_option("nonexist") is None
    assert get_option("nonexist", "x") == "x"
