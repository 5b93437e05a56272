"""Hooks for datar to load forcats_polars as a backend"""
from datar.core.options import add_option
from datar.core.plugin import plugin

# For simplug to retrieve the version
from .version import __version__


def add_options():
    """Add the options of the forcats functions to datar's options"""
    # label of the lumped levels, fct_other() and fct_lump_*()
    add_option("other_level", "Other")
    # label of the missing values, fct_explicit_na()
    add_option("na_level", "(Missing)")
    # separator of the combined labels, fct_cross()
    add_option("cross_sep", ":")


@plugin.impl
def setup():
    add_options()


@plugin.impl
def base_api():
    from .api.base import factor  # noqa: F401


@plugin.impl
def forcats_api():
    from .api.forcats import (  # noqa: F401
        fct_multi,
        lvl_addrm,
        lvl_order,
        lvl_value,
        lvls,
        misc,
    )


@plugin.impl
def get_versions():
    import polars

    out = {
        "forcats-polars": __version__,
        "polars": polars.__version__,
    }

    return out
