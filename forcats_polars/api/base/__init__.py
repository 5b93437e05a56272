"""Factor functions from R-base"""
from datar.apis.base import (  # noqa: F401
    as_factor,
    droplevels,
    is_factor,
    levels,
    nlevels,
)

from . import factor  # noqa: F401

__all__ = ["as_factor", "droplevels", "is_factor", "levels", "nlevels"]
