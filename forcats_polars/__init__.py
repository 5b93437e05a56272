"""R's factors and forcats, for polars"""
from datar import get_option, options, options_context  # noqa: F401

from .api.base import *  # noqa: F401, F403
from .api.forcats import *  # noqa: F401, F403
from .errors import (  # noqa: F401
    FactorError,
    InvalidLevelsError,
    LengthMismatchError,
    UnknownLevelError,
)
from .factor import Factor  # noqa: F401
from .plugin import add_options
from .version import __version__  # noqa: F401

add_options()
