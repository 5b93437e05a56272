"""Exceptions raised by forcats_polars"""


class FactorError(Exception):
    """Base class of the errors raised when manipulating factors"""


class InvalidLevelsError(FactorError, ValueError):
    """When a list of levels contains duplicated labels"""


class LengthMismatchError(FactorError, ValueError):
    """When new labels don't pair up with the existing levels"""


class UnknownLevelError(FactorError, KeyError):
    """When a label is not one of the levels of a factor"""

    def __str__(self) -> str:
        # KeyError quotes its message
        return str(self.args[0]) if self.args else ""
