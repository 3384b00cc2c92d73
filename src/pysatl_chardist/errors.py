"""
Exceptions raised by the character distribution engine.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class CharDistributionError(Exception):
    """Base class for errors raised by this package."""


class MalformedRangeSetError(CharDistributionError, ValueError):
    """
    Raised when supplied character ranges are inverted, unsorted,
    overlapping, incomplete or outside the alphabet.

    Parameters
    ----------
    message : str
        Description of the problem.
    index : int or None
        Position of the offending range in the supplied sequence.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class EmptySupportError(CharDistributionError, RuntimeError):
    """Raised when sampling from a distribution with zero total mass."""


__all__ = [
    "CharDistributionError",
    "MalformedRangeSetError",
    "EmptySupportError",
]
