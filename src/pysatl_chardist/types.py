"""
Core Type Definitions
=====================

Fundamental types and data structures used throughout the character
distribution engine.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias, cast, overload

import numpy as np
from numpy.typing import NDArray

CodePoint: TypeAlias = int
"""Type alias for a symbol of the alphabet (an integer code point)."""

CharLike: TypeAlias = str | int
"""A code point given either as an integer or as a one-character string."""

RangePairs: TypeAlias = str | Sequence[tuple[CharLike, CharLike]]
"""Inclusive ranges, as alternating characters of a string or as pairs."""

IntArray = NDArray[np.int64]
"""Type alias for code point arrays."""

FloatArray = NDArray[np.float64]
"""Type alias for weight arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""


@dataclass(frozen=True, slots=True)
class Alphabet:
    """
    Code point domain of a text encoding.

    Parameters
    ----------
    name : str
        Human readable name.
    size : int
        Number of code points; symbols are ``0 .. size - 1``.
    """

    name: str
    size: int

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("Alphabet size must be a positive integer.")

    def __contains__(self, x: object) -> bool:
        return isinstance(x, int) and 0 <= x < self.size

    def __str__(self) -> str:
        return self.name


BMP = Alphabet(name="BMP", size=0x10000)
"""UTF-16 code units (16-bit), the default alphabet."""

UNICODE = Alphabet(name="Unicode", size=0x110000)
"""Full Unicode code space (21-bit)."""


@dataclass(frozen=True, slots=True)
class CharRange:
    """
    Half-open range of code points ``[start, end)``.

    Parameters
    ----------
    start : int
        First code point of the range.
    end : int
        Code point following the last one of the range.
    """

    start: CodePoint
    end: CodePoint

    @property
    def length(self) -> int:
        """Number of code points in the range."""
        return max(self.end - self.start, 0)

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    @property
    def last(self) -> CodePoint:
        """Last code point of the range (inclusive bound)."""
        return self.end - 1

    @overload
    def contains(self, x: CodePoint) -> bool: ...
    @overload
    def contains(self, x: IntArray) -> BoolArray: ...

    def contains(self, x: CodePoint | IntArray) -> bool | BoolArray:
        """
        Check if code point(s) fall into the range.

        Parameters
        ----------
        x : int or IntArray
            Code point(s) to check.

        Returns
        -------
        bool or BoolArray
            True for code points inside the range, False otherwise.
        """
        arr = np.asarray(x)
        result = (arr >= self.start) & (arr < self.end)

        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(CodePoint, x)))

    def __str__(self) -> str:
        if self.length == 1:
            return format_code_point(self.start)
        return f"{format_code_point(self.start)}-{format_code_point(self.last)}"


class CharClass(StrEnum):
    """Names of the predefined character classes."""

    DIGIT = "digit"
    LETTER = "letter"
    UPPER = "upper"
    LOWER = "lower"
    LETTER_OR_DIGIT = "letter_or_digit"
    WORD_CHAR = "word_char"
    WHITESPACE = "whitespace"


def to_code_point(c: Any) -> CodePoint:
    """
    Convert a character or an integer into a code point.

    Raises
    ------
    TypeError
        If ``c`` is neither an integer nor a one-character string.
    """
    if isinstance(c, str):
        if len(c) != 1:
            raise TypeError(f"Expected a single character, got {c!r}")
        return ord(c)
    if isinstance(c, int | np.integer) and not isinstance(c, bool):
        return int(c)
    raise TypeError(f"Expected a character or an integer code point, got {type(c).__name__}")


def format_code_point(c: CodePoint) -> str:
    """Printable form of a code point for diagnostics."""
    if 0x20 < c < 0x7F and chr(c) not in "[]-\\'":
        return chr(c)
    if c <= 0xFFFF:
        return f"\\u{c:04X}"
    return f"\\U{c:08X}"


__all__ = [
    "CodePoint",
    "CharLike",
    "RangePairs",
    "IntArray",
    "FloatArray",
    "BoolArray",
    "Alphabet",
    "BMP",
    "UNICODE",
    "CharRange",
    "CharClass",
    "to_code_point",
    "format_code_point",
]
