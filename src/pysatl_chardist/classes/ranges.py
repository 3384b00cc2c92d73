"""
Character Class Tables
======================

Hand-maintained inclusive ``(start, end)`` code point ranges of the
predefined character classes. Every table is sorted and disjoint.

Notes
-----
- Tables cover the Basic Multilingual Plane. Scripts are listed block by
  block; cased Latin and Cyrillic extension blocks alternate upper and
  lower case between neighbouring code points.
- Composite classes are unions of the primary tables.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Iterable
from typing import TypeAlias

from pysatl_chardist.types import Alphabet, CharClass

RangeTable: TypeAlias = tuple[tuple[int, int], ...]


def _alternating(first: int, last: int) -> list[tuple[int, int]]:
    """Single code point ranges ``first, first + 2, ..., last``."""
    return [(c, c) for c in range(first, last + 1, 2)]


def union_ranges(*tables: Iterable[tuple[int, int]]) -> RangeTable:
    """
    Union of inclusive range tables.

    Overlapping and adjacent ranges are coalesced, so the result is sorted
    and disjoint.
    """
    merged: list[tuple[int, int]] = []
    for start, end in sorted(r for table in tables for r in table):
        if merged and start <= merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return tuple(merged)


def clip_ranges(table: RangeTable, alphabet: Alphabet) -> list[tuple[int, int]]:
    """Drop or shorten ranges that do not fit into ``alphabet``."""
    limit = alphabet.size - 1
    return [(start, min(end, limit)) for start, end in table if start <= limit]


DIGIT: RangeTable = (
    (0x0030, 0x0039),  # ASCII
    (0x0660, 0x0669),  # Arabic-Indic
    (0x06F0, 0x06F9),  # Extended Arabic-Indic
    (0x07C0, 0x07C9),  # NKo
    (0x0966, 0x096F),  # Devanagari
    (0x09E6, 0x09EF),  # Bengali
    (0x0A66, 0x0A6F),  # Gurmukhi
    (0x0AE6, 0x0AEF),  # Gujarati
    (0x0B66, 0x0B6F),  # Oriya
    (0x0BE6, 0x0BEF),  # Tamil
    (0x0C66, 0x0C6F),  # Telugu
    (0x0CE6, 0x0CEF),  # Kannada
    (0x0D66, 0x0D6F),  # Malayalam
    (0x0DE6, 0x0DEF),  # Sinhala
    (0x0E50, 0x0E59),  # Thai
    (0x0ED0, 0x0ED9),  # Lao
    (0x0F20, 0x0F29),  # Tibetan
    (0x1040, 0x1049),  # Myanmar
    (0x1090, 0x1099),  # Myanmar Shan
    (0x17E0, 0x17E9),  # Khmer
    (0x1810, 0x1819),  # Mongolian
    (0x1946, 0x194F),  # Limbu
    (0x19D0, 0x19D9),  # New Tai Lue
    (0x1A80, 0x1A89),  # Tai Tham Hora
    (0x1A90, 0x1A99),  # Tai Tham Tham
    (0x1B50, 0x1B59),  # Balinese
    (0x1BB0, 0x1BB9),  # Sundanese
    (0x1C40, 0x1C49),  # Lepcha
    (0x1C50, 0x1C59),  # Ol Chiki
    (0xA620, 0xA629),  # Vai
    (0xA8D0, 0xA8D9),  # Saurashtra
    (0xA900, 0xA909),  # Kayah Li
    (0xA9D0, 0xA9D9),  # Javanese
    (0xA9F0, 0xA9F9),  # Myanmar Tai Laing
    (0xAA50, 0xAA59),  # Cham
    (0xABF0, 0xABF9),  # Meetei Mayek
    (0xFF10, 0xFF19),  # Fullwidth
)

UPPER: RangeTable = (
    (0x0041, 0x005A),
    (0x00C0, 0x00D6),
    (0x00D8, 0x00DE),
    # Latin Extended-A
    *_alternating(0x0100, 0x0136),
    *_alternating(0x0139, 0x0147),
    *_alternating(0x014A, 0x0176),
    (0x0178, 0x0179),
    (0x017B, 0x017B),
    (0x017D, 0x017D),
    # Greek
    (0x0386, 0x0386),
    (0x0388, 0x038A),
    (0x038C, 0x038C),
    (0x038E, 0x038F),
    (0x0391, 0x03A1),
    (0x03A3, 0x03AB),
    # Cyrillic
    (0x0400, 0x042F),
    *_alternating(0x0460, 0x0480),
    *_alternating(0x048A, 0x04BE),
    # Armenian
    (0x0531, 0x0556),
    # Georgian
    (0x10A0, 0x10C5),
    # Latin Extended Additional
    *_alternating(0x1E00, 0x1E94),
    *_alternating(0x1EA0, 0x1EFE),
    # Fullwidth
    (0xFF21, 0xFF3A),
)

LOWER: RangeTable = (
    (0x0061, 0x007A),
    (0x00B5, 0x00B5),
    (0x00DF, 0x00F6),
    (0x00F8, 0x00FF),
    # Latin Extended-A
    *_alternating(0x0101, 0x0137),
    (0x0138, 0x0138),
    *_alternating(0x013A, 0x0148),
    (0x0149, 0x0149),
    *_alternating(0x014B, 0x0177),
    (0x017A, 0x017A),
    (0x017C, 0x017C),
    (0x017E, 0x0180),
    # Greek
    (0x03AC, 0x03CE),
    # Cyrillic
    (0x0430, 0x045F),
    *_alternating(0x0461, 0x0481),
    *_alternating(0x048B, 0x04BF),
    # Armenian
    (0x0561, 0x0587),
    # Latin Extended Additional
    *_alternating(0x1E01, 0x1E95),
    (0x1E96, 0x1E9D),
    *_alternating(0x1EA1, 0x1EFF),
    # Fullwidth
    (0xFF41, 0xFF5A),
)

OTHER_LETTER: RangeTable = (
    (0x00AA, 0x00AA),
    (0x00BA, 0x00BA),
    (0x0100, 0x024F),  # Latin Extended-A and B
    (0x0250, 0x02AF),  # IPA Extensions
    (0x048A, 0x052F),  # Cyrillic
    (0x05D0, 0x05EA),  # Hebrew
    (0x05F0, 0x05F2),
    (0x0620, 0x064A),  # Arabic
    (0x066E, 0x066F),
    (0x0671, 0x06D3),
    (0x0904, 0x0939),  # Devanagari
    (0x0985, 0x098C),  # Bengali
    (0x0E01, 0x0E30),  # Thai
    (0x10D0, 0x10FA),  # Georgian
    (0x1100, 0x11FF),  # Hangul Jamo
    (0x1E00, 0x1EFF),  # Latin Extended Additional
    (0x3041, 0x3096),  # Hiragana
    (0x30A1, 0x30FA),  # Katakana
    (0x3400, 0x4DBF),  # CJK Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0xAC00, 0xD7A3),  # Hangul Syllables
    (0xF900, 0xFA6D),  # CJK Compatibility Ideographs
    (0xFF66, 0xFF9F),  # Halfwidth Katakana
)

CONNECTOR_PUNCTUATION: RangeTable = (
    (0x005F, 0x005F),
    (0x203F, 0x2040),
    (0x2054, 0x2054),
    (0xFE33, 0xFE34),
    (0xFE4D, 0xFE4F),
    (0xFF3F, 0xFF3F),
)

COMBINING_MARKS: RangeTable = ((0x0300, 0x036F),)

WHITESPACE: RangeTable = (
    (0x0009, 0x000D),
    (0x0020, 0x0020),
    (0x0085, 0x0085),
    (0x00A0, 0x00A0),
    (0x1680, 0x1680),
    (0x2000, 0x200A),
    (0x2028, 0x2029),
    (0x202F, 0x202F),
    (0x205F, 0x205F),
    (0x3000, 0x3000),
)

LETTER: RangeTable = union_ranges(UPPER, LOWER, OTHER_LETTER)

LETTER_OR_DIGIT: RangeTable = union_ranges(LETTER, DIGIT)

WORD_CHAR: RangeTable = union_ranges(LETTER_OR_DIGIT, CONNECTOR_PUNCTUATION, COMBINING_MARKS)

CLASS_TABLES: dict[CharClass, RangeTable] = {
    CharClass.DIGIT: DIGIT,
    CharClass.LETTER: LETTER,
    CharClass.UPPER: UPPER,
    CharClass.LOWER: LOWER,
    CharClass.LETTER_OR_DIGIT: LETTER_OR_DIGIT,
    CharClass.WORD_CHAR: WORD_CHAR,
    CharClass.WHITESPACE: WHITESPACE,
}


__all__ = [
    "RangeTable",
    "union_ranges",
    "clip_ranges",
    "DIGIT",
    "UPPER",
    "LOWER",
    "LETTER",
    "LETTER_OR_DIGIT",
    "WORD_CHAR",
    "WHITESPACE",
    "CLASS_TABLES",
]
