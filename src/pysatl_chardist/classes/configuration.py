"""
Named Character Classes
=======================

Process-wide distributions for the predefined character classes:

- :func:`digit`, :func:`letter`, :func:`upper`, :func:`lower`,
  :func:`letter_or_digit`, :func:`word_char`, :func:`whitespace`;
- :func:`named_class` — lookup by :class:`~pysatl_chardist.types.CharClass`.

Notes
-----
- Each class partition is built once per alphabet from the range tables in
  :mod:`.ranges` and cached. Partitions are immutable, so concurrent readers
  need no synchronization.
- Every call returns a new distribution sharing the cached partition;
  in-place operations on it replace its partition and leave the cache and
  other callers untouched.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from functools import lru_cache

from pysatl_chardist.classes.ranges import CLASS_TABLES, clip_ranges
from pysatl_chardist.distributions.distribution import DiscreteCharDistribution
from pysatl_chardist.distributions.partition import IntervalPartition
from pysatl_chardist.types import BMP, Alphabet, CharClass

logger = logging.getLogger(__name__)


def class_partition(name: CharClass | str, alphabet: Alphabet = BMP) -> IntervalPartition:
    """
    Build (once) the partition of a named character class.

    Parameters
    ----------
    name : CharClass or str
        The character class.
    alphabet : Alphabet, default=BMP
        Alphabet of the partition; table ranges beyond it are clipped.

    Returns
    -------
    IntervalPartition
        Immutable partition with weight 1 on the members of the class.
    """
    return _build_class_partition(CharClass(name), alphabet)


@lru_cache(maxsize=None)
def _build_class_partition(name: CharClass, alphabet: Alphabet) -> IntervalPartition:
    ranges = clip_ranges(CLASS_TABLES[name], alphabet)
    partition = IntervalPartition.from_ranges(ranges, alphabet)
    logger.debug(
        "Built character class %s over %s: %d ranges, %d code points",
        name,
        alphabet,
        len(ranges),
        int(partition.total_mass),
    )
    return partition


def named_class(name: CharClass | str, alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
    """
    Uniform distribution over the members of a named character class.

    Raises
    ------
    ValueError
        If ``name`` is not a known class.
    """
    return DiscreteCharDistribution(class_partition(name, alphabet))


def digit(alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
    """Uniform distribution over decimal digits."""
    return named_class(CharClass.DIGIT, alphabet)


def letter(alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
    """Uniform distribution over letters."""
    return named_class(CharClass.LETTER, alphabet)


def upper(alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
    """Uniform distribution over uppercase letters."""
    return named_class(CharClass.UPPER, alphabet)


def lower(alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
    """Uniform distribution over lowercase letters."""
    return named_class(CharClass.LOWER, alphabet)


def letter_or_digit(alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
    return named_class(CharClass.LETTER_OR_DIGIT, alphabet)


def word_char(alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
    """Uniform distribution over word characters: letters, digits, ``_`` and joiners."""
    return named_class(CharClass.WORD_CHAR, alphabet)


def whitespace(alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
    return named_class(CharClass.WHITESPACE, alphabet)


def reset_named_classes() -> None:
    """
    Reset the cached class partitions.
    """
    _build_class_partition.cache_clear()
