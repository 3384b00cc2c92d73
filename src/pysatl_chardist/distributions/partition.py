"""
Interval Partitions
===================

Weighted decomposition of an alphabet into half-open intervals.

- :class:`IntervalPartition` — immutable, canonical, sorted partition of the
  whole code point domain; every code point lies in exactly one interval.
- :class:`Refinement` — common refinement of two partitions carrying the
  weight of each operand on every sub-interval.
- :func:`parse_range_pairs` — validation of caller-supplied inclusive ranges.

Notes
-----
- Gaps are materialized as zero-weight intervals, so the first interval
  always starts at code point ``0`` and the last one ends at the alphabet
  size.
- Adjacent intervals with equal weight are coalesced, which makes the
  representation unique and structural equality meaningful.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING, cast, overload

import numpy as np

from pysatl_chardist.errors import MalformedRangeSetError
from pysatl_chardist.types import BMP, Alphabet, CharRange, to_code_point

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from pysatl_chardist.types import (
        CodePoint,
        FloatArray,
        IntArray,
        RangePairs,
    )


def parse_range_pairs(pairs: RangePairs, alphabet: Alphabet = BMP) -> list[tuple[int, int]]:
    """
    Validate inclusive character ranges.

    Parameters
    ----------
    pairs : str or Sequence[tuple[str | int, str | int]]
        Either a string of alternating range bounds (``"aj"``, ``"09AZaz"``)
        or a sequence of ``(start, end)`` pairs. Bounds are inclusive.
    alphabet : Alphabet, default=BMP
        Alphabet the code points must belong to.

    Returns
    -------
    list[tuple[int, int]]
        Inclusive ``(start, end)`` code point pairs, in the supplied order.

    Raises
    ------
    MalformedRangeSetError
        If a range is inverted, ranges are unsorted or overlap, the string
        has odd length, or a bound lies outside the alphabet.
    """
    if isinstance(pairs, str):
        if len(pairs) % 2 != 0:
            raise MalformedRangeSetError(
                f"Range string must contain an even number of characters, got {len(pairs)}"
            )
        raw = [(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2)]
    else:
        raw = list(pairs)

    result: list[tuple[int, int]] = []
    prev_end = -1
    for i, pair in enumerate(raw):
        try:
            lo, hi = pair
            start, end = to_code_point(lo), to_code_point(hi)
        except (TypeError, ValueError) as exc:
            raise MalformedRangeSetError(f"Range #{i} is not a pair of characters", i) from exc

        if start not in alphabet or end not in alphabet:
            raise MalformedRangeSetError(
                f"Range #{i} [{start:#x}, {end:#x}] is outside of alphabet {alphabet}", i
            )
        if start > end:
            raise MalformedRangeSetError(
                f"Range #{i} is inverted: start {start:#x} is after end {end:#x}", i
            )
        if start <= prev_end:
            raise MalformedRangeSetError(
                f"Range #{i} starting at {start:#x} overlaps or precedes the previous range "
                f"ending at {prev_end:#x}; ranges must be sorted and disjoint",
                i,
            )
        result.append((start, end))
        prev_end = end

    return result


class IntervalPartition:
    """
    Immutable weighted partition of an alphabet.

    Interval ``i`` covers ``[starts[i], starts[i + 1])``; the last interval
    ends at ``alphabet.size``.

    Parameters
    ----------
    starts : array_like of int
        Strictly increasing interval starts; the first must be ``0``.
    weights : array_like of float
        Finite non-negative weight of each interval.
    alphabet : Alphabet, default=BMP
        The partitioned domain.

    Raises
    ------
    ValueError
        If the arrays do not describe a valid partition.
    """

    def __init__(
        self,
        starts: Iterable[int] | IntArray,
        weights: Iterable[float] | FloatArray,
        alphabet: Alphabet = BMP,
    ) -> None:
        s = np.asarray(starts, dtype=np.int64).ravel()
        w = np.asarray(weights, dtype=np.float64).ravel() + 0.0

        if s.size == 0 or s.size != w.size:
            raise ValueError("Starts and weights must be non-empty arrays of equal size")
        if s[0] != 0:
            raise ValueError("The first interval must start at code point 0")
        if s.size > 1 and not (np.diff(s) > 0).all():
            raise ValueError("Interval starts must be strictly increasing")
        if s[-1] >= alphabet.size:
            raise ValueError(f"Interval start {int(s[-1]):#x} is outside of alphabet {alphabet}")
        if not np.isfinite(w).all() or (w < 0).any():
            raise ValueError("Weights must be finite and non-negative")

        keep = np.empty(s.size, dtype=bool)
        keep[0] = True
        keep[1:] = w[1:] != w[:-1]

        self._starts = s[keep]
        self._weights = w[keep]
        self._starts.flags.writeable = False
        self._weights.flags.writeable = False
        self._alphabet = alphabet

    # --- constructors ---

    @classmethod
    def uniform(cls, alphabet: Alphabet = BMP) -> IntervalPartition:
        """Weight 1 on every code point."""
        return cls([0], [1.0], alphabet)

    @classmethod
    def zero(cls, alphabet: Alphabet = BMP) -> IntervalPartition:
        """Weight 0 on every code point."""
        return cls([0], [0.0], alphabet)

    @classmethod
    def point_mass(cls, c: CodePoint, alphabet: Alphabet = BMP) -> IntervalPartition:
        """Weight 1 on ``[c, c + 1)`` and 0 elsewhere."""
        return cls.from_ranges([(c, c)], alphabet)

    @classmethod
    def from_ranges(
        cls,
        ranges: RangePairs,
        alphabet: Alphabet = BMP,
        weight: float = 1.0,
    ) -> IntervalPartition:
        """
        Build a partition with ``weight`` inside the given ranges and 0 outside.

        Parameters
        ----------
        ranges : str or Sequence[tuple[str | int, str | int]]
            Sorted, disjoint inclusive ranges, in any form accepted by
            :func:`parse_range_pairs`.
        alphabet : Alphabet, default=BMP
            The partitioned domain.
        weight : float, default=1.0
            Weight of every code point inside the ranges.

        Raises
        ------
        MalformedRangeSetError
            If the ranges are malformed or outside of the alphabet.
        """
        starts = [0]
        weights = [0.0]
        for start, end in parse_range_pairs(ranges, alphabet):
            if start == starts[-1]:
                weights[-1] = weight
            else:
                starts.append(start)
                weights.append(weight)
            if end + 1 < alphabet.size:
                starts.append(end + 1)
                weights.append(0.0)
        return cls(starts, weights, alphabet)

    # --- accessors ---

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def starts(self) -> IntArray:
        """Read-only array of interval starts."""
        return self._starts

    @property
    def weights(self) -> FloatArray:
        """Read-only array of interval weights."""
        return self._weights

    @cached_property
    def ends(self) -> IntArray:
        """Exclusive interval ends."""
        ends = np.append(self._starts[1:], self._alphabet.size)
        ends.flags.writeable = False
        return ends

    @cached_property
    def lengths(self) -> IntArray:
        """Number of code points in each interval."""
        lengths = self.ends - self._starts
        lengths.flags.writeable = False
        return lengths

    @cached_property
    def total_mass(self) -> float:
        """Sum of ``weight * length`` over all intervals."""
        return float(np.dot(self._weights, self.lengths))

    @property
    def is_zero(self) -> bool:
        return self.total_mass == 0.0

    def __len__(self) -> int:
        return int(self._starts.size)

    def __iter__(self) -> Iterator[tuple[CharRange, float]]:
        for start, end, weight in zip(self._starts, self.ends, self._weights, strict=True):
            yield CharRange(int(start), int(end)), float(weight)

    # --- queries ---

    def _check_code_points(self, arr: np.ndarray) -> None:
        if arr.size and ((arr < 0).any() or (arr >= self._alphabet.size).any()):
            raise ValueError(f"Code point is outside of alphabet {self._alphabet}")

    @overload
    def lookup(self, c: CodePoint) -> float: ...
    @overload
    def lookup(self, c: IntArray) -> FloatArray: ...

    def lookup(self, c: CodePoint | IntArray) -> float | FloatArray:
        """
        Weight of the interval containing code point(s) ``c``.

        Raises
        ------
        ValueError
            If a code point is outside of the alphabet.
        """
        arr = np.asarray(c, dtype=np.int64)
        self._check_code_points(arr)
        idx = np.searchsorted(self._starts, arr, side="right") - 1
        result = self._weights[idx]

        if np.ndim(arr) == 0:
            return float(result)
        return cast("FloatArray", result)

    def interval_of(self, c: CodePoint) -> CharRange:
        """The interval containing code point ``c``."""
        arr = np.asarray(c, dtype=np.int64)
        self._check_code_points(arr)
        idx = int(np.searchsorted(self._starts, c, side="right")) - 1
        return CharRange(int(self._starts[idx]), int(self.ends[idx]))

    def normalized_weights(self) -> FloatArray:
        """Weights divided by total mass; all zero for a zero-mass partition."""
        mass = self.total_mass
        if mass == 0.0:
            return np.zeros_like(self._weights)
        return cast("FloatArray", self._weights / mass)

    # --- transformations ---

    def normalized(self) -> IntervalPartition:
        """Partition with unit total mass (or itself, if already normalized or zero)."""
        mass = self.total_mass
        if mass == 0.0 or mass == 1.0:
            return self
        return self.map_weights(lambda w: w / mass)

    def map_weights(self, fn: Callable[[FloatArray], FloatArray]) -> IntervalPartition:
        """Apply ``fn`` to the weight array and return the resulting partition."""
        return IntervalPartition(self._starts, fn(self._weights), self._alphabet)

    def merge(self, other: IntervalPartition) -> Refinement:
        """
        Compute the common refinement with ``other``.

        The boundaries of the result are the union of both partitions'
        boundaries. Each sub-interval carries the weight it has in ``self``
        (``left``) and in ``other`` (``right``).

        Raises
        ------
        ValueError
            If the partitions cover different alphabets.
        """
        if self._alphabet != other._alphabet:
            raise ValueError(
                f"Cannot merge partitions over different alphabets: "
                f"{self._alphabet} and {other._alphabet}"
            )
        if self is other or np.array_equal(self._starts, other._starts):
            return Refinement(self._starts, self._weights, other._weights, self._alphabet)

        starts = np.union1d(self._starts, other._starts)
        left = self._weights[np.searchsorted(self._starts, starts, side="right") - 1]
        right = other._weights[np.searchsorted(other._starts, starts, side="right") - 1]
        return Refinement(starts, left, right, self._alphabet)

    # --- comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalPartition):
            return NotImplemented
        return (
            self._alphabet == other._alphabet
            and np.array_equal(self._starts, other._starts)
            and np.array_equal(self._weights, other._weights)
        )

    def __hash__(self) -> int:
        return hash((self._alphabet, self._starts.tobytes(), self._weights.tobytes()))

    def __repr__(self) -> str:
        items = ", ".join(f"{r}: {w:g}" for r, w in self)
        return f"IntervalPartition({self._alphabet}, [{items}])"


@dataclass(frozen=True, slots=True)
class Refinement:
    """
    Common refinement of two partitions.

    Parameters
    ----------
    starts : IntArray
        Starts of the refined intervals.
    left : FloatArray
        Weight of the first operand on each refined interval.
    right : FloatArray
        Weight of the second operand on each refined interval.
    alphabet : Alphabet
        The partitioned domain.
    """

    starts: IntArray
    left: FloatArray
    right: FloatArray
    alphabet: Alphabet

    @property
    def lengths(self) -> IntArray:
        return cast("IntArray", np.diff(self.starts, append=self.alphabet.size))

    def combine(self, fn: Callable[[FloatArray, FloatArray], FloatArray]) -> IntervalPartition:
        """Build a partition whose weights are ``fn(left, right)``."""
        return IntervalPartition(self.starts, fn(self.left, self.right), self.alphabet)


__all__ = [
    "IntervalPartition",
    "Refinement",
    "parse_range_pairs",
]
