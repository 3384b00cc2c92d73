from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_chardist.types import CharRange

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pysatl_chardist.distributions.partition import IntervalPartition
    from pysatl_chardist.types import BoolArray, CodePoint, IntArray


@runtime_checkable
class DiscreteSupport(Protocol):
    @overload
    def contains(self, x: CodePoint) -> bool: ...
    @overload
    def contains(self, x: IntArray) -> BoolArray: ...

    def iter_points(self) -> Iterator[CodePoint]: ...

    def iter_leq(self, x: CodePoint) -> Iterator[CodePoint]: ...

    def prev(self, x: CodePoint) -> CodePoint | None: ...


class RangeDiscreteSupport(DiscreteSupport):
    """
    Set of code points with positive weight, stored as sorted disjoint ranges.

    Parameters
    ----------
    partition : IntervalPartition
        Partition whose positive-weight intervals form the support.
    """

    __slots__ = ("_ends", "_starts")

    def __init__(self, partition: IntervalPartition) -> None:
        mask = partition.weights > 0
        self._starts = partition.starts[mask]
        self._ends = partition.ends[mask]

    @overload
    def contains(self, x: CodePoint) -> bool: ...
    @overload
    def contains(self, x: IntArray) -> BoolArray: ...

    def contains(self, x: CodePoint | IntArray) -> bool | BoolArray:
        arr = np.asarray(x)
        if self.is_empty:
            result = np.zeros(arr.shape, dtype=bool)
        else:
            idx = np.searchsorted(self._starts, arr, side="right") - 1
            in_bounds = idx >= 0
            idx_clipped = np.maximum(idx, 0)
            result = in_bounds & (arr < self._ends[idx_clipped])

        if np.ndim(arr) == 0:
            return bool(result)
        return cast("BoolArray", result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast("CodePoint", x)))

    def __len__(self) -> int:
        return int((self._ends - self._starts).sum())

    @property
    def is_empty(self) -> bool:
        return self._starts.size == 0

    def iter_ranges(self) -> Iterator[CharRange]:
        for start, end in zip(self._starts, self._ends, strict=True):
            yield CharRange(int(start), int(end))

    def iter_points(self) -> Iterator[CodePoint]:
        for r in self.iter_ranges():
            yield from range(r.start, r.end)

    def iter_leq(self, x: CodePoint) -> Iterator[CodePoint]:
        for r in self.iter_ranges():
            if r.start > x:
                return
            yield from range(r.start, min(r.end, x + 1))

    def prev(self, x: CodePoint) -> CodePoint | None:
        idx = int(np.searchsorted(self._starts, x, side="left")) - 1
        if x - 1 in self:
            return x - 1
        if idx < 0:
            return None
        return int(self._ends[idx]) - 1

    def first(self) -> CodePoint | None:
        if self.is_empty:
            return None
        return int(self._starts[0])

    def last(self) -> CodePoint | None:
        if self.is_empty:
            return None
        return int(self._ends[-1]) - 1

    def next(self, current: CodePoint) -> CodePoint | None:
        if current + 1 in self:
            return current + 1
        idx = int(np.searchsorted(self._starts, current, side="right"))
        if idx == self._starts.size:
            return None
        return int(self._starts[idx])

    __iter__ = iter_points


__all__ = [
    "DiscreteSupport",
    "RangeDiscreteSupport",
]
