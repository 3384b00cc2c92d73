"""
Sampling
========

Inverse-CDF sampling over interval partitions:

- :class:`RandomSource` — protocol for caller-supplied uniform variates.
- :func:`default_random_source` — per-thread NumPy generator.
- :class:`IntervalSampler` — cumulative-weight index over the nonzero
  intervals of a partition.
- :class:`CharSample` — array-backed container of drawn code points.

Notes
-----
- The random source is never owned by a distribution; passing a seeded
  generator makes sampling reproducible.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import threading
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from pysatl_chardist.errors import EmptySupportError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pysatl_chardist.distributions.partition import IntervalPartition
    from pysatl_chardist.types import CodePoint, IntArray


@runtime_checkable
class RandomSource(Protocol):
    """
    Source of uniform variates in ``[0, 1)``.

    Both :class:`numpy.random.Generator` and :class:`random.Random`
    satisfy this protocol.
    """

    def random(self) -> float: ...


_thread_local = threading.local()


def default_random_source() -> np.random.Generator:
    """
    Return the generator of the calling thread, creating it on first use.

    Returns
    -------
    numpy.random.Generator
        A generator that is never shared between threads.
    """
    rng: np.random.Generator | None = getattr(_thread_local, "rng", None)
    if rng is None:
        rng = np.random.default_rng()
        _thread_local.rng = rng
    return rng


class CharSample:
    """
    Array-backed container of sampled code points.

    Parameters
    ----------
    data : numpy.ndarray
        1D integer array of code points.

    Raises
    ------
    ValueError
        If data is not 1D.
    """

    data: IntArray

    def __init__(self, data: IntArray) -> None:
        if data.ndim != 1:
            raise ValueError("CharSample expects 1D array of code points.")
        self.data = data

    def __len__(self) -> int:
        """Return the number of samples."""
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[CodePoint]:
        for c in self.data:
            yield int(c)

    @property
    def array(self) -> IntArray:
        """Return the backing array."""
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        return (len(self),)

    def to_string(self) -> str:
        """Join the sampled code points into a string."""
        return "".join(map(chr, self))


class IntervalSampler:
    """
    Inverse-CDF sampler over the nonzero intervals of a partition.

    The cumulative table is ``cum[i] = cum[i - 1] + weight(i) * length(i)``.
    A variate ``u`` in ``[0, total_mass)`` selects the first interval whose
    cumulative mass exceeds ``u``; the offset of ``u`` inside that interval,
    divided by its weight, selects the code point.

    Parameters
    ----------
    partition : IntervalPartition
        Partition to sample from.
    """

    __slots__ = ("_cum", "_starts", "_ends", "_weights", "total_mass")

    def __init__(self, partition: IntervalPartition) -> None:
        mask = partition.weights > 0
        self._starts = partition.starts[mask]
        self._ends = partition.ends[mask]
        self._weights = partition.weights[mask]
        self._cum = np.cumsum(self._weights * (self._ends - self._starts))
        self.total_mass = float(self._cum[-1]) if self._cum.size else 0.0

    def _check_nonempty(self) -> None:
        if self.total_mass == 0.0:
            raise EmptySupportError("Cannot sample from a distribution with zero total mass")

    def _locate(self, u: np.ndarray) -> IntArray:
        idx = np.searchsorted(self._cum, u, side="right")
        idx = np.minimum(idx, self._cum.size - 1)

        prev = np.where(idx > 0, self._cum[idx - 1], 0.0)
        offset = np.floor((u - prev) / self._weights[idx]).astype(np.int64)
        points = self._starts[idx] + np.maximum(offset, 0)
        return np.minimum(points, self._ends[idx] - 1)

    def draw(self, source: RandomSource) -> CodePoint:
        """
        Draw a single code point.

        Raises
        ------
        EmptySupportError
            If the partition has zero total mass.
        """
        self._check_nonempty()
        u = np.asarray(source.random() * self.total_mass)
        return int(self._locate(u))

    def draw_n(self, n: int, source: RandomSource) -> CharSample:
        """
        Draw ``n`` independent code points.

        Raises
        ------
        ValueError
            If ``n`` is negative.
        EmptySupportError
            If the partition has zero total mass.
        """
        if n < 0:
            raise ValueError(f"Number of samples must be non-negative, got {n}")
        self._check_nonempty()
        if isinstance(source, np.random.Generator):
            u = source.random(n)
        else:
            u = np.fromiter((source.random() for _ in range(n)), dtype=np.float64, count=n)
        return CharSample(self._locate(u * self.total_mass))


__all__ = [
    "RandomSource",
    "default_random_source",
    "CharSample",
    "IntervalSampler",
]
