"""
Character Distributions
=======================

This module defines :class:`DiscreteCharDistribution`, a distribution over the
code points of an alphabet backed by an :class:`IntervalPartition`.

- Constructors: point mass, uniform, uniform over ranges or over a set of
  characters, zero (improper) distribution.
- Queries: exact log-probabilities, point mass and uniformity checks,
  support view, mode.
- In-place algebra: mixture (:meth:`~DiscreteCharDistribution.set_to_sum`),
  product, ratio and power, as used by message passing.
- Comparison primitives: :meth:`~DiscreteCharDistribution.max_diff` with a
  caller-chosen tolerance and exact structural equality/hash.

Notes
-----
- The partition is an immutable value. Mutating operations replace it, so an
  operand may alias the receiver and distributions built by the
  named-class factory can share one partition safely.
- Weights are not required to be normalized; every query divides by the
  total mass. Algebraic operations rescale their result to unit mass.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import xlogy

from pysatl_chardist.distributions.partition import IntervalPartition
from pysatl_chardist.distributions.sampling import IntervalSampler, default_random_source
from pysatl_chardist.distributions.support import RangeDiscreteSupport
from pysatl_chardist.types import BMP, format_code_point, to_code_point

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from pysatl_chardist.distributions.sampling import CharSample, RandomSource
    from pysatl_chardist.types import (
        Alphabet,
        CharLike,
        CharRange,
        CodePoint,
        FloatArray,
        IntArray,
        RangePairs,
    )

logger = logging.getLogger(__name__)


def _rescaled(partition: IntervalPartition) -> IntervalPartition:
    """Normalize a combination result, turning underflowed mass into zero."""
    mass = partition.total_mass
    if mass == 0.0 or not math.isfinite(mass):
        if (partition.weights > 0).any():
            logger.debug("Total mass %r is not representable, result set to zero", mass)
        return IntervalPartition.zero(partition.alphabet)
    return partition.normalized()


def _peak_scaled(partition: IntervalPartition) -> IntervalPartition:
    """Divide weights by the largest one, so subnormal weights are not flushed to zero."""
    peak = float(partition.weights.max())
    if peak == 0.0 or peak == 1.0:
        return partition
    return partition.map_weights(lambda w: w / peak)


class DiscreteCharDistribution:
    """
    Distribution over the code points of an alphabet.

    Parameters
    ----------
    partition : IntervalPartition or None, default=None
        Backing partition. ``None`` gives the uniform distribution over
        ``alphabet``.
    alphabet : Alphabet or None, default=None
        Alphabet of the distribution; ``BMP`` when neither argument gives one.

    Raises
    ------
    ValueError
        If ``alphabet`` differs from the alphabet of ``partition``.
    """

    __slots__ = ("_partition", "_sampler")

    def __init__(
        self, partition: IntervalPartition | None = None, alphabet: Alphabet | None = None
    ) -> None:
        if partition is None:
            partition = IntervalPartition.uniform(BMP if alphabet is None else alphabet)
        elif alphabet is not None and alphabet != partition.alphabet:
            raise ValueError(
                f"Partition covers alphabet {partition.alphabet}, not {alphabet}"
            )
        self._partition = partition
        self._sampler: IntervalSampler | None = None

    # --- constructors ---

    @classmethod
    def from_partition(cls, partition: IntervalPartition) -> DiscreteCharDistribution:
        return cls(partition)

    @classmethod
    def uniform(cls, alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
        """Uniform distribution over the whole alphabet."""
        return cls(IntervalPartition.uniform(alphabet))

    @classmethod
    def zero(cls, alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
        """Improper distribution assigning zero weight to every code point."""
        return cls(IntervalPartition.zero(alphabet))

    @classmethod
    def point_mass(cls, c: CharLike, alphabet: Alphabet = BMP) -> DiscreteCharDistribution:
        """
        Distribution assigning all probability to a single code point.

        Raises
        ------
        ValueError
            If ``c`` is outside of the alphabet.
        """
        point = to_code_point(c)
        if point not in alphabet:
            raise ValueError(f"Code point {point:#x} is outside of alphabet {alphabet}")
        return cls(IntervalPartition.point_mass(point, alphabet))

    @classmethod
    def uniform_in_ranges(
        cls, pairs: RangePairs, alphabet: Alphabet = BMP
    ) -> DiscreteCharDistribution:
        """
        Uniform distribution over the union of the given inclusive ranges.

        Parameters
        ----------
        pairs : str or Sequence[tuple[str | int, str | int]]
            Sorted, disjoint inclusive ranges. A string is read as
            alternating bounds, so ``"bdgi"`` means ``[b-d]`` and ``[g-i]``.
        alphabet : Alphabet, default=BMP
            Alphabet of the distribution.

        Raises
        ------
        MalformedRangeSetError
            If the ranges are inverted, unsorted or overlapping.
        """
        return cls(IntervalPartition.from_ranges(pairs, alphabet))

    @classmethod
    def uniform_in_range(
        cls, start: CharLike, end: CharLike, alphabet: Alphabet = BMP
    ) -> DiscreteCharDistribution:
        """Uniform distribution over the inclusive range ``[start, end]``."""
        return cls.uniform_in_ranges([(start, end)], alphabet)

    @classmethod
    def uniform_of(
        cls, chars: Iterable[CharLike], alphabet: Alphabet = BMP
    ) -> DiscreteCharDistribution:
        """
        Uniform distribution over a set of characters.

        Unlike :meth:`uniform_in_ranges`, the characters may come in any order
        and may repeat.
        """
        points = sorted({to_code_point(c) for c in chars})
        ranges: list[tuple[int, int]] = []
        for p in points:
            if ranges and ranges[-1][1] + 1 == p:
                ranges[-1] = (ranges[-1][0], p)
            else:
                ranges.append((p, p))
        return cls.uniform_in_ranges(ranges, alphabet)

    # --- accessors ---

    @property
    def partition(self) -> IntervalPartition:
        """The backing (immutable) partition."""
        return self._partition

    @property
    def alphabet(self) -> Alphabet:
        return self._partition.alphabet

    @property
    def total_mass(self) -> float:
        return self._partition.total_mass

    @property
    def is_zero(self) -> bool:
        """Whether every code point has zero weight."""
        return self._partition.is_zero

    @property
    def is_uniform(self) -> bool:
        """Whether all code points of the alphabet are equally probable."""
        return len(self._partition) == 1 and not self.is_zero

    @property
    def is_point_mass(self) -> bool:
        return self._point_index() is not None

    @property
    def point(self) -> CodePoint:
        """
        The code point of a point mass distribution.

        Raises
        ------
        ValueError
            If the distribution is not a point mass.
        """
        idx = self._point_index()
        if idx is None:
            raise ValueError("Distribution is not a point mass")
        return int(self._partition.starts[idx])

    def _point_index(self) -> int | None:
        nonzero = np.flatnonzero(self._partition.weights)
        if nonzero.size != 1 or self._partition.lengths[nonzero[0]] != 1:
            return None
        return int(nonzero[0])

    @property
    def support(self) -> RangeDiscreteSupport:
        """Code points with strictly positive probability."""
        return RangeDiscreteSupport(self._partition)

    @property
    def support_size(self) -> int:
        p = self._partition
        return int(p.lengths[p.weights > 0].sum())

    @property
    def mode(self) -> CodePoint:
        """
        The first most probable code point.

        Raises
        ------
        ValueError
            If the distribution has zero mass.
        """
        if self.is_zero:
            raise ValueError("Zero distribution has no mode")
        return int(self._partition.starts[int(np.argmax(self._partition.weights))])

    def ranges(self) -> Iterator[tuple[CharRange, float]]:
        """Yield the nonzero intervals with the probability of each code point in them."""
        mass = self.total_mass
        for r, weight in self._partition:
            if weight > 0:
                yield r, weight / mass

    # --- point queries ---

    def get_log_prob(self, c: CharLike) -> float:
        """
        Natural logarithm of the probability of ``c``.

        Returns exactly ``-inf`` for code points with zero weight and exactly
        ``0.0`` at the point of a point mass.

        Raises
        ------
        ValueError
            If ``c`` is outside of the alphabet.
        """
        weight = self._partition.lookup(to_code_point(c))
        if weight == 0.0:
            return -math.inf
        return math.log(weight) - math.log(self.total_mass)

    def get_prob(self, c: CharLike) -> float:
        weight = self._partition.lookup(to_code_point(c))
        if weight == 0.0:
            return 0.0
        return weight / self.total_mass

    def get_log_prob_many(self, points: IntArray) -> FloatArray:
        """Vectorized :meth:`get_log_prob` over an array of code points."""
        weights = self._partition.lookup(np.asarray(points, dtype=np.int64))
        if self.is_zero:
            return cast("FloatArray", np.full(np.shape(weights), -np.inf))
        with np.errstate(divide="ignore"):
            return cast("FloatArray", np.log(weights) - math.log(self.total_mass))

    # --- in-place operations ---

    def _replace(self, partition: IntervalPartition) -> None:
        self._partition = partition
        self._sampler = None

    def set_to(self, other: DiscreteCharDistribution) -> None:
        """Make this distribution equal to ``other``."""
        self._replace(other._partition)

    def set_to_uniform(self) -> None:
        self._replace(IntervalPartition.uniform(self.alphabet))

    def set_point(self, c: CharLike) -> None:
        """Turn this distribution into a point mass at ``c``."""
        self._replace(DiscreteCharDistribution.point_mass(c, self.alphabet)._partition)

    def set_to_sum(
        self,
        weight1: float,
        dist1: DiscreteCharDistribution,
        weight2: float,
        dist2: DiscreteCharDistribution,
    ) -> None:
        """
        Set this distribution to the mixture ``weight1 * dist1 + weight2 * dist2``.

        Each operand is normalized before weighting, so the result is a proper
        distribution when the weights sum to one. Zero-mass operands
        contribute nothing.

        Parameters
        ----------
        weight1, weight2 : float
            Non-negative mixture weights.
        dist1, dist2 : DiscreteCharDistribution
            Mixture components; either may be ``self``.

        Raises
        ------
        ValueError
            If a weight is negative or not finite, or the alphabets differ.
        """
        if not (math.isfinite(weight1) and math.isfinite(weight2)):
            raise ValueError("Mixture weights must be finite")
        if weight1 < 0 or weight2 < 0:
            raise ValueError(f"Mixture weights must be non-negative, got {weight1}, {weight2}")

        a = dist1._partition.normalized()
        b = dist2._partition.normalized()
        self._replace(a.merge(b).combine(lambda x, y: weight1 * x + weight2 * y))

    def set_to_product(self, a: DiscreteCharDistribution, b: DiscreteCharDistribution) -> None:
        """
        Set this distribution to the normalized pointwise product of ``a`` and ``b``.

        Disjoint supports, or a product whose mass underflows, give the zero
        distribution.
        """
        merged = _peak_scaled(a._partition).merge(_peak_scaled(b._partition))
        self._replace(_rescaled(merged.combine(np.multiply)))

    def set_to_ratio(
        self, numerator: DiscreteCharDistribution, denominator: DiscreteCharDistribution
    ) -> None:
        """
        Set this distribution to the normalized pointwise ratio.

        ``0 / 0`` is taken to be ``0``.

        Raises
        ------
        ZeroDivisionError
            If the numerator has weight where the denominator has none.
        """
        merged = _peak_scaled(numerator._partition).merge(_peak_scaled(denominator._partition))
        if ((merged.left > 0) & (merged.right == 0)).any():
            raise ZeroDivisionError("Denominator has zero weight where numerator is positive")

        def ratio(x: FloatArray, y: FloatArray) -> FloatArray:
            return cast("FloatArray", np.divide(x, y, out=np.zeros_like(x), where=y > 0))

        self._replace(_rescaled(merged.combine(ratio)))

    def set_to_power(self, dist: DiscreteCharDistribution, exponent: float) -> None:
        """
        Raise every positive weight of ``dist`` to ``exponent`` and normalize.

        Code points with zero weight stay excluded for any exponent. Powers
        are taken in log space relative to the largest powered weight, so
        large exponents of either sign keep the support.

        Raises
        ------
        ValueError
            If ``exponent`` is not finite.
        """
        if not math.isfinite(exponent):
            raise ValueError(f"Exponent must be finite, got {exponent}")
        source = dist._partition.normalized()
        if exponent == 1.0:
            self._replace(source)
            return

        weights = source.weights
        positive = weights > 0
        if not positive.any():
            self._replace(source)
            return
        log_powered = exponent * np.log(weights[positive])
        powered = np.zeros_like(weights)
        powered[positive] = np.exp(log_powered - log_powered.max())
        self._replace(_rescaled(IntervalPartition(source.starts, powered, source.alphabet)))

    # --- operator sugar ---

    def __mul__(self, other: DiscreteCharDistribution) -> DiscreteCharDistribution:
        if not isinstance(other, DiscreteCharDistribution):
            return NotImplemented
        result = DiscreteCharDistribution(alphabet=self.alphabet)
        result.set_to_product(self, other)
        return result

    def __truediv__(self, other: DiscreteCharDistribution) -> DiscreteCharDistribution:
        if not isinstance(other, DiscreteCharDistribution):
            return NotImplemented
        result = DiscreteCharDistribution(alphabet=self.alphabet)
        result.set_to_ratio(self, other)
        return result

    def __pow__(self, exponent: float) -> DiscreteCharDistribution:
        result = DiscreteCharDistribution(alphabet=self.alphabet)
        result.set_to_power(self, exponent)
        return result

    # --- evidence primitives ---

    def get_log_average_of(self, other: DiscreteCharDistribution) -> float:
        """
        Logarithm of ``sum_c p(c) q(c)``, the evidence of a product.

        Returns ``-inf`` when the supports are disjoint.
        """
        merged = self._partition.normalized().merge(other._partition.normalized())
        total = float(np.dot(merged.left * merged.right, merged.lengths))
        if total == 0.0:
            return -math.inf
        return math.log(total)

    def get_average_log(self, other: DiscreteCharDistribution) -> float:
        """
        Expectation of ``log q(c)`` under this distribution, ``sum_c p(c) log q(c)``.

        Returns ``-inf`` when this distribution puts mass where ``other`` has
        none.
        """
        merged = self._partition.normalized().merge(other._partition.normalized())
        if ((merged.left > 0) & (merged.right == 0)).any():
            return -math.inf
        return float(np.dot(xlogy(merged.left, merged.right), merged.lengths))

    # --- comparison ---

    def max_diff(self, other: DiscreteCharDistribution) -> float:
        """
        Largest absolute difference between per-code-point probabilities.

        Returns ``inf`` for distributions over different alphabets.
        """
        if self.alphabet != other.alphabet:
            return math.inf
        merged = self._partition.normalized().merge(other._partition.normalized())
        return float(np.max(np.abs(merged.left - merged.right)))

    def equals(self, other: DiscreteCharDistribution, tolerance: float) -> bool:
        """Whether ``max_diff(other)`` does not exceed ``tolerance``."""
        return self.max_diff(other) <= tolerance

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscreteCharDistribution):
            return NotImplemented
        return self._partition.normalized() == other._partition.normalized()

    def __hash__(self) -> int:
        return hash(self._partition.normalized())

    # --- copying ---

    def clone(self) -> DiscreteCharDistribution:
        return DiscreteCharDistribution(self._partition)

    __copy__ = clone

    def __deepcopy__(self, memo: dict[int, object]) -> DiscreteCharDistribution:
        return self.clone()

    # --- sampling ---

    def _get_sampler(self) -> IntervalSampler:
        if self._sampler is None:
            self._sampler = IntervalSampler(self._partition)
        return self._sampler

    def sample(self, source: RandomSource | None = None) -> CodePoint:
        """
        Draw a code point.

        Parameters
        ----------
        source : RandomSource or None, default=None
            Uniform variate source; the calling thread's default generator
            is used when omitted.

        Raises
        ------
        EmptySupportError
            If the distribution has zero total mass.
        """
        if source is None:
            source = default_random_source()
        return self._get_sampler().draw(source)

    def sample_n(self, n: int, source: RandomSource | None = None) -> CharSample:
        """Draw ``n`` independent code points."""
        if source is None:
            source = default_random_source()
        return self._get_sampler().draw_n(n, source)

    # --- rendering ---

    def __str__(self) -> str:
        if self.is_zero:
            return "<zero>"
        if self.is_uniform:
            return "?"
        if self.is_point_mass:
            return f"'{format_code_point(self.point)}'"
        items = list(self.ranges())
        if len({p for _, p in items}) == 1:
            return "[" + "".join(str(r) for r, _ in items) + "]"
        return "{" + ", ".join(f"[{r}]: {p:.6g}" for r, p in items) + "}"

    def __repr__(self) -> str:
        return f"DiscreteCharDistribution({self.alphabet}, {self})"


__all__ = [
    "DiscreteCharDistribution",
]
