"""
Distributions subpackage

Character distributions and their building blocks:

- interval partitions and common refinement (:mod:`.partition`);
- the distribution itself (:mod:`.distribution`);
- inverse-CDF sampling and random sources (:mod:`.sampling`);
- range-backed support view (:mod:`.support`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .distribution import DiscreteCharDistribution
from .partition import IntervalPartition, Refinement, parse_range_pairs
from .sampling import CharSample, IntervalSampler, RandomSource, default_random_source
from .support import DiscreteSupport, RangeDiscreteSupport

__all__ = [
    # distribution
    "DiscreteCharDistribution",
    # partition
    "IntervalPartition",
    "Refinement",
    "parse_range_pairs",
    # sampling
    "CharSample",
    "IntervalSampler",
    "RandomSource",
    "default_random_source",
    # support
    "DiscreteSupport",
    "RangeDiscreteSupport",
]
