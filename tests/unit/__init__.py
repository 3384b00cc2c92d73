"""
PySATL Char Distributions
=========================

Unit tests for interval partitions, character distributions, sampling and
predefined character classes.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
