from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from pysatl_chardist.distributions import DiscreteCharDistribution, IntervalPartition
from pysatl_chardist.errors import EmptySupportError
from pysatl_chardist.types import BMP, UNICODE

UNIFORM_PROB = 1.0 / BMP.size


def make_mixture() -> DiscreteCharDistribution:
    rng = DiscreteCharDistribution.uniform_in_ranges("bdgi")
    unif = DiscreteCharDistribution.uniform()
    mix = DiscreteCharDistribution()
    mix.set_to_sum(0.8, rng, 0.2, unif)
    return mix


class TestSetToSum:
    @pytest.mark.parametrize("c", "bcdghi")
    def test_mixture_inside_ranges(self, c):
        mix = make_mixture()
        assert mix.get_prob(c) == pytest.approx(0.8 / 6 + 0.2 * UNIFORM_PROB)

    @pytest.mark.parametrize("c", ["a", "e", "f", "j", "z", 0, 0xFFFF])
    def test_mixture_outside_ranges(self, c):
        mix = make_mixture()
        assert mix.get_prob(c) == pytest.approx(0.2 * UNIFORM_PROB)
        assert mix.get_log_prob(c) > -math.inf

    def test_mixture_prefers_ranges(self):
        mix = make_mixture()
        inside = [mix.get_log_prob(c) for c in "bcdghi"]
        outside = [mix.get_log_prob(c) for c in "aefjz"]
        assert min(inside) > max(outside)

    def test_mixture_is_normalized(self):
        assert make_mixture().total_mass == pytest.approx(1.0)

    def test_mixture_with_point_mass(self):
        mix = DiscreteCharDistribution()
        mix.set_to_sum(
            0.8, DiscreteCharDistribution.point_mass("b"), 0.2, DiscreteCharDistribution.uniform()
        )
        assert mix.get_prob("b") == pytest.approx(0.8 * 1.0 + 0.2 * UNIFORM_PROB)

    def test_self_mixture_is_idempotent(self):
        d = DiscreteCharDistribution.uniform_in_ranges("bdgi")
        original = d.clone()
        d.set_to_sum(0.3, d, 0.7, d)
        assert d.max_diff(original) < 1e-12
        assert d.equals(original, tolerance=1e-12)

    def test_receiver_as_operand(self):
        d = DiscreteCharDistribution.point_mass("a")
        d.set_to_sum(0.5, d, 0.5, DiscreteCharDistribution.point_mass("b"))
        assert d.get_prob("a") == pytest.approx(0.5)
        assert d.get_prob("b") == pytest.approx(0.5)

    def test_unnormalized_operands_are_normalized_first(self):
        heavy = DiscreteCharDistribution(IntervalPartition.from_ranges([(97, 97)], weight=100.0))
        light = DiscreteCharDistribution.point_mass("b")
        mix = DiscreteCharDistribution()
        mix.set_to_sum(0.5, heavy, 0.5, light)
        assert mix.get_prob("a") == pytest.approx(0.5)

    def test_zero_operand_contributes_nothing(self):
        mix = DiscreteCharDistribution()
        mix.set_to_sum(0.5, DiscreteCharDistribution.zero(), 0.5, DiscreteCharDistribution())
        assert mix.is_uniform
        assert mix.get_prob("a") == pytest.approx(UNIFORM_PROB)

    @pytest.mark.parametrize(
        "w1, w2", [(-0.1, 1.1), (0.5, math.nan), (math.inf, 0.0)], ids=["negative", "nan", "inf"]
    )
    def test_invalid_weights(self, w1, w2):
        d = DiscreteCharDistribution()
        with pytest.raises(ValueError):
            d.set_to_sum(w1, DiscreteCharDistribution(), w2, DiscreteCharDistribution())

    def test_different_alphabets(self):
        d = DiscreteCharDistribution()
        with pytest.raises(ValueError):
            d.set_to_sum(
                0.5, DiscreteCharDistribution(), 0.5, DiscreteCharDistribution.uniform(UNICODE)
            )


class TestProduct:
    def test_overlapping_ranges(self):
        a = DiscreteCharDistribution.uniform_in_ranges("aj")
        b = DiscreteCharDistribution.uniform_in_ranges("fz")
        product = a * b
        assert product.get_prob("g") == pytest.approx(0.2)
        assert product.get_log_prob("a") == -math.inf
        assert product.total_mass == pytest.approx(1.0)
        assert product.support_size == 5

    def test_product_with_uniform_is_identity(self):
        mix = make_mixture()
        d = DiscreteCharDistribution()
        d.set_to_product(mix, DiscreteCharDistribution.uniform())
        assert d.max_diff(mix) < 1e-12

    def test_disjoint_supports_give_zero(self):
        d = DiscreteCharDistribution()
        d.set_to_product(
            DiscreteCharDistribution.uniform_in_ranges("az"),
            DiscreteCharDistribution.uniform_in_ranges("09"),
        )
        assert d.is_zero
        assert d.get_log_prob("a") == -math.inf
        with pytest.raises(EmptySupportError):
            d.sample()

    def test_underflow_gives_zero_instead_of_nan(self):
        a = DiscreteCharDistribution(IntervalPartition([0, 97, 98, 123], [0.0, 1e-200, 1.0, 0.0]))
        b = DiscreteCharDistribution(
            IntervalPartition([0, 65, 91, 97, 98], [0.0, 1.0, 0.0, 1e-200, 0.0])
        )
        product = a * b
        assert product.is_zero
        log_prob = product.get_log_prob("a")
        assert not math.isnan(log_prob)
        assert log_prob == -math.inf

    def test_point_mass_times_support(self):
        product = DiscreteCharDistribution.point_mass("c") * make_mixture()
        assert product.is_point_mass
        assert product.get_log_prob("c") == 0.0


class TestRatioAndPower:
    def test_ratio_undoes_product(self):
        a = DiscreteCharDistribution.uniform_in_ranges("aj")
        mix = make_mixture()
        assert ((a * mix) / mix).max_diff(a) < 1e-9

    def test_ratio_of_zero_by_zero(self):
        ratio = DiscreteCharDistribution.point_mass("a") / (
            DiscreteCharDistribution.uniform_in_ranges("az")
        )
        assert ratio.is_point_mass
        assert ratio.point == ord("a")

    def test_ratio_by_subnormal_weight(self):
        denominator = DiscreteCharDistribution(IntervalPartition([0, 97, 98], [0.0, 5e-324, 0.0]))
        ratio = DiscreteCharDistribution.point_mass("a") / denominator
        assert ratio.is_point_mass
        assert ratio.point == ord("a")

    def test_product_with_subnormal_weight(self):
        tiny = DiscreteCharDistribution(IntervalPartition([0, 97, 98], [0.0, 5e-324, 0.0]))
        product = DiscreteCharDistribution.uniform_in_ranges("az") * tiny
        assert product.is_point_mass
        assert product.get_log_prob("a") == 0.0

    def test_ratio_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            _ = DiscreteCharDistribution.uniform() / DiscreteCharDistribution.point_mass("a")

    def test_power_of_uniform_in_ranges(self):
        d = DiscreteCharDistribution.uniform_in_ranges("aj")
        assert (d**2).max_diff(d) < 1e-12

    def test_power_squares_odds(self):
        mix = make_mixture()
        odds = mix.get_prob("b") / mix.get_prob("a")
        squared = mix**2
        assert squared.get_prob("b") / squared.get_prob("a") == pytest.approx(odds**2)
        assert squared.total_mass == pytest.approx(1.0)

    def test_power_zero_keeps_support(self):
        d = DiscreteCharDistribution.uniform_in_ranges("bdgi")
        mix = make_mixture()
        assert (d**0).max_diff(d) < 1e-12
        assert (mix**0).is_uniform

    def test_power_one(self):
        mix = make_mixture()
        assert (mix**1).max_diff(mix) < 1e-12

    @pytest.mark.parametrize(
        "alphabet, exponent",
        [(BMP, 70), (BMP, -70), (UNICODE, 60), (BMP, 1e6)],
        ids=["bmp_positive", "bmp_negative", "unicode", "huge"],
    )
    def test_power_of_uniform_stays_uniform(self, alphabet, exponent):
        powered = DiscreteCharDistribution.uniform(alphabet) ** exponent
        assert powered.is_uniform
        assert powered.get_prob("a") == pytest.approx(1.0 / alphabet.size)

    @pytest.mark.parametrize("exponent", [70, -70])
    def test_large_power_keeps_support_and_order(self, exponent):
        mix = make_mixture()
        powered = mix**exponent
        assert not powered.is_zero
        assert powered.support_size == mix.support_size
        assert (powered.get_prob("b") > powered.get_prob("a")) is (exponent > 0)

    @pytest.mark.parametrize("exponent", [math.inf, -math.inf, math.nan])
    def test_power_non_finite_exponent(self, exponent):
        with pytest.raises(ValueError):
            _ = make_mixture() ** exponent

    def test_set_to_power_in_place(self):
        d = make_mixture()
        d.set_to_power(d, 0.5)
        assert d.total_mass == pytest.approx(1.0)
        assert d.get_prob("b") > d.get_prob("a")


class TestEvidence:
    def test_log_average_of_overlapping(self):
        a = DiscreteCharDistribution.uniform_in_ranges("aj")
        b = DiscreteCharDistribution.uniform_in_ranges("fo")
        assert a.get_log_average_of(b) == pytest.approx(math.log(0.05))

    def test_log_average_of_disjoint(self):
        a = DiscreteCharDistribution.uniform_in_ranges("aj")
        b = DiscreteCharDistribution.uniform_in_ranges("kz")
        assert a.get_log_average_of(b) == -math.inf

    def test_average_log(self):
        a = DiscreteCharDistribution.uniform_in_ranges("aj")
        unif = DiscreteCharDistribution.uniform()
        assert a.get_average_log(unif) == pytest.approx(-math.log(BMP.size))
        assert a.get_average_log(a) == pytest.approx(math.log(0.1))

    def test_average_log_outside_support(self):
        a = DiscreteCharDistribution.uniform_in_ranges("aj")
        assert DiscreteCharDistribution.uniform().get_average_log(a) == -math.inf


class TestComparison:
    def test_max_diff(self):
        a = DiscreteCharDistribution.point_mass("a")
        b = DiscreteCharDistribution.point_mass("b")
        assert a.max_diff(b) == pytest.approx(1.0)
        assert a.max_diff(a) == 0.0

    def test_max_diff_different_alphabets(self):
        assert DiscreteCharDistribution.uniform().max_diff(
            DiscreteCharDistribution.uniform(UNICODE)
        ) == math.inf

    @pytest.mark.parametrize(
        "tolerance, expected", [(0.0, False), (1e-3, False), (1e-1, True)]
    )
    def test_equals_with_tolerance(self, tolerance, expected):
        a = DiscreteCharDistribution.uniform_in_ranges("aj")
        b = DiscreteCharDistribution(IntervalPartition([0, 97, 98, 107], [0.0, 1.5, 1.0, 0.0]))
        assert a.equals(b, tolerance) is expected

    def test_structural_equality_and_hash(self):
        a = DiscreteCharDistribution.uniform_in_ranges("aj")
        b = DiscreteCharDistribution.uniform_of("abcdefghij")
        assert a == b
        assert hash(a) == hash(b)
        assert {a: "letters"}[b] == "letters"
        assert a != DiscreteCharDistribution.uniform_in_ranges("ai")
        assert a != "aj"
