"""
Tests for Gauss-Legendre, midpoint and Clenshaw-Curtis quadrature.
"""

import logging
import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from astronumerics.numerics.quadrature import (
    gauss_legendre, gauss_legendre_nodes_and_weights, midpoint,
    clenshaw_curtis, clenshaw_curtis_nodes_and_weights,
    automatic_clenshaw_curtis,
)
from astronumerics.quantities.dimensions import LENGTH, TIME
from astronumerics.quantities.quantities import Length
from astronumerics.quantities.si import Metre, Second


# =============================================================================
# Nodes and weights
# =============================================================================

class TestNodesAndWeights:

    def test_gauss_legendre_weights_sum_to_two(self):
        nodes, weights = gauss_legendre_nodes_and_weights(7)
        assert nodes.shape == (7,)
        assert_allclose(weights.sum(), 2.0, rtol=1e-14)

    def test_clenshaw_curtis_three_points_is_simpson(self):
        nodes, weights = clenshaw_curtis_nodes_and_weights(3)
        assert_allclose(nodes, [1.0, 0.0, -1.0], atol=1e-16)
        assert_allclose(weights, [1 / 3, 4 / 3, 1 / 3], rtol=1e-14)

    def test_clenshaw_curtis_two_points_is_trapezoid(self):
        _, weights = clenshaw_curtis_nodes_and_weights(2)
        assert_allclose(weights, [1.0, 1.0], rtol=1e-15)

    @pytest.mark.parametrize("points", [5, 9, 17, 65])
    def test_clenshaw_curtis_weights(self, points):
        nodes, weights = clenshaw_curtis_nodes_and_weights(points)
        assert_allclose(weights.sum(), 2.0, rtol=1e-14)
        assert np.all(weights > 0.0)
        assert_allclose(weights, weights[::-1], rtol=1e-13)
        # Exact for polynomials up to degree points - 1.
        assert_allclose(np.dot(weights, nodes ** (points - 1)),
                        2.0 / points, rtol=1e-13)

    @pytest.mark.parametrize("points", [0, 1, 4, 6, 10])
    def test_clenshaw_curtis_point_counts(self, points):
        with pytest.raises(ValueError):
            clenshaw_curtis_nodes_and_weights(points)

    def test_cached(self):
        assert (clenshaw_curtis_nodes_and_weights(9)
                is clenshaw_curtis_nodes_and_weights(9))
        assert gauss_legendre_nodes_and_weights(5) is gauss_legendre_nodes_and_weights(5)

    def test_read_only(self):
        _, weights = gauss_legendre_nodes_and_weights(4)
        with pytest.raises(ValueError):
            weights[0] = 0.0


# =============================================================================
# Fixed rules
# =============================================================================

class TestGaussLegendre:

    @pytest.mark.parametrize("points", [1, 2, 3, 5, 8])
    def test_exact_for_degree_2n_minus_1(self, points):
        degree = 2 * points - 1

        def f(t):
            return (degree + 1) * t ** degree + 1.0
        assert_allclose(gauss_legendre(f, 0.0, 2.0, points),
                        2.0 ** (degree + 1) + 2.0, rtol=1e-13)

    def test_smooth_integrand(self):
        assert_allclose(gauss_legendre(math.exp, 0.0, 1.0, 10),
                        math.e - 1.0, rtol=1e-15)

    def test_invalid_point_count(self):
        with pytest.raises(ValueError):
            gauss_legendre(math.sin, 0.0, 1.0, 0)

    def test_quantity_bounds_and_values(self):
        result = gauss_legendre(lambda t: 3.0 * Metre, 0.0 * Second, 2.0 * Second, 4)
        assert result.dimensions == LENGTH * TIME
        assert_allclose(result.magnitude, 6.0, rtol=1e-14)


class TestMidpoint:

    def test_exact_for_lines(self):
        assert_allclose(midpoint(lambda t: 2.0 * t + 1.0, 0.0, 3.0, 1), 12.0)

    def test_second_order_convergence(self):
        exact = 1.0 - math.cos(1.0)
        error_10 = abs(midpoint(math.sin, 0.0, 1.0, 10) - exact)
        error_20 = abs(midpoint(math.sin, 0.0, 1.0, 20) - exact)
        assert 3.9 < error_10 / error_20 < 4.1

    def test_invalid_interval_count(self):
        with pytest.raises(ValueError):
            midpoint(math.sin, 0.0, 1.0, 0)

    def test_vector_values(self):
        result = midpoint(lambda t: np.array([1.0, t]), 0.0, 2.0, 4)
        assert_allclose(result, [2.0, 2.0])


class TestClenshawCurtis:

    def test_cosine(self):
        assert_allclose(clenshaw_curtis(math.cos, 0.0, math.pi / 2, 17),
                        1.0, rtol=1e-14)

    def test_invalid_point_count(self):
        with pytest.raises(ValueError):
            clenshaw_curtis(math.cos, 0.0, 1.0, 8)


# =============================================================================
# Adaptive rule
# =============================================================================

class TestAutomaticClenshawCurtis:

    def test_converges(self):
        result = automatic_clenshaw_curtis(math.exp, 0.0, 1.0,
                                           max_relative_error=1e-14)
        assert result.converged
        assert result.relative_error <= 1e-14
        assert_allclose(result.value, math.e - 1.0, rtol=1e-14)

    def test_reuses_samples(self):
        calls = []

        def f(t):
            calls.append(t)
            return math.cos(3.0 * t)
        result = automatic_clenshaw_curtis(f, -1.0, 2.0, max_relative_error=1e-12)
        assert result.converged
        assert len(calls) == result.points
        assert len(set(calls)) == len(calls)
        assert_allclose(result.value, (math.sin(6.0) + math.sin(3.0)) / 3.0,
                        rtol=1e-12)

    def test_budget_exhaustion(self, caplog):
        with caplog.at_level(logging.INFO,
                             logger="astronumerics.numerics.quadrature"):
            result = automatic_clenshaw_curtis(
                lambda t: math.sin(50.0 * t), 0.0, 10.0,
                max_relative_error=1e-14, max_points=33)
        assert not result.converged
        assert result.points == 33
        assert "exhausted" in caplog.text

    def test_points_only(self):
        result = automatic_clenshaw_curtis(math.exp, 0.0, 1.0, max_points=17)
        assert not result.converged
        assert result.points == 17
        assert_allclose(result.value, math.e - 1.0, rtol=1e-14)

    def test_needs_a_stopping_criterion(self):
        with pytest.raises(ValueError):
            automatic_clenshaw_curtis(math.exp, 0.0, 1.0)

    def test_invalid_initial_points(self):
        with pytest.raises(ValueError):
            automatic_clenshaw_curtis(math.exp, 0.0, 1.0,
                                      max_relative_error=1e-10, initial_points=4)

    def test_zero_integrand(self):
        result = automatic_clenshaw_curtis(lambda t: 0.0, 0.0, 1.0,
                                           max_relative_error=1e-10)
        assert result.converged
        assert result.value == 0.0

    def test_quantity_integrand(self):
        result = automatic_clenshaw_curtis(
            lambda t: (t / Second) * Metre, 0.0 * Second, 2.0 * Second,
            max_relative_error=1e-12)
        assert result.converged
        assert result.value.dimensions == LENGTH * TIME
        assert_allclose(result.value.magnitude, 2.0, rtol=1e-14)
        assert isinstance(result.value / Second, Length)
