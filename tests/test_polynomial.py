"""
Tests for polynomials in the monomial basis.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from astronumerics.numerics.polynomial import (
    Polynomial, taylor_shift, pointwise_inner_product,
)
from astronumerics.quantities.dimensions import DimensionError, LENGTH, TIME
from astronumerics.quantities.quantities import Length, Speed
from astronumerics.quantities.si import Metre, Second


@pytest.fixture
def cubic():
    """p(t) = 1 - 2 (t - 3) + 0.5 (t - 3)^2 + 4 (t - 3)^3."""
    return Polynomial([1.0, -2.0, 0.5, 4.0], origin=3.0)


def cubic_reference(t):
    x = t - 3.0
    return 1.0 - 2.0 * x + 0.5 * x ** 2 + 4.0 * x ** 3


class TestEvaluation:

    def test_horner_matches_expansion(self, cubic):
        for t in [-2.0, 0.0, 3.0, 4.5, 10.0]:
            assert_allclose(cubic(t), cubic_reference(t), rtol=1e-14)

    def test_array_argument(self, cubic):
        t = np.linspace(0.0, 6.0, 7)
        assert_allclose(cubic(t), cubic_reference(t), rtol=1e-14)

    def test_time_argument(self, cubic):
        assert_allclose(cubic(4.0 * Second), cubic_reference(4.0), rtol=1e-15)
        with pytest.raises(DimensionError):
            cubic(4.0 * Metre)

    def test_degree_and_origin(self, cubic):
        assert cubic.degree == 3
        assert cubic.origin == 3.0
        assert Polynomial([2.0], origin=1.0 * Second).origin == 1.0

    def test_needs_a_coefficient(self):
        with pytest.raises(ValueError):
            Polynomial([])

    def test_coefficients_must_agree(self):
        with pytest.raises(DimensionError):
            Polynomial([1.0 * Metre, 1.0 * Second])
        with pytest.raises(ValueError):
            Polynomial([np.zeros(3), np.zeros(2)])


class TestRepresentationChanges:

    def test_taylor_shift(self):
        # (x + 1)^2 = 1 + 2x + x^2
        assert taylor_shift([0.0, 0.0, 1.0], 1.0) == (1.0, 2.0, 1.0)

    @pytest.mark.parametrize("origin", [-7.0, 0.0, 2.5, 100.0])
    def test_at_origin_preserves_values(self, cubic, origin):
        moved = cubic.at_origin(origin)
        assert moved.origin == origin
        for t in [-1.0, 2.0, 5.0]:
            assert_allclose(moved(t), cubic(t), rtol=1e-12)

    def test_at_same_origin_is_identity(self, cubic):
        assert cubic.at_origin(3.0) is cubic

    def test_with_degree_pads_with_zeros(self, cubic):
        padded = cubic.with_degree(5)
        assert padded.degree == 5
        assert padded.coefficients[4:] == (0.0, 0.0)
        assert_allclose(padded(1.3), cubic(1.3), rtol=1e-15)
        with pytest.raises(ValueError):
            cubic.with_degree(2)


class TestAlgebra:

    def test_sum_aligns_origins_and_degrees(self, cubic):
        line = Polynomial([1.0, 1.0], origin=0.0)
        total = cubic + line
        assert total.origin == cubic.origin
        assert total.degree == 3
        for t in [0.0, 1.0, 7.0]:
            assert_allclose(total(t), cubic(t) + line(t), rtol=1e-13)
            assert_allclose((cubic - line)(t), cubic(t) - line(t), rtol=1e-13)

    def test_product(self, cubic):
        line = Polynomial([2.0, -1.0], origin=1.0)
        product = cubic * line
        assert product.degree == 4
        for t in [-1.0, 0.5, 4.0]:
            assert_allclose(product(t), cubic(t) * line(t), rtol=1e-12)

    def test_scalar_operations(self, cubic):
        assert_allclose((2.0 * cubic)(1.0), 2.0 * cubic(1.0))
        assert_allclose((cubic * 2.0)(1.0), 2.0 * cubic(1.0))
        assert_allclose((cubic / 4.0)(1.0), cubic(1.0) / 4.0)
        assert_allclose((-cubic)(1.0), -cubic(1.0))
        assert (+cubic) is cubic

    def test_quantity_scaling(self, cubic):
        scaled = cubic * Metre
        value = scaled(4.0)
        assert type(value) is Length
        assert_allclose(value.magnitude, cubic_reference(4.0))
        assert type((Metre * cubic)(4.0)) is Length

    def test_mixed_dimensions_rejected(self):
        with pytest.raises(DimensionError):
            Polynomial([1.0 * Metre]) + Polynomial([1.0 * Second])

    def test_equality(self, cubic):
        assert cubic == Polynomial([1.0, -2.0, 0.5, 4.0], origin=3.0)
        assert cubic != cubic.with_degree(4)
        assert cubic != Polynomial([1.0, -2.0, 0.5, 4.0], origin=0.0)


class TestCalculus:

    def test_derivative(self, cubic):
        derivative = cubic.derivative()
        assert derivative.coefficients == (-2.0, 1.0, 12.0)
        assert Polynomial([5.0]).derivative().coefficients == (0.0,)

    def test_primitive_vanishes_at_origin(self, cubic):
        primitive = cubic.primitive()
        assert primitive.degree == 4
        assert primitive(cubic.origin) == 0.0
        assert_allclose(primitive.derivative()(1.7), cubic(1.7), rtol=1e-14)

    def test_integrate(self):
        # int_0^2 (1 + 3 t^2) dt = 2 + 8
        p = Polynomial([1.0, 0.0, 3.0])
        assert_allclose(p.integrate(0.0, 2.0), 10.0, rtol=1e-15)

    def test_quantity_calculus_dimensions(self):
        # Coefficients carry the value dimension; time is in seconds.
        position = Polynomial([1.0 * Metre, 2.0 * Metre])
        velocity = position.derivative()
        assert type(velocity(0.0)) is Speed
        assert_allclose(velocity(0.0).magnitude, 2.0)
        distance = velocity.integrate(0.0, 3.0)
        assert type(distance) is Length
        assert_allclose(distance.magnitude, 6.0)
        area = position.integrate(0.0, 1.0)
        assert area.dimensions == LENGTH * TIME


def test_pointwise_inner_product():
    a = Polynomial([np.array([0.0, 0.0, 1.0]) * Metre,
                    np.array([0.0, 1.0, 0.0]) * Metre,
                    np.array([1.0, 0.0, 0.0]) * Metre])
    b = Polynomial([np.array([0.0, 2.0, 3.0]) * Metre,
                    np.array([-1.0, 1.0, 0.0]) * Metre,
                    np.array([1.0, 1.0, -2.0]) * Metre])
    product = pointwise_inner_product(a, b)
    assert product.degree == 4
    value = product(1.0)
    assert value.dimensions == LENGTH ** 2
    assert_allclose(value.magnitude, np.dot(a(1.0).magnitude, b(1.0).magnitude))
    assert_allclose(value.magnitude, 5.0)
