"""
Tests for dimension vectors, quantities and SI units.
"""

from fractions import Fraction

import numpy as np
import pytest
from numpy.testing import assert_allclose

from astronumerics.quantities.dimensions import (
    Dimensions, DimensionError, LENGTH, TIME, ANGLE, MASS,
)
from astronumerics.quantities.quantities import (
    Quantity, Length, Time, Speed, Area, Angle, AngularFrequency,
    quantity_type, make_quantity, dimensions_of,
)
from astronumerics.quantities.si import (
    Metre, Second, Kilogram, Newton, Radian, Degree, ArcSecond, Minute, Day,
    kilo, milli,
)


# =============================================================================
# Dimensions
# =============================================================================

class TestDimensions:

    def test_product_adds_exponents(self):
        speed = LENGTH / TIME
        assert speed.length == 1
        assert speed.time == -1
        assert (speed * TIME) == LENGTH

    def test_rational_power(self):
        root = LENGTH ** Fraction(1, 2)
        assert root.length == Fraction(1, 2)
        assert (root * root) == LENGTH

    def test_ints_and_fractions_compare_equal(self):
        assert Dimensions(length=1) == Dimensions(length=Fraction(1))
        assert hash(Dimensions(length=1)) == hash(Dimensions(length=Fraction(1)))

    def test_from_exponents_requires_eight(self):
        assert Dimensions.from_exponents([1, 0, -1, 0, 0, 0, 0, 0]) == LENGTH / TIME
        with pytest.raises(ValueError):
            Dimensions.from_exponents([1, 0, -1])

    def test_unit_string(self):
        assert (LENGTH / TIME).unit_string() == "m s^-1"
        assert (MASS * LENGTH / TIME ** 2).unit_string() == "m kg s^-2"
        assert (ANGLE / TIME).unit_string() == "s^-1 rad"
        assert Dimensions().unit_string() == ""
        assert str(Dimensions()) == "1"


# =============================================================================
# Quantities
# =============================================================================

class TestQuantityTypes:

    def test_named_types_are_the_cached_types(self):
        assert quantity_type(LENGTH) is Length
        assert quantity_type(LENGTH / TIME) is Speed
        assert type(3.0 * Metre / Second) is Speed
        assert type(Metre * Metre) is Area

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            Quantity(1.0)

    def test_dimensionless_results_are_plain_numbers(self):
        ratio = (6.0 * Metre) / (2.0 * Metre)
        assert not isinstance(ratio, Quantity)
        assert ratio == 3.0
        assert make_quantity(2.0, Dimensions()) == 2.0
        assert dimensions_of(2.0) == Dimensions()

    def test_derived_units(self):
        assert Newton.dimensions == MASS * LENGTH / TIME ** 2
        assert Newton == Kilogram * Metre / Second ** 2
        assert (1.0 / Second).dimensions == Dimensions(time=-1)
        assert type(Radian / Second) is AngularFrequency


class TestQuantityArithmetic:

    def test_addition_requires_same_dimensions(self):
        total = 1.0 * Metre + 2.0 * Metre
        assert total == 3.0 * Metre
        with pytest.raises(DimensionError):
            Metre + Second
        with pytest.raises(DimensionError):
            Metre + 1.0
        with pytest.raises(DimensionError):
            1.0 - Metre

    def test_dimension_error_is_a_type_error(self):
        with pytest.raises(TypeError):
            Metre - Second

    def test_comparisons(self):
        assert 1.0 * Metre < 2.0 * Metre
        assert 2.0 * Metre >= 2.0 * Metre
        with pytest.raises(DimensionError):
            Metre < Second
        assert Metre != Second

    def test_units_conversion(self):
        assert_allclose((90.0 * Degree).in_units(Radian), np.pi / 2, rtol=1e-15)
        assert_allclose((3600.0 * ArcSecond).in_units(Degree), 1.0, rtol=1e-14)
        assert_allclose(Day.in_units(Minute), 1440.0, rtol=1e-15)
        assert kilo(Metre).in_units(Metre) == 1000.0
        assert_allclose(milli(Second).magnitude, 1e-3)
        with pytest.raises(DimensionError):
            Metre.in_units(Second)

    def test_rational_power(self):
        area = 4.0 * Metre ** 2
        side = area ** Fraction(1, 2)
        assert type(side) is Length
        assert_allclose(side.magnitude, 2.0)
        with pytest.raises(DimensionError):
            Metre ** 0.5

    def test_negation_and_absolute_value(self):
        assert -(2.0 * Metre) == -2.0 * Metre
        assert abs(-2.0 * Metre) == 2.0 * Metre

    def test_hash_matches_equality(self):
        assert hash(2.0 * Metre) == hash(Length(2.0))
        assert len({2.0 * Metre, Length(2.0)}) == 1


class TestVectorQuantities:

    def test_array_times_unit(self):
        r = np.array([3.0, 4.0, 0.0]) * Metre
        assert type(r) is Length
        assert r.is_vector
        assert r.shape == (3,)
        assert r.norm() == 5.0 * Metre
        assert r[0] == 3.0 * Metre
        assert len(r) == 3

    def test_dot_composes_dimensions(self):
        r = np.array([1.0, 2.0, 3.0]) * Metre
        v = np.array([0.0, 1.0, -1.0]) * Metre / Second
        product = r.dot(v)
        assert product.dimensions == LENGTH ** 2 / TIME
        assert_allclose(product.magnitude, -1.0)

    def test_magnitude_is_read_only(self):
        r = np.array([1.0, 2.0]) * Metre
        with pytest.raises(ValueError):
            r.magnitude[0] = 5.0

    def test_scalars_are_not_iterable(self):
        with pytest.raises(TypeError):
            len(Metre)
        with pytest.raises(TypeError):
            iter(Metre)

    def test_finiteness(self):
        assert Metre.is_finite()
        assert not (np.array([1.0, np.inf]) * Metre).is_finite()


def test_time_and_angle_types():
    assert type(Minute) is Time
    assert type(Degree) is Angle
