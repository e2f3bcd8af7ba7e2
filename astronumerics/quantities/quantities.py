"""
Dimensioned quantities.

A Quantity is an SI magnitude (a float, or a numpy array for vector
quantities) tagged with a Dimensions vector. Every dimension vector has its
own Quantity subclass, built once by quantity_type(), so the dimension is
part of the type: Length and Time are distinct classes and adding one to
the other is rejected with a DimensionError before any arithmetic happens.

Multiplication and division compose dimensions and always succeed. When the
result is dimensionless it collapses to a plain float (or array), so that
ratios of like quantities are ordinary numbers.
"""

from __future__ import annotations

import numbers
from functools import lru_cache

import numpy as np

from .dimensions import (
    Dimensions, DimensionError, Exponent,
    DIMENSIONLESS, LENGTH, MASS, TIME, CURRENT, TEMPERATURE, AMOUNT,
    LUMINOUS_INTENSITY, ANGLE,
)


def _is_scalar_like(value) -> bool:
    """Plain numbers and numpy arrays, the things a Quantity scales by."""
    return isinstance(value, (numbers.Real, np.ndarray)) and not isinstance(value, bool)


def _freeze(magnitude):
    if isinstance(magnitude, np.ndarray) or isinstance(magnitude, (list, tuple)):
        array = np.array(magnitude, dtype=float)
        array.setflags(write=False)
        return array
    return float(magnitude)


class Quantity:
    """Base class of all dimensioned quantities.

    Not instantiated directly: use a named type such as Length, or
    make_quantity() when the dimensions are only known at run time.

    Attributes:
        dimensions: Class-level dimension vector of this quantity type.
    """

    __slots__ = ("_magnitude",)
    # Make numpy defer to our reflected operators.
    __array_ufunc__ = None

    dimensions: Dimensions = None

    def __init__(self, magnitude):
        if type(self).dimensions is None:
            raise TypeError("Quantity is abstract; use quantity_type()")
        self._magnitude = _freeze(magnitude)

    # -----------------------------------------------------------------------
    # Accessors
    # -----------------------------------------------------------------------

    @property
    def magnitude(self):
        """SI magnitude (float or read-only array)."""
        return self._magnitude

    @property
    def shape(self) -> tuple:
        return np.shape(self._magnitude)

    @property
    def is_vector(self) -> bool:
        return isinstance(self._magnitude, np.ndarray)

    def in_units(self, unit: Quantity):
        """Express this quantity as a plain number of the given unit."""
        ratio = self / unit
        if isinstance(ratio, Quantity):
            raise DimensionError(
                f"Cannot express [{self.dimensions}] in units of "
                f"[{unit.dimensions}]"
            )
        return ratio

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self._magnitude)))

    # -----------------------------------------------------------------------
    # Vector space over identical dimensions
    # -----------------------------------------------------------------------

    def _require_same(self, other, operation: str):
        if not isinstance(other, Quantity):
            raise DimensionError(
                f"Cannot {operation} [{self.dimensions}] and a "
                f"dimensionless {type(other).__name__}"
            )
        if other.dimensions != self.dimensions:
            raise DimensionError(
                f"Cannot {operation} [{self.dimensions}] and "
                f"[{other.dimensions}]"
            )

    def __add__(self, other):
        self._require_same(other, "add")
        return type(self)(self._magnitude + other._magnitude)

    def __radd__(self, other):
        self._require_same(other, "add")
        return type(self)(other._magnitude + self._magnitude)

    def __sub__(self, other):
        self._require_same(other, "subtract")
        return type(self)(self._magnitude - other._magnitude)

    def __rsub__(self, other):
        self._require_same(other, "subtract")
        return type(self)(other._magnitude - self._magnitude)

    def __neg__(self):
        return type(self)(-self._magnitude)

    def __pos__(self):
        return self

    def __abs__(self):
        return type(self)(np.abs(self._magnitude))

    # -----------------------------------------------------------------------
    # Products compose dimensions
    # -----------------------------------------------------------------------

    def __mul__(self, other):
        if isinstance(other, Quantity):
            return make_quantity(self._magnitude * other._magnitude,
                                 self.dimensions * other.dimensions)
        if _is_scalar_like(other):
            return type(self)(self._magnitude * other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar_like(other):
            return type(self)(other * self._magnitude)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Quantity):
            return make_quantity(self._magnitude / other._magnitude,
                                 self.dimensions / other.dimensions)
        if _is_scalar_like(other):
            return type(self)(self._magnitude / other)
        return NotImplemented

    def __rtruediv__(self, other):
        if _is_scalar_like(other):
            return make_quantity(other / self._magnitude,
                                 DIMENSIONLESS / self.dimensions)
        return NotImplemented

    def __pow__(self, exponent: Exponent):
        if not isinstance(exponent, numbers.Rational):
            raise DimensionError(
                "Quantities may only be raised to rational powers"
            )
        return make_quantity(self._magnitude ** float(exponent),
                             self.dimensions ** exponent)

    def dot(self, other):
        """Euclidean inner product of vector quantities."""
        if isinstance(other, Quantity):
            return make_quantity(np.dot(self._magnitude, other._magnitude),
                                 self.dimensions * other.dimensions)
        return type(self)(np.dot(self._magnitude, other))

    def norm(self) -> Quantity:
        """Euclidean norm, a scalar quantity of the same dimension."""
        return type(self)(np.linalg.norm(self._magnitude))

    # -----------------------------------------------------------------------
    # Comparisons
    # -----------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        if other.dimensions != self.dimensions:
            return False
        return bool(np.array_equal(self._magnitude, other._magnitude))

    def __hash__(self):
        if self.is_vector:
            return hash((self.dimensions, self._magnitude.tobytes()))
        return hash((self.dimensions, self._magnitude))

    def __lt__(self, other):
        self._require_same(other, "compare")
        return self._magnitude < other._magnitude

    def __le__(self, other):
        self._require_same(other, "compare")
        return self._magnitude <= other._magnitude

    def __gt__(self, other):
        self._require_same(other, "compare")
        return self._magnitude > other._magnitude

    def __ge__(self, other):
        self._require_same(other, "compare")
        return self._magnitude >= other._magnitude

    # -----------------------------------------------------------------------
    # Vector access
    # -----------------------------------------------------------------------

    def __len__(self):
        if not self.is_vector:
            raise TypeError(f"Scalar {type(self).__name__} has no len()")
        return len(self._magnitude)

    def __getitem__(self, index):
        if not self.is_vector:
            raise TypeError(f"Scalar {type(self).__name__} is not indexable")
        return type(self)(self._magnitude[index])

    def __iter__(self):
        if not self.is_vector:
            raise TypeError(f"Scalar {type(self).__name__} is not iterable")
        return (type(self)(m) for m in self._magnitude)

    def __repr__(self):
        magnitude = (np.array2string(self._magnitude, precision=17)
                     if self.is_vector else repr(self._magnitude))
        return f"{magnitude} {self.dimensions.unit_string()}"

    __str__ = __repr__


@lru_cache(maxsize=None)
def quantity_type(dimensions: Dimensions) -> type:
    """The Quantity subclass for a dimension vector, created once."""
    if dimensions.is_dimensionless:
        raise TypeError("Dimensionless quantities are plain numbers")
    return type(f"Quantity[{dimensions}]", (Quantity,),
                {"__slots__": (), "dimensions": dimensions})


def make_quantity(magnitude, dimensions: Dimensions):
    """A quantity of the given dimensions, or the bare magnitude if none."""
    if dimensions.is_dimensionless:
        return magnitude
    return quantity_type(dimensions)(magnitude)


def dimensions_of(value) -> Dimensions:
    """Dimensions of a quantity; plain numbers and arrays are dimensionless."""
    if isinstance(value, Quantity):
        return value.dimensions
    return DIMENSIONLESS


def _named(name: str, dimensions: Dimensions) -> type:
    cls = quantity_type(dimensions)
    cls.__name__ = name
    cls.__qualname__ = name
    return cls


# ---------------------------------------------------------------------------
# Named quantity types
# ---------------------------------------------------------------------------

Length = _named("Length", LENGTH)
Mass = _named("Mass", MASS)
Time = _named("Time", TIME)
Current = _named("Current", CURRENT)
Temperature = _named("Temperature", TEMPERATURE)
Amount = _named("Amount", AMOUNT)
LuminousIntensity = _named("LuminousIntensity", LUMINOUS_INTENSITY)
Angle = _named("Angle", ANGLE)

Area = _named("Area", LENGTH ** 2)
Speed = _named("Speed", LENGTH / TIME)
Acceleration = _named("Acceleration", LENGTH / TIME ** 2)
AngularFrequency = _named("AngularFrequency", ANGLE / TIME)
