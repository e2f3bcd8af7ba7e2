"""
Polynomials in the monomial basis over an origin instant.

A degree-d polynomial holds d + 1 coefficients c_0..c_d (c_0 the constant
term) and an origin t0, and evaluates to

    p(t) = sum_i c_i * (t - t0)^i

with Horner's scheme. Keeping t - t0 small near the region of interest is
what keeps long-horizon evaluation accurate, so the origin can be moved with
at_origin(), an exact Taylor shift of the coefficients.

Coefficients may be floats, numpy arrays (vector-valued polynomials) or
quantities; all coefficients of one polynomial share one value type.
Instants are float seconds or Time quantities.
"""

from __future__ import annotations

import math
import numbers
from functools import reduce
from typing import Callable, Sequence

import numpy as np

from ..core.types import to_seconds
from ..quantities.dimensions import DimensionError
from ..quantities.quantities import Quantity, dimensions_of
from .values import (
    zero_like, inner, integrated, differentiated, values_equal,
)


def is_coefficient_like(value) -> bool:
    """Whether value can scale, or be, a polynomial coefficient."""
    return (isinstance(value, (numbers.Real, np.ndarray, Quantity))
            and not isinstance(value, bool))


def _freeze_value(value):
    if isinstance(value, Quantity):
        return value
    if isinstance(value, (np.ndarray, list, tuple)):
        array = np.array(value, dtype=float)
        array.setflags(write=False)
        return array
    return float(value)


def _add(a, b):
    return a + b


def taylor_shift(coefficients: Sequence, shift: float) -> tuple:
    """Coefficients of x -> p(x + shift) for p given by its coefficients.

    Binomial expansion of (x + shift)^i:

        b_j = sum_{i >= j} C(i, j) * shift^(i - j) * c_i

    This is exact algebra; the only error is the rounding of each term.

    Args:
        coefficients: c_0..c_d, constant term first.
        shift: Offset added to the argument [seconds].

    Returns:
        b_0..b_d as a tuple.
    """
    coefficients = tuple(coefficients)
    n = len(coefficients)
    shifted = []
    for j in range(n):
        terms = [(math.comb(i, j) * shift ** (i - j)) * coefficients[i]
                 for i in range(n - 1, j - 1, -1)]
        shifted.append(reduce(_add, terms))
    return tuple(shifted)


def _convolve(left: Sequence, right: Sequence, multiply: Callable) -> tuple:
    """Cauchy product of two coefficient sequences."""
    result = []
    for k in range(len(left) + len(right) - 1):
        terms = [multiply(left[i], right[k - i])
                 for i in range(max(0, k - len(right) + 1),
                                min(k, len(left) - 1) + 1)]
        result.append(reduce(_add, terms))
    return tuple(result)


class Polynomial:
    """Immutable polynomial sum_i c_i (t - origin)^i.

    Attributes:
        coefficients: Tuple c_0..c_d.
        origin: Origin instant [seconds].
    """

    __slots__ = ("_coefficients", "_origin")
    __array_ufunc__ = None

    def __init__(self, coefficients: Sequence, origin=0.0):
        """Initialize the polynomial.

        Args:
            coefficients: c_0..c_d, at least one.
            origin: Origin instant, float seconds or a Time.

        Raises:
            ValueError: If there are no coefficients or their shapes differ.
            DimensionError: If the coefficients' dimensions differ.
        """
        coefficients = tuple(_freeze_value(c) for c in coefficients)
        if not coefficients:
            raise ValueError("A polynomial needs at least one coefficient")
        dimensions = dimensions_of(coefficients[0])
        shape = np.shape(coefficients[0].magnitude
                         if isinstance(coefficients[0], Quantity)
                         else coefficients[0])
        for c in coefficients[1:]:
            if dimensions_of(c) != dimensions:
                raise DimensionError(
                    f"Coefficients of one polynomial must share dimensions: "
                    f"[{dimensions}] vs [{dimensions_of(c)}]"
                )
            if np.shape(c.magnitude if isinstance(c, Quantity) else c) != shape:
                raise ValueError("Coefficients of one polynomial must share a shape")
        self._coefficients = coefficients
        self._origin = to_seconds(origin)

    @property
    def coefficients(self) -> tuple:
        return self._coefficients

    @property
    def origin(self) -> float:
        return self._origin

    @property
    def degree(self) -> int:
        return len(self._coefficients) - 1

    def zero(self):
        """The zero of this polynomial's value type."""
        return zero_like(self._coefficients[0])

    # -----------------------------------------------------------------------
    # Evaluation and representation changes
    # -----------------------------------------------------------------------

    def evaluate(self, t):
        """Horner evaluation at t (float, Time, or array of scalar instants)."""
        dt = to_seconds(t) - self._origin
        result = self._coefficients[-1]
        for c in reversed(self._coefficients[:-1]):
            result = result * dt + c
        return result

    __call__ = evaluate

    def at_origin(self, origin) -> Polynomial:
        """The same polynomial expressed relative to another origin."""
        origin = to_seconds(origin)
        if origin == self._origin:
            return self
        return Polynomial(taylor_shift(self._coefficients, origin - self._origin),
                          origin)

    def with_degree(self, degree: int) -> Polynomial:
        """Zero-pad to a higher degree.

        Raises:
            ValueError: If degree is lower than the current degree.
        """
        if degree < self.degree:
            raise ValueError(
                f"Cannot convert a degree {self.degree} polynomial to "
                f"degree {degree}"
            )
        if degree == self.degree:
            return self
        zero = self.zero()
        return Polynomial(self._coefficients + (zero,) * (degree - self.degree),
                          self._origin)

    def _aligned(self, other: Polynomial) -> Polynomial:
        return other.at_origin(self._origin)

    # -----------------------------------------------------------------------
    # Vector space
    # -----------------------------------------------------------------------

    def __pos__(self):
        return self

    def __neg__(self):
        return Polynomial([-c for c in self._coefficients], self._origin)

    def __add__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        other = self._aligned(other)
        degree = max(self.degree, other.degree)
        left = self.with_degree(degree).coefficients
        right = other.with_degree(degree).coefficients
        return Polynomial([a + b for a, b in zip(left, right)], self._origin)

    def __sub__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        other = self._aligned(other)
        degree = max(self.degree, other.degree)
        left = self.with_degree(degree).coefficients
        right = other.with_degree(degree).coefficients
        return Polynomial([a - b for a, b in zip(left, right)], self._origin)

    def __mul__(self, other):
        if isinstance(other, Polynomial):
            other = self._aligned(other)
            return Polynomial(
                _convolve(self._coefficients, other.coefficients,
                          lambda a, b: a * b),
                self._origin)
        if is_coefficient_like(other):
            return Polynomial([c * other for c in self._coefficients], self._origin)
        return NotImplemented

    def __rmul__(self, other):
        if is_coefficient_like(other):
            return Polynomial([other * c for c in self._coefficients], self._origin)
        return NotImplemented

    def __truediv__(self, other):
        if is_coefficient_like(other):
            return Polynomial([c / other for c in self._coefficients], self._origin)
        return NotImplemented

    # -----------------------------------------------------------------------
    # Calculus
    # -----------------------------------------------------------------------

    def derivative(self) -> Polynomial:
        """Time derivative; a degree-0 polynomial has the zero derivative."""
        if self.degree == 0:
            return Polynomial([differentiated(self.zero())], self._origin)
        return Polynomial([i * differentiated(self._coefficients[i])
                           for i in range(1, self.degree + 1)],
                          self._origin)

    def primitive(self) -> Polynomial:
        """Antiderivative vanishing at the origin (power rule)."""
        integrals = [integrated(c) / (i + 1)
                     for i, c in enumerate(self._coefficients)]
        return Polynomial([zero_like(integrals[0])] + integrals, self._origin)

    def integrate(self, t1, t2):
        """Definite integral from t1 to t2."""
        primitive = self.primitive()
        return primitive(t2) - primitive(t1)

    # -----------------------------------------------------------------------
    # Comparison
    # -----------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return (self._origin == other.origin
                and self.degree == other.degree
                and all(values_equal(a, b) for a, b in
                        zip(self._coefficients, other.coefficients)))

    __hash__ = None

    def __repr__(self):
        return (f"Polynomial(coefficients={list(self._coefficients)!r}, "
                f"origin={self._origin!r})")


def pointwise_inner_product(left: Polynomial, right: Polynomial) -> Polynomial:
    """Polynomial t -> <left(t), right(t)> for vector-valued polynomials."""
    right = right.at_origin(left.origin)
    return Polynomial(_convolve(left.coefficients, right.coefficients, inner),
                      left.origin)
