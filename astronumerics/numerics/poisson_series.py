"""
Poisson series: polynomials plus polynomial-modulated sinusoids.

A Poisson series with origin t0 is

    f(t) = A(t) + sum_w [ S_w(t) sin(w (t - t0)) + C_w(t) cos(w (t - t0)) ]

where A, S_w and C_w are polynomials over the same origin and the angular
frequencies w are distinct and strictly positive. This is the natural shape
of slowly drifting orbital elements, and the family is closed under sums,
products, antiderivatives and changes of origin, all of which are computed
here in closed form.

Binary operations produce a result at the left operand's origin; the right
operand is re-based first if needed. Inner products with an apodization
weight are not closed-form in general and use adaptive Clenshaw-Curtis
quadrature.

Conventions:
    - Instants: float seconds or Time quantities
    - Frequencies: float rad/s or AngularFrequency quantities
"""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Callable, Mapping, NamedTuple, Optional, Union

import numpy as np

from ..core.config import NumericsConfig, QuadratureConfig
from ..core.types import (
    Instant, InnerProductResult, to_seconds, to_radians_per_second,
)
from ..quantities.elementary_functions import sqrt
from .polynomial import (
    Polynomial, is_coefficient_like,
    pointwise_inner_product as polynomial_pointwise_inner_product,
)
from .quadrature import automatic_clenshaw_curtis
from .values import inner, integrated, differentiated

logger = logging.getLogger(__name__)


class SinCosPolynomials(NamedTuple):
    """Envelope polynomials of the sine and cosine at one frequency."""
    sin: Polynomial
    cos: Polynomial


def _map_coefficients(polynomial: Polynomial, function: Callable) -> Polynomial:
    return Polynomial([function(c) for c in polynomial.coefficients],
                      polynomial.origin)


def _scaled_derivative(polynomial: Polynomial, k: int) -> Polynomial:
    """k-th derivative with time measured in seconds and the value type kept.

    Coefficient i contributes i! / (i - k)! * c_i at index i - k.
    """
    coefficients = polynomial.coefficients
    if k > polynomial.degree:
        return Polynomial([polynomial.zero()], polynomial.origin)
    return Polynomial([math.perm(i, k) * coefficients[i]
                       for i in range(k, len(coefficients))],
                      polynomial.origin)


class PoissonSeries:
    """Immutable Poisson series.

    Attributes:
        aperiodic: Aperiodic polynomial A.
        periodic: Read-only mapping w [rad/s] -> SinCosPolynomials, in
            increasing frequency order.
        origin: Common origin of all polynomials [seconds].
    """

    __slots__ = ("_aperiodic", "_periodic", "_periodic_degree")
    __array_ufunc__ = None

    def __init__(self,
                 aperiodic: Polynomial,
                 periodic: Optional[Mapping] = None,
                 periodic_degree: Optional[int] = None):
        """Initialize the series.

        Frequencies are normalized: a negative w is replaced by |w| with the
        sine polynomial negated, a zero w folds its cosine polynomial into
        the aperiodic part, and entries that land on the same frequency are
        summed.

        Args:
            aperiodic: Aperiodic polynomial; its origin is the series origin.
            periodic: Mapping w -> (sin_polynomial, cos_polynomial), w as
                float rad/s or AngularFrequency.
            periodic_degree: Degree of the periodic polynomials. Inferred
                from the entries if omitted, 0 for a series without any.

        Raises:
            ValueError: If origins differ or periodic degrees disagree.
        """
        origin = aperiodic.origin
        periodic = dict(periodic or {})

        degrees = set()
        for omega, polynomials in periodic.items():
            sin_polynomial, cos_polynomial = polynomials
            for polynomial in (sin_polynomial, cos_polynomial):
                if polynomial.origin != origin:
                    raise ValueError(
                        f"Periodic polynomial at w={omega} has origin "
                        f"{polynomial.origin}, expected {origin}"
                    )
                degrees.add(polynomial.degree)
        if periodic_degree is not None:
            degrees.add(periodic_degree)
        if len(degrees) > 1:
            raise ValueError(
                f"Periodic polynomials must share one degree, got {sorted(degrees)}"
            )
        self._periodic_degree = degrees.pop() if degrees else 0

        normalized = {}
        for omega, (sin_polynomial, cos_polynomial) in periodic.items():
            omega = to_radians_per_second(omega)
            if omega < 0.0:
                omega = -omega
                sin_polynomial = -sin_polynomial
            if omega == 0.0:
                aperiodic = aperiodic + cos_polynomial
                continue
            if omega in normalized:
                previous = normalized[omega]
                sin_polynomial = previous.sin + sin_polynomial
                cos_polynomial = previous.cos + cos_polynomial
            normalized[omega] = SinCosPolynomials(sin_polynomial, cos_polynomial)

        self._aperiodic = aperiodic
        self._periodic = {omega: normalized[omega] for omega in sorted(normalized)}

    @classmethod
    def _make(cls, aperiodic, periodic, periodic_degree) -> PoissonSeries:
        """Build from already-normalized data, skipping validation."""
        series = cls.__new__(cls)
        series._aperiodic = aperiodic
        series._periodic = {omega: periodic[omega] for omega in sorted(periodic)}
        series._periodic_degree = periodic_degree
        return series

    @classmethod
    def from_polynomial(cls, polynomial: Polynomial,
                        periodic_degree: int = 0) -> PoissonSeries:
        """A series with no periodic terms."""
        return cls._make(polynomial, {}, periodic_degree)

    # -----------------------------------------------------------------------
    # Accessors
    # -----------------------------------------------------------------------

    @property
    def aperiodic(self) -> Polynomial:
        return self._aperiodic

    @property
    def periodic(self) -> Mapping[float, SinCosPolynomials]:
        return MappingProxyType(self._periodic)

    @property
    def frequencies(self) -> tuple[float, ...]:
        return tuple(self._periodic)

    @property
    def origin(self) -> float:
        return self._aperiodic.origin

    @property
    def aperiodic_degree(self) -> int:
        return self._aperiodic.degree

    @property
    def periodic_degree(self) -> int:
        return self._periodic_degree

    def _zero_polynomial(self, degree: int) -> Polynomial:
        zero = self._aperiodic.zero()
        return Polynomial([zero] * (degree + 1), self.origin)

    # -----------------------------------------------------------------------
    # Evaluation and representation changes
    # -----------------------------------------------------------------------

    def evaluate(self, t):
        """Value of the series at t (float, Time, or array of instants)."""
        t = to_seconds(t)
        dt = t - self.origin
        result = self._aperiodic(t)
        for omega, (sin_polynomial, cos_polynomial) in self._periodic.items():
            angle = omega * dt
            result = (result
                      + sin_polynomial(t) * np.sin(angle)
                      + cos_polynomial(t) * np.cos(angle))
        return result

    __call__ = evaluate

    def with_degree(self, aperiodic_degree: int,
                    periodic_degree: int) -> PoissonSeries:
        """Zero-pad to higher degrees.

        Raises:
            ValueError: If either degree would decrease.
        """
        if periodic_degree < self._periodic_degree:
            raise ValueError(
                f"Cannot convert periodic degree {self._periodic_degree} "
                f"to {periodic_degree}"
            )
        periodic = {
            omega: SinCosPolynomials(s.with_degree(periodic_degree),
                                     c.with_degree(periodic_degree))
            for omega, (s, c) in self._periodic.items()
        }
        return PoissonSeries._make(self._aperiodic.with_degree(aperiodic_degree),
                                   periodic, periodic_degree)

    def at_origin(self, origin) -> PoissonSeries:
        """The same function expressed about another origin.

        Each polynomial is Taylor-shifted and each sine/cosine pair is
        rotated by the phase w * (origin - old_origin).
        """
        origin = to_seconds(origin)
        if origin == self.origin:
            return self
        shift = origin - self.origin
        periodic = {}
        for omega, (sin_polynomial, cos_polynomial) in self._periodic.items():
            phase = omega * shift
            sin_phase = np.sin(phase)
            cos_phase = np.cos(phase)
            s = sin_polynomial.at_origin(origin)
            c = cos_polynomial.at_origin(origin)
            periodic[omega] = SinCosPolynomials(
                sin=s * cos_phase - c * sin_phase,
                cos=s * sin_phase + c * cos_phase)
        return PoissonSeries._make(self._aperiodic.at_origin(origin),
                                   periodic, self._periodic_degree)

    def _aligned(self, other) -> PoissonSeries:
        if isinstance(other, Polynomial):
            other = PoissonSeries.from_polynomial(other)
        return other.at_origin(self.origin)

    # -----------------------------------------------------------------------
    # Vector space
    # -----------------------------------------------------------------------

    def __pos__(self):
        return self

    def __neg__(self):
        periodic = {omega: SinCosPolynomials(-s, -c)
                    for omega, (s, c) in self._periodic.items()}
        return PoissonSeries._make(-self._aperiodic, periodic,
                                   self._periodic_degree)

    def _combine(self, other: PoissonSeries, operation: Callable) -> PoissonSeries:
        degree = max(self._periodic_degree, other.periodic_degree)
        zero = self._zero_polynomial(degree)
        missing = SinCosPolynomials(zero, zero)
        periodic = {}
        for omega in set(self._periodic) | set(other.periodic):
            left = self._periodic.get(omega, missing)
            right = other.periodic.get(omega, missing)
            periodic[omega] = SinCosPolynomials(
                operation(left.sin, right.sin).with_degree(degree),
                operation(left.cos, right.cos).with_degree(degree))
        return PoissonSeries._make(operation(self._aperiodic, other.aperiodic),
                                   periodic, degree)

    def __add__(self, other):
        if not isinstance(other, (PoissonSeries, Polynomial)):
            return NotImplemented
        return self._combine(self._aligned(other), lambda a, b: a + b)

    def __radd__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return PoissonSeries.from_polynomial(other) + self

    def __sub__(self, other):
        if not isinstance(other, (PoissonSeries, Polynomial)):
            return NotImplemented
        return self._combine(self._aligned(other), lambda a, b: a - b)

    def __rsub__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return PoissonSeries.from_polynomial(other) - self

    def _scaled(self, function: Callable) -> PoissonSeries:
        periodic = {omega: SinCosPolynomials(function(s), function(c))
                    for omega, (s, c) in self._periodic.items()}
        return PoissonSeries._make(function(self._aperiodic), periodic,
                                   self._periodic_degree)

    def __mul__(self, other):
        if isinstance(other, (PoissonSeries, Polynomial)):
            return _product(self, self._aligned(other), lambda a, b: a * b)
        if is_coefficient_like(other):
            return self._scaled(lambda p: p * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Polynomial):
            return PoissonSeries.from_polynomial(other) * self
        if is_coefficient_like(other):
            return self._scaled(lambda p: other * p)
        return NotImplemented

    def __truediv__(self, other):
        if is_coefficient_like(other):
            return self._scaled(lambda p: p / other)
        return NotImplemented

    # -----------------------------------------------------------------------
    # Calculus
    # -----------------------------------------------------------------------

    def primitive(self) -> PoissonSeries:
        """Closed-form antiderivative.

        The aperiodic part integrates by the power rule. For the pair (S, C)
        at frequency w, repeated integration by parts gives

            int S sin = sum_k S^(k) / w^(k+1) * (+sin, k = 1, 5, ..;
                        -sin, k = 3, 7, ..; -cos, k = 0, 4, ..; +cos, k = 2, 6, ..)
            int C cos = sum_k C^(k) / w^(k+1) * (+sin, k = 0, 4, ..;
                        -sin, k = 2, 6, ..; +cos, k = 1, 5, ..; -cos, k = 3, 7, ..)

        which terminates after degree + 1 terms. The aperiodic degree grows
        by one; the periodic degree is unchanged. The aperiodic part of the
        primitive vanishes at the origin.
        """
        degree = self._periodic_degree
        periodic = {}
        for omega, (sin_polynomial, cos_polynomial) in self._periodic.items():
            sin_terms = []
            cos_terms = []
            for k in range(degree + 1):
                scale = 1.0 / omega ** (k + 1)
                s_k = _scaled_derivative(sin_polynomial, k) * scale
                c_k = _scaled_derivative(cos_polynomial, k) * scale
                if k % 2 == 0:
                    sign = 1.0 if k % 4 == 0 else -1.0
                    cos_terms.append(s_k * -sign)
                    sin_terms.append(c_k * sign)
                else:
                    sign = 1.0 if k % 4 == 1 else -1.0
                    sin_terms.append(s_k * sign)
                    cos_terms.append(c_k * sign)
            new_sin = sin_terms[0]
            for term in sin_terms[1:]:
                new_sin = new_sin + term
            new_cos = cos_terms[0]
            for term in cos_terms[1:]:
                new_cos = new_cos + term
            periodic[omega] = SinCosPolynomials(
                _map_coefficients(new_sin.with_degree(degree), integrated),
                _map_coefficients(new_cos.with_degree(degree), integrated))
        return PoissonSeries._make(self._aperiodic.primitive(), periodic, degree)

    def integrate(self, t1, t2):
        """Definite integral from t1 to t2, in closed form."""
        primitive = self.primitive()
        return primitive(t2) - primitive(t1)

    def derivative(self) -> PoissonSeries:
        """Closed-form derivative: (S' - wC) sin + (C' + wS) cos."""
        degree = self._periodic_degree
        periodic = {}
        for omega, (sin_polynomial, cos_polynomial) in self._periodic.items():
            omega_sin = _map_coefficients(sin_polynomial * omega, differentiated)
            omega_cos = _map_coefficients(cos_polynomial * omega, differentiated)
            periodic[omega] = SinCosPolynomials(
                (sin_polynomial.derivative() - omega_cos).with_degree(degree),
                (cos_polynomial.derivative() + omega_sin).with_degree(degree))
        return PoissonSeries._make(self._aperiodic.derivative(), periodic, degree)

    # -----------------------------------------------------------------------
    # Comparison
    # -----------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, PoissonSeries):
            return NotImplemented
        return (self._aperiodic == other.aperiodic
                and self._periodic_degree == other.periodic_degree
                and list(self._periodic) == list(other.periodic)
                and all(self._periodic[omega].sin == other.periodic[omega].sin
                        and self._periodic[omega].cos == other.periodic[omega].cos
                        for omega in self._periodic))

    __hash__ = None

    def __repr__(self):
        return (f"PoissonSeries(origin={self.origin!r}, "
                f"aperiodic_degree={self.aperiodic_degree}, "
                f"periodic_degree={self._periodic_degree}, "
                f"frequencies={list(self._periodic)!r})")


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

def _product(left: PoissonSeries, right: PoissonSeries,
             multiply: Callable) -> PoissonSeries:
    """Distribute every term of left against every term of right.

    Products of sinusoids are reduced with

        sin a sin b = 1/2 [cos(a - b) - cos(a + b)]
        cos a cos b = 1/2 [cos(a - b) + cos(a + b)]
        sin a cos b = 1/2 [sin(a + b) + sin(a - b)]
        cos a sin b = 1/2 [sin(a + b) - sin(a - b)]

    A vanishing difference frequency lands in the aperiodic part.
    """
    ad1, pd1 = left.aperiodic_degree, left.periodic_degree
    ad2, pd2 = right.aperiodic_degree, right.periodic_degree
    aperiodic_degree = max(ad1 + ad2, pd1 + pd2)
    periodic_degree = max(ad1 + pd2, pd1 + ad2, pd1 + pd2)

    aperiodic = multiply(left.aperiodic, right.aperiodic)
    sins = {}
    coss = {}

    def accumulate(omega, sin_polynomial, cos_polynomial):
        if omega in sins:
            sins[omega] = sins[omega] + sin_polynomial
            coss[omega] = coss[omega] + cos_polynomial
        else:
            sins[omega] = sin_polynomial
            coss[omega] = cos_polynomial

    for omega, (s, c) in right.periodic.items():
        accumulate(omega, multiply(left.aperiodic, s), multiply(left.aperiodic, c))
    for omega, (s, c) in left.periodic.items():
        accumulate(omega, multiply(s, right.aperiodic), multiply(c, right.aperiodic))

    for omega1, (s1, c1) in left.periodic.items():
        for omega2, (s2, c2) in right.periodic.items():
            ss = multiply(s1, s2)
            sc = multiply(s1, c2)
            cs = multiply(c1, s2)
            cc = multiply(c1, c2)
            accumulate(omega1 + omega2, (sc + cs) * 0.5, (cc - ss) * 0.5)
            difference = omega1 - omega2
            if difference == 0.0:
                aperiodic = aperiodic + (ss + cc) * 0.5
            elif difference > 0.0:
                accumulate(difference, (sc - cs) * 0.5, (ss + cc) * 0.5)
            else:
                accumulate(-difference, (cs - sc) * 0.5, (ss + cc) * 0.5)

    periodic = {
        omega: SinCosPolynomials(sins[omega].with_degree(periodic_degree),
                                 coss[omega].with_degree(periodic_degree))
        for omega in sins
    }
    return PoissonSeries._make(aperiodic.with_degree(aperiodic_degree),
                               periodic, periodic_degree)


def pointwise_inner_product(left: PoissonSeries,
                            right: PoissonSeries) -> PoissonSeries:
    """Scalar series t -> <left(t), right(t)>, computed exactly."""
    return _product(left, left._aligned(right), polynomial_pointwise_inner_product)


# ---------------------------------------------------------------------------
# Weighted inner products
# ---------------------------------------------------------------------------

Config = Union[QuadratureConfig, NumericsConfig]


def _quadrature_config(config: Optional[Config]) -> QuadratureConfig:
    if config is None:
        return QuadratureConfig()
    if isinstance(config, NumericsConfig):
        return config.quadrature
    return config


def _near(operand: Callable, origin: float) -> Callable:
    if isinstance(operand, PoissonSeries):
        return operand.at_origin(origin)
    return operand


def inner_product(left: Callable,
                  right: Callable,
                  weight: Callable,
                  t_min: Instant,
                  t_max: Instant,
                  config: Optional[Config] = None
                  ) -> InnerProductResult:
    """Weighted mean of <left, right> over [t_min, t_max].

    Computes (1 / (t_max - t_min)) * int weight(t) <left(t), right(t)> dt by
    adaptive Clenshaw-Curtis quadrature, because an apodization weight is
    not in general a Poisson series, and even when it is the exact product
    is needlessly expensive. Poisson series operands are re-based at the
    middle of the interval beforehand, which keeps t - origin small where
    they are evaluated.

    Args:
        left, right: Poisson series, piecewise Poisson series, or any
            callable of time with values supporting an inner product.
        weight: Apodization window or any callable of time.
        t_min, t_max: Integration bounds, float seconds or Time.
        config: Quadrature stopping criteria, either a QuadratureConfig or
            a NumericsConfig; defaults to QuadratureConfig().

    Returns:
        InnerProductResult with the value and quadrature status.

    Raises:
        ValueError: If t_min >= t_max.
    """
    config = _quadrature_config(config)
    t_min = to_seconds(t_min)
    t_max = to_seconds(t_max)
    if not t_min < t_max:
        raise ValueError(f"Empty interval [{t_min}, {t_max}]")

    t_mid = 0.5 * (t_min + t_max)
    left = _near(left, t_mid)
    right = _near(right, t_mid)
    weight = _near(weight, t_mid)

    def integrand(t):
        return inner(left(t), right(t)) * weight(t)

    quadrature = automatic_clenshaw_curtis(
        integrand, t_min, t_max,
        max_relative_error=config.max_relative_error,
        max_points=config.max_points,
        initial_points=config.initial_points)
    if not quadrature.converged:
        logger.debug("Inner product over [%g, %g] did not reach %s",
                     t_min, t_max, config.describe())
    return InnerProductResult(value=quadrature.value / (t_max - t_min),
                              quadrature=quadrature)


def dot(left: Callable, right: Callable, weight: Callable,
        t_min: Instant, t_max: Instant, config: Optional[Config] = None):
    """Value of inner_product(), without the quadrature status."""
    return inner_product(left, right, weight, t_min, t_max, config).value


def norm(series: Callable, weight: Callable, t_min: Instant, t_max: Instant,
         config: Optional[Config] = None):
    """Weighted RMS norm: sqrt of the weighted self inner product."""
    return sqrt(dot(series, series, weight, t_min, t_max, config))
