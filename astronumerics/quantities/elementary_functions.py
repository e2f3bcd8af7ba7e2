"""
Elementary functions on quantities.

Roots and powers act on the dimension vector exactly (sqrt halves it, cbrt
thirds it). Circular and hyperbolic functions take angles only and return
plain numbers; their inverses take plain numbers and return angles. A bare
float passed where an angle is expected is a DimensionError, which catches
the classic degrees-vs-radians and forgot-the-angle mistakes.

Hyperbolic functions are treated as functions of hyperbolic angles (arc
length over curvature radius in the hyperbolic plane), hence "arc" for the
inverses.
"""

from __future__ import annotations

import numbers
from fractions import Fraction

import numpy as np

from .dimensions import DimensionError, Exponent, ANGLE
from .quantities import Angle, Quantity, dimensions_of, make_quantity


def _angle_radians(alpha):
    if not isinstance(alpha, Quantity) or alpha.dimensions != ANGLE:
        raise DimensionError(
            f"Expected an Angle, got [{dimensions_of(alpha)}] "
            f"({type(alpha).__name__})"
        )
    return alpha.magnitude


def _plain(x, function: str):
    if isinstance(x, Quantity):
        raise DimensionError(
            f"{function} expects a plain number, got [{x.dimensions}]"
        )
    return x


# ---------------------------------------------------------------------------
# Roots and powers
# ---------------------------------------------------------------------------

def absolute(x):
    """Absolute value, preserving dimensions."""
    return abs(x)


def sqrt(x):
    """Square root; the dimension exponents are halved."""
    if isinstance(x, Quantity):
        return make_quantity(np.sqrt(x.magnitude), x.dimensions ** Fraction(1, 2))
    return np.sqrt(x)


def cbrt(x):
    """Cube root; the dimension exponents are divided by three."""
    if isinstance(x, Quantity):
        return make_quantity(np.cbrt(x.magnitude), x.dimensions ** Fraction(1, 3))
    return np.cbrt(x)


def power(x, exponent: Exponent):
    """x raised to a rational exponent.

    Integer exponents with |n| <= 3 are expanded into multiplications,
    which is faster than a general power and introduces no rounding from
    exp/log.

    Args:
        x: Plain number, array or quantity.
        exponent: Integer or Fraction.

    Returns:
        x**exponent with dimensions scaled accordingly.
    """
    if not isinstance(exponent, numbers.Rational):
        raise TypeError(f"Exponent must be rational, got {exponent!r}")
    if exponent == 0:
        if isinstance(x, Quantity):
            return np.ones_like(x.magnitude) if x.is_vector else 1.0
        return np.ones_like(x) if isinstance(x, np.ndarray) else 1.0
    if exponent == 1:
        return x
    if exponent == 2:
        return x * x
    if exponent == 3:
        return x * x * x
    if exponent == -1:
        return 1.0 / x
    if exponent == -2:
        return 1.0 / (x * x)
    if exponent == -3:
        return 1.0 / (x * x * x)
    if isinstance(x, Quantity):
        return x ** exponent
    return x ** float(exponent)


# ---------------------------------------------------------------------------
# Circular functions
# ---------------------------------------------------------------------------

def sin(alpha: Angle):
    return np.sin(_angle_radians(alpha))


def cos(alpha: Angle):
    return np.cos(_angle_radians(alpha))


def tan(alpha: Angle):
    return np.tan(_angle_radians(alpha))


def arcsin(x) -> Angle:
    return Angle(np.arcsin(_plain(x, "arcsin")))


def arccos(x) -> Angle:
    return Angle(np.arccos(_plain(x, "arccos")))


def arctan(y, x=1.0) -> Angle:
    """Two-argument arctangent.

    Either both arguments are plain numbers, or both are quantities of the
    same dimensions (e.g. two lengths).
    """
    if isinstance(y, Quantity) or isinstance(x, Quantity):
        if dimensions_of(y) != dimensions_of(x):
            raise DimensionError(
                f"arctan of [{dimensions_of(y)}] over [{dimensions_of(x)}]"
            )
        return Angle(np.arctan2(y.magnitude, x.magnitude))
    return Angle(np.arctan2(y, x))


# ---------------------------------------------------------------------------
# Hyperbolic functions
# ---------------------------------------------------------------------------

def sinh(alpha: Angle):
    return np.sinh(_angle_radians(alpha))


def cosh(alpha: Angle):
    return np.cosh(_angle_radians(alpha))


def tanh(alpha: Angle):
    return np.tanh(_angle_radians(alpha))


def arcsinh(x) -> Angle:
    return Angle(np.arcsinh(_plain(x, "arcsinh")))


def arccosh(x) -> Angle:
    return Angle(np.arccosh(_plain(x, "arccosh")))


def arctanh(x) -> Angle:
    return Angle(np.arctanh(_plain(x, "arctanh")))
