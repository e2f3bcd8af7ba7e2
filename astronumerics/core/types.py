"""
Foundational types shared across the numerics.

Convention:
    - Instants and durations: float seconds (numerical layer), or Time
      quantities at the API boundary
    - Angular frequencies: float rad/s, or AngularFrequency quantities
    - Coefficient values: float, numpy array, or Quantity
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from ..quantities.dimensions import DimensionError, TIME, ANGLE
from ..quantities.quantities import Quantity, Time, AngularFrequency

Instant = Union[float, Time]
Frequency = Union[float, AngularFrequency]

_ANGULAR_FREQUENCY = ANGLE / TIME


def to_seconds(t: Instant):
    """Convert an instant or duration to float seconds (arrays pass through).

    Raises:
        DimensionError: If t is a quantity that is not a Time.
    """
    if isinstance(t, Quantity):
        if t.dimensions != TIME:
            raise DimensionError(f"Expected a Time, got [{t.dimensions}]")
        return t.magnitude
    if isinstance(t, np.ndarray):
        return t.astype(float, copy=False)
    if isinstance(t, numbers.Real):
        return float(t)
    raise TypeError(f"Expected an instant, got {type(t).__name__}")


def to_radians_per_second(omega: Frequency) -> float:
    """Convert an angular frequency to float rad/s.

    Raises:
        DimensionError: If omega is a quantity that is not Angle / Time.
    """
    if isinstance(omega, Quantity):
        if omega.dimensions != _ANGULAR_FREQUENCY:
            raise DimensionError(
                f"Expected an AngularFrequency, got [{omega.dimensions}]"
            )
        return float(omega.magnitude)
    return float(omega)


@dataclass(frozen=True)
class QuadratureResult:
    """Outcome of an adaptive quadrature.

    Attributes:
        value: Latest estimate of the integral.
        converged: True if the relative error criterion was met, False if
            the point budget was exhausted first.
        points: Number of integrand samples used by the latest estimate.
        relative_error: Estimated relative error of the latest estimate
            (difference with the previous level); inf before any refinement.
    """
    value: Any
    converged: bool
    points: int
    relative_error: float


@dataclass(frozen=True)
class InnerProductResult:
    """Weighted inner product of two series over an interval.

    Attributes:
        value: (1 / (t_max - t_min)) * integral of weight * f * g.
        quadrature: Status of the underlying adaptive quadrature.
    """
    value: Any
    quadrature: QuadratureResult

    @property
    def converged(self) -> bool:
        return self.quadrature.converged
