"""
Piecewise Poisson series.

n Poisson series stitched over the n contiguous intervals defined by n + 1
strictly increasing bounds. Interval i is [b_i, b_i+1), except the last
one which also contains b_n. Evaluating outside [b_0, b_n] is an error.
"""

from __future__ import annotations

import bisect
from typing import Callable, Sequence

import numpy as np

from ..core.types import to_seconds
from .poisson_series import PoissonSeries
from .polynomial import is_coefficient_like


class PiecewisePoissonSeries:
    """Immutable sequence of Poisson series over contiguous intervals.

    Attributes:
        bounds: Strictly increasing interval bounds [seconds], length n + 1.
        series: Poisson series, length n.
    """

    __slots__ = ("_bounds", "_series")
    __array_ufunc__ = None

    def __init__(self, bounds: Sequence, series: Sequence[PoissonSeries]):
        """Initialize the piecewise series.

        Args:
            bounds: n + 1 instants, float seconds or Time.
            series: n Poisson series.

        Raises:
            ValueError: If the counts disagree, n is zero, or the bounds are
                not strictly increasing.
        """
        bounds = tuple(to_seconds(b) for b in bounds)
        series = tuple(series)
        if not series:
            raise ValueError("A piecewise series needs at least one piece")
        if len(bounds) != len(series) + 1:
            raise ValueError(
                f"{len(series)} series need {len(series) + 1} bounds, "
                f"got {len(bounds)}"
            )
        for lower, upper in zip(bounds, bounds[1:]):
            if not lower < upper:
                raise ValueError(
                    f"Bounds must be strictly increasing: {lower} >= {upper}"
                )
        self._bounds = bounds
        self._series = series

    @property
    def bounds(self) -> tuple[float, ...]:
        return self._bounds

    @property
    def series(self) -> tuple[PoissonSeries, ...]:
        return self._series

    @property
    def t_min(self) -> float:
        return self._bounds[0]

    @property
    def t_max(self) -> float:
        return self._bounds[-1]

    def __len__(self):
        return len(self._series)

    def _index(self, t: float) -> int:
        if not self.t_min <= t <= self.t_max:
            raise ValueError(
                f"{t} is outside of [{self.t_min}, {self.t_max}]"
            )
        if t == self.t_max:
            return len(self._series) - 1
        return bisect.bisect_right(self._bounds, t) - 1

    def evaluate(self, t):
        """Value at t, from the piece whose interval contains t.

        Raises:
            ValueError: If t is outside [t_min, t_max].
        """
        t = to_seconds(t)
        if isinstance(t, np.ndarray):
            return np.array([self._series[self._index(float(u))](float(u))
                             for u in t])
        return self._series[self._index(t)](t)

    __call__ = evaluate

    # -----------------------------------------------------------------------
    # Algebra
    # -----------------------------------------------------------------------

    def _map(self, function: Callable) -> PiecewisePoissonSeries:
        return PiecewisePoissonSeries(self._bounds,
                                      [function(s) for s in self._series])

    def _zip(self, other: PiecewisePoissonSeries,
             function: Callable) -> PiecewisePoissonSeries:
        if other.bounds != self._bounds:
            raise ValueError("Piecewise series must share their bounds")
        return PiecewisePoissonSeries(
            self._bounds,
            [function(a, b) for a, b in zip(self._series, other.series)])

    def __pos__(self):
        return self

    def __neg__(self):
        return self._map(lambda s: -s)

    def __add__(self, other):
        if isinstance(other, PiecewisePoissonSeries):
            return self._zip(other, lambda a, b: a + b)
        if isinstance(other, PoissonSeries):
            return self._map(lambda s: s + other)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, PoissonSeries):
            return self._map(lambda s: other + s)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, PiecewisePoissonSeries):
            return self._zip(other, lambda a, b: a - b)
        if isinstance(other, PoissonSeries):
            return self._map(lambda s: s - other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, PoissonSeries):
            return self._map(lambda s: other - s)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, PoissonSeries) or is_coefficient_like(other):
            return self._map(lambda s: s * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, PoissonSeries) or is_coefficient_like(other):
            return self._map(lambda s: other * s)
        return NotImplemented

    def __truediv__(self, other):
        if is_coefficient_like(other):
            return self._map(lambda s: s / other)
        return NotImplemented

    # -----------------------------------------------------------------------
    # Calculus
    # -----------------------------------------------------------------------

    def integrate(self, t1, t2):
        """Definite integral from t1 to t2, summing closed-form pieces.

        Raises:
            ValueError: If [t1, t2] is not within [t_min, t_max] or t1 > t2.
        """
        t1 = to_seconds(t1)
        t2 = to_seconds(t2)
        if t1 > t2:
            raise ValueError(f"Reversed integration interval [{t1}, {t2}]")
        first = self._index(t1)
        last = self._index(t2)
        total = None
        for i in range(first, last + 1):
            lower = max(t1, self._bounds[i])
            upper = min(t2, self._bounds[i + 1])
            piece = self._series[i].integrate(lower, upper)
            total = piece if total is None else total + piece
        return total

    def __repr__(self):
        return (f"PiecewisePoissonSeries(bounds={list(self._bounds)!r}, "
                f"pieces={len(self._series)})")
