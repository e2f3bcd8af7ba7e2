"""
Numerics configuration.

Central configuration objects for the tolerance-seeking parts of the
library. The closed-form algebra has no knobs; only the quadrature that
backs inner products does.
"""

from dataclasses import dataclass, field
from typing import Optional

from .constants import (
    CLENSHAW_CURTIS_INITIAL_POINTS,
    INNER_PRODUCT_MAX_RELATIVE_ERROR,
    INNER_PRODUCT_MAX_POINTS,
)


@dataclass
class QuadratureConfig:
    """Adaptive Clenshaw-Curtis configuration.

    At least one of the two stopping criteria must be set, otherwise the
    doubling scheme has no stopping point.

    Attributes:
        initial_points: Point count of the first level, of the form 2^p + 1.
        max_relative_error: Stop once the estimated relative error of the
            result falls below this value.
        max_points: Stop once the next level would use more points.
    """
    initial_points: int = CLENSHAW_CURTIS_INITIAL_POINTS
    max_relative_error: Optional[float] = INNER_PRODUCT_MAX_RELATIVE_ERROR
    max_points: Optional[int] = INNER_PRODUCT_MAX_POINTS

    def describe(self) -> str:
        """Human-readable description of the stopping criteria."""
        criteria = []
        if self.max_relative_error is not None:
            criteria.append(f"relative error < {self.max_relative_error:g}")
        if self.max_points is not None:
            criteria.append(f"at most {self.max_points} points")
        if not criteria:
            return "unbounded (invalid)"
        return f"from {self.initial_points} points, " + " or ".join(criteria)


@dataclass
class NumericsConfig:
    """Top-level numerics configuration."""
    quadrature: QuadratureConfig = field(default_factory=QuadratureConfig)
