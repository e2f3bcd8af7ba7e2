"""
Numerical quadrature.

Fixed rules:
    - Gauss-Legendre on N nodes, exact for polynomials of degree <= 2N - 1
    - Composite midpoint on a caller-chosen number of intervals
    - Clenshaw-Curtis on 2^p + 1 Chebyshev extrema

and an adaptive Clenshaw-Curtis that doubles p until an estimated relative
error or a point budget is reached. Clenshaw-Curtis nodes are nested, so
each refinement only samples the new odd-indexed nodes.

The bounds may be floats or quantities (e.g. Time) and the integrand may
return floats, arrays or quantities: the result has the dimensions of the
integrand times those of the argument.

References:
    Waldvogel, "Fast construction of the Fejer and Clenshaw-Curtis
    quadrature rules", BIT 46 (2006)
    Trefethen, "Is Gauss quadrature better than Clenshaw-Curtis?",
    SIAM Review 50 (2008)
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import Callable, Optional

import numpy as np
from scipy.fft import dct
from scipy.special import roots_legendre

from ..core.types import QuadratureResult
from .values import weighted_sum, magnitude_norm

logger = logging.getLogger(__name__)


# ===================================================================
# Nodes and weights
# ===================================================================

@lru_cache(maxsize=None)
def gauss_legendre_nodes_and_weights(points: int) -> tuple[np.ndarray, np.ndarray]:
    """Gauss-Legendre nodes and weights on [-1, 1].

    Args:
        points: Number of nodes N >= 1.

    Returns:
        nodes: shape (N,).
        weights: shape (N,).
    """
    if points < 1:
        raise ValueError(f"Gauss-Legendre needs at least one point, got {points}")
    nodes, weights = roots_legendre(points)
    nodes.setflags(write=False)
    weights.setflags(write=False)
    return nodes, weights


def _clenshaw_curtis_level(points: int) -> int:
    """p such that points == 2^p + 1."""
    n = points - 1
    if n < 1 or n & (n - 1):
        raise ValueError(
            f"Clenshaw-Curtis needs 2^p + 1 points, got {points}"
        )
    return n.bit_length() - 1


@lru_cache(maxsize=None)
def clenshaw_curtis_nodes_and_weights(points: int) -> tuple[np.ndarray, np.ndarray]:
    """Clenshaw-Curtis nodes cos(k pi / N) and weights on [-1, 1].

    The rule integrates the Chebyshev interpolant of the samples:

        I = sum''_{j even} a_j * 2 / (1 - j^2)

    with a_j the DCT-I of the samples divided by N. The weights are the
    transposed map, obtained with one DCT-I of the moment vector.

    Args:
        points: N + 1 = 2^p + 1 nodes.

    Returns:
        nodes: shape (N + 1,), decreasing from 1 to -1.
        weights: shape (N + 1,).
    """
    _clenshaw_curtis_level(points)
    n = points - 1
    k = np.arange(points)
    nodes = np.cos(np.pi * k / n)

    # Moments of the even Chebyshev polynomials, with the end terms halved.
    moments = np.zeros(points)
    j = np.arange(0, points, 2)
    moments[j] = 2.0 / (1.0 - j.astype(float) ** 2)
    moments[0] = 1.0
    if n % 2 == 0:
        moments[n] *= 0.5

    transformed = dct(moments, type=1)
    weights = (transformed + moments[0] + (-1.0) ** k * moments[n]) / n
    weights[0] *= 0.5
    weights[n] *= 0.5

    nodes.setflags(write=False)
    weights.setflags(write=False)
    return nodes, weights


# ===================================================================
# Fixed rules
# ===================================================================

def _affine(lower, upper):
    half_width = (upper - lower) * 0.5
    midpoint = lower + half_width
    return midpoint, half_width


def gauss_legendre(f: Callable, lower, upper, points: int):
    """Gauss-Legendre quadrature of f over [lower, upper] on N nodes.

    Args:
        f: Integrand.
        lower, upper: Bounds (floats or quantities).
        points: Number of nodes N.

    Returns:
        Approximation of the integral, exact for polynomials of degree
        up to 2N - 1.
    """
    nodes, weights = gauss_legendre_nodes_and_weights(points)
    midpoint, half_width = _affine(lower, upper)
    samples = [f(midpoint + half_width * x) for x in nodes]
    return weighted_sum(weights, samples) * half_width


def midpoint(f: Callable, lower, upper, intervals: int):
    """Composite midpoint rule on equal intervals.

    Args:
        f: Integrand.
        lower, upper: Bounds (floats or quantities).
        intervals: Number of subintervals, >= 1.

    Returns:
        Approximation of the integral; the error decreases as intervals^-2.
    """
    if intervals < 1:
        raise ValueError(f"Midpoint needs at least one interval, got {intervals}")
    h = (upper - lower) / intervals
    samples = [f(lower + (i + 0.5) * h) for i in range(intervals)]
    return weighted_sum([1.0] * intervals, samples) * h


def clenshaw_curtis(f: Callable, lower, upper, points: int):
    """Clenshaw-Curtis quadrature of f on 2^p + 1 points.

    Raises:
        ValueError: If points is not of the form 2^p + 1.
    """
    nodes, weights = clenshaw_curtis_nodes_and_weights(points)
    midpoint_, half_width = _affine(lower, upper)
    samples = [f(midpoint_ + half_width * x) for x in nodes]
    return weighted_sum(weights, samples) * half_width


# ===================================================================
# Adaptive rule
# ===================================================================

def automatic_clenshaw_curtis(f: Callable,
                              lower,
                              upper,
                              max_relative_error: Optional[float] = None,
                              max_points: Optional[int] = None,
                              initial_points: int = 2
                              ) -> QuadratureResult:
    """Clenshaw-Curtis on 2^p + 1 points for increasing p.

    Starting from initial_points, the point count is doubled (minus one)
    and the new estimate compared with the previous one. Iteration stops as
    soon as the relative difference is at most max_relative_error, or when
    the next level would need more than max_points samples. Samples of
    level p are reused at level p + 1.

    Args:
        f: Integrand.
        lower, upper: Bounds (floats or quantities).
        max_relative_error: Target relative error, or None.
        max_points: Sample budget, or None.
        initial_points: Point count of the first level, 2^p + 1.

    Returns:
        QuadratureResult whose converged flag tells whether the tolerance
        was met (True) or the budget ran out (False).

    Raises:
        ValueError: If neither stopping criterion is given, or if
            initial_points is not of the form 2^p + 1.
    """
    if max_relative_error is None and max_points is None:
        raise ValueError(
            "automatic_clenshaw_curtis needs max_relative_error or max_points"
        )
    _clenshaw_curtis_level(initial_points)

    midpoint_, half_width = _affine(lower, upper)

    def sample(x):
        return f(midpoint_ + half_width * x)

    points = initial_points
    nodes, weights = clenshaw_curtis_nodes_and_weights(points)
    samples = [sample(x) for x in nodes]
    estimate = weighted_sum(weights, samples) * half_width
    relative_error = math.inf

    while True:
        next_points = 2 * points - 1
        if max_points is not None and next_points > max_points:
            converged = False
            logger.info(
                "Clenshaw-Curtis budget of %d points exhausted at %d points "
                "(estimated relative error %.3e)",
                max_points, points, relative_error)
            break

        nodes, weights = clenshaw_curtis_nodes_and_weights(next_points)
        refined = [None] * next_points
        refined[0::2] = samples
        for k in range(1, next_points, 2):
            refined[k] = sample(nodes[k])
        samples = refined
        points = next_points

        previous = estimate
        estimate = weighted_sum(weights, samples) * half_width
        scale = magnitude_norm(estimate)
        difference = magnitude_norm(estimate - previous)
        relative_error = difference / scale if scale > 0.0 else (
            0.0 if difference == 0.0 else math.inf)
        logger.debug("Clenshaw-Curtis on %d points: relative error %.3e",
                     points, relative_error)

        if max_relative_error is not None and relative_error <= max_relative_error:
            converged = True
            break

    return QuadratureResult(value=estimate, converged=converged,
                            points=points, relative_error=relative_error)
