"""
Operations on coefficient values.

Polynomial and series coefficients are floats, numpy arrays (vectors) or
quantities (dimensioned scalars or vectors). These helpers give the algebra
one way to build zeros, sum samples, measure sizes and take the inner
product of such values without caring which one it has.
"""

from __future__ import annotations

from functools import reduce

import numpy as np

from ..quantities.quantities import Quantity
from ..quantities.si import Second


def zero_like(value):
    """The additive identity of value's type and shape."""
    return value * 0.0


def weighted_sum(weights, samples):
    """sum(w_i * s_i) for arbitrary coefficient values."""
    terms = (w * s for w, s in zip(weights, samples))
    return reduce(lambda a, b: a + b, terms)


def magnitude_norm(value) -> float:
    """Euclidean size of a value, ignoring its dimensions."""
    if isinstance(value, Quantity):
        value = value.magnitude
    return float(np.linalg.norm(np.asarray(value, dtype=float)))


def inner(left, right):
    """Euclidean inner product; the plain product for scalars."""
    if isinstance(left, Quantity) or isinstance(right, Quantity):
        if (isinstance(left, Quantity) and left.is_vector) or (
                isinstance(right, Quantity) and right.is_vector):
            return left.dot(right) if isinstance(left, Quantity) else right.dot(left)
        return left * right
    if np.ndim(left) or np.ndim(right):
        return np.dot(left, right)
    return left * right


def integrated(value):
    """A coefficient of the time integral of value: value * Second."""
    if isinstance(value, Quantity):
        return value * Second
    return value


def differentiated(value):
    """A coefficient of the time derivative of value: value / Second."""
    if isinstance(value, Quantity):
        return value / Second
    return value


def values_equal(left, right) -> bool:
    """Exact equality for floats, arrays and quantities."""
    if isinstance(left, Quantity) or isinstance(right, Quantity):
        return left == right
    return bool(np.array_equal(left, right))
