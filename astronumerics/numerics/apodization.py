"""
Apodization windows.

Each window is a degree-0 Poisson series centred on the middle of
[t_min, t_max]. Cosine-sum windows are

    w(t) = a_0 + a_1 cos(W x) + a_2 cos(2 W x) + ...,   x = t - t_mid,

with W = 2 pi / (t_max - t_min); written about the midpoint all terms add,
which is the alternating-sign textbook form seen from t_min. Being Poisson
series, windows evaluate like any other series and can also enter exact
products.

They exist to weight inner products (see poisson_series.inner_product) so
that periodic content fitted over a finite interval leaks less into
neighbouring frequencies.

References:
    Harris, "On the use of windows for harmonic analysis with the discrete
    Fourier transform", Proc. IEEE 66 (1978)
    Nuttall, "Some windows with very good sidelobe behavior", IEEE Trans.
    ASSP 29 (1981)
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from ..core.constants import (
    TWO_PI,
    HAMMING_COEFFICIENTS, BLACKMAN_COEFFICIENTS, EXACT_BLACKMAN_COEFFICIENTS,
    NUTTALL_COEFFICIENTS, BLACKMAN_NUTTALL_COEFFICIENTS,
    BLACKMAN_HARRIS_COEFFICIENTS, FLAT_TOP_COEFFICIENTS,
)
from ..core.types import to_seconds
from .poisson_series import PoissonSeries, SinCosPolynomials
from .polynomial import Polynomial


def _interval(t_min, t_max) -> tuple[float, float]:
    t_min = to_seconds(t_min)
    t_max = to_seconds(t_max)
    if not t_min < t_max:
        raise ValueError(f"Window needs t_min < t_max, got [{t_min}, {t_max}]")
    return t_min, t_max


def cosine_sum(coefficients: Sequence[float], t_min, t_max) -> PoissonSeries:
    """Generalized cosine window sum_k a_k cos(k W (t - t_mid)).

    Args:
        coefficients: a_0, a_1, ... of the centred form.
        t_min, t_max: Window support.

    Returns:
        Degree-0 Poisson series with origin at the midpoint.
    """
    t_min, t_max = _interval(t_min, t_max)
    t_mid = 0.5 * (t_min + t_max)
    omega = TWO_PI / (t_max - t_min)
    periodic = {
        k * omega: SinCosPolynomials(Polynomial([0.0], t_mid),
                                     Polynomial([a_k], t_mid))
        for k, a_k in enumerate(coefficients) if k > 0
    }
    return PoissonSeries(Polynomial([coefficients[0]], t_mid), periodic,
                         periodic_degree=0)


def dirichlet(t_min, t_max) -> PoissonSeries:
    """Rectangular window: 1 on the whole interval."""
    return cosine_sum((1.0,), t_min, t_max)


def sine(t_min, t_max) -> PoissonSeries:
    """Sine window sin(pi (t - t_min) / T), i.e. cos(pi x / T) centred."""
    t_min, t_max = _interval(t_min, t_max)
    t_mid = 0.5 * (t_min + t_max)
    omega = np.pi / (t_max - t_min)
    return PoissonSeries(
        Polynomial([0.0], t_mid),
        {omega: SinCosPolynomials(Polynomial([0.0], t_mid),
                                  Polynomial([1.0], t_mid))},
        periodic_degree=0)


def hann(t_min, t_max) -> PoissonSeries:
    """Hann window: 0 at both ends, 1 at the midpoint."""
    return cosine_sum((0.5, 0.5), t_min, t_max)


def hamming(t_min, t_max) -> PoissonSeries:
    return cosine_sum(HAMMING_COEFFICIENTS, t_min, t_max)


def blackman(t_min, t_max) -> PoissonSeries:
    return cosine_sum(BLACKMAN_COEFFICIENTS, t_min, t_max)


def exact_blackman(t_min, t_max) -> PoissonSeries:
    return cosine_sum(EXACT_BLACKMAN_COEFFICIENTS, t_min, t_max)


def nuttall(t_min, t_max) -> PoissonSeries:
    return cosine_sum(NUTTALL_COEFFICIENTS, t_min, t_max)


def blackman_nuttall(t_min, t_max) -> PoissonSeries:
    return cosine_sum(BLACKMAN_NUTTALL_COEFFICIENTS, t_min, t_max)


def blackman_harris(t_min, t_max) -> PoissonSeries:
    return cosine_sum(BLACKMAN_HARRIS_COEFFICIENTS, t_min, t_max)


def flat_top(t_min, t_max) -> PoissonSeries:
    """ISO 18431-2 flat-top window."""
    return cosine_sum(FLAT_TOP_COEFFICIENTS, t_min, t_max)


WINDOWS: dict[str, Callable[..., PoissonSeries]] = {
    "dirichlet": dirichlet,
    "sine": sine,
    "hann": hann,
    "hamming": hamming,
    "blackman": blackman,
    "exact_blackman": exact_blackman,
    "nuttall": nuttall,
    "blackman_nuttall": blackman_nuttall,
    "blackman_harris": blackman_harris,
    "flat_top": flat_top,
}


def window(name: str, t_min, t_max) -> PoissonSeries:
    """Look up a window by name.

    Raises:
        KeyError: If the name is unknown.
    """
    try:
        factory = WINDOWS[name]
    except KeyError:
        raise KeyError(
            f"Unknown window {name!r}; known windows: {', '.join(sorted(WINDOWS))}"
        ) from None
    return factory(t_min, t_max)
