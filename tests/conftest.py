"""
Shared fixtures: two degree-1 Poisson series with known closed forms.

pa has a zero-frequency entry (folded into the aperiodic part) and pb a
negative frequency (folded onto +3 rad/s with its sine negated).
"""

import pytest

from astronumerics.numerics.poisson_series import PoissonSeries, SinCosPolynomials
from astronumerics.numerics.polynomial import Polynomial

T0 = 0.0


def _p(*coefficients):
    return Polynomial(list(coefficients), T0)


@pytest.fixture
def pa():
    return PoissonSeries(
        _p(0.0, 0.0),
        {
            0.0: SinCosPolynomials(_p(100.0, 200.0), _p(1.0, 2.0)),
            1.0: SinCosPolynomials(_p(5.0, 6.0), _p(7.0, 8.0)),
            2.0: SinCosPolynomials(_p(13.0, 14.0), _p(15.0, 16.0)),
        })


@pytest.fixture
def pb():
    return PoissonSeries(
        _p(3.0, 4.0),
        {
            1.0: SinCosPolynomials(_p(9.0, 10.0), _p(11.0, 12.0)),
            -3.0: SinCosPolynomials(_p(-17.0, -18.0), _p(19.0, 20.0)),
        })
