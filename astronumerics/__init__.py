"""
Astrodynamics Numerics
======================
Numerical core for modelling slowly varying orbital quantities.

Architecture:
    - Dimensioned quantities with SI units and elementary functions
    - Polynomials in the monomial basis with a movable origin
    - Poisson series and piecewise Poisson series with closed-form algebra
    - Gauss-Legendre, midpoint and Clenshaw-Curtis quadrature
    - Apodization windows for frequency analysis
    - JSON message serialization and Mathematica export
"""

__version__ = "0.1.0"
