"""
Export of values, polynomials and series as Mathematica expressions.

Every function returns Wolfram Language source text. Floats are written with
17 significant digits and wrapped in SetPrecision so that they are read back
at machine precision. Quantities are written as Quantity[number, "unit"]
unless an ExpressIn is given, in which case they become plain numbers in the
chosen units.

Polynomials and series become pure functions of one argument, #, measured in
seconds (or in the ExpressIn time unit).
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from ..numerics.piecewise import PiecewisePoissonSeries
from ..numerics.poisson_series import PoissonSeries
from ..numerics.polynomial import Polynomial
from ..quantities.dimensions import BASE_UNIT_SYMBOLS, DimensionError
from ..quantities.quantities import Quantity, AngularFrequency, Time
from ..quantities.si import Second


def escape(text: str) -> str:
    """Quote a string, escaping quotes and backslashes."""
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def apply(function: str, arguments: Sequence[str]) -> str:
    """function[arg1,arg2,...]; the arguments are used verbatim."""
    return f"{function}[{','.join(arguments)}]"


class ExpressIn:
    """Conversion of quantities to plain numbers in chosen units.

    Each unit must have the dimensions of a single base quantity raised to
    the first power, e.g. ExpressIn(Metre, Second, Degree). A quantity is
    divided by the product of the units matching its dimensions.
    """

    def __init__(self, *units: Quantity):
        self._units = {}
        for unit in units:
            exponents = unit.dimensions.exponents
            bases = [i for i, e in enumerate(exponents) if e != 0]
            if len(bases) != 1 or exponents[bases[0]] != 1 or unit.is_vector:
                raise ValueError(f"{unit!r} is not a base unit")
            self._units[bases[0]] = unit.magnitude

    def __call__(self, quantity: Quantity):
        numerator = 1.0
        denominator = 1.0
        for index, exponent in enumerate(quantity.dimensions.exponents):
            if exponent == 0:
                continue
            if index not in self._units:
                raise DimensionError(
                    f"No unit given for {BASE_UNIT_SYMBOLS[index]} "
                    f"to express {quantity!r}"
                )
            if exponent > 0:
                denominator *= self._units[index] ** float(exponent)
            else:
                numerator *= self._units[index] ** float(-exponent)
        return quantity.magnitude * numerator / denominator


# ---------------------------------------------------------------------------
# Scalars and containers
# ---------------------------------------------------------------------------

def _real(x: float) -> str:
    if math.isinf(x):
        return "Infinity" if x > 0 else apply("Minus", ["Infinity"])
    if math.isnan(x):
        return "Indeterminate"
    return apply("SetPrecision",
                 [f"{x:+.17e}".replace("e", "*^"), "$MachinePrecision"])


def _quantity(quantity: Quantity, express_in: Optional[ExpressIn]) -> str:
    if express_in is not None:
        return to_mathematica(express_in(quantity))
    if quantity.is_vector:
        return apply("List", [_quantity(q, None) for q in quantity])
    return apply("Quantity", [_real(float(quantity.magnitude)),
                              escape(quantity.dimensions.unit_string())])


# ---------------------------------------------------------------------------
# Functions of time
# ---------------------------------------------------------------------------

def _argument(origin: float, express_in: Optional[ExpressIn]) -> str:
    return apply("Subtract", ["#", to_mathematica(Time(origin), express_in)])


def _polynomial_expression(polynomial: Polynomial,
                           express_in: Optional[ExpressIn]) -> str:
    argument = _argument(polynomial.origin, express_in)
    monomials = []
    for i, coefficient in enumerate(polynomial.coefficients):
        # The argument is a time, so coefficient i is per second^i.
        if i > 0:
            coefficient = coefficient / Second ** i
        coefficient = to_mathematica(coefficient, express_in)
        if i == 0:
            monomials.append(coefficient)
        elif i == 1:
            monomials.append(apply("Times", [coefficient, argument]))
        else:
            monomials.append(apply(
                "Times", [coefficient, apply("Power", [argument, str(i)])]))
    return apply("Plus", monomials)


def _series_expression(series: PoissonSeries,
                       express_in: Optional[ExpressIn]) -> str:
    components = [_polynomial_expression(series.aperiodic, express_in)]
    argument = _argument(series.origin, express_in)
    for omega, polynomials in series.periodic.items():
        angle = apply("Times", [to_mathematica(AngularFrequency(omega),
                                               express_in),
                                argument])
        components.append(apply(
            "Times", [_polynomial_expression(polynomials.sin, express_in),
                      apply("Sin", [angle])]))
        components.append(apply(
            "Times", [_polynomial_expression(polynomials.cos, express_in),
                      apply("Cos", [angle])]))
    return apply("Plus", components)


def _piecewise_expression(series: PiecewisePoissonSeries,
                          express_in: Optional[ExpressIn]) -> str:
    cases = []
    bounds = series.bounds
    for i, piece in enumerate(series.series):
        interval = apply("List", [to_mathematica(Time(bounds[i]), express_in),
                                  to_mathematica(Time(bounds[i + 1]),
                                                 express_in)])
        cases.append(apply("List", [_series_expression(piece, express_in),
                                    apply("Between", ["#", interval])]))
    return apply("Piecewise", [apply("List", cases)])


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

def to_mathematica(value, express_in: Optional[ExpressIn] = None) -> str:
    """Mathematica source text for a value.

    Args:
        value: bool, int, float, str, None, sequence, numpy array, Quantity,
            Polynomial, PoissonSeries or PiecewisePoissonSeries. None is an
            empty List, the rendering of an absent optional value.
        express_in: Units in which to write quantities as plain numbers.

    Returns:
        Wolfram Language expression.

    Raises:
        TypeError: For unsupported values.
    """
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    if isinstance(value, (float, np.floating)):
        return _real(float(value))
    if isinstance(value, str):
        return escape(value)
    if value is None:
        return apply("List", [])
    if isinstance(value, Quantity):
        return _quantity(value, express_in)
    if isinstance(value, Polynomial):
        return apply("Function", [_polynomial_expression(value, express_in)])
    if isinstance(value, PoissonSeries):
        return apply("Function", [_series_expression(value, express_in)])
    if isinstance(value, PiecewisePoissonSeries):
        return apply("Function", [_piecewise_expression(value, express_in)])
    if isinstance(value, np.ndarray):
        if value.ndim == 0:
            return to_mathematica(value.item(), express_in)
        return apply("List", [to_mathematica(v, express_in) for v in value])
    if isinstance(value, (list, tuple)):
        return apply("List", [to_mathematica(v, express_in) for v in value])
    raise TypeError(f"Cannot export {type(value).__name__} to Mathematica")


def option(name: str, value, express_in: Optional[ExpressIn] = None) -> str:
    """name -> value, for use as an option of a Mathematica function."""
    return apply("Rule", [name, to_mathematica(value, express_in)])


def assign(name: str, value, express_in: Optional[ExpressIn] = None) -> str:
    """name = value; as a statement terminated by a newline."""
    return apply("Set", [name, to_mathematica(value, express_in)]) + ";\n"


def plottable_dataset(x: Sequence, y: Sequence,
                      express_in: Optional[ExpressIn] = None) -> str:
    """Transpose of the two lists, i.e. a list of {x, y} points."""
    if len(x) != len(y):
        raise ValueError(f"Lengths differ: {len(x)} and {len(y)}")
    return apply("Transpose", [apply("List", [to_mathematica(x, express_in),
                                              to_mathematica(y, express_in)])])
