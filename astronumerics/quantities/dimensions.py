"""
Physical dimension vectors.

A dimension is an 8-tuple of rational exponents over the base dimensions
(length, mass, time, current, temperature, amount, luminous intensity,
angle). Angle is a base dimension of its own so that angular quantities
never silently combine with plain numbers.

Multiplying dimensions adds exponents, dividing subtracts them and raising
to a rational power scales them, mirroring the algebra of the quantities
that carry them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from fractions import Fraction
from typing import Union

Exponent = Union[int, Fraction]

BASE_UNIT_SYMBOLS = ("m", "kg", "s", "A", "K", "mol", "cd", "rad")


class DimensionError(TypeError):
    """Raised when an operation combines incompatible dimensions."""


@dataclass(frozen=True)
class Dimensions:
    """Rational exponents of the eight base dimensions."""
    length: Fraction = Fraction(0)
    mass: Fraction = Fraction(0)
    time: Fraction = Fraction(0)
    current: Fraction = Fraction(0)
    temperature: Fraction = Fraction(0)
    amount: Fraction = Fraction(0)
    luminous_intensity: Fraction = Fraction(0)
    angle: Fraction = Fraction(0)

    def __post_init__(self):
        # Normalize ints to Fractions so that equality and hashing agree.
        for f in fields(self):
            object.__setattr__(self, f.name, Fraction(getattr(self, f.name)))

    @classmethod
    def from_exponents(cls, exponents) -> Dimensions:
        """Build from a sequence of 8 exponents in base-dimension order."""
        exponents = tuple(exponents)
        if len(exponents) != len(BASE_UNIT_SYMBOLS):
            raise ValueError(
                f"Expected {len(BASE_UNIT_SYMBOLS)} exponents, "
                f"got {len(exponents)}"
            )
        return cls(*(Fraction(e) for e in exponents))

    @property
    def exponents(self) -> tuple[Fraction, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    @property
    def is_dimensionless(self) -> bool:
        return not any(self.exponents)

    def __mul__(self, other: Dimensions) -> Dimensions:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return Dimensions(*(a + b for a, b in
                            zip(self.exponents, other.exponents)))

    def __truediv__(self, other: Dimensions) -> Dimensions:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return Dimensions(*(a - b for a, b in
                            zip(self.exponents, other.exponents)))

    def __pow__(self, exponent: Exponent) -> Dimensions:
        exponent = Fraction(exponent)
        return Dimensions(*(a * exponent for a in self.exponents))

    def unit_string(self) -> str:
        """SI unit rendering, e.g. ``m s^-1``; empty when dimensionless."""
        parts = []
        for symbol, exponent in zip(BASE_UNIT_SYMBOLS, self.exponents):
            if exponent == 0:
                continue
            if exponent == 1:
                parts.append(symbol)
            else:
                parts.append(f"{symbol}^{exponent}")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.unit_string() or "1"


DIMENSIONLESS = Dimensions()
LENGTH = Dimensions(length=1)
MASS = Dimensions(mass=1)
TIME = Dimensions(time=1)
CURRENT = Dimensions(current=1)
TEMPERATURE = Dimensions(temperature=1)
AMOUNT = Dimensions(amount=1)
LUMINOUS_INTENSITY = Dimensions(luminous_intensity=1)
ANGLE = Dimensions(angle=1)
