"""
SI units as quantities.

Units are ordinary quantities of magnitude one (or the unit's size in SI
base units), so that 3 * Metre / Second is a Speed and q.in_units(Degree)
converts back to a plain number.
"""

from __future__ import annotations

import numpy as np

from ..core.constants import (
    DEG2RAD, ARCMIN2RAD, ARCSEC2RAD,
    SECONDS_PER_MINUTE, SECONDS_PER_HOUR, SECONDS_PER_DAY,
)
from .quantities import (
    Length, Mass, Time, Current, Temperature, Amount, LuminousIntensity,
    Angle, Quantity,
)

# ---------------------------------------------------------------------------
# Base units
# ---------------------------------------------------------------------------
Metre = Length(1.0)
Kilogram = Mass(1.0)
Second = Time(1.0)
Ampere = Current(1.0)
Kelvin = Temperature(1.0)
Mole = Amount(1.0)
Candela = LuminousIntensity(1.0)
Radian = Angle(1.0)

# ---------------------------------------------------------------------------
# Derived and non-SI units
# ---------------------------------------------------------------------------
Newton = Kilogram * Metre / Second ** 2
Joule = Newton * Metre
Watt = Joule / Second

Degree = Angle(DEG2RAD)
ArcMinute = Angle(ARCMIN2RAD)
ArcSecond = Angle(ARCSEC2RAD)
Cycle = Angle(2.0 * np.pi)

Minute = Time(SECONDS_PER_MINUTE)
Hour = Time(SECONDS_PER_HOUR)
Day = Time(SECONDS_PER_DAY)


def kilo(unit: Quantity) -> Quantity:
    return 1e3 * unit


def milli(unit: Quantity) -> Quantity:
    return 1e-3 * unit


def micro(unit: Quantity) -> Quantity:
    return 1e-6 * unit
