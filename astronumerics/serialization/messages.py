"""
Message codec for polynomials and Poisson series.

Messages are nested JSON-compatible dicts:

    value       {"double": x}
                {"vector": [value, ...]}
                {"quantity": {"magnitude": value, "dimensions": [8 x "p/q"]}}
    polynomial  {"degree": d, "origin": t0, "coefficients": [value, ...]}
    series      {"aperiodic": polynomial, "periodic_degree": d,
                 "periodic": [{"frequency": quantity, "sin": polynomial,
                               "cos": polynomial}, ...]}
    piecewise   {"bounds": [t, ...], "series": [series, ...]}

Instants are float seconds; frequencies are quantities in rad/s. Periodic
entries are written in increasing frequency order.

encode() renders a message canonically (sorted keys, compact separators,
shortest round-trip floats), so decode followed by encode reproduces the
original bytes exactly. Readers reject inconsistent messages with a
DeserializationError rather than truncating or padding anything.
"""

from __future__ import annotations

import json
import logging
from fractions import Fraction
from typing import Any

import numpy as np
from jsonschema import Draft202012Validator, ValidationError

from ..numerics.piecewise import PiecewisePoissonSeries
from ..numerics.poisson_series import PoissonSeries, SinCosPolynomials
from ..numerics.polynomial import Polynomial
from ..quantities.dimensions import Dimensions, DimensionError, ANGLE, TIME
from ..quantities.quantities import Quantity, make_quantity
from .schemas import (
    VALUE_SCHEMA, POLYNOMIAL_SCHEMA, POISSON_SERIES_SCHEMA,
    PIECEWISE_POISSON_SERIES_SCHEMA,
    VALUE_VALIDATOR, POLYNOMIAL_VALIDATOR, POISSON_SERIES_VALIDATOR,
    PIECEWISE_POISSON_SERIES_VALIDATOR,
)

logger = logging.getLogger(__name__)

for _schema in (VALUE_SCHEMA, POLYNOMIAL_SCHEMA, POISSON_SERIES_SCHEMA,
                PIECEWISE_POISSON_SERIES_SCHEMA):
    Draft202012Validator.check_schema(_schema)

_ANGULAR_FREQUENCY = ANGLE / TIME


class DeserializationError(ValueError):
    """Raised when a message is malformed or internally inconsistent."""


def _validate(validator: Draft202012Validator, message: Any, kind: str):
    try:
        validator.validate(message)
    except ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise DeserializationError(
            f"Malformed {kind} message at {path}: {e.message}"
        ) from e


# ===================================================================
# Values
# ===================================================================

def write_value_message(value) -> dict:
    """Message for a float, numpy array or quantity."""
    if isinstance(value, Quantity):
        return {"quantity": write_quantity_message(value)}
    if isinstance(value, np.ndarray):
        if value.ndim == 0:
            return {"double": float(value)}
        return {"vector": [write_value_message(v) for v in value]}
    return {"double": float(value)}


def write_quantity_message(quantity: Quantity) -> dict:
    return {
        "magnitude": write_value_message(quantity.magnitude),
        "dimensions": [str(e) for e in quantity.dimensions.exponents],
    }


def _read_value(message: dict):
    if "double" in message:
        return float(message["double"])
    if "vector" in message:
        return np.array([_read_value(v) for v in message["vector"]], dtype=float)
    return _read_quantity(message["quantity"])


def _read_quantity(message: dict):
    magnitude = _read_value(message["magnitude"])
    if isinstance(magnitude, Quantity):
        raise DeserializationError("A quantity magnitude cannot be a quantity")
    try:
        dimensions = Dimensions.from_exponents(
            Fraction(e) for e in message["dimensions"])
    except (ValueError, ZeroDivisionError) as error:
        raise DeserializationError(
            f"Invalid dimensions {message['dimensions']!r}: {error}"
        ) from error
    if dimensions.is_dimensionless:
        raise DeserializationError(
            "Dimensionless values must be written as doubles or vectors"
        )
    return make_quantity(magnitude, dimensions)


def read_value_message(message: dict):
    _validate(VALUE_VALIDATOR, message, "value")
    return _read_value(message)


# ===================================================================
# Polynomials
# ===================================================================

def write_polynomial_message(polynomial: Polynomial) -> dict:
    return {
        "degree": polynomial.degree,
        "origin": float(polynomial.origin),
        "coefficients": [write_value_message(c) for c in polynomial.coefficients],
    }


def _read_polynomial(message: dict) -> Polynomial:
    coefficients = message["coefficients"]
    if message["degree"] != len(coefficients) - 1:
        raise DeserializationError(
            f"Polynomial of degree {message['degree']} with "
            f"{len(coefficients)} coefficients"
        )
    try:
        return Polynomial([_read_value(c) for c in coefficients],
                          float(message["origin"]))
    except (DimensionError, ValueError) as e:
        raise DeserializationError(f"Inconsistent coefficients: {e}") from e


def read_polynomial_message(message: dict) -> Polynomial:
    _validate(POLYNOMIAL_VALIDATOR, message, "polynomial")
    return _read_polynomial(message)


# ===================================================================
# Poisson series
# ===================================================================

def write_poisson_series_message(series: PoissonSeries) -> dict:
    return {
        "aperiodic": write_polynomial_message(series.aperiodic),
        "periodic_degree": series.periodic_degree,
        "periodic": [
            {
                "frequency": {
                    "magnitude": {"double": float(omega)},
                    "dimensions": [str(e) for e in _ANGULAR_FREQUENCY.exponents],
                },
                "sin": write_polynomial_message(polynomials.sin),
                "cos": write_polynomial_message(polynomials.cos),
            }
            for omega, polynomials in series.periodic.items()
        ],
    }


def _read_frequency(message: dict) -> float:
    frequency = _read_quantity(message)
    if not isinstance(frequency, Quantity) or (
            frequency.dimensions != _ANGULAR_FREQUENCY):
        raise DeserializationError(
            f"Frequency must be an angular frequency, got {frequency!r}"
        )
    if frequency.is_vector:
        raise DeserializationError("Frequency must be a scalar")
    return frequency.magnitude


def _read_poisson_series(message: dict) -> PoissonSeries:
    aperiodic = _read_polynomial(message["aperiodic"])
    periodic_degree = message["periodic_degree"]
    periodic = {}
    for entry in message["periodic"]:
        omega = _read_frequency(entry["frequency"])
        if not omega > 0.0:
            raise DeserializationError(f"Non-positive frequency {omega}")
        if omega in periodic:
            raise DeserializationError(f"Duplicate frequency {omega}")
        sin_polynomial = _read_polynomial(entry["sin"])
        cos_polynomial = _read_polynomial(entry["cos"])
        for name, polynomial in (("sin", sin_polynomial), ("cos", cos_polynomial)):
            if polynomial.degree != periodic_degree:
                raise DeserializationError(
                    f"{name} polynomial at w={omega} has degree "
                    f"{polynomial.degree}, expected {periodic_degree}"
                )
            if polynomial.origin != aperiodic.origin:
                raise DeserializationError(
                    f"{name} polynomial at w={omega} has origin "
                    f"{polynomial.origin}, expected {aperiodic.origin}"
                )
        periodic[omega] = SinCosPolynomials(sin_polynomial, cos_polynomial)
    try:
        return PoissonSeries(aperiodic, periodic, periodic_degree=periodic_degree)
    except (DimensionError, ValueError) as e:
        raise DeserializationError(f"Inconsistent Poisson series: {e}") from e


def read_poisson_series_message(message: dict) -> PoissonSeries:
    _validate(POISSON_SERIES_VALIDATOR, message, "Poisson series")
    series = _read_poisson_series(message)
    logger.debug("Read Poisson series with %d frequencies", len(series.periodic))
    return series


# ===================================================================
# Piecewise Poisson series
# ===================================================================

def write_piecewise_poisson_series_message(
        series: PiecewisePoissonSeries) -> dict:
    return {
        "bounds": [float(b) for b in series.bounds],
        "series": [write_poisson_series_message(s) for s in series.series],
    }


def read_piecewise_poisson_series_message(
        message: dict) -> PiecewisePoissonSeries:
    _validate(PIECEWISE_POISSON_SERIES_VALIDATOR, message,
              "piecewise Poisson series")
    if len(message["bounds"]) != len(message["series"]) + 1:
        raise DeserializationError(
            f"{len(message['series'])} series with "
            f"{len(message['bounds'])} bounds"
        )
    pieces = [_read_poisson_series(s) for s in message["series"]]
    try:
        return PiecewisePoissonSeries(message["bounds"], pieces)
    except ValueError as e:
        raise DeserializationError(f"Inconsistent bounds: {e}") from e


# ===================================================================
# Bytes
# ===================================================================

def _to_bytes(message: dict) -> bytes:
    return json.dumps(message, sort_keys=True, separators=(",", ":"),
                      allow_nan=True).encode("utf-8")


def _from_bytes(data: bytes) -> Any:
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DeserializationError(f"Not a JSON message: {e}") from e


def encode(value) -> bytes:
    """Canonical byte encoding of a polynomial, series or piecewise series."""
    if isinstance(value, PiecewisePoissonSeries):
        return _to_bytes(write_piecewise_poisson_series_message(value))
    if isinstance(value, PoissonSeries):
        return _to_bytes(write_poisson_series_message(value))
    if isinstance(value, Polynomial):
        return _to_bytes(write_polynomial_message(value))
    raise TypeError(f"Cannot encode {type(value).__name__}")


def decode_polynomial(data: bytes) -> Polynomial:
    return read_polynomial_message(_from_bytes(data))


def decode_poisson_series(data: bytes) -> PoissonSeries:
    return read_poisson_series_message(_from_bytes(data))


def decode_piecewise_poisson_series(data: bytes) -> PiecewisePoissonSeries:
    return read_piecewise_poisson_series_message(_from_bytes(data))
