"""
JSON schemas of the serialized messages.

These pin down the structure of a message (field names, nesting, JSON
types). Consistency between fields, such as a degree matching the number of
coefficients, is checked by the readers in messages.py.
"""

from __future__ import annotations

from jsonschema import Draft202012Validator

_DEFINITIONS = {
    "value": {
        "oneOf": [
            {
                "type": "object",
                "properties": {"double": {"type": "number"}},
                "required": ["double"],
                "additionalProperties": False,
            },
            {
                "type": "object",
                "properties": {
                    "vector": {
                        "type": "array",
                        "items": {"$ref": "#/$defs/value"},
                        "minItems": 1,
                    },
                },
                "required": ["vector"],
                "additionalProperties": False,
            },
            {
                "type": "object",
                "properties": {"quantity": {"$ref": "#/$defs/quantity"}},
                "required": ["quantity"],
                "additionalProperties": False,
            },
        ],
    },
    "quantity": {
        "type": "object",
        "properties": {
            "magnitude": {"$ref": "#/$defs/value"},
            "dimensions": {
                "type": "array",
                "items": {"type": "string", "pattern": r"^-?\d+(/[1-9]\d*)?$"},
                "minItems": 8,
                "maxItems": 8,
            },
        },
        "required": ["magnitude", "dimensions"],
        "additionalProperties": False,
    },
    "polynomial": {
        "type": "object",
        "properties": {
            "degree": {"type": "integer", "minimum": 0},
            "origin": {"type": "number"},
            "coefficients": {
                "type": "array",
                "items": {"$ref": "#/$defs/value"},
                "minItems": 1,
            },
        },
        "required": ["degree", "origin", "coefficients"],
        "additionalProperties": False,
    },
    "poisson_series": {
        "type": "object",
        "properties": {
            "aperiodic": {"$ref": "#/$defs/polynomial"},
            "periodic_degree": {"type": "integer", "minimum": 0},
            "periodic": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "frequency": {"$ref": "#/$defs/quantity"},
                        "sin": {"$ref": "#/$defs/polynomial"},
                        "cos": {"$ref": "#/$defs/polynomial"},
                    },
                    "required": ["frequency", "sin", "cos"],
                    "additionalProperties": False,
                },
            },
        },
        "required": ["aperiodic", "periodic_degree", "periodic"],
        "additionalProperties": False,
    },
    "piecewise_poisson_series": {
        "type": "object",
        "properties": {
            "bounds": {
                "type": "array",
                "items": {"type": "number"},
                "minItems": 2,
            },
            "series": {
                "type": "array",
                "items": {"$ref": "#/$defs/poisson_series"},
                "minItems": 1,
            },
        },
        "required": ["bounds", "series"],
        "additionalProperties": False,
    },
}


def _schema(root: str) -> dict:
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "$defs": _DEFINITIONS,
        "$ref": f"#/$defs/{root}",
    }


VALUE_SCHEMA = _schema("value")
POLYNOMIAL_SCHEMA = _schema("polynomial")
POISSON_SERIES_SCHEMA = _schema("poisson_series")
PIECEWISE_POISSON_SERIES_SCHEMA = _schema("piecewise_poisson_series")

VALUE_VALIDATOR = Draft202012Validator(VALUE_SCHEMA)
POLYNOMIAL_VALIDATOR = Draft202012Validator(POLYNOMIAL_SCHEMA)
POISSON_SERIES_VALIDATOR = Draft202012Validator(POISSON_SERIES_SCHEMA)
PIECEWISE_POISSON_SERIES_VALIDATOR = Draft202012Validator(
    PIECEWISE_POISSON_SERIES_SCHEMA)
