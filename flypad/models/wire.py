"""Tolerant coercion of loosely-typed JSON field values.

The weather and flight-planning services are not consistent about how they
encode individual fields: numbers arrive as strings, strings arrive as empty
objects (``{}``), and keys are dropped entirely. Each rule below maps one wire
value to a domain value and never raises; they are attached to model fields
through pydantic ``BeforeValidator`` so coercion happens during decode.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

PLACEHOLDER = "No Value"


class WireShape(str, Enum):
    """Shape of a decoded JSON value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"


def wire_shape(value: Any) -> WireShape:
    """Classify a value produced by a JSON decoder."""

    if value is None:
        return WireShape.NULL
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return WireShape.BOOLEAN
    if isinstance(value, (int, float)):
        return WireShape.NUMBER
    if isinstance(value, str):
        return WireShape.STRING
    if isinstance(value, (list, tuple)):
        return WireShape.ARRAY
    return WireShape.OBJECT


def string_or_placeholder(value: Any) -> str:
    """Pass strings through; anything else becomes ``"No Value"``."""

    if wire_shape(value) is WireShape.STRING:
        return value
    return PLACEHOLDER


def _decimal_text(value: int | float) -> Optional[str]:
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError:
            # beyond the interpreter's int-to-str digit limit
            return None
    if not math.isfinite(value):
        return None
    # repr gives the shortest round-trip digits; "f" drops the exponent
    return format(Decimal(repr(value)), "f")


def string_or_number(value: Any) -> Optional[str]:
    """Return strings as-is and numbers as their decimal text, else ``None``.

    Numbers never use exponent notation: ``1e-05`` reads ``"0.00001"``.
    """

    shape = wire_shape(value)
    if shape is WireShape.STRING:
        return value
    if shape is WireShape.NUMBER:
        return _decimal_text(value)
    return None


def string_or_absent(value: Any) -> Optional[str]:
    if wire_shape(value) is WireShape.STRING:
        return value
    return None


def string_or_empty(value: Any) -> str:
    text = string_or_absent(value)
    return text if text is not None else ""


def number_or_absent(value: Any) -> Optional[float]:
    """Return finite numbers as floats; anything else, including inf, is ``None``."""

    if wire_shape(value) is not WireShape.NUMBER:
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def number_or_zero(value: Any) -> float:
    number = number_or_absent(value)
    return number if number is not None else 0.0


__all__ = [
    "PLACEHOLDER",
    "WireShape",
    "number_or_absent",
    "number_or_zero",
    "string_or_absent",
    "string_or_empty",
    "string_or_number",
    "string_or_placeholder",
    "wire_shape",
]
