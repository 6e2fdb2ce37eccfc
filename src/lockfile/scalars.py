"""Scalar coercion for unquoted lock-file values."""

from __future__ import annotations

import re
from typing import Union

Scalar = Union[bool, int, float, str, None]

_INT_PATTERN = re.compile(r"^-?\d+$")
_FLOAT_PATTERN = re.compile(r"^-?\d+\.\d+$")


def coerce_scalar(token: str) -> Scalar:
    """Convert a raw, unquoted token into a typed value.

    Precedence: ``true``/``false`` -> bool, empty or ``null`` -> None,
    integer -> int, decimal -> float, anything else -> the token itself.
    """
    if token == "true":
        return True
    if token == "false":
        return False
    if token == "" or token == "null":
        return None
    if _INT_PATTERN.match(token):
        return int(token)
    if _FLOAT_PATTERN.match(token):
        return float(token)
    return token
