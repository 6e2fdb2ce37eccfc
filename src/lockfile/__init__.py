"""Lock text parsing.

This package turns yarn lock text into nested mappings. Splitting request
keys and building the package graph happen elsewhere (``versioning`` and
``graph``).
"""

from .errors import InvalidInputError, ParserError, ResolutionError, YarnLockError
from .parser import Parser, parse
from .scalars import coerce_scalar

__all__ = [
    "InvalidInputError",
    "ParserError",
    "ResolutionError",
    "YarnLockError",
    "Parser",
    "parse",
    "coerce_scalar",
]
