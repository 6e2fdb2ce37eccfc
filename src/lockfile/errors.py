"""Exceptions raised while parsing lock text and resolving the package graph."""

from __future__ import annotations

from typing import Optional

from constants import ErrorCodes


class YarnLockError(Exception):
    """Base exception carrying a stable numeric error code."""

    def __init__(self, message: str, code: ErrorCodes):
        self.code = code.value
        self.error = code
        super().__init__(message)


class InvalidInputError(YarnLockError, ValueError):
    """Raised when an entry point is given no text (or something that is not text)."""


class ParserError(YarnLockError):
    """Raised when the lock text violates the grammar."""

    def __init__(self, message: str, code: ErrorCodes, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message, code)


class ResolutionError(YarnLockError):
    """Raised when well-formed lock text does not describe a consistent graph."""
