"""Parser for the indentation-based yarn lock text format.

The format is a YAML-like subset: comments, nested blocks opened by a key
ending in ``:``, value lines written as ``key value`` (or ``key: value``),
double-quoted keys and values, and scalar coercion of unquoted values.
Indentation width is inferred from the first indented line and must stay
uniform for the rest of the file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple, Union

from constants import Constants, ErrorCodes
from common.logging_utils import extra_context, is_debug_enabled

from .errors import InvalidInputError, ParserError
from .scalars import coerce_scalar

logger = logging.getLogger(__name__)

ParsedMapping = Dict[str, Any]

_INDENT_PATTERN = re.compile(r"^([ \t]*)(.*?)\s*$")
_UNQUOTED_KEY_PATTERN = re.compile(r"^[^\s:]+")


@dataclass
class _Line:
    """A structural (non-blank, non-comment) line of the input."""

    number: int
    indent: str
    body: str


def _read_quoted(text: str, start: int = 0) -> Optional[Tuple[str, int]]:
    """Read a double-quoted span beginning at ``start``.

    Returns the unescaped content and the index just past the closing quote,
    or None when the span is not terminated.
    """
    chars: List[str] = []
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            chars.append(text[i + 1])
            i += 2
            continue
        if ch == Constants.QUOTE:
            return "".join(chars), i + 1
        chars.append(ch)
        i += 1
    return None


def _unquote_key(key: str) -> str:
    """Strip the quotes of a key that is exactly one quoted span."""
    if key.startswith(Constants.QUOTE):
        quoted = _read_quoted(key)
        if quoted is not None and quoted[1] == len(key):
            return quoted[0]
    return key


def _has_open_quote(text: str) -> bool:
    """Return True when ``text`` ends inside a double-quoted span."""
    inside = False
    escaped = False
    for ch in text:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = inside
        elif ch == Constants.QUOTE:
            inside = not inside
    return inside


def _to_namespace(data: ParsedMapping) -> SimpleNamespace:
    """Convert nested mappings into nested attribute records."""
    record = SimpleNamespace()
    for key, value in data.items():
        setattr(record, key, _to_namespace(value) if isinstance(value, dict) else value)
    return record


class Parser:
    """Turn lock text into nested mappings (or attribute records).

    A parser instance keeps per-call state (cursor, inferred indentation) and
    may be reused for several ``parse`` calls, but not concurrently.
    """

    def __init__(self):
        self._lines: List[_Line] = []
        self._pos = 0
        self._indent_char: Optional[str] = None
        self._indent_width: Optional[int] = None

    def parse(
        self, content: Union[str, bytes, None], assoc: bool = False
    ) -> Union[ParsedMapping, SimpleNamespace]:
        """Parse lock text.

        Args:
            content: The lock file text. Bytes are decoded as UTF-8.
            assoc: Return nested dicts when True, nested ``SimpleNamespace``
                records when False.

        Returns:
            The parsed top-level mapping.

        Raises:
            InvalidInputError: ``content`` is None or not text.
            ParserError: The text violates the grammar.
        """
        if content is None:
            raise InvalidInputError(
                "Lock content must be a string, got None", ErrorCodes.PARSER_NULL_INPUT
            )
        if isinstance(content, bytes):
            content = content.decode(Constants.FILE_ENCODING)
        if not isinstance(content, str):
            raise InvalidInputError(
                f"Lock content must be a string, got {type(content).__name__}",
                ErrorCodes.PARSER_NULL_INPUT,
            )

        self._lines = self._structural_lines(content)
        self._pos = 0
        self._indent_char = None
        self._indent_width = None

        data = self._parse_block(0)

        if is_debug_enabled(logger):
            logger.debug(
                "Parsed lock text",
                extra=extra_context(
                    event="parse_complete",
                    component="lockfile_parser",
                    outcome="success",
                    lines=len(self._lines),
                    entries=len(data),
                ),
            )
        return data if assoc else _to_namespace(data)

    @staticmethod
    def _structural_lines(content: str) -> List[_Line]:
        """Split text into lines, dropping blanks and comments at any indentation."""
        lines: List[_Line] = []
        for number, raw in enumerate(content.split("\n"), start=1):
            match = _INDENT_PATTERN.match(raw)
            indent, body = match.group(1), match.group(2)
            if not body or body.startswith(Constants.COMMENT_MARKER):
                continue
            lines.append(_Line(number=number, indent=indent, body=body))
        return lines

    def _level(self, line: _Line) -> int:
        """Return the nesting level of ``line`` in indentation units."""
        indent = line.indent
        if not indent:
            return 0
        if len(set(indent)) > 1 or (
            self._indent_char is not None and indent[0] != self._indent_char
        ):
            raise ParserError(
                "Mixed indentation characters", ErrorCodes.PARSER_MIXED_INDENTATION, line.number
            )
        if self._indent_width is None:
            self._indent_char = indent[0]
            self._indent_width = len(indent)
        if len(indent) % self._indent_width:
            raise ParserError(
                f"Indentation of {len(indent)} is not a multiple of {self._indent_width}",
                ErrorCodes.PARSER_INCONSISTENT_INDENTATION,
                line.number,
            )
        return len(indent) // self._indent_width

    def _parse_block(self, depth: int) -> ParsedMapping:
        """Consume consecutive lines at ``depth`` and their nested blocks."""
        result: ParsedMapping = {}
        while self._pos < len(self._lines):
            line = self._lines[self._pos]
            level = self._level(line)
            if level < depth:
                break
            if level > depth:
                raise ParserError(
                    "Unexpected indentation", ErrorCodes.PARSER_UNEXPECTED_INDENTATION, line.number
                )

            self._pos += 1
            if self._opens_block(line.body):
                key = _unquote_key(line.body[:-1].rstrip())
                self._expect_children(line, depth)
                result[key] = self._parse_block(depth + 1)
            else:
                key, value = self._split_value_line(line)
                result[key] = value
        return result

    @staticmethod
    def _opens_block(body: str) -> bool:
        return body.endswith(Constants.KEY_SEPARATOR) and not _has_open_quote(body[:-1])

    def _expect_children(self, line: _Line, depth: int) -> None:
        """Check that the block opened by ``line`` has children one level deeper."""
        if self._pos >= len(self._lines) or self._level(self._lines[self._pos]) <= depth:
            raise ParserError(
                "Expected properties after key", ErrorCodes.PARSER_MISSING_PROPERTY, line.number
            )
        child = self._lines[self._pos]
        if self._level(child) != depth + 1:
            raise ParserError(
                "Inconsistent indentation depth",
                ErrorCodes.PARSER_INCONSISTENT_INDENTATION,
                child.number,
            )

    @staticmethod
    def _split_value_line(line: _Line) -> Tuple[str, Any]:
        """Split ``key value`` / ``key: value`` into a key and a typed value."""
        body = line.body
        key: Optional[str] = None
        end = 0
        if body.startswith(Constants.QUOTE):
            quoted = _read_quoted(body)
            if quoted is not None:
                key, end = quoted
        if key is None:
            match = _UNQUOTED_KEY_PATTERN.match(body)
            key = match.group(0) if match else ""
            end = len(key)

        rest = body[end:]
        if rest.startswith(Constants.KEY_SEPARATOR):
            rest = rest[1:]
        raw_value = rest.strip()
        if not key or not raw_value:
            raise ParserError(
                f"Missing value for key '{key or body}'", ErrorCodes.PARSER_MISSING_VALUE, line.number
            )

        if raw_value.startswith(Constants.QUOTE):
            quoted = _read_quoted(raw_value)
            if quoted is not None and quoted[1] == len(raw_value):
                return key, quoted[0]
        return key, coerce_scalar(raw_value)


def parse(
    content: Union[str, bytes, None], assoc: bool = False
) -> Union[ParsedMapping, SimpleNamespace]:
    """Parse lock text with a fresh ``Parser``."""
    return Parser().parse(content, assoc)
