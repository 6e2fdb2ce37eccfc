"""Token parsing utilities for lock-file request strings."""

import re
from typing import List, Tuple

from constants import Constants

from .models import RequestKind, VersionRequest

_X_RANGE_PATTERN = re.compile(r"(^|\.)[xX](\.|$)")


def split_request_list(raw: str) -> List[str]:
    """Split a comma-joined list of request strings.

    Commas inside a double-quoted span do not split. Surrounding whitespace
    and the quote characters are removed from every token.
    """
    tokens: List[str] = []
    current: List[str] = []
    in_quotes = False
    for ch in raw:
        if ch == Constants.QUOTE:
            in_quotes = not in_quotes
            continue
        if ch == Constants.REQUEST_SEPARATOR and not in_quotes:
            tokens.append("".join(current))
            current = []
            continue
        current.append(ch)
    tokens.append("".join(current))
    return [token.strip() for token in tokens if token.strip()]


def _name_boundary(token: str) -> int:
    """Index of the ``@`` separating name and spec, or -1 when absent.

    Scoped names (``@scope/name``) start with ``@`` themselves, so the
    boundary is the second ``@`` for them.
    """
    start = 1 if token.startswith("@") else 0
    return token.find("@", start)


def _effective_spec(raw_spec: str) -> Tuple[str, RequestKind]:
    """Derive the version or range a raw spec stands for."""
    scheme = raw_spec.find(Constants.URL_SCHEME_MARKER)
    if scheme != -1:
        fragment = raw_spec.find(Constants.URL_FRAGMENT_MARKER, scheme)
        if fragment != -1:
            spec = raw_spec[fragment + 1:]
            if spec.startswith(Constants.SEMVER_FRAGMENT_PREFIX):
                spec = spec[len(Constants.SEMVER_FRAGMENT_PREFIX):]
            return spec, RequestKind.GIT
        return raw_spec, RequestKind.URL
    if raw_spec.startswith("file:"):
        return raw_spec, RequestKind.FILE
    return raw_spec, _determine_request_kind(raw_spec)


def _determine_request_kind(spec: str) -> RequestKind:
    """Tell plain versions apart from range expressions."""
    range_ops = ['^', '~', '*', '<', '>', '=', '|', ' ']
    if not spec or any(op in spec for op in range_ops) or _X_RANGE_PATTERN.search(spec):
        return RequestKind.RANGE
    return RequestKind.EXACT


def split_name_and_spec(token: str) -> Tuple[str, str]:
    """Return (name, effective spec) for a ``name@spec`` request token.

    Git URLs contribute their ``#`` fragment (minus a ``semver:`` prefix);
    everything else, ``file:`` references included, is returned verbatim.
    """
    request = parse_request(token)
    return request.name, request.spec


def parse_request(token: str) -> VersionRequest:
    """Parse a request token into a VersionRequest."""
    token = token.strip()
    boundary = _name_boundary(token)
    if boundary == -1:
        return VersionRequest(name=token, spec="", raw_spec="", kind=RequestKind.RANGE)
    name = token[:boundary]
    raw_spec = token[boundary + 1:]
    spec, kind = _effective_spec(raw_spec)
    return VersionRequest(name=name, spec=spec, raw_spec=raw_spec, kind=kind)
