"""npm range satisfaction backed by semantic_version."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Optional, Union

import semantic_version

from common.logging_utils import is_debug_enabled

logger = logging.getLogger(__name__)

Spec = Union[semantic_version.NpmSpec, semantic_version.SimpleSpec]

# ">= 1.0.0" is valid npm syntax; NpmSpec wants the operator attached.
_OPERATOR_GAP = re.compile(r"(<=|>=|<|>|=|\^|~)\s+")


def _normalize_spec(spec_str: str) -> str:
    """Normalize npm range syntax (hyphen, x-ranges) into SimpleSpec-compatible form."""
    s = spec_str.strip()

    # Hyphen ranges: "1.2.3 - 1.4.5" => ">=1.2.3,<=1.4.5"
    m = re.match(r'^\s*([0-9A-Za-z\.\-\+]+)\s+-\s+([0-9A-Za-z\.\-\+]+)\s*$', s)
    if m:
        return f">={m.group(1)},<={m.group(2)}"

    s2 = s.replace('*', 'x').lower()
    m = re.match(r'^\s*(\d+)\.(\d+)\.x\s*$', s2)
    if m:
        major, minor = int(m.group(1)), int(m.group(2))
        return f">={major}.{minor}.0,<{major}.{minor + 1}.0"

    m = re.match(r'^\s*(\d+)(?:\.x)?\s*$', s2)
    if m:
        major = int(m.group(1))
        return f">={major}.0.0,<{major + 1}.0.0"

    return spec_str


@lru_cache(maxsize=1024)
def compile_range(range_str: str) -> Optional[Spec]:
    """Compile an npm range, or return None when neither grammar accepts it.

    NpmSpec understands ^, ~, ||, hyphen and x-ranges natively; a normalized
    SimpleSpec is the fallback for the forms it rejects.
    """
    try:
        return semantic_version.NpmSpec(_OPERATOR_GAP.sub(r"\1", range_str.strip()))
    except ValueError:
        pass
    try:
        return semantic_version.SimpleSpec(_normalize_spec(range_str))
    except ValueError as exc:
        if is_debug_enabled(logger):
            logger.debug("Invalid semver range %r: %s", range_str, exc)
        return None


def satisfies(version: str, range_str: str) -> bool:
    """Return True if the concrete ``version`` matches ``range_str``.

    Identical strings always match, which covers exact versions, git tags
    and ``file:`` references. An exact version used as a range matches only
    itself.
    """
    if version == range_str:
        return True
    spec = compile_range(range_str)
    if spec is None:
        return False
    try:
        parsed = semantic_version.Version(version)
    except ValueError:
        if is_debug_enabled(logger):
            logger.debug("Version %r is not a semantic version", version)
        return False
    return spec.match(parsed)
