"""Data models for version requests found in lock files."""

from dataclasses import dataclass
from enum import Enum


class RequestKind(Enum):
    """Shape of the specifier part of a request string."""
    EXACT = "exact"
    RANGE = "range"
    GIT = "git"
    FILE = "file"
    URL = "url"


@dataclass(frozen=True)
class VersionRequest:
    """A single ``name@spec`` request split into its parts.

    ``spec`` is the effective version or range (for git URLs the fragment,
    without any ``semver:`` prefix); ``raw_spec`` is everything after the
    name boundary as written.
    """
    name: str
    spec: str
    raw_spec: str
    kind: RequestKind

    def __str__(self) -> str:
        return f"{self.name}@{self.spec}"
