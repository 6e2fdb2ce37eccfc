"""Request-string grammar and npm range matching."""

from .models import RequestKind, VersionRequest
from .parser import parse_request, split_name_and_spec, split_request_list
from .semver import satisfies

__all__ = [
    "RequestKind",
    "VersionRequest",
    "parse_request",
    "split_name_and_spec",
    "split_request_list",
    "satisfies",
]
