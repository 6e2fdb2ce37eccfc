"""Constants used in the project."""

from enum import Enum


class ErrorCodes(Enum):
    """Stable error codes raised by the parser and the lock resolver.

    Args:
        Enum (int): Error codes for the program.
    """

    PARSER_NULL_INPUT = 1519142104
    PARSER_MIXED_INDENTATION = 1519140104
    PARSER_INCONSISTENT_INDENTATION = 1519140379
    PARSER_UNEXPECTED_INDENTATION = 1519140493
    PARSER_MISSING_VALUE = 1519141916
    PARSER_MISSING_PROPERTY = 1519142311
    LOCK_NULL_INPUT = 1519201965
    LOCK_INVALID_ENTRY = 1519202051
    LOCK_NO_MATCHING_PACKAGE = 1519202338


class DependencyBlocks(Enum):
    """Nested blocks of a lock entry that describe dependency edges.

    Args:
        Enum (string): Block names as written in the lock file.
    """

    DEPENDENCIES = "dependencies"
    OPTIONAL_DEPENDENCIES = "optionalDependencies"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "YARNLOCK_LOG_LEVEL"
    DEFAULT_LOG_LEVEL = "WARNING"
    FILE_ENCODING = "utf-8"

    COMMENT_MARKER = "#"
    QUOTE = '"'
    KEY_SEPARATOR = ":"
    REQUEST_SEPARATOR = ","

    URL_SCHEME_MARKER = "://"
    URL_FRAGMENT_MARKER = "#"
    SEMVER_FRAGMENT_PREFIX = "semver:"

    ENTRY_VERSION = "version"
    ENTRY_RESOLVED = "resolved"
    ENTRY_INTEGRITY = "integrity"
    METADATA_KEY = "__metadata"
