"""Resolved package graph built from a yarn lock file.

Resolution happens in two passes over the parsed top-level mapping: the
first creates one ``Package`` per distinct (name, version) and records every
constraint that maps to it, the second wires dependency edges by matching
each requested range against the packages created in the first pass.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from constants import Constants, DependencyBlocks, ErrorCodes
from common.logging_utils import extra_context, is_debug_enabled
from lockfile.errors import InvalidInputError, ResolutionError
from lockfile.parser import Parser
from versioning.parser import parse_request, split_name_and_spec, split_request_list
from versioning.semver import satisfies

from .depth import DepthClassifier
from .package import Package

logger = logging.getLogger(__name__)

RangeMatcher = Callable[[str, str], bool]

_NEXT_LEVEL = object()


class YarnLock:
    """Queryable dependency graph of a lock file.

    Build instances with ``from_string``, ``from_file`` or ``from_parsed``.
    ``matcher`` decides whether a concrete version satisfies a range and
    defaults to npm semantics.
    """

    def __init__(self, matcher: Optional[RangeMatcher] = None):
        self._matcher: RangeMatcher = matcher or satisfies
        self._packages: List[Package] = []
        self._by_key: Dict[Tuple[str, str], Package] = {}
        self._by_name: Dict[str, List[Package]] = {}
        self._depth = DepthClassifier(self.get_packages)

    @classmethod
    def from_string(
        cls, content: Union[str, bytes, None], matcher: Optional[RangeMatcher] = None
    ) -> "YarnLock":
        """Parse lock text and resolve it into a graph.

        Raises:
            InvalidInputError: ``content`` is None.
            ParserError: The text is malformed.
            ResolutionError: A dependency cannot be matched to a locked package.
        """
        if content is None:
            raise InvalidInputError(
                "Lock file content must not be None", ErrorCodes.LOCK_NULL_INPUT
            )
        data = Parser().parse(content, assoc=True)
        return cls.from_parsed(data, matcher)

    @classmethod
    def from_file(cls, path: Union[str, Path], matcher: Optional[RangeMatcher] = None) -> "YarnLock":
        """Read a lock file from disk and resolve it."""
        content = Path(path).read_text(encoding=Constants.FILE_ENCODING)
        logger.info("Loaded lock file: %s", path)
        return cls.from_string(content, matcher)

    @classmethod
    def from_parsed(
        cls, data: Dict[str, Any], matcher: Optional[RangeMatcher] = None
    ) -> "YarnLock":
        """Resolve an already parsed top-level mapping (``assoc=True`` shape)."""
        lock = cls(matcher)
        entries = lock._create_packages(data)
        lock._wire_dependencies(entries)
        if is_debug_enabled(logger):
            logger.debug(
                "Resolved lock graph",
                extra=extra_context(
                    event="resolve_complete",
                    component="yarn_lock",
                    outcome="success",
                    entries=len(entries),
                    packages=len(lock._packages),
                ),
            )
        return lock

    def _create_packages(self, data: Dict[str, Any]) -> List[Tuple[Package, Dict[str, Any]]]:
        entries: List[Tuple[Package, Dict[str, Any]]] = []
        for key, entry in data.items():
            if key == Constants.METADATA_KEY:
                continue
            requests = [parse_request(token) for token in split_request_list(key)]
            if not requests or not isinstance(entry, dict) or entry.get(Constants.ENTRY_VERSION) is None:
                raise ResolutionError(
                    f"Invalid lock entry '{key}': expected a block with a version",
                    ErrorCodes.LOCK_INVALID_ENTRY,
                )

            name = requests[0].name
            version = str(entry[Constants.ENTRY_VERSION])
            package = self._by_key.get((name, version))
            if package is None:
                package = self._add_package(name, version, entry)
            for request in requests:
                if request.name != name and is_debug_enabled(logger):
                    logger.debug("Entry '%s' aliases %s as %s", key, request.name, name)
                package.add_satisfied_version(request.spec)
            entries.append((package, entry))
        return entries

    def _add_package(self, name: str, version: str, entry: Dict[str, Any]) -> Package:
        resolved = entry.get(Constants.ENTRY_RESOLVED)
        integrity = entry.get(Constants.ENTRY_INTEGRITY)
        package = Package(
            name=name,
            version=version,
            resolved=str(resolved) if resolved is not None else None,
            integrity=str(integrity) if integrity is not None else None,
        )
        self._packages.append(package)
        self._by_key[(name, version)] = package
        self._by_name.setdefault(name, []).append(package)
        return package

    def _wire_dependencies(self, entries: Iterable[Tuple[Package, Dict[str, Any]]]) -> None:
        for package, entry in entries:
            for block in DependencyBlocks:
                requirements = entry.get(block.value)
                if not isinstance(requirements, dict):
                    continue
                optional = block is DependencyBlocks.OPTIONAL_DEPENDENCIES
                for dep_name, dep_spec in requirements.items():
                    _, spec = split_name_and_spec(f"{dep_name}@{dep_spec}")
                    match = self._find(dep_name, spec)
                    if match is None:
                        if optional:
                            logger.debug(
                                "Optional dependency %s@%s of %s is not locked; skipping",
                                dep_name, dep_spec, package,
                            )
                            continue
                        raise ResolutionError(
                            f"No matching package for {dep_name}@{dep_spec} required by {package}",
                            ErrorCodes.LOCK_NO_MATCHING_PACKAGE,
                        )
                    if optional:
                        package.add_optional_dependency(match)
                    else:
                        package.add_dependency(match)

    def _find(self, name: str, spec: str) -> Optional[Package]:
        """Locked package of ``name`` that a request for ``spec`` resolves to."""
        candidates = self._by_name.get(name, [])
        for package in candidates:
            if spec in package.satisfied_versions or spec == package.version:
                return package
        for package in candidates:
            if self._matcher(package.version, spec):
                return package
        return None

    def has_package(self, name: str, version: Optional[str] = None) -> bool:
        return self.get_package(name, version) is not None

    def get_package(self, name: str, version: Optional[str] = None) -> Optional[Package]:
        """Look up a package by name and, optionally, a version or range.

        Without a version the first package of that name in file order is
        returned.
        """
        if version is None:
            candidates = self._by_name.get(name)
            return candidates[0] if candidates else None
        return self._find(name, version)

    def get_packages(self) -> List[Package]:
        """All packages, in creation order."""
        return list(self._packages)

    def get_packages_by_name(self, name: str) -> List[Package]:
        return list(self._by_name.get(name, []))

    def calculate_depth(self, roots: Optional[Iterable[Package]] = None) -> None:
        """Compute package depths from ``roots``.

        Without roots this uses every package nothing depends on, and does
        nothing if depths were already computed. Explicit roots always
        recompute.
        """
        self._depth.calculate(list(roots) if roots is not None else None)

    def get_depth(self) -> int:
        """Maximum depth of the dependency tree."""
        return self._depth.max_depth()

    def get_packages_by_depth(self, start: int, end: Any = _NEXT_LEVEL) -> List[Package]:
        """Packages whose depth lies in ``[start, end)``.

        ``end`` defaults to ``start + 1``; ``None`` means unbounded.
        """
        if end is _NEXT_LEVEL:
            end = start + 1
        return self._depth.packages_by_depth(start, end)
