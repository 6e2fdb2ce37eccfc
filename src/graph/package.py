"""Package nodes of a resolved lock graph."""

from __future__ import annotations

import weakref
from typing import List, Optional


class Package:
    """A concrete (name, version) pair from the lock file and its edges.

    ``dependencies`` holds strong references; ``resolves`` (the packages that
    depend on this one) is a non-owning back relation kept as weak
    references, so it never keeps a package alive on its own.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        version: Optional[str] = None,
        resolved: Optional[str] = None,
        integrity: Optional[str] = None,
    ):
        self.name = name
        self.version = version
        self.resolved = resolved
        self.integrity = integrity
        self.depth: Optional[int] = None
        self._satisfied_versions: List[str] = []
        self._dependencies: List[Package] = []
        self._optional_dependencies: List[Package] = []
        self._resolves: List[weakref.ReferenceType] = []

    @property
    def satisfied_versions(self) -> List[str]:
        """Constraint strings that resolve to this package, in file order."""
        return list(self._satisfied_versions)

    @property
    def dependencies(self) -> List[Package]:
        return list(self._dependencies)

    @property
    def optional_dependencies(self) -> List[Package]:
        return list(self._optional_dependencies)

    @property
    def resolves(self) -> List[Package]:
        """Packages depending on this one, in the order the edges were added."""
        return [pkg for pkg in (ref() for ref in self._resolves) if pkg is not None]

    def add_satisfied_version(self, spec: str) -> None:
        if spec not in self._satisfied_versions:
            self._satisfied_versions.append(spec)

    def add_dependency(self, package: Package) -> None:
        """Record that this package requires ``package``; idempotent."""
        if not any(dep is package for dep in self._dependencies):
            self._dependencies.append(package)
        package.add_resolves(self)

    def add_optional_dependency(self, package: Package) -> None:
        """Record an optional requirement; it also counts as a regular edge."""
        if not any(dep is package for dep in self._optional_dependencies):
            self._optional_dependencies.append(package)
        self.add_dependency(package)

    def add_resolves(self, package: Package) -> None:
        """Record that ``package`` depends on this one; idempotent."""
        if not any(ref() is package for ref in self._resolves):
            self._resolves.append(weakref.ref(package))

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"

    def __repr__(self) -> str:
        return f"Package({self.name!r}, {self.version!r})"
