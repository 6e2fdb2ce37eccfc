"""Breadth-first depth classification of a package graph."""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Callable, Iterable, List, Optional

from common.logging_utils import extra_context, is_debug_enabled

from .package import Package

logger = logging.getLogger(__name__)

_UNBOUNDED = None


class DepthState(Enum):
    """Whether a depth computation has run for the current graph."""
    NOT_COMPUTED = "not_computed"
    COMPUTED = "computed"


class DepthClassifier:
    """Assigns every reachable package its minimum hop count from a root set.

    A computation without explicit roots runs only once; later calls without
    roots keep the earlier result, whichever roots it used. Explicit roots
    always recompute.
    """

    def __init__(self, packages: Callable[[], List[Package]]):
        self._packages = packages
        self.state = DepthState.NOT_COMPUTED

    def default_roots(self) -> List[Package]:
        """Packages nothing else in the graph depends on."""
        return [pkg for pkg in self._packages() if not pkg.resolves]

    def calculate(self, roots: Optional[Iterable[Package]] = None) -> None:
        if roots is None and self.state is DepthState.COMPUTED:
            return

        packages = self._packages()
        for pkg in packages:
            pkg.depth = None

        queue = deque()
        for root in (self.default_roots() if roots is None else roots):
            if root.depth is None:
                root.depth = 0
                queue.append(root)

        while queue:
            current = queue.popleft()
            for dep in current.dependencies:
                if dep.depth is None:
                    dep.depth = current.depth + 1
                    queue.append(dep)

        self.state = DepthState.COMPUTED
        if is_debug_enabled(logger):
            logger.debug(
                "Calculated package depths",
                extra=extra_context(
                    event="depth_calculated",
                    component="depth_classifier",
                    action="custom_roots" if roots is not None else "default_roots",
                    packages=len(packages),
                    unreached=sum(1 for pkg in packages if pkg.depth is None),
                ),
            )

    def max_depth(self) -> int:
        """Largest assigned depth; runs the default computation if needed."""
        self.calculate()
        return max((pkg.depth for pkg in self._packages() if pkg.depth is not None), default=0)

    def packages_by_depth(self, start: int, end: Optional[int] = _UNBOUNDED) -> List[Package]:
        """Packages with ``start <= depth < end``.

        ``end=None`` is unbounded and then also includes packages the last
        computation did not reach, which count as infinitely deep.
        """
        self.calculate()
        result = []
        for pkg in self._packages():
            if pkg.depth is None:
                if end is _UNBOUNDED:
                    result.append(pkg)
            elif pkg.depth >= start and (end is _UNBOUNDED or pkg.depth < end):
                result.append(pkg)
        return result
