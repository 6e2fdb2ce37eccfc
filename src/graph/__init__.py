"""Package graph model, lock resolver and depth classification."""

from .depth import DepthClassifier, DepthState
from .package import Package
from .yarn_lock import YarnLock

__all__ = [
    "DepthClassifier",
    "DepthState",
    "Package",
    "YarnLock",
]
