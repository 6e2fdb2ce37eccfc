"""Logging helpers shared by the parser and the lock resolver.

The library never installs handlers on import; applications (and tests that
want console output) call ``configure_logging()`` explicitly.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

_CONTEXT_FIELDS = ("event", "component", "action", "outcome", "target", "context")


def _resolve_level(level: Optional[str]) -> int:
    """Map a level name (or the environment override) to a logging level."""
    name = level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.DEFAULT_LOG_LEVEL
    value = getattr(logging, str(name).strip().upper(), None)
    if isinstance(value, int):
        return value
    return logging.WARNING


def configure_logging(level: Optional[str] = None) -> None:
    """Install a root stream handler using the project log format.

    Args:
        level: Optional level name; falls back to ``YARNLOCK_LOG_LEVEL`` and
            then to ``Constants.DEFAULT_LOG_LEVEL``.
    """
    root = logging.getLogger()
    if not any(getattr(h, "_yarnlock_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        handler._yarnlock_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(_resolve_level(level))


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping for structured log records.

    Known fields are always present (``None`` when not given) so formatters
    can reference them unconditionally; unknown keyword fields pass through.
    ``None`` values of unknown fields are dropped.
    """
    extra: Dict[str, Any] = {name: fields.pop(name, None) for name in _CONTEXT_FIELDS}
    extra.update({k: v for k, v in fields.items() if v is not None})
    return extra
