# src/logging/context.py — v3
"""Contextual logging support: attach source and build_id to log records."""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

# Set for the duration of one ingestion, read by the formatters.
_source: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "source", default=None
)
_build_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "build_id", default=None
)


@dataclass
class LogContext:
    """Snapshot of the current logging context."""

    source: str | None = None
    build_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(source=_source.get(), build_id=_build_id.get())


@contextmanager
def ingestion_context(build_id: str, source: str | None = None) -> Iterator[LogContext]:
    """Scope ``build_id`` (and ``source``, when given) to one index build.

    The previous values are restored on exit, so a later build never
    inherits this build's source. Without ``source`` the enclosing one, if
    any, stays visible.
    """
    build_token = _build_id.set(build_id)
    source_token = _source.set(source) if source is not None else None
    try:
        yield get_context()
    finally:
        if source_token is not None:
            _source.reset(source_token)
        _build_id.reset(build_token)


def clear_context() -> None:
    """Reset all context variables."""
    _source.set(None)
    _build_id.set(None)
