# src/index/holder.py — v1
"""Shared index reference that can be rebuilt while readers keep reading.

A rebuild constructs a complete new index and only then replaces the
reference, so a reader holding the old snapshot (or fetching the new one)
never sees a half-built index. Rebuilds are serialised by a lock; reads
take no lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

from account_summaries.core.models import AccountSummaries
from account_summaries.index.account_index import AccountIndex
from account_summaries.index.builder import build_index
from account_summaries.index.resolver import EntityResolver

logger = logging.getLogger(__name__)


class IndexHolder:
    """Owns the current AccountIndex and swaps it atomically on rebuild."""

    def __init__(self, index: AccountIndex | None = None) -> None:
        self._index = index if index is not None else AccountIndex()
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def index(self) -> AccountIndex:
        return self._index

    @property
    def generation(self) -> int:
        """Number of completed rebuilds."""
        return self._generation

    def rebuild(
        self,
        response: AccountSummaries | Mapping[str, Any],
        source: str | None = None,
    ) -> AccountIndex:
        """Build a fresh index from ``response`` and make it current."""
        with self._lock:
            fresh = build_index(response, source=source)
            self._index = fresh
            self._generation += 1
        logger.info("Index swapped (generation %d)", self._generation)
        return fresh

    def resolver(self) -> EntityResolver:
        """Resolver bound to the current snapshot."""
        return EntityResolver(self._index)
