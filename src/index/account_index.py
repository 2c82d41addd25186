# src/index/account_index.py — v1
"""Immutable account tree plus the flat reverse index of ancestor ids.

Reverse index keys are ``<parent prefix><child prefix><child id>``:

    {
        "apUA-1234-1": "1234",       # account of property UA-1234-1
        "av5678": "1234",            # account of profile 5678
        "pv5678": "UA-1234-1",       # property of profile 5678
    }

Ids are only unique within their own kind, so the two-letter relation
prefix namespaces them. Both mappings are exposed read-only; an index is
never modified once built.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from account_summaries.core.models import AccountRecord

# Entity prefixes for reverse index keys.
ACCOUNT_PREFIX = "a"
PROPERTY_PREFIX = "p"
PROFILE_PREFIX = "v"


class Relation(str, Enum):
    """Ancestor relation recorded in the reverse index."""

    ACCOUNT_OF_PROPERTY = ACCOUNT_PREFIX + PROPERTY_PREFIX
    ACCOUNT_OF_PROFILE = ACCOUNT_PREFIX + PROFILE_PREFIX
    PROPERTY_OF_PROFILE = PROPERTY_PREFIX + PROFILE_PREFIX


def normalize_id(entity_id: object) -> str | None:
    """Map a caller-supplied id to the string form used as key.

    Numbers are accepted since the response may carry numeric ids.
    ``None`` never matches anything.
    """
    if entity_id is None:
        return None
    if isinstance(entity_id, str):
        return entity_id
    return str(entity_id)


def index_key(relation: Relation, child_id: str) -> str:
    """Compose the reverse index key for ``child_id`` under ``relation``."""
    return f"{relation.value}{child_id}"


class AccountIndex:
    """Account tree and reverse index produced by one ingestion.

    Args:
        tree: Account id -> account record, in input order.
        entries: Reverse index key -> ancestor id.
        skipped_properties: Number of properties left out for having no
            profiles.
    """

    __slots__ = ("_tree", "_entries", "_skipped_properties")

    def __init__(
        self,
        tree: Mapping[str, AccountRecord] | None = None,
        entries: Mapping[str, str] | None = None,
        skipped_properties: int = 0,
    ) -> None:
        self._tree: Mapping[str, AccountRecord] = MappingProxyType(dict(tree or {}))
        self._entries: Mapping[str, str] = MappingProxyType(dict(entries or {}))
        self._skipped_properties = skipped_properties

    @property
    def tree(self) -> Mapping[str, AccountRecord]:
        return self._tree

    @property
    def entries(self) -> Mapping[str, str]:
        return self._entries

    def account(self, account_id: object) -> AccountRecord | None:
        key = normalize_id(account_id)
        if key is None:
            return None
        return self._tree.get(key)

    def ancestor_id(self, relation: Relation, child_id: object) -> str | None:
        """Return the ancestor id recorded for ``child_id``, or None."""
        key = normalize_id(child_id)
        if key is None:
            return None
        return self._entries.get(index_key(relation, key))

    def has_entry(self, relation: Relation, child_id: object) -> bool:
        return self.ancestor_id(relation, child_id) is not None

    @property
    def account_count(self) -> int:
        return len(self._tree)

    @property
    def property_count(self) -> int:
        return sum(len(a.properties) for a in self._tree.values())

    @property
    def skipped_properties(self) -> int:
        return self._skipped_properties

    @property
    def profile_count(self) -> int:
        return sum(
            len(p.profiles)
            for a in self._tree.values()
            for p in a.properties.values()
        )

    def is_empty(self) -> bool:
        return not self._tree

    def __repr__(self) -> str:
        return (
            f"AccountIndex(accounts={self.account_count}, "
            f"properties={self.property_count}, profiles={self.profile_count})"
        )
