# src/index/builder.py — v2
"""Tree builder: one pass over an AccountSummaries response.

Produces an ``AccountIndex`` holding

* the account tree, account id -> property id -> profile id, and
* the reverse index of ancestor ids for every kept property and profile.

Properties without profiles are deleted properties; they are left out of
both structures. Missing sequences count as empty, so partial payloads
never fail here.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping

from account_summaries.core.models import (
    AccountRecord,
    AccountSummaries,
    ProfileRecord,
    PropertyRecord,
)
from account_summaries.index.account_index import AccountIndex, Relation, index_key
from account_summaries.logging.context import ingestion_context
from account_summaries.storage.reader import parse_summaries

logger = logging.getLogger(__name__)


def build_index(
    response: AccountSummaries | Mapping[str, Any],
    source: str | None = None,
) -> AccountIndex:
    """Build the account tree and reverse index from one response.

    Accounts are taken in input order. A repeated account id replaces the
    earlier account (last write wins). When the same property or profile id
    appears under several surviving parents, the parent written last in
    input order owns the reverse index entry. Every call returns a fresh
    index, inputs are never merged into an existing one.

    Args:
        response: AccountSummaries model or its decoded JSON mapping.
        source: Optional label of where the response came from (for logs).

    Returns:
        A new, immutable AccountIndex.

    Raises:
        SummariesFormatError: If a raw mapping has wrongly-typed structure.
    """
    summaries = parse_summaries(response)

    with ingestion_context(uuid.uuid4().hex[:12], source):
        tree: dict[str, AccountRecord] = {}
        last_seen: dict[str, int] = {}
        skipped = 0

        for position, account in enumerate(summaries.items or []):
            if account.id in tree:
                logger.warning("Duplicate account id %s: later entry replaces earlier", account.id)

            properties: dict[str, PropertyRecord] = {}
            for prop in account.web_properties or []:
                # Deleted properties have no profiles.
                if not prop.profiles:
                    skipped += 1
                    logger.debug("Skipping property %s of account %s: no profiles", prop.id, account.id)
                    continue
                profiles = {p.id: ProfileRecord.from_summary(p) for p in prop.profiles}
                properties[prop.id] = PropertyRecord.from_summary(prop, profiles)

            tree[account.id] = AccountRecord.from_summary(account, properties)
            last_seen[account.id] = position

        entries = _reverse_entries(tree, last_seen)
        index = AccountIndex(tree, entries, skipped_properties=skipped)
        logger.info(
            "Built account index: %d accounts, %d properties, %d profiles (%d properties skipped)",
            index.account_count,
            index.property_count,
            index.profile_count,
            skipped,
            extra={"data": {"skipped_properties": skipped, "index_entries": len(entries)}},
        )
    return index


def _reverse_entries(
    tree: Mapping[str, AccountRecord],
    last_seen: Mapping[str, int],
) -> dict[str, str]:
    """Derive the reverse index from the final tree.

    Accounts are replayed in the order of their last occurrence, so an
    entry always points at a record that is still in the tree and later
    writes win over earlier ones.
    """
    entries: dict[str, str] = {}
    for account_id in sorted(tree, key=last_seen.__getitem__):
        for prop in tree[account_id].properties.values():
            entries[index_key(Relation.ACCOUNT_OF_PROPERTY, prop.id)] = account_id
            for profile_id in prop.profiles:
                entries[index_key(Relation.ACCOUNT_OF_PROFILE, profile_id)] = account_id
                entries[index_key(Relation.PROPERTY_OF_PROFILE, profile_id)] = prop.id
    return entries
