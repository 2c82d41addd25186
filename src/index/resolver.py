# src/index/resolver.py — v1
"""Read-only lookups over an AccountIndex.

Every operation is total: an unknown id, or the id of a property that was
skipped at build time, yields ``None`` (or an empty list for listings).
Nothing here raises for a lookup miss and nothing mutates the index.
"""

from __future__ import annotations

from dataclasses import dataclass

from account_summaries.core.models import AccountRecord, ProfileRecord, PropertyRecord
from account_summaries.index.account_index import AccountIndex, Relation, normalize_id


@dataclass(frozen=True)
class ProfilePath:
    """Full account -> property -> profile path of one profile."""

    account: AccountRecord
    property: PropertyRecord
    profile: ProfileRecord


class EntityResolver:
    """Entity lookups by id, by ancestor, and by full path.

    Args:
        index: The index to read. The resolver keeps a reference, it never
            copies or changes it.
    """

    def __init__(self, index: AccountIndex) -> None:
        self._index = index

    @property
    def index(self) -> AccountIndex:
        return self._index

    # --- Direct lookups ---

    def get_account(self, account_id: object) -> AccountRecord | None:
        """Return the account with ``account_id``."""
        return self._index.account(account_id)

    def get_property(self, property_id: object) -> PropertyRecord | None:
        """Return a property without knowing its account."""
        account = self.get_account_by_property_id(property_id)
        if account is None:
            return None
        return account.properties.get(normalize_id(property_id))

    def get_profile(self, profile_id: object) -> ProfileRecord | None:
        """Return a profile without knowing its property or account."""
        prop = self.get_property_by_profile_id(profile_id)
        if prop is None:
            return None
        return prop.profiles.get(normalize_id(profile_id))

    # --- Ancestor lookups ---

    def get_account_by_property_id(self, property_id: object) -> AccountRecord | None:
        """Return the parent account of a property."""
        account_id = self._index.ancestor_id(Relation.ACCOUNT_OF_PROPERTY, property_id)
        if account_id is None:
            return None
        return self.get_account(account_id)

    def get_account_by_profile_id(self, profile_id: object) -> AccountRecord | None:
        """Return the account a profile belongs to."""
        account_id = self._index.ancestor_id(Relation.ACCOUNT_OF_PROFILE, profile_id)
        if account_id is None:
            return None
        return self.get_account(account_id)

    def get_property_by_profile_id(self, profile_id: object) -> PropertyRecord | None:
        """Return the parent property of a profile."""
        account_id = self._index.ancestor_id(Relation.ACCOUNT_OF_PROFILE, profile_id)
        property_id = self._index.ancestor_id(Relation.PROPERTY_OF_PROFILE, profile_id)
        if account_id is None or property_id is None:
            return None
        return self.get_property_at(account_id, property_id)

    # --- Full-path lookups ---

    def get_property_at(self, account_id: object, property_id: object) -> PropertyRecord | None:
        account = self.get_account(account_id)
        if account is None:
            return None
        return account.properties.get(normalize_id(property_id))

    def get_profile_at(
        self,
        account_id: object,
        property_id: object,
        profile_id: object,
    ) -> ProfileRecord | None:
        prop = self.get_property_at(account_id, property_id)
        if prop is None:
            return None
        return prop.profiles.get(normalize_id(profile_id))

    def get_profile_path(self, profile_id: object) -> ProfilePath | None:
        """Resolve a profile together with its property and account."""
        account = self.get_account_by_profile_id(profile_id)
        prop = self.get_property_by_profile_id(profile_id)
        if account is None or prop is None:
            return None
        profile = prop.profiles.get(normalize_id(profile_id))
        if profile is None:
            return None
        return ProfilePath(account=account, property=prop, profile=profile)

    # --- Listings ---

    def list_accounts(self) -> list[AccountRecord]:
        return list(self._index.tree.values())

    def list_properties(self, account_id: object) -> list[PropertyRecord]:
        """Kept properties of an account, in input order."""
        account = self.get_account(account_id)
        if account is None:
            return []
        return list(account.properties.values())

    def list_profiles(self, property_id: object) -> list[ProfileRecord]:
        """Profiles of a property, in input order."""
        prop = self.get_property(property_id)
        if prop is None:
            return []
        return list(prop.profiles.values())

    def default_profile_path(self) -> ProfilePath | None:
        """First account, its first kept property, and that property's first profile.

        Accounts whose properties were all skipped are passed over. Returns
        None when the index holds no profile at all.
        """
        for account in self._index.tree.values():
            for prop in account.properties.values():
                for profile in prop.profiles.values():
                    return ProfilePath(account=account, property=prop, profile=profile)
        return None
