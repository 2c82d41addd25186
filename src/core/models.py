# src/core/models.py — v1
"""Shared Pydantic domain models.

Two families live here:

* Summary models mirror the AccountSummaries listing response exactly as it
  arrives (camelCase aliases, every field optional) so a decoded payload can
  be validated as-is.
* Record models are the immutable nodes of the account tree. Each record has
  a fixed attribute set and keeps its children in a separate id-keyed
  mapping, so a child id can never shadow an attribute.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _SummaryModel(BaseModel):
    """Base for response models: JSON null means "use the default"."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, list):
                value = [item for item in value if item is not None]
            cleaned[key] = value
        return cleaned


# === RESPONSE MODELS ===


class ProfileSummary(_SummaryModel):
    """A view (profile) entry of a web property."""

    id: str = ""
    name: str = ""
    kind: str = "analytics#profileSummary"
    type: str = ""
    starred: bool = False


class WebPropertySummary(_SummaryModel):
    """A web property entry of an account.

    ``profiles`` is ``None`` when the field is absent; deleted properties
    arrive with no profiles at all.
    """

    id: str = ""
    internal_web_property_id: str = Field(default="", alias="internalWebPropertyId")
    name: str = ""
    level: str = ""
    website_url: str | None = Field(default=None, alias="websiteUrl")
    kind: str = "analytics#webPropertySummary"
    starred: bool = False
    profiles: list[ProfileSummary] | None = None


class AccountSummary(_SummaryModel):
    """A top-level account entry."""

    id: str = ""
    name: str = ""
    kind: str = "analytics#accountSummary"
    starred: bool = False
    web_properties: list[WebPropertySummary] | None = Field(
        default=None, alias="webProperties"
    )


class AccountSummaries(_SummaryModel):
    """One page of the AccountSummaries collection."""

    kind: str = "analytics#accountSummaries"
    username: str | None = None
    total_results: int | None = Field(default=None, alias="totalResults")
    start_index: int | None = Field(default=None, alias="startIndex")
    items_per_page: int | None = Field(default=None, alias="itemsPerPage")
    next_link: str | None = Field(default=None, alias="nextLink")
    previous_link: str | None = Field(default=None, alias="previousLink")
    items: list[AccountSummary] | None = None


# === TREE RECORDS ===


class ProfileRecord(BaseModel):
    """Leaf node of the account tree."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: str
    type: str
    starred: bool = False

    @classmethod
    def from_summary(cls, summary: ProfileSummary) -> ProfileRecord:
        return cls(
            id=summary.id,
            name=summary.name,
            kind=summary.kind,
            type=summary.type,
            starred=summary.starred,
        )


class PropertyRecord(BaseModel):
    """Web property node; ``profiles`` maps profile id to record."""

    model_config = ConfigDict(frozen=True)

    id: str
    internal_web_property_id: str
    name: str
    level: str
    website_url: str | None = None
    kind: str
    starred: bool = False
    profiles: dict[str, ProfileRecord] = Field(default_factory=dict)

    @classmethod
    def from_summary(
        cls,
        summary: WebPropertySummary,
        profiles: dict[str, ProfileRecord],
    ) -> PropertyRecord:
        return cls(
            id=summary.id,
            internal_web_property_id=summary.internal_web_property_id,
            name=summary.name,
            level=summary.level,
            website_url=summary.website_url,
            kind=summary.kind,
            starred=summary.starred,
            profiles=profiles,
        )

    def attributes(self) -> dict[str, object]:
        """Own attributes without the child mapping."""
        return self.model_dump(exclude={"profiles"})


class AccountRecord(BaseModel):
    """Account node; ``properties`` maps property id to record."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: str
    starred: bool = False
    properties: dict[str, PropertyRecord] = Field(default_factory=dict)

    @classmethod
    def from_summary(
        cls,
        summary: AccountSummary,
        properties: dict[str, PropertyRecord],
    ) -> AccountRecord:
        return cls(
            id=summary.id,
            name=summary.name,
            kind=summary.kind,
            starred=summary.starred,
            properties=properties,
        )

    def attributes(self) -> dict[str, object]:
        """Own attributes without the child mapping."""
        return self.model_dump(exclude={"properties"})
