# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides AccountSummaries payloads (as decoded JSON) and built indices.
No external dependencies, no I/O beyond tmp_path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from account_summaries.index.account_index import AccountIndex
from account_summaries.index.builder import build_index
from account_summaries.index.resolver import EntityResolver
from account_summaries.logging.context import clear_context


def make_profile(profile_id: str, name: str, profile_type: str = "WEB") -> dict[str, Any]:
    return {
        "kind": "analytics#profileSummary",
        "id": profile_id,
        "name": name,
        "type": profile_type,
    }


def make_property(
    property_id: str,
    name: str,
    profiles: list[dict[str, Any]] | None,
    internal_id: str = "1001",
    website_url: str | None = "http://www.example.com",
) -> dict[str, Any]:
    prop: dict[str, Any] = {
        "kind": "analytics#webPropertySummary",
        "id": property_id,
        "name": name,
        "internalWebPropertyId": internal_id,
        "level": "STANDARD",
    }
    if website_url is not None:
        prop["websiteUrl"] = website_url
    if profiles is not None:
        prop["profiles"] = profiles
    return prop


def make_account(
    account_id: str, name: str, properties: list[dict[str, Any]] | None
) -> dict[str, Any]:
    account: dict[str, Any] = {
        "kind": "analytics#accountSummary",
        "id": account_id,
        "name": name,
    }
    if properties is not None:
        account["webProperties"] = properties
    return account


def make_response(accounts: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "kind": "analytics#accountSummaries",
        "username": "user@example.com",
        "totalResults": len(accounts),
        "startIndex": 1,
        "itemsPerPage": 1000,
        "items": accounts,
    }


# === FIXTURES: Sample payloads ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def acme_response() -> dict[str, Any]:
    """One account, one property, one view."""
    return make_response([
        make_account("1234", "Acme", [
            make_property("UA-1234-1", "Acme Site", [make_profile("5678", "Main View")]),
        ]),
    ])


@pytest.fixture
def mixed_response() -> dict[str, Any]:
    """Two accounts with a deleted property, a missing profiles field and an app property."""
    return make_response([
        make_account("1234", "Acme", [
            make_property("UA-1234-1", "Acme Site", [
                make_profile("5678", "Main View"),
                make_profile("5679", "Raw Data"),
            ]),
            make_property("UA-1234-2", "Deleted Site", []),
            make_property("UA-1234-3", "Acme App", [
                make_profile("7000", "App View", profile_type="APP"),
            ], internal_id="1003", website_url=None),
        ]),
        make_account("2000", "Globex", [
            make_property("UA-2000-1", "Globex Site", [make_profile("8000", "All Data")]),
            make_property("UA-2000-9", "Half Deleted", None),
        ]),
        make_account("3000", "Initech", None),
    ])


@pytest.fixture
def mixed_index(mixed_response) -> AccountIndex:
    return build_index(mixed_response)


@pytest.fixture
def resolver(mixed_index) -> EntityResolver:
    return EntityResolver(mixed_index)


@pytest.fixture
def summaries_file(tmp_path: Path, mixed_response) -> Path:
    path = tmp_path / "summaries.json"
    path.write_text(json.dumps(mixed_response), encoding="utf-8")
    return path
