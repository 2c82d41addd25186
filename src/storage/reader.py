# src/storage/reader.py — v2
"""Read AccountSummaries payloads from files, strings or decoded mappings.

Validation errors surface here, at the loading boundary. Once a payload is
an ``AccountSummaries`` model the index builder accepts it unconditionally.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

from pydantic import ValidationError

from account_summaries.core.models import AccountSummaries

logger = logging.getLogger(__name__)

SummariesInput = Union[AccountSummaries, Mapping[str, Any], str, bytes]


class SummariesError(Exception):
    """Base class for payload loading failures."""


class SummariesFormatError(SummariesError):
    """Raised when a payload does not have the AccountSummaries shape."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class SummariesLoadError(SummariesError):
    """Raised when a payload file cannot be read or decoded."""


def parse_summaries(data: SummariesInput) -> AccountSummaries:
    """Validate a payload into an ``AccountSummaries`` model.

    Missing fields take their defaults and absent sequences stay empty, so
    partial payloads are accepted. Only wrongly-typed structure is rejected.

    Args:
        data: A model (returned unchanged), a decoded JSON mapping, or raw
            JSON text.

    Returns:
        Validated AccountSummaries.

    Raises:
        SummariesFormatError: If the payload cannot be validated.
    """
    if isinstance(data, AccountSummaries):
        return data
    try:
        if isinstance(data, (str, bytes, bytearray)):
            return AccountSummaries.model_validate_json(data)
        return AccountSummaries.model_validate(data)
    except ValidationError as exc:
        raise SummariesFormatError(
            f"Invalid AccountSummaries payload ({exc.error_count()} error(s)): "
            f"{exc.errors()[0]['msg']}",
            errors=exc.errors(),
        ) from exc


def load_summaries(path: Path | str) -> AccountSummaries:
    """Load one AccountSummaries response from a JSON file.

    Raises:
        SummariesLoadError: If the file is missing, unreadable or not JSON.
        SummariesFormatError: If the JSON does not have the expected shape.
    """
    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SummariesLoadError(f"Cannot read {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SummariesLoadError(f"Invalid JSON in {path}: {exc}") from exc

    summaries = parse_summaries(data)
    logger.debug("Loaded %d account(s) from %s", len(summaries.items or []), path)
    return summaries


def combine_pages(pages: Iterable[SummariesInput]) -> AccountSummaries:
    """Concatenate the accounts of paginated responses into one response.

    Pages are taken in the given order. The combined response keeps the
    first page's ``username`` and describes itself as a single full page.
    """
    parsed = [parse_summaries(page) for page in pages]
    items = [item for page in parsed for item in (page.items or [])]
    username = parsed[0].username if parsed else None
    logger.debug("Combined %d page(s) into %d account(s)", len(parsed), len(items))
    return AccountSummaries(
        username=username,
        total_results=len(items),
        start_index=1,
        items_per_page=len(items),
        items=items,
    )
