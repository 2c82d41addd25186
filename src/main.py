# src/main.py — v2
"""CLI entry point: lookup, tree, stats commands.

Usage:
    account-summaries lookup <file> (--account ID | --property ID | --profile ID)
    account-summaries tree <file>
    account-summaries stats <file>

<file> may be omitted when SUMMARIES_PATH is set.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from account_summaries.config.settings import ConfigurationError, Settings, load_settings
from account_summaries.index.account_index import AccountIndex
from account_summaries.index.builder import build_index
from account_summaries.index.resolver import EntityResolver
from account_summaries.logging.logger import setup_logging_from_settings
from account_summaries.storage.reader import SummariesError, load_summaries
from account_summaries.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    setup_logging_from_settings(settings, args.verbose)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except SummariesError as exc:
        logger.error("%s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="account-summaries",
        description=f"account-summaries v{__version__}: account / property / view lookups",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- lookup ---
    p_lookup = subparsers.add_parser(
        "lookup", help="Look up one entity by id",
    )
    p_lookup.add_argument(
        "file", type=Path, nargs="?", default=None,
        help="AccountSummaries JSON file (default: SUMMARIES_PATH)",
    )
    target = p_lookup.add_mutually_exclusive_group(required=True)
    target.add_argument("--account", dest="account_id", help="Account id")
    target.add_argument("--property", dest="property_id", help="Web property id")
    target.add_argument("--profile", dest="profile_id", help="View (profile) id")
    p_lookup.set_defaults(func=_cmd_lookup)

    # --- tree ---
    p_tree = subparsers.add_parser(
        "tree", help="Print the account hierarchy",
    )
    p_tree.add_argument(
        "file", type=Path, nargs="?", default=None,
        help="AccountSummaries JSON file (default: SUMMARIES_PATH)",
    )
    p_tree.set_defaults(func=_cmd_tree)

    # --- stats ---
    p_stats = subparsers.add_parser(
        "stats", help="Show index statistics",
    )
    p_stats.add_argument(
        "file", type=Path, nargs="?", default=None,
        help="AccountSummaries JSON file (default: SUMMARIES_PATH)",
    )
    p_stats.set_defaults(func=_cmd_stats)

    return parser


def _cmd_lookup(args: argparse.Namespace, settings: Settings) -> int:
    """Print an entity and its ancestors as JSON."""
    resolver = EntityResolver(_load_index(args.file, settings))

    result: dict[str, Any] | None = None
    if args.account_id is not None:
        account = resolver.get_account(args.account_id)
        if account is not None:
            result = {"account": account.attributes()}
    elif args.property_id is not None:
        prop = resolver.get_property(args.property_id)
        account = resolver.get_account_by_property_id(args.property_id)
        if prop is not None and account is not None:
            result = {"account": account.attributes(), "property": prop.attributes()}
    else:
        path = resolver.get_profile_path(args.profile_id)
        if path is not None:
            result = {
                "account": path.account.attributes(),
                "property": path.property.attributes(),
                "profile": path.profile.model_dump(),
            }

    if result is None:
        wanted = args.account_id or args.property_id or args.profile_id
        logger.error("Not found: %s", wanted)
        return 1

    print(json.dumps(result, indent=settings.json_indent or None, ensure_ascii=False))
    return 0


def _cmd_tree(args: argparse.Namespace, settings: Settings) -> int:
    """Print the indented account hierarchy."""
    index = _load_index(args.file, settings)
    for account in index.tree.values():
        print(f"{account.name} [{account.id}]")
        for prop in account.properties.values():
            print(f"  {prop.name} [{prop.id}]")
            for profile in prop.profiles.values():
                print(f"    {profile.name} [{profile.id}] {profile.type}")
    return 0


def _cmd_stats(args: argparse.Namespace, settings: Settings) -> int:
    """Print index statistics as JSON."""
    from account_summaries.graph.builder import build_hierarchy_graph, hierarchy_stats

    index = _load_index(args.file, settings)
    stats = hierarchy_stats(build_hierarchy_graph(index))
    stats["index_entries"] = len(index.entries)
    stats["skipped_properties"] = index.skipped_properties
    print(json.dumps(stats, indent=settings.json_indent or None))
    return 0


def _load_index(file: Path | None, settings: Settings) -> AccountIndex:
    path = file or settings.summaries_path
    if path is None:
        raise SummariesError("No input file given and SUMMARIES_PATH is not set")
    return build_index(load_summaries(path), source=str(path))


if __name__ == "__main__":
    sys.exit(main())
