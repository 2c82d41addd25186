# src/__init__.py — v1
"""Account Summaries index: tree and reverse index over an accounts hierarchy.

Usage:
    from account_summaries.index.builder import build_index
    from account_summaries.index.resolver import EntityResolver

    resolver = EntityResolver(build_index(response))
    profile = resolver.get_profile("5678")
"""

from account_summaries.version import __version__

__all__ = ["__version__"]
