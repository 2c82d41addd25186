# src/graph/builder.py — v2
"""Hierarchy graph export: account index as a NetworkX directed graph.

Nodes are keyed ``(entity_type, id)`` since ids are only unique within a
kind. Edges point from parent to child and carry ``relation="contains"``,
so ``nx.ancestors(graph, node)`` yields the lineage of any entity.
"""

from __future__ import annotations

import logging
from typing import Any

import networkx as nx

from account_summaries.index.account_index import AccountIndex

logger = logging.getLogger(__name__)

ACCOUNT = "account"
PROPERTY = "property"
PROFILE = "profile"


def node_key(entity_type: str, entity_id: str) -> tuple[str, str]:
    return (entity_type, entity_id)


def build_hierarchy_graph(index: AccountIndex) -> nx.DiGraph:
    """Build a directed account -> property -> profile graph.

    Node attributes are the record attributes plus ``entity_type``; child
    mappings are represented by edges only.

    Args:
        index: Built account index.

    Returns:
        NetworkX DiGraph, one node per indexed entity.
    """
    graph = nx.DiGraph()

    for account in index.tree.values():
        account_node = node_key(ACCOUNT, account.id)
        graph.add_node(account_node, entity_type=ACCOUNT, **account.attributes())

        for prop in account.properties.values():
            property_node = node_key(PROPERTY, prop.id)
            graph.add_node(property_node, entity_type=PROPERTY, **prop.attributes())
            graph.add_edge(account_node, property_node, relation="contains")

            for profile in prop.profiles.values():
                profile_node = node_key(PROFILE, profile.id)
                graph.add_node(profile_node, entity_type=PROFILE, **profile.model_dump())
                graph.add_edge(property_node, profile_node, relation="contains")

    logger.info(
        "Built hierarchy graph: %d nodes, %d edges",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


def hierarchy_stats(graph: nx.DiGraph) -> dict[str, Any]:
    """Count nodes per entity type plus graph-level figures."""
    counts = {ACCOUNT: 0, PROPERTY: 0, PROFILE: 0}
    for _, data in graph.nodes(data=True):
        entity_type = data.get("entity_type")
        if entity_type in counts:
            counts[entity_type] += 1

    empty_accounts = sum(
        1
        for node, data in graph.nodes(data=True)
        if data.get("entity_type") == ACCOUNT and graph.out_degree(node) == 0
    )
    return {
        "accounts": counts[ACCOUNT],
        "properties": counts[PROPERTY],
        "profiles": counts[PROFILE],
        "edges": graph.number_of_edges(),
        "accounts_without_properties": empty_accounts,
        "is_forest": nx.is_forest(graph) if graph.number_of_nodes() else True,
    }
