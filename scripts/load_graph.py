#!/usr/bin/env python3
"""
Bulk-load nodes and edges from a JSON document into the knowledge base.

Input format::

    {
      "nodes": [[{"name": "A"}, "alpha"], [{"name": "B"}, "alpha"]],
      "edges": [[[{"name": "E"}, "next"], [{"name": "A"}, "alpha"], [{"name": "B"}, "alpha"]]]
    }

Node maps and edge maps (the first group of each edge) are legalized
with ``--hash-by`` before submission. Nodes are submitted in one
transaction, then edges in a second one.

Usage:
    NEO4J_AUTH=neo4j:secret python scripts/load_graph.py graph.json --hash-by name

    # Print the composed statements without contacting the database
    python scripts/load_graph.py graph.json --hash-by name --dry-run
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from neo4j_kb.config import settings
from neo4j_kb.constraints import legalize
from neo4j_kb.graph.compose import compose_add_edge, compose_add_node
from neo4j_kb.graph.factory import create_knowledge_base

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def legalize_nodes(nodes: list, hash_by: str | None, updated_by: str) -> list:
    """Legalize the property map of every ``[prop, label]`` pair."""
    legal = []
    for prop, *label in nodes:
        legal.append([legalize(prop, hash_by, updated_by), *label])
    return legal


def legalize_edges(edges: list, hash_by: str | None, updated_by: str) -> list:
    """Legalize the edge group of every ``[groupE, groupA, groupB]`` triple."""
    legal = []
    for group_e, group_a, group_b in edges:
        prop_e, *label_e = group_e
        legal.append([[legalize(prop_e, hash_by, updated_by), *label_e], group_a, group_b])
    return legal


async def load(path: Path, hash_by: str | None, dry_run: bool) -> dict:
    """Load ``path`` and submit it. Returns counts of composed/returned statements."""
    document = json.loads(path.read_text())
    updated_by = settings.neo4j.updated_by

    nodes = legalize_nodes(document.get("nodes", []), hash_by, updated_by)
    edges = legalize_edges(document.get("edges", []), hash_by, updated_by)

    node_units = compose_add_node(nodes) if nodes else []
    edge_units = compose_add_edge(edges) if edges else []
    stats = {"node_statements": len(node_units), "edge_statements": len(edge_units)}
    logger.info(f"Composed {stats['node_statements']} node and {stats['edge_statements']} edge statement(s)")

    if dry_run:
        for unit in node_units + edge_units:
            print(unit.query)
        logger.info("No changes made (dry run)")
        return stats

    async with await create_knowledge_base() as kb:
        node_results = await kb.query(node_units) if node_units else []
        edge_results = await kb.query(edge_units) if edge_units else []

    stats["nodes_returned"] = sum(len(r.data) for r in node_results)
    stats["edges_returned"] = sum(len(r.data) for r in edge_results)
    logger.info(f"Loaded {stats['nodes_returned']} node(s) and {stats['edges_returned']} edge(s)")
    return stats


async def main():
    parser = argparse.ArgumentParser(description="Bulk-load nodes and edges into the knowledge base")
    parser.add_argument("path", type=Path, help="JSON document with 'nodes' and 'edges'")
    parser.add_argument("--hash-by", default=None, help="Identity field for legalize(); content hash if omitted")
    parser.add_argument("--dry-run", action="store_true", help="Print statements without submitting")
    args = parser.parse_args()

    await load(args.path, args.hash_by, args.dry_run)


if __name__ == "__main__":
    asyncio.run(main())
