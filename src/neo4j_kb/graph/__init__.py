"""
Graph layer for neo4j_kb.

Composes loosely-shaped node/edge arguments into parameterized Cypher and
submits each batch as one multi-statement transaction:

- shapes / rank: classify arguments and resolve the calling convention
- render: single-unit query renderers (literal-map templating)
- labels: relationship-type fan-out (create) or alternation (read)
- compose: batch composers
- transport / client: HTTP transaction endpoint and async facade
"""

from .client import KnowledgeBase
from .compose import compose_add_edge, compose_add_node, compose_get, compose_get_edge, compose_get_node
from .transport import Neo4jTransport

__all__ = [
    "KnowledgeBase",
    "Neo4jTransport",
    "compose_add_edge",
    "compose_add_node",
    "compose_get",
    "compose_get_edge",
    "compose_get_node",
]
