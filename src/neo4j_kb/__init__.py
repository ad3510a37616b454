"""
neo4j_kb: batched, parameterized Cypher composition for a property-graph
knowledge base.
"""

from .constraints import is_legal, legalize
from .errors import KnowledgeBaseError, LabelError, ShapeError, TransactionError
from .graph import (
    KnowledgeBase,
    Neo4jTransport,
    compose_add_edge,
    compose_add_node,
    compose_get,
    compose_get_edge,
    compose_get_node,
)
from .models.query import QueryUnit

__all__ = [
    "KnowledgeBase",
    "KnowledgeBaseError",
    "LabelError",
    "Neo4jTransport",
    "QueryUnit",
    "ShapeError",
    "TransactionError",
    "compose_add_edge",
    "compose_add_node",
    "compose_get",
    "compose_get_edge",
    "compose_get_node",
    "is_legal",
    "legalize",
]
