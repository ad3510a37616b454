"""
Knowledge-base client: compose batched Cypher and submit it as one transaction.

Every public operation accepts one unit, several units as positional
arguments, or several units packed in one list::

    kb = await create_knowledge_base()

    await kb.add_node(prop_a, "alpha")
    await kb.add_node([prop_a, "alpha"], [prop_b, "alpha"])
    await kb.add_node([[prop_a, "alpha"], [prop_b, "alpha"]])

    await kb.add_edge([prop_e, "next"], [prop_a, "alpha"], [prop_b, "alpha"])
    await kb.get_edge([{"name": "E"}, "next"])
    await kb.get([{"name": "A"}, "alpha"], ["*0..2", "next"], "RETURN b, e")

and returns one StatementResult per composed statement.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import ShapeError
from ..models.query import QueryUnit
from ..models.responses import StatementResult
from .compose import compose_add_edge, compose_add_node, compose_get, compose_get_edge, compose_get_node
from .transport import Neo4jTransport

logger = logging.getLogger(__name__)

RawStatement = str | QueryUnit | tuple[str, Mapping[str, Any]]


def to_query_unit(statement: Any) -> QueryUnit:
    """Coerce a raw statement (text, QueryUnit or ``(text, params)``) to a QueryUnit."""
    if isinstance(statement, QueryUnit):
        return statement
    if isinstance(statement, str):
        return QueryUnit(statement, {})
    if isinstance(statement, (list, tuple)) and len(statement) == 2 and isinstance(statement[0], str):
        return QueryUnit(statement[0], dict(statement[1] or {}))
    raise ShapeError(f"Cannot use {statement!r} as a statement; expected text or (text, params)")


class KnowledgeBase:
    """
    Async facade over composition + transport.

    Composition happens fully in memory before the single transport call,
    so a batch is committed (or rejected) as a whole.
    """

    def __init__(self, transport: Neo4jTransport):
        self._transport = transport

    @property
    def transport(self) -> Neo4jTransport:
        return self._transport

    async def query(self, statements: RawStatement | Sequence[RawStatement]) -> list[StatementResult]:
        """
        Submit raw statements as one transaction.

        Accepts a query string, a QueryUnit, a ``(query, params)`` pair, or a
        list of any of these.
        """
        if isinstance(statements, (str, QueryUnit)) or (
            isinstance(statements, tuple) and len(statements) == 2 and isinstance(statements[0], str)
        ):
            units = [to_query_unit(statements)]
        else:
            units = [to_query_unit(s) for s in statements]
        return await self._transport.submit(units)

    async def add_node(self, *args: Any) -> list[StatementResult]:
        """Upsert node(s) by hash. Illegal property maps are skipped."""
        return await self._transport.submit(compose_add_node(*args))

    async def get_node(self, *args: Any) -> list[StatementResult]:
        """Read node(s) by optional property map and label."""
        return await self._transport.submit(compose_get_node(*args))

    async def add_edge(self, *args: Any) -> list[StatementResult]:
        """Upsert edge(s) between existing nodes, one statement per edge type."""
        return await self._transport.submit(compose_add_edge(*args))

    async def get_edge(self, *args: Any) -> list[StatementResult]:
        """Read edge(s); several edge types are matched as alternatives."""
        return await self._transport.submit(compose_get_edge(*args))

    async def get(self, *args: Any) -> list[StatementResult]:
        """Generic graph read/update/delete with WHERE, SET, RETURN and path clauses."""
        return await self._transport.submit(compose_get(*args))

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> "KnowledgeBase":
        await self._transport.initialize()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
