"""Composition data model: entity references, clause roles and query units.

These are internal value types. They are frozen so that a composed query
can be passed around, expanded and batched without anyone editing it
in place.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from ..errors import ShapeError


@dataclass(frozen=True)
class EntityRef:
    """One node or edge reference inside a pattern.

    ``props`` and ``dist`` share a slot: an edge is matched either by its
    properties or by a variable-length distance, never both.
    """

    props: dict[str, Any] | None = None
    dist: str | None = None
    labels: tuple[str, ...] = ()

    def __post_init__(self):
        if self.props is not None and self.dist is not None:
            raise ShapeError("An entity reference takes a property map or a distance, not both")

    @property
    def bound_props(self) -> dict[str, Any] | None:
        """Property map if it binds anything, else None."""
        return dict(self.props) if self.props else None


@dataclass(frozen=True)
class Clauses:
    """Trailing clause fragments of a generic graph read, keyed by role."""

    terminal: str
    filter: str | None = None
    mutation: str | None = None
    path: str | None = None

    def tail(self) -> str:
        """Filter, mutation and terminal text joined in execution order."""
        return " ".join(part.strip() for part in (self.filter, self.mutation, self.terminal) if part)


@dataclass(frozen=True)
class QueryUnit:
    """One rendered statement: Cypher text plus its parameter map."""

    query: str
    params: dict[str, Any] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Any]:
        # Allows ``query, params = unit``
        yield self.query
        yield self.params

    def as_statement(self) -> dict[str, Any]:
        """Statement payload for the transactional HTTP endpoint."""
        return {
            "statement": self.query,
            "parameters": self.params,
            "resultDataContents": ["row"],
        }
