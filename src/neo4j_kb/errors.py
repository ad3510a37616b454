"""Exception hierarchy for query composition and transport.

Shape and labeling errors are caller programming errors and are raised
before any query is rendered. Invalid property maps on create operations
do not raise: the unit is skipped (see ``graph.compose``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.responses import StatementError


class KnowledgeBaseError(Exception):
    """Base class for all neo4j_kb errors."""


class ShapeError(KnowledgeBaseError, ValueError):
    """Raised when call arguments cannot be resolved into query units."""


class LabelError(KnowledgeBaseError, ValueError):
    """Raised when an edge is created without a relationship type."""


class TransactionError(KnowledgeBaseError):
    """Raised when the database reports errors for a submitted transaction.

    The whole transaction is rolled back by the server, so no statement in
    the batch has been applied.
    """

    def __init__(self, errors: list[StatementError]):
        self.errors = errors
        summary = "; ".join(f"{e.code}: {e.message}" for e in errors) or "unknown error"
        super().__init__(f"Transaction failed with {len(errors)} error(s): {summary}")
