"""Data models for query composition and transport responses."""

from .query import Clauses, EntityRef, QueryUnit
from .responses import RowData, StatementError, StatementResult, TransactionResponse

__all__ = [
    "Clauses",
    "EntityRef",
    "QueryUnit",
    "RowData",
    "StatementError",
    "StatementResult",
    "TransactionResponse",
]
