"""Wire models for the Neo4j transactional HTTP endpoint.

Response shape::

    {
      "results": [{"columns": ["u"], "data": [{"row": [{...}], "meta": [...]}]}],
      "errors": [{"code": "Neo.ClientError...", "message": "..."}]
    }

One ``StatementResult`` per submitted statement, in submission order.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RowData(BaseModel):
    """A single returned row."""

    model_config = ConfigDict(extra="ignore")

    row: list[Any] = Field(default_factory=list)
    meta: list[Any] | None = None


class StatementResult(BaseModel):
    """Projection returned by one statement."""

    model_config = ConfigDict(extra="ignore")

    columns: list[str] = Field(default_factory=list)
    data: list[RowData] = Field(default_factory=list)


class StatementError(BaseModel):
    """Error record reported by the server."""

    model_config = ConfigDict(extra="ignore")

    code: str = ""
    message: str = ""


class TransactionResponse(BaseModel):
    """Body of a commit response."""

    model_config = ConfigDict(extra="ignore")

    results: list[StatementResult] = Field(default_factory=list)
    errors: list[StatementError] = Field(default_factory=list)
