"""Helpers for reading statement results.

Properties are stored flat (``slack__id``), see ``constraints.flatten_props``;
``beautify`` restores the nested shape for consumers.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from .constraints import unflatten_props
from .models.responses import StatementResult


def rows(result: StatementResult) -> list[list[Any]]:
    """Row values of one statement result."""
    return [data.row for data in result.data]


def column(result: StatementResult, name: str) -> list[Any]:
    """Values of one named column, in row order.

    Raises:
        KeyError: If the statement did not return ``name``.
    """
    try:
        index = result.columns.index(name)
    except ValueError:
        raise KeyError(f"Column {name!r} not in {result.columns}") from None
    return [data.row[index] for data in result.data]


def _beautify_cell(cell: Any) -> Any:
    if isinstance(cell, Mapping):
        return unflatten_props(cell)
    if isinstance(cell, list):
        return [_beautify_cell(item) for item in cell]
    return cell


def beautify(results: Sequence[StatementResult]) -> list[list[list[Any]]]:
    """Rows of every statement with map cells unflattened."""
    return [[[_beautify_cell(cell) for cell in row] for row in rows(result)] for result in results]
