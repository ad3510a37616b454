"""
Batch composition: many units in, one flat statement list out.

Each public composer pairs the rank resolver with a single-unit renderer
(and, for edges, the label expander). The resulting list goes to the
transport as one transaction, so its order matches the caller's input
order, with label expansion inserted in place.
"""

import logging
from collections.abc import Callable
from typing import Any

from ..models.query import QueryUnit
from .labels import split_edge_labels
from .rank import EDGE_UNIT_RANK, NODE_UNIT_RANK, resolve_units
from .render import pull, pull_edge, pull_node, push_edge, push_node

logger = logging.getLogger(__name__)

Renderer = Callable[..., QueryUnit | None]


def _log_skipped(fn: Renderer, total: int, rendered: int) -> None:
    skipped = total - rendered
    if skipped:
        logger.warning(f"{fn.__name__}: skipped {skipped} of {total} unit(s) with illegal property maps")


def batch_node_units(fn: Renderer, *args: Any) -> list[QueryUnit]:
    """
    Apply a node renderer to every unit in ``args``.

    Units whose renderer returns None (illegal create maps) contribute
    nothing.
    """
    units = resolve_units(args, NODE_UNIT_RANK)
    composed = [unit for unit in (fn(*arg) for arg in units) if unit is not None]
    _log_skipped(fn, len(units), len(composed))
    return composed


def batch_edge_units(fn: Renderer, *args: Any, relax: bool = False) -> list[QueryUnit]:
    """
    Apply an edge/graph renderer to every unit in ``args``, then expand labels.

    Args:
        fn: Single-unit renderer.
        args: Batch arguments in any of the three calling conventions.
        relax: Passed to ``split_edge_labels`` (False for creation).
    """
    units = resolve_units(args, EDGE_UNIT_RANK)
    composed: list[QueryUnit] = []
    rendered = 0
    for arg in units:
        unit = fn(*arg)
        if unit is None:
            continue
        rendered += 1
        composed.extend(split_edge_labels(unit, relax=relax))
    _log_skipped(fn, len(units), rendered)
    return composed


def compose_add_node(*args: Any) -> list[QueryUnit]:
    """Upsert statements for nodes: ``(prop, label)`` per unit."""
    return batch_node_units(push_node, *args)


def compose_get_node(*args: Any) -> list[QueryUnit]:
    """Read statements for nodes: ``(prop?, label?)`` per unit."""
    return batch_node_units(pull_node, *args)


def compose_add_edge(*args: Any) -> list[QueryUnit]:
    """Upsert statements for edges: ``(groupE, groupA, groupB)`` per unit."""
    return batch_edge_units(push_edge, *args, relax=False)


def compose_get_edge(*args: Any) -> list[QueryUnit]:
    """Read statements for edges: ``(groupE?, groupA?, groupB?)`` per unit."""
    return batch_edge_units(pull_edge, *args, relax=True)


def compose_get(*args: Any) -> list[QueryUnit]:
    """Generic graph reads: ``(groupA, groupE?, groupB?, *clauses)`` per unit."""
    return batch_edge_units(pull, *args, relax=True)
