"""
Rank resolution for batch arguments.

Every batch operation accepts three calling conventions::

    add_node(propA, "alpha")                          # one unit
    add_node([propA, "alpha"], [propB, "alpha"])      # several units, positional
    add_node([[propA, "alpha"], [propB, "alpha"]])    # several units, one array

The convention is not declared; it is read off the nesting depth (rank) of
the arguments. A sequence whose elements are all entity parts (property
maps, strings, multi-label lists) has rank 0; anything else has rank
``1 + rank(first element)``.

A unit of a node operation is a rank-0 list (``[prop, label]``). A unit of an
edge operation is a rank-1 list (``[[propE, labelE], [propA, labelA],
[propB, labelB]]``); a generic graph read puts the source node first
(``[[propA, labelA], [propE, labelE], [propB, labelB], "RETURN e"]``).
Arguments of higher rank are flattened one level at a time until they are
a list of units.
"""

import logging
from collections.abc import Sequence
from typing import Any, Literal

from ..errors import ShapeError
from .shapes import is_entity_parts, is_sequence

logger = logging.getLogger(__name__)

NODE_UNIT_RANK = 0
EDGE_UNIT_RANK = 1

Convention = Literal["unit", "units", "boxed"]


def get_rank(values: Any) -> int:
    """Nesting depth of ``values`` above the entity-part level."""
    if not is_sequence(values) or is_entity_parts(values):
        return 0
    return 1 + get_rank(values[0])


def flatten_once(values: Sequence[Any]) -> list[Any]:
    """Splice nested sequences into their parent, one level deep."""
    flat: list[Any] = []
    for value in values:
        if is_sequence(value):
            flat.extend(value)
        else:
            flat.append(value)
    return flat


def flatten_to_rank(values: Sequence[Any], n: int) -> list[Any]:
    """Flatten ``values`` until its rank is ``n``; lower ranks are returned as-is."""
    flat = list(values)
    for _ in range(get_rank(values) - n):
        flat = flatten_once(flat)
    return flat


def calling_convention(args: Sequence[Any], unit_rank: int) -> Convention:
    """Which of the three calling conventions ``args`` uses."""
    rank = get_rank(list(args))
    if rank < unit_rank:
        raise ShapeError(f"Your argument rank is {rank}; it must be at least {unit_rank}")
    if rank == unit_rank:
        return "unit"
    if rank == unit_rank + 1:
        return "units"
    return "boxed"


def resolve_units(args: Sequence[Any], unit_rank: int) -> list[list[Any]]:
    """
    Normalize batch arguments to a flat list of per-unit argument lists.

    Args:
        args: The positional arguments of a batch call.
        unit_rank: Rank of a single unit (NODE_UNIT_RANK or EDGE_UNIT_RANK).

    Returns:
        One argument list per unit, in input order.

    Raises:
        ShapeError: If the arguments are shallower than a single unit.
    """
    args = list(args)
    convention = calling_convention(args, unit_rank)
    if convention == "unit":
        units = [args]
    else:
        units = [list(unit) if is_sequence(unit) else [unit] for unit in flatten_to_rank(args, unit_rank + 1)]
    logger.debug(f"Resolved {len(units)} unit(s) from {convention!r} call")
    return units
