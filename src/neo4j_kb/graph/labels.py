"""
Relationship-type expansion for rendered edge queries.

A relationship has exactly one type, but callers may name several:

- create (strict): one statement per type, otherwise identical.
  ``[e:next:after ...]`` -> ``[e:next ...]`` and ``[e:after ...]``
- read (relaxed): one statement matching any of the types.
  ``[e:next:after ...]`` -> ``[e:next|after ...]``
"""

import logging

from ..errors import LabelError
from ..models.query import QueryUnit
from .schema import EDGE_LABEL_TOKEN, LABEL_NAME

logger = logging.getLogger(__name__)


def edge_labels(query: str) -> list[str]:
    """Relationship types on the ``e`` variable, as rendered (quoted if needed)."""
    match = EDGE_LABEL_TOKEN.search(query)
    if not match:
        return []
    return LABEL_NAME.findall(match.group(1))


def _with_edge_token(query: str, token: str) -> str:
    return EDGE_LABEL_TOKEN.sub(lambda m: "[e" + token, query, count=1)


def split_edge_labels(unit: QueryUnit, relax: bool = False) -> list[QueryUnit]:
    """
    Expand a rendered edge query by its relationship types.

    Args:
        unit: A rendered query; node-only queries pass through in relaxed mode.
        relax: False for creation (exactly one type per statement, fan out),
            True for reads (types optional, joined into one alternation).

    Returns:
        The expanded units, in label order.

    Raises:
        LabelError: In strict mode, if the edge has no type.
    """
    labels = edge_labels(unit.query)
    if not labels:
        if relax:
            return [unit]
        raise LabelError("Edges (relationships) must have label(s)")

    if relax:
        if len(labels) == 1:
            return [unit]
        return [QueryUnit(_with_edge_token(unit.query, ":" + "|".join(labels)), unit.params)]

    if len(labels) > 1:
        logger.debug(f"Expanding edge create into {len(labels)} statements: {labels}")
    return [QueryUnit(_with_edge_token(unit.query, ":" + label), unit.params) for label in labels]
