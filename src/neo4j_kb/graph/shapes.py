"""
Argument shape classification.

Callers describe an entity loosely: a property map, a label string, a list
of labels, a distance string, in any order and with either part omitted.
These helpers assign each value its role without relying on position.

Roles:
    property map  - any mapping
    distance      - a string starting with DIST_SENTINEL ("*0..2")
    label         - any other string, or a sequence of strings
"""

from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import ShapeError
from ..models.query import Clauses, EntityRef
from .schema import CLAUSE_PATTERNS, DIST_SENTINEL, FILTER, MUTATION, PATH, TERMINAL


def is_sequence(value: Any) -> bool:
    """List or tuple; strings and mappings are not groups."""
    return isinstance(value, (list, tuple))


def is_property_map(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_distance(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(DIST_SENTINEL)


def is_multi_label(value: Any) -> bool:
    """A sequence of more than one label whose first item is a string."""
    return is_sequence(value) and len(value) > 1 and isinstance(value[0], str)


def is_label(value: Any) -> bool:
    if isinstance(value, str):
        return not is_distance(value)
    return is_sequence(value) and len(value) > 0 and all(isinstance(v, str) and not is_distance(v) for v in value)


def is_entity_part(value: Any) -> bool:
    """True if ``value`` can sit directly inside one entity reference."""
    return is_property_map(value) or isinstance(value, str) or is_multi_label(value)


def is_entity_parts(values: Any) -> bool:
    """True if every element of ``values`` is an entity part (rank 0)."""
    return is_sequence(values) and all(is_entity_part(v) for v in values)


def partition_prop_label(group: Any) -> EntityRef:
    """
    Sort a loosely-shaped (prop|dist, label) group into an EntityRef.

    Accepts None, a single mapping or string, or a sequence of up to two
    values in either order. ``None`` items are ignored, so ``[None, "alpha"]``
    is the same as ``["alpha"]``.

    Raises:
        ShapeError: On a value that is neither, or a repeated role.
    """
    if group is None:
        return EntityRef()
    if is_sequence(group) and len(group) > 1 and is_label(group):
        # ["next", "after"] is one multi-label, not two labels
        return EntityRef(labels=tuple(group))
    items: Sequence[Any] = group if is_sequence(group) else [group]

    prop_or_dist: Any = None
    label: Any = None
    for item in items:
        if item is None:
            continue
        if is_property_map(item) or is_distance(item):
            if prop_or_dist is not None:
                raise ShapeError(f"More than one property map or distance in {group!r}")
            prop_or_dist = item
        elif is_label(item):
            if label is not None:
                raise ShapeError(f"More than one label in {group!r}; pass several labels as one list")
            label = item
        elif is_sequence(item) and not item:
            continue
        else:
            raise ShapeError(f"Cannot classify {item!r} as a property map, label or distance")

    labels: tuple[str, ...] = ()
    if label is not None:
        labels = (label,) if isinstance(label, str) else tuple(label)

    if is_property_map(prop_or_dist):
        return EntityRef(props=dict(prop_or_dist), labels=labels)
    return EntityRef(dist=prop_or_dist, labels=labels)


def clause_role(text: Any) -> str | None:
    """Role of a clause fragment by its leading keyword, or None."""
    if not isinstance(text, str):
        return None
    for role, pattern in CLAUSE_PATTERNS.items():
        if pattern.match(text):
            return role
    return None


def parse_clauses(fragments: Sequence[str]) -> Clauses:
    """
    Assign free-form clause fragments to their roles, in any order.

    Raises:
        ShapeError: If a fragment has no recognized keyword, a role is
            given twice, or no terminal (RETURN/DELETE) fragment is present.
    """
    found: dict[str, str] = {}
    for fragment in fragments:
        role = clause_role(fragment)
        if role is None:
            raise ShapeError(
                f"Unrecognized clause {fragment!r}; expected WHERE, SET/REMOVE, "
                "RETURN/DELETE/DETACH DELETE or SHORTESTPATH/ALLSHORTESTPATHS"
            )
        if role in found:
            raise ShapeError(f"Clause role {role!r} given twice: {found[role]!r} and {fragment!r}")
        found[role] = fragment.strip()

    if TERMINAL not in found:
        raise ShapeError("A RETURN, DELETE or DETACH DELETE clause is required")

    return Clauses(
        terminal=found[TERMINAL],
        filter=found.get(FILTER),
        mutation=found.get(MUTATION),
        path=found.get(PATH),
    )
