"""
Single-unit query renderers.

Each renderer takes one unit's worth of loosely-shaped arguments and
returns a QueryUnit (Cypher text + parameter map).

Property values never appear in the text. A bound property map is written
as a literal map of placeholders, ``{name: {propA}.name, hash: {propA}.hash}``,
and the map itself travels in the parameters under the facet name. The
engine does not accept a parameter map directly inside a MATCH/MERGE
pattern, hence the literal form. Facets that are not bound get no
parameter entry: referencing an unbound parameter is an engine error.

Create renderers (``push_*``) return None when the property map is not
legal; the batch simply contributes nothing for that unit.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .. import constraints as cons
from ..errors import LabelError, ShapeError
from ..models.query import Clauses, EntityRef, QueryUnit
from .schema import EDGE_PARAM, NODE_PARAM, PROVENANCE_FIELDS, SOURCE_PARAM, TARGET_PARAM
from .shapes import is_property_map, is_sequence, parse_clauses, partition_prop_label

logger = logging.getLogger(__name__)


def literalize_prop(prop: Mapping[str, Any] | None, param_name: str = NODE_PARAM) -> str:
    """
    Render a property map as a literal map of ``{param}.key`` placeholders.

    >>> literalize_prop({"name": "A", "hash_by": "name"}, "propA")
    '{name: {propA}.name, hash_by: {propA}.hash_by}'
    >>> literalize_prop(None)
    ''
    """
    if not prop:
        return ""
    fields = ", ".join(f"{cons.quote_name(k)}: {{{param_name}}}.{cons.quote_name(k)}" for k in prop)
    return "{" + fields + "}"


def _pattern_body(var: str, ref: EntityRef, param_name: str) -> str:
    """``var:Labels {literal}`` or ``var:Labels *dist`` (without brackets)."""
    parts = [var + cons.stringify_label(ref.labels)]
    literal = literalize_prop(ref.props, param_name)
    if literal:
        parts.append(literal)
    dist = cons.stringify_dist(ref.dist)
    if dist:
        parts.append(dist)
    return " ".join(parts)


def _node(var: str, ref: EntityRef, param_name: str) -> str:
    return f"({_pattern_body(var, ref, param_name)})"


def _bound_params(**facets: EntityRef | None) -> dict[str, Any]:
    """Parameter map holding only the facets whose props are bound."""
    params: dict[str, Any] = {}
    for name, ref in facets.items():
        if ref is not None and ref.bound_props is not None:
            params[name] = ref.bound_props
    return params


def _on_create_set(var: str, param_name: str) -> str:
    provenance = ", ".join(
        f"{var}.{created} = {{{param_name}}}.{updated}" for created, updated in PROVENANCE_FIELDS.items()
    )
    return f"ON CREATE SET {var} = {{{param_name}}}, {provenance} ON MATCH SET {var} += {{{param_name}}}"


def _node_ref(group: Any, role: str) -> EntityRef:
    ref = partition_prop_label(group)
    if ref.dist is not None:
        raise ShapeError(f"A distance ({ref.dist!r}) is only valid on an edge, not on {role}")
    return ref


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def push_node(*prop_label: Any) -> QueryUnit | None:
    """
    Compose an upsert for one node, keyed by the map's ``hash``.

    On creation all properties are set plus ``created_by``/``created_when``
    copied from the ``updated_*`` fields; on match the properties are merged
    in (existing fields not in the map are kept).

    Args:
        prop_label: A legal property map and an optional label (string or
            list), as two arguments or as one ``[prop, label]`` list.

    Returns:
        The QueryUnit, or None if the property map is not legal.
    """
    ref = _node_ref(list(prop_label) if len(prop_label) != 1 else prop_label[0], "a node")
    if not cons.is_legal(ref.props):
        logger.debug(f"Skipping node create: {cons.illegal_reason(ref.props)}")
        return None

    return QueryUnit(
        f"MERGE (u{cons.stringify_label(ref.labels)} {{hash: {{{NODE_PARAM}}}.hash}}) "
        f"{_on_create_set('u', NODE_PARAM)} RETURN u",
        {NODE_PARAM: dict(ref.props)},
    )


def pull_node(*prop_label: Any) -> QueryUnit:
    """
    Compose a read for nodes matching an optional property map and label.

    With neither, every node matches.
    """
    ref = _node_ref(list(prop_label) if len(prop_label) != 1 else prop_label[0], "a node")
    return QueryUnit(f"MATCH {_node('u', ref, NODE_PARAM)} RETURN u", _bound_params(**{NODE_PARAM: ref}))


# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------


def push_edge(prop_label_e: Any, prop_label_a: Any, prop_label_b: Any) -> QueryUnit | None:
    """
    Compose an upsert for one edge ``(a)-[e]->(b)``, keyed by the edge's ``hash``.

    Both nodes must already exist; they are matched by whatever label and
    properties are given (no constraints apply to them). The edge map must be
    legal and the edge must carry at least one type. Several types are
    expanded into one statement each by the label expander.

    Args:
        prop_label_e: The edge group, ``[propE, labelE]``.
        prop_label_a: The source node group.
        prop_label_b: The target node group.

    Returns:
        The QueryUnit, or None if the edge property map is not legal.

    Raises:
        LabelError: If the edge has no type.
        ShapeError: If the edge is given a distance instead of a property map.
    """
    ref_e = partition_prop_label(prop_label_e)
    if not ref_e.labels:
        raise LabelError("Edges (relationships) must have label(s) to be created")
    if ref_e.dist is not None:
        raise ShapeError(f"Cannot create an edge from a distance ({ref_e.dist!r})")
    if not cons.is_legal(ref_e.props):
        logger.debug(f"Skipping edge create: {cons.illegal_reason(ref_e.props)}")
        return None

    ref_a = _node_ref(prop_label_a, "the source node")
    ref_b = _node_ref(prop_label_b, "the target node")
    params = _bound_params(**{SOURCE_PARAM: ref_a, TARGET_PARAM: ref_b})
    params[EDGE_PARAM] = dict(ref_e.props)

    return QueryUnit(
        f"MATCH {_node('a', ref_a, SOURCE_PARAM)}, {_node('b', ref_b, TARGET_PARAM)} "
        f"MERGE (a)-[e{cons.stringify_label(ref_e.labels)} {{hash: {{{EDGE_PARAM}}}.hash}}]->(b) "
        f"{_on_create_set('e', EDGE_PARAM)} RETURN e",
        params,
    )


def pull_edge(prop_label_e: Any = None, prop_label_a: Any = None, prop_label_b: Any = None) -> QueryUnit:
    """
    Compose a read for edges ``(a)-[e]->(b)``.

    The edge group comes first; the node groups are optional. The edge may
    be matched by properties or by a distance; its labels may be several
    (read as "any of").
    """
    ref_a = _node_ref(prop_label_a, "the source node")
    ref_e = partition_prop_label(prop_label_e)
    ref_b = _node_ref(prop_label_b, "the target node")

    return QueryUnit(
        f"MATCH {_node('a', ref_a, SOURCE_PARAM)}"
        f"-[{_pattern_body('e', ref_e, EDGE_PARAM)}]->"
        f"{_node('b', ref_b, TARGET_PARAM)} RETURN e",
        _bound_params(**{SOURCE_PARAM: ref_a, EDGE_PARAM: ref_e, TARGET_PARAM: ref_b}),
    )


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------


def pull(*args: Any) -> QueryUnit:
    """
    Compose a generic graph read from entity groups and clause fragments.

    Groups (lists, tuples or mappings) are taken positionally as
    ``a``, ``e``, ``b``; strings are clause fragments in any order::

        pull([propA, "alpha"], "RETURN a")
        pull([propA, "alpha"], ["*0..2", "next"], "WHERE b.name <> 'A'", "RETURN b, e")
        pull([propA], ["*..3"], [propZ], "SHORTESTPATH", "RETURN p")

    Resulting text::

        MATCH (a ..) <tail>                                   no edge group
        MATCH (a ..)-[e ..]->(b ..) <tail>                    edge group
        MATCH (a ..), (b ..), p=SHORTESTPATH((a)-[e ..]->(b)) <tail>

    On a path read the edge property map is dropped; only labels and a
    distance can constrain the path's relationships.

    Raises:
        ShapeError: On more than three groups, bad clause fragments, or a
            path clause without an edge group.
    """
    bad = [arg for arg in args if not (isinstance(arg, str) or arg is None or is_sequence(arg) or is_property_map(arg))]
    if bad:
        raise ShapeError(f"Cannot use {bad!r} as an entity group or clause")
    groups = [arg for arg in args if not isinstance(arg, str)]
    fragments = [arg for arg in args if isinstance(arg, str)]
    if len(groups) > 3:
        raise ShapeError(f"Expected at most 3 entity groups (a, e, b), got {len(groups)}")

    clauses: Clauses = parse_clauses(fragments)
    groups += [None] * (3 - len(groups))
    group_a, group_e, group_b = groups

    ref_a = _node_ref(group_a, "node a")
    head = f"MATCH {_node('a', ref_a, SOURCE_PARAM)}"

    if group_e is None:
        if clauses.path:
            raise ShapeError(f"{clauses.path} needs an edge or distance group")
        return QueryUnit(f"{head} {clauses.tail()}", _bound_params(**{SOURCE_PARAM: ref_a}))

    ref_e = partition_prop_label(group_e)
    ref_b = _node_ref(group_b, "node b")

    if clauses.path:
        ref_e = EntityRef(dist=ref_e.dist, labels=ref_e.labels)
        body = (
            f", {_node('b', ref_b, TARGET_PARAM)}, "
            f"p={clauses.path}((a)-[{_pattern_body('e', ref_e, EDGE_PARAM)}]->(b))"
        )
    else:
        body = f"-[{_pattern_body('e', ref_e, EDGE_PARAM)}]->{_node('b', ref_b, TARGET_PARAM)}"

    return QueryUnit(
        f"{head}{body} {clauses.tail()}",
        _bound_params(**{SOURCE_PARAM: ref_a, EDGE_PARAM: ref_e, TARGET_PARAM: ref_b}),
    )
