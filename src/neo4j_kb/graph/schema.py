"""
Pattern vocabulary for composed Cypher queries.

Every composed query binds the same small set of pattern variables and
parameter names, so that callers can reference them in their own clause
fragments (``WHERE a.name = "A"``, ``RETURN p`` ...).

Pattern variables:
    u  - the node of a node operation
    a  - source node of an edge / graph pattern
    e  - the relationship between ``a`` and ``b``
    b  - target node of an edge / graph pattern
    p  - the named path of a SHORTESTPATH / ALLSHORTESTPATHS read

Parameter (facet) names:
    prop   - property map of ``u``
    propA  - property map of ``a``
    propE  - property map of ``e``
    propB  - property map of ``b``
"""

import re

# A string starting with this character is a variable-length distance
# specifier for an edge (``*``, ``*2``, ``*0..3``, ``*..5``).
DIST_SENTINEL = "*"

NODE_PARAM = "prop"
SOURCE_PARAM = "propA"
EDGE_PARAM = "propE"
TARGET_PARAM = "propB"

# Audit fields copied on creation: created_* <- updated_*
PROVENANCE_FIELDS: dict[str, str] = {
    "created_by": "updated_by",
    "created_when": "updated_when",
}

# Clause roles and the keywords that introduce them (case-insensitive).
FILTER = "filter"
MUTATION = "mutation"
TERMINAL = "terminal"
PATH = "path"

CLAUSE_PATTERNS: dict[str, re.Pattern[str]] = {
    FILTER: re.compile(r"^\s*WHERE\b", re.IGNORECASE),
    MUTATION: re.compile(r"^\s*(?:SET|REMOVE)\b", re.IGNORECASE),
    TERMINAL: re.compile(r"^\s*(?:RETURN|DELETE|DETACH\s+DELETE)\b", re.IGNORECASE),
    PATH: re.compile(r"^\s*(?:ALLSHORTESTPATHS|SHORTESTPATH)\s*$", re.IGNORECASE),
}

# Identifiers that can appear unquoted in labels and property keys.
IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# The relationship-type token of the ``e`` variable in a rendered pattern,
# e.g. ``[e:next:after`` -> group(1) == ":next:after".
EDGE_LABEL_TOKEN = re.compile(r"\[e((?::(?:`[^`]+`|\w+))+)")
LABEL_NAME = re.compile(r"`[^`]+`|\w+")
