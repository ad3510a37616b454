"""
Property-map constraints for knowledge-base entities.

A property map is *legal* for creation when it is a non-empty, flat map of
scalars (or lists of scalars) carrying the identity and audit fields:

    hash_by       - name of the field the identity hash is taken from
    hash          - identity value; entities of one type with equal hash are
                    the same persisted entity (MERGE key)
    updated_by    - who wrote the current version
    updated_when  - when the current version was written (UTC ISO-8601)

``legalize()`` turns an arbitrary (possibly nested) map into a legal one;
``is_legal()`` is the predicate used by the create renderers.

Also hosts the text renderers for labels and distances used inside
pattern text, and the clause-keyword predicates.
"""

import hashlib
import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from .graph.schema import DIST_SENTINEL, FILTER, IDENTIFIER, MUTATION, PATH, TERMINAL
from .graph.shapes import clause_role

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("hash_by", "hash", "updated_by", "updated_when")

# Separator for flattened nested keys: {"slack": {"id": 1}} -> {"slack__id": 1}
KEY_SEPARATOR = "__"

# hash_by value used when the identity is derived from the whole content
CONTENT_HASH_BY = "content"

_SCALARS = (str, int, float, bool)


# ---------------------------------------------------------------------------
# Flattening
# ---------------------------------------------------------------------------


def flatten_props(obj: Mapping[str, Any], sep: str = KEY_SEPARATOR) -> dict[str, Any]:
    """Flatten nested mappings into a single level of ``sep``-joined keys.

    Lists are kept as values; graph properties cannot hold maps.
    """
    flat: dict[str, Any] = {}
    for key, value in obj.items():
        if isinstance(value, Mapping):
            for sub_key, sub_value in flatten_props(value, sep).items():
                flat[f"{key}{sep}{sub_key}"] = sub_value
        else:
            flat[key] = value
    return flat


def unflatten_props(flat: Mapping[str, Any], sep: str = KEY_SEPARATOR) -> dict[str, Any]:
    """Inverse of ``flatten_props``."""
    nested: dict[str, Any] = {}
    for key, value in flat.items():
        parts = key.split(sep)
        cursor = nested
        for part in parts[:-1]:
            existing = cursor.get(part)
            if not isinstance(existing, dict):
                existing = cursor[part] = {}
            cursor = existing
        cursor[parts[-1]] = value
    return nested


# ---------------------------------------------------------------------------
# Legalization
# ---------------------------------------------------------------------------


def content_hash(prop: Mapping[str, Any]) -> str:
    """SHA-256 over the canonical JSON of a property map."""
    canonical = json.dumps(prop, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def legalize(prop: Mapping[str, Any], hash_by: str | None = None, updated_by: str = "bot") -> dict[str, Any]:
    """
    Return a legal copy of ``prop`` ready for node/edge creation.

    Args:
        prop: Property map, may be nested.
        hash_by: Field whose value becomes ``hash``. Overrides a ``hash_by``
            already present in ``prop``. When neither is given the hash is
            derived from the content and ``hash_by`` is set to "content".
        updated_by: Audit value for ``updated_by``.

    Returns:
        A new flat dict; ``prop`` is not modified.

    Raises:
        ValueError: If ``hash_by`` names a field the map does not have.
    """
    legal = flatten_props(prop)
    hash_by = hash_by or legal.get("hash_by")

    if hash_by and hash_by != CONTENT_HASH_BY:
        if hash_by not in legal:
            raise ValueError(f"hash_by field {hash_by!r} is missing from the property map")
        legal["hash_by"] = hash_by
        legal["hash"] = legal[hash_by]
    else:
        identity = {k: v for k, v in legal.items() if k not in REQUIRED_FIELDS}
        legal["hash_by"] = CONTENT_HASH_BY
        legal["hash"] = content_hash(identity)

    legal["updated_by"] = updated_by
    legal["updated_when"] = datetime.now(timezone.utc).isoformat()
    return legal


def _is_property_value(value: Any) -> bool:
    if isinstance(value, _SCALARS):
        return True
    if isinstance(value, (list, tuple)):
        return all(isinstance(item, _SCALARS) for item in value)
    return False


def illegal_reason(prop: Any) -> str | None:
    """Why ``prop`` is not legal for creation, or None if it is."""
    if not isinstance(prop, Mapping):
        return f"expected a property map, got {type(prop).__name__}"
    if not prop:
        return "property map is empty"
    missing = [f for f in REQUIRED_FIELDS if prop.get(f) in (None, "")]
    if missing:
        return f"missing required field(s): {', '.join(missing)}"
    bad = sorted(k for k, v in prop.items() if v is not None and not _is_property_value(v))
    if bad:
        return f"non-scalar value(s) for: {', '.join(bad)}"
    return None


def is_legal(prop: Any) -> bool:
    """True if ``prop`` satisfies the creation constraints. Never raises."""
    reason = illegal_reason(prop)
    if reason is not None:
        logger.debug(f"Illegal property map: {reason}")
        return False
    return True


# ---------------------------------------------------------------------------
# Pattern text renderers
# ---------------------------------------------------------------------------


def quote_name(name: str) -> str:
    """Backtick-quote a label or key unless it is a plain identifier."""
    if IDENTIFIER.match(name):
        return name
    return "`" + name.replace("`", "``") + "`"


def stringify_label(label: str | list[str] | tuple[str, ...] | None) -> str:
    """
    Render a Label as the type annotation used inside pattern text.

    >>> stringify_label("alpha")
    ':alpha'
    >>> stringify_label(["next", "after"])
    ':next:after'
    >>> stringify_label(None)
    ''
    """
    if not label:
        return ""
    if isinstance(label, str):
        label = [label]
    return "".join(f":{quote_name(item)}" for item in label if item)


def stringify_dist(value: Any) -> str:
    """Render a Distance token, or "" if ``value`` is not a distance."""
    if isinstance(value, str) and value.startswith(DIST_SENTINEL):
        return value.strip()
    return ""


# ---------------------------------------------------------------------------
# Clause keyword predicates
# ---------------------------------------------------------------------------


def is_filter_clause(text: Any) -> bool:
    return clause_role(text) == FILTER


def is_mutation_clause(text: Any) -> bool:
    return clause_role(text) == MUTATION


def is_terminal_clause(text: Any) -> bool:
    return clause_role(text) == TERMINAL


def is_path_clause(text: Any) -> bool:
    return clause_role(text) == PATH
