"""
Unit tests for property-map constraints.

Covers flattening, legalize() identity/audit fields, the is_legal()
predicate, and the label/distance/clause text helpers.
"""

from datetime import datetime

import pytest

from neo4j_kb.constraints import (
    CONTENT_HASH_BY,
    REQUIRED_FIELDS,
    content_hash,
    flatten_props,
    illegal_reason,
    is_filter_clause,
    is_legal,
    is_mutation_clause,
    is_path_clause,
    is_terminal_clause,
    legalize,
    stringify_dist,
    stringify_label,
    unflatten_props,
)


class TestFlatten:
    def test_flatten_nested(self):
        user = {"id": "ID1", "slack": {"id": "ID1", "team_id": "T1", "profile": {"tz": "PST"}}}
        assert flatten_props(user) == {
            "id": "ID1",
            "slack__id": "ID1",
            "slack__team_id": "T1",
            "slack__profile__tz": "PST",
        }

    def test_unflatten_restores_nesting(self):
        flat = {"id": "ID1", "slack__id": "ID1", "slack__deleted": False}
        assert unflatten_props(flat) == {"id": "ID1", "slack": {"id": "ID1", "deleted": False}}

    def test_lists_are_kept_as_values(self):
        assert flatten_props({"tags": ["a", "b"]}) == {"tags": ["a", "b"]}


class TestLegalize:
    def test_hash_from_hash_by_field(self):
        prop = legalize({"name": "A", "hash_by": "name"})
        assert prop["hash_by"] == "name"
        assert prop["hash"] == "A"
        assert prop["updated_by"] == "bot"
        # ISO-8601 timestamp
        datetime.fromisoformat(prop["updated_when"])

    def test_hash_by_argument_overrides(self):
        prop = legalize({"name": "A", "id": 7, "hash_by": "name"}, "id")
        assert prop["hash_by"] == "id"
        assert prop["hash"] == 7

    def test_content_hash_when_no_hash_by(self):
        prop = legalize({"name": "A"})
        assert prop["hash_by"] == CONTENT_HASH_BY
        assert prop["hash"] == content_hash({"name": "A"})

    def test_content_hash_is_stable(self):
        first = legalize({"name": "A", "x": 1})
        second = legalize({"x": 1, "name": "A"})
        assert first["hash"] == second["hash"]

    def test_missing_hash_by_field_raises(self):
        with pytest.raises(ValueError, match="missing"):
            legalize({"name": "A"}, "id")

    def test_does_not_mutate_input(self):
        original = {"name": "A", "hash_by": "name"}
        legalize(original)
        assert original == {"name": "A", "hash_by": "name"}

    def test_nested_input_is_flattened(self):
        prop = legalize({"id": "U1", "slack": {"name": "alice"}}, "id", updated_by="tester")
        assert prop["slack__name"] == "alice"
        assert prop["updated_by"] == "tester"
        assert is_legal(prop)


class TestIsLegal:
    def test_legalized_map_is_legal(self):
        assert is_legal(legalize({"name": "A", "hash_by": "name"}))

    @pytest.mark.parametrize("missing", REQUIRED_FIELDS)
    def test_missing_required_field(self, missing):
        prop = legalize({"name": "A", "hash_by": "name"})
        del prop[missing]
        assert not is_legal(prop)
        assert missing in illegal_reason(prop)

    def test_empty_and_non_maps(self):
        assert not is_legal({})
        assert not is_legal(None)
        assert not is_legal("alpha")
        assert not is_legal(["a"])

    def test_nested_values_are_illegal(self):
        prop = legalize({"name": "A", "hash_by": "name"})
        prop["nested"] = {"x": 1}
        assert not is_legal(prop)
        assert "nested" in illegal_reason(prop)

    def test_scalar_lists_are_legal(self):
        prop = legalize({"name": "A", "hash_by": "name", "tags": ["x", "y"]})
        assert is_legal(prop)


class TestTextHelpers:
    def test_stringify_label(self):
        assert stringify_label("alpha") == ":alpha"
        assert stringify_label(["next", "after"]) == ":next:after"
        assert stringify_label(None) == ""
        assert stringify_label([]) == ""

    def test_stringify_label_quotes_non_identifiers(self):
        assert stringify_label("my label") == ":`my label`"

    def test_stringify_dist(self):
        assert stringify_dist("*0..2") == "*0..2"
        assert stringify_dist("alpha") == ""
        assert stringify_dist({"name": "A"}) == ""
        assert stringify_dist(None) == ""

    def test_clause_predicates(self):
        assert is_filter_clause('WHERE a.name = "A"')
        assert is_mutation_clause("SET a.age = 10")
        assert is_mutation_clause("remove a.age")
        assert is_terminal_clause("RETURN a")
        assert is_terminal_clause("DETACH DELETE a")
        assert is_terminal_clause("delete e")
        assert is_path_clause("SHORTESTPATH")
        assert is_path_clause("allShortestPaths")
        assert not is_filter_clause("RETURN a")
        assert not is_terminal_clause("RETURNING")
        assert not is_path_clause(None)
