"""Tests for relationship-type expansion of rendered edge queries."""

import pytest

from neo4j_kb.errors import LabelError
from neo4j_kb.graph.labels import edge_labels, split_edge_labels
from neo4j_kb.graph.render import pull_edge, push_edge
from neo4j_kb.models.query import QueryUnit


class TestEdgeLabels:
    def test_finds_labels(self):
        assert edge_labels("MATCH (a)-[e:next:after *0..2]->(b) RETURN e") == ["next", "after"]

    def test_quoted_labels(self):
        assert edge_labels("MERGE (a)-[e:`is next`:after]->(b)") == ["`is next`", "after"]

    def test_no_labels(self):
        assert edge_labels("MATCH (a)-[e]->(b) RETURN e") == []
        assert edge_labels("MATCH (u:alpha) RETURN u") == []


class TestStrictExpansion:
    def test_one_statement_per_label(self, prop_a, prop_b, prop_e):
        unit = push_edge([prop_e, ["next", "after"]], [prop_a, "alpha"], [prop_b, "alpha"])
        expanded = split_edge_labels(unit)

        assert len(expanded) == 2
        assert "[e:next {hash: {propE}.hash}]" in expanded[0].query
        assert "[e:after {hash: {propE}.hash}]" in expanded[1].query
        assert expanded[0].params == expanded[1].params == unit.params
        # only the label token differs
        assert expanded[0].query.replace("[e:next ", "[e:after ") == expanded[1].query

    def test_single_label_unchanged(self, prop_a, prop_b, prop_e):
        unit = push_edge([prop_e, "next"], [prop_a], [prop_b])
        assert split_edge_labels(unit) == [unit]

    def test_no_label_raises(self):
        with pytest.raises(LabelError):
            split_edge_labels(QueryUnit("MATCH (a)-[e]->(b) RETURN e"))


class TestRelaxedExpansion:
    def test_alternation(self):
        unit = pull_edge([["next", "after"]], ["alpha"], ["alpha"])
        expanded = split_edge_labels(unit, relax=True)

        assert len(expanded) == 1
        assert expanded[0].query == "MATCH (a:alpha)-[e:next|after]->(b:alpha) RETURN e"
        assert expanded[0].params == unit.params

    def test_no_label_passes_through(self):
        unit = pull_edge(None, ["alpha"])
        assert split_edge_labels(unit, relax=True) == [unit]

    def test_node_query_passes_through(self):
        unit = QueryUnit("MATCH (a:alpha) RETURN a")
        assert split_edge_labels(unit, relax=True) == [unit]
