import os
import sys

import pytest

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Keep a developer's real credentials out of settings-driven tests
os.environ.pop("NEO4J_AUTH", None)


@pytest.fixture
def label_node():
    return "alpha"


@pytest.fixture
def prop_a():
    from neo4j_kb.constraints import legalize

    return legalize({"name": "A", "hash_by": "name"}, updated_by="tester")


@pytest.fixture
def prop_b():
    from neo4j_kb.constraints import legalize

    return legalize({"name": "B", "hash_by": "name"}, updated_by="tester")


@pytest.fixture
def prop_c():
    from neo4j_kb.constraints import legalize

    return legalize({"name": "C", "hash_by": "name"}, updated_by="tester")


@pytest.fixture
def prop_e():
    from neo4j_kb.constraints import legalize

    return legalize({"name": "E", "hash_by": "name"}, updated_by="tester")


@pytest.fixture
def prop_e2():
    from neo4j_kb.constraints import legalize

    return legalize({"name": "E2", "hash_by": "name"}, updated_by="tester")
