# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
End-to-end tests: compiled models running procedures on a real Kuzu database.
"""

from __future__ import annotations

import pyarrow as pa
import pytest

from kuzumodel import GraphContext, GraphSettings, Schema, get_model_by_type

from .conftest import PEOPLE_SCRIPT, PERSON_DDL


@pytest.fixture
def person_schema() -> Schema:
    schema = Schema()

    @schema.method
    def reload(self):
        rows = self.find_by_name(self.name)
        return rows[0] if rows else None

    @schema.static
    @classmethod
    def names(cls):
        return [row["name"] for row in cls.list_people()]

    return schema


@pytest.fixture
def Person(graph_context, person_schema):
    return graph_context.model("Person", person_schema, PEOPLE_SCRIPT)


class TestProceduresOnKuzu:
    """Procedures forwarded through the context client to Kuzu."""

    def test_create_and_find(self, Person):
        Person.create_person("Alice", 30)
        Person.create_person("Bob", 25)

        assert Person.find_by_name("Alice") == [{"name": "Alice", "age": 30}]
        assert Person.count_people() == [{"total": 2}]

    def test_callback_result_is_returned(self, Person):
        Person.create_person("Alice", 30)

        age = Person.find_by_name("Alice", lambda rows: rows[0]["age"])
        assert age == 30

    def test_schema_functions_use_procedures(self, Person):
        Person.create_person("Alice", 30)
        Person.create_person("Bob", 25)

        assert Person.names() == ["Alice", "Bob"]
        assert Person(name="Bob").reload() == {"name": "Bob", "age": 25}
        assert Person(name="Nobody").reload() is None

    def test_arity_errors_surface_from_bindings(self, Person):
        with pytest.raises(ValueError, match="takes 2 parameter"):
            Person.create_person("Alice")

    def test_database_errors_surface_from_bindings(self, graph_context):
        Broken = graph_context.model("Broken", None, "def bad() { MATCH (n:Missing) RETURN n }")

        with pytest.raises(RuntimeError):
            Broken.bad()

    def test_fetch_table(self, graph_context, Person):
        Person.create_person("Alice", 30)
        script = Person.__dict__["count_people"].script

        table = graph_context.client.fetch_table(script)
        assert isinstance(table, pa.Table)
        assert table.column("total").to_pylist() == [1]


class TestContextBehaviour:
    """Accessors following the context's connection."""

    def test_graph_accessor_is_the_live_connection(self, graph_context, Person):
        assert Person.g is graph_context.connection.graph
        assert Person(name="x").g is graph_context.connection.graph

    def test_reconnect_is_observed_by_compiled_models(self, graph_context, Person):
        before = Person.g
        graph_context.reconnect()

        assert Person.g is graph_context.connection.graph
        assert Person.g is not before
        assert Person.count_people() == [{"total": 0}]

    def test_closed_context_fails_loudly(self, test_db_path):
        context = GraphContext(GraphSettings(db_path=test_db_path))
        context.connection.execute(PERSON_DDL)
        Person = context.model("Person", None, PEOPLE_SCRIPT)
        context.close()

        with pytest.raises(RuntimeError, match="connection is closed"):
            Person.count_people()
        with pytest.raises(RuntimeError, match="connection is closed"):
            Person.g

    def test_models_are_kept_by_name_and_registered(self, graph_context, Person):
        assert graph_context.get_model("Person") is Person
        assert get_model_by_type("person") is Person
