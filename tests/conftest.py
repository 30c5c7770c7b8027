# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and shared fixtures for kuzumodel tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pyarrow as pa
import pytest

from kuzumodel import GraphContext, GraphSettings, ModelCompiler, clear_registry


PEOPLE_SCRIPT = """
// Procedures for Person vertices
def create_person(name, age) {
    CREATE (:Person {name: $name, age: $age})
}

def find_by_name(name) {
    MATCH (p:Person) WHERE p.name = $name
    RETURN p.name AS name, p.age AS age
}

/* Everyone, oldest first */
def list_people() {
    MATCH (p:Person) RETURN p.name AS name, p.age AS age ORDER BY p.age DESC
}

def count_people() {
    MATCH (p:Person) RETURN count(p) AS total
}
"""

PERSON_DDL = "CREATE NODE TABLE Person(name STRING, age INT64, PRIMARY KEY(name))"


class FakeConnection:
    """Connection stand-in recording executed queries."""

    def __init__(self, read_only: bool = False, rows: Optional[List[Dict[str, Any]]] = None):
        self.read_only = read_only
        self.graph = object()
        self.rows = rows or []
        self.executed: List[tuple] = []

    def execute(self, query: str, parameters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        self.executed.append((query, parameters))
        return list(self.rows)

    def execute_arrow(self, query: str, parameters: Optional[Dict[str, Any]] = None) -> pa.Table:
        self.executed.append((query, parameters))
        return pa.Table.from_pylist(self.rows)


class RecordingClient:
    """Execution client stand-in recording every forwarded call."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.error: Optional[BaseException] = None

    def execute(self, script, params, callback=None):
        self.calls.append((script, params, callback))
        if self.error is not None:
            raise self.error
        return ("executed", script.name)


class FakeContext:
    """Runtime context stand-in with a swappable connection and client."""

    def __init__(self):
        self.connection = FakeConnection()
        self.client = RecordingClient()


@pytest.fixture(autouse=True)
def global_registry_cleanup():
    """Clean up the global model registry around every test."""
    clear_registry()
    yield
    clear_registry()


@pytest.fixture(scope="function")
def fake_context() -> FakeContext:
    return FakeContext()


@pytest.fixture(scope="function")
def compiler(fake_context: FakeContext) -> ModelCompiler:
    return ModelCompiler(fake_context)


@pytest.fixture(scope="function")
def test_db_path(tmp_path: Path) -> Path:
    """Path for a temporary Kuzu database."""
    return tmp_path / "graph.kuzu"


@pytest.fixture(scope="function")
def graph_context(test_db_path: Path) -> Generator[GraphContext, None, None]:
    """A real context on a fresh database with the Person table created."""
    context = GraphContext(GraphSettings(db_path=test_db_path))
    try:
        context.connection.execute(PERSON_DDL)
        yield context
    finally:
        context.close()
