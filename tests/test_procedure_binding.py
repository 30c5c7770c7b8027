# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Tests for procedure bindings: the trailing-callback calling convention, the
object a binding forwards through, and error pass-through.
"""

from __future__ import annotations

import pytest

from kuzumodel import ModelCompiler, ProcedureBinding, Schema

from .conftest import PEOPLE_SCRIPT


def on_done(rows):
    return rows


@pytest.fixture
def Person(compiler):
    return compiler.compile("Person", Schema(), PEOPLE_SCRIPT)


@pytest.fixture
def find_script(Person):
    return Person.__dict__["find_by_name"].script


class TestCallingConvention:
    """Normalization of (*params, callback?) into (script, params, callback)."""

    def test_no_arguments(self, Person, fake_context):
        Person.find_by_name()

        script, params, callback = fake_context.client.calls[-1]
        assert (script.name, params, callback) == ("find_by_name", [], None)

    def test_single_non_callable_argument_is_a_parameter(self, Person, fake_context, find_script):
        Person.find_by_name("Alice")

        assert fake_context.client.calls[-1] == (find_script, ["Alice"], None)

    def test_single_callable_argument_is_the_callback(self, Person, fake_context, find_script):
        Person.find_by_name(on_done)

        assert fake_context.client.calls[-1] == (find_script, [], on_done)

    def test_trailing_callable_is_stripped(self, Person, fake_context, find_script):
        Person.find_by_name("A", "B", on_done)

        assert fake_context.client.calls[-1] == (find_script, ["A", "B"], on_done)

    def test_trailing_non_callable_is_kept(self, Person, fake_context, find_script):
        Person.find_by_name("A", "B")

        assert fake_context.client.calls[-1] == (find_script, ["A", "B"], None)

    def test_falsy_single_argument_is_a_parameter(self, Person, fake_context, find_script):
        Person.find_by_name(None)

        assert fake_context.client.calls[-1] == (find_script, [None], None)

    def test_classes_count_as_callables(self, Person, fake_context, find_script):
        Person.find_by_name(1, list)

        assert fake_context.client.calls[-1] == (find_script, [1], list)

    def test_return_value_of_execution_is_returned(self, Person):
        assert Person.count_people() == ("executed", "count_people")


class TestBindingTarget:
    """The object a binding is read from supplies the execution accessor."""

    def test_fresh_callable_on_every_read(self, Person):
        first = Person.find_by_name
        second = Person.find_by_name

        assert first is not second
        assert first.__name__ == "find_by_name"
        assert first.__qualname__ == "Person.find_by_name"
        assert "MATCH (p:Person)" in first.__doc__

    def test_instance_read_forwards_through_instance(self, Person, fake_context):
        person = Person(name="Alice")
        person.find_by_name("Alice")

        assert len(fake_context.client.calls) == 1

    def test_binding_uses_the_reading_objects_accessor(self, Person, find_script):
        """A subclass overriding `cypher` receives the forwarded call."""
        received = []

        class Audited(Person):
            @classmethod
            def cypher(cls, script, params, callback):
                received.append((cls, script, params, callback))
                return "audited"

        assert Audited.find_by_name("x") == "audited"
        assert received == [(Audited, find_script, ["x"], None)]

    def test_binding_is_read_only_on_instances(self, Person):
        person = Person()
        with pytest.raises(AttributeError):
            person.find_by_name = "shadow"

    def test_descriptor_factory(self, find_script):
        binding = ModelCompiler.define_procedure_getter(find_script)

        assert isinstance(binding, ProcedureBinding)
        assert binding.script is find_script
        assert repr(binding) == "<ProcedureBinding(find_by_name)>"


class TestErrorPassThrough:
    """Failures from the execution accessor surface unchanged."""

    def test_execution_error_is_not_wrapped(self, Person, fake_context):
        error = ConnectionError("graph unreachable")
        fake_context.client.error = error

        with pytest.raises(ConnectionError) as excinfo:
            Person.count_people()
        assert excinfo.value is error

    def test_callback_is_not_invoked_by_the_binding(self, Person):
        calls = []
        Person.count_people(lambda rows: calls.append(rows))

        # The recording client ignores callbacks; the binding never calls them itself
        assert calls == []
