# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Model compiler.

Builds an instantiable model class from a name, a :class:`~kuzumodel.schema.Schema`
and the text of a Cypher procedure script. The compiled class carries:

- ``base``, ``type_tag`` and ``graph_schema`` identity metadata,
- ``g`` and ``cypher`` accessors, re-read from the runtime context on every access,
- the schema's methods and statics,
- one binding per procedure found in the script.

Schema functions are attached before procedure bindings, so a procedure whose
name matches a schema function replaces it. Procedures may not use the
model's own attribute names (``cypher``, ``g``, ``init``, ...).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, FrozenSet, Mapping, Optional, Type

from pydantic import create_model

from .constants import ErrorMessages, LoggingConstants, ModelMetadataConstants
from .cypher_parser import CypherParser, CypherScript
from .model import KuzuModel
from .schema import Schema

if TYPE_CHECKING:
    from .context import GraphContext

logger = logging.getLogger(__name__)


class ContextAccessor:
    """Read-only attribute whose value is resolved on every access, on the class and on instances."""

    def __init__(self, name: str, resolve: Callable[[], Any]):
        self.name = name
        self._resolve = resolve

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        return self._resolve()

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"'{self.name}' is read-only")


class ProcedureBinding:
    """
    Attribute exposing a procedure as a callable.

    Each read builds a new forwarding function bound to the object it was read
    from (a model instance or the model class), which calls that object's
    ``cypher`` accessor with ``(script, params, callback)``.
    """

    def __init__(self, script: CypherScript):
        self.script = script

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Callable[..., Any]:
        target = owner if instance is None else instance
        script = self.script

        def invoke(*args: Any) -> Any:
            # A trailing callable is the callback; everything else is a parameter
            if args and callable(args[-1]):
                params, callback = list(args[:-1]), args[-1]
            else:
                params, callback = list(args), None
            return target.cypher(script, params, callback)

        invoke.__name__ = script.name
        invoke.__qualname__ = f"{(owner or type(instance)).__name__}.{script.name}"
        invoke.__doc__ = script.body
        return invoke

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"Procedure '{self.script.name}' is read-only")

    def __repr__(self) -> str:
        return f"<ProcedureBinding({self.script.name})>"


class ModelCompiler:
    """
    Compiles model classes against a runtime context.

    :param base: Runtime context holding ``connection`` and ``client``
    :param parser: Script parser; defaults to :class:`CypherParser`
    """

    def __init__(self, base: "GraphContext", parser: Optional[CypherParser] = None):
        self.base = base
        self.parser = parser if parser is not None else CypherParser()

    def compile(self, name: str, schema: Optional[Schema], script_text: str) -> Type[KuzuModel]:
        """
        Dynamically build an instantiable model class.

        :param name: Name of the model; its lower-cased form is the vertex type tag
        :param schema: Schema whose methods and statics are attached
        :param script_text: Content of a Cypher procedure script, possibly empty
        :returns: The compiled model class
        :raises ValueError: If the name is empty, the script text is malformed,
            or a procedure uses a reserved model attribute name
        """
        if not isinstance(name, str) or not name:
            raise ValueError(ErrorMessages.INVALID_MODEL_NAME.format(name=name))
        if schema is None:
            schema = Schema()

        base = self.base

        # @@ STEP 1: Scan procedures before any class exists
        procedures = self.parser.scan(script_text)
        self._check_reserved_names(name, procedures)

        # @@ STEP 2: Derive from KuzuModel; the constructor is inherited unchanged
        model = create_model(name, __base__=KuzuModel)

        # @@ STEP 3: Identity metadata, shared by the class and its instances
        setattr(model, ModelMetadataConstants.BASE, base)
        setattr(model, ModelMetadataConstants.TYPE_TAG, name.lower())
        setattr(model, ModelMetadataConstants.GRAPH_SCHEMA, schema)

        # @@ STEP 4: Accessors re-read the context, so reconnects are observed
        setattr(model, ModelMetadataConstants.GRAPH_ACCESSOR, ContextAccessor(
            ModelMetadataConstants.GRAPH_ACCESSOR, lambda: base.connection.graph,
        ))
        setattr(model, ModelMetadataConstants.EXECUTE_ACCESSOR, ContextAccessor(
            ModelMetadataConstants.EXECUTE_ACCESSOR, lambda: base.client.execute,
        ))

        # @@ STEP 5: Schema functions first, then procedures (procedures win collisions)
        self.attach_schema_functions(model, schema)
        setattr(model, ModelMetadataConstants.PROCEDURE_NAMES, self.attach_procedures(model, procedures))

        # @@ STEP 6: Finalize
        model.init()

        logger.debug(
            LoggingConstants.MODEL_COMPILED,
            name,
            model.type_tag,
            len(schema.methods) + len(schema.statics),
            len(model.procedure_names),
        )
        return model

    @staticmethod
    def _check_reserved_names(name: str, procedures: Mapping[str, CypherScript]) -> None:
        for fn_name in procedures:
            if fn_name in ModelMetadataConstants.RESERVED_NAMES:
                raise ValueError(ErrorMessages.RESERVED_PROCEDURE_NAME.format(name=fn_name, model=name))

    def attach_schema_functions(self, model: Type[KuzuModel], schema: Schema) -> None:
        """
        Attach schema instance methods and statics to the model.

        Plain static functions are attached as staticmethods and keep their own
        signature; ``staticmethod``/``classmethod`` objects are attached as given.
        """
        for fn_name, fn in schema.methods.items():
            setattr(model, fn_name, fn)

        for fn_name, fn in schema.statics.items():
            if not isinstance(fn, (staticmethod, classmethod)):
                fn = staticmethod(fn)
            setattr(model, fn_name, fn)

    def attach_procedures(self, model: Type[KuzuModel], procedures: Mapping[str, CypherScript]) -> FrozenSet[str]:
        """
        Attach one binding per scanned procedure.

        :returns: Names of the attached procedures
        """
        for fn_name, script in procedures.items():
            setattr(model, fn_name, self.define_procedure_getter(script))
        return frozenset(procedures)

    @staticmethod
    def define_procedure_getter(script: CypherScript) -> ProcedureBinding:
        """Build the attribute exposing ``script`` on a model."""
        return ProcedureBinding(script)
