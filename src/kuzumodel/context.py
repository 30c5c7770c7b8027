# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Runtime context shared by every compiled model.

A :class:`GraphContext` owns the Kuzu connection and the procedure client,
compiles models against itself, and keeps the models it compiled by name.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from .client import ProcedureClient
from .compiler import ModelCompiler
from .connection import KuzuConnection
from .constants import DatabaseConstants, ErrorMessages, LoggingConstants, ScriptConstants
from .cypher_parser import CypherParser
from .model import KuzuModel
from .schema import Schema

logger = logging.getLogger(__name__)


class GraphSettings(BaseModel):
    """Settings for opening a :class:`GraphContext`."""

    model_config = ConfigDict(frozen=True)

    db_path: Path
    read_only: bool = False
    buffer_pool_size: int = Field(default=DatabaseConstants.DEFAULT_BUFFER_POOL_SIZE, ge=0)
    scripts_dir: Optional[Path] = None
    script_suffix: str = ScriptConstants.DEFAULT_SUFFIX


class GraphContext:
    """
    Connection, client and compiled models for one graph database.

    Example:
        >>> with GraphContext(GraphSettings(db_path="graph.kuzu")) as ctx:
        ...     Person = ctx.model("Person", schema, script_text)
        ...     Person.find_by_name("Alice")
    """

    def __init__(self, settings: GraphSettings, parser: Optional[CypherParser] = None):
        self.settings = settings
        self.connection = KuzuConnection(
            settings.db_path,
            read_only=settings.read_only,
            buffer_pool_size=settings.buffer_pool_size,
        )
        self.client = ProcedureClient(self)
        self.compiler = ModelCompiler(self, parser=parser)
        self.models: Dict[str, Type[KuzuModel]] = {}

    @classmethod
    def connect(cls, db_path, **settings) -> "GraphContext":
        """Open a context from keyword settings."""
        return cls(GraphSettings(db_path=db_path, **settings))

    def load_script(self, name: str) -> str:
        """
        Read the procedure script of a model from ``scripts_dir``.

        Returns an empty string when no scripts directory is configured or the
        model has no script file.
        """
        if self.settings.scripts_dir is None:
            return ""
        path = self.settings.scripts_dir / f"{name.lower()}{self.settings.script_suffix}"
        if not path.is_file():
            return ""
        logger.debug(LoggingConstants.SCRIPT_LOADED, path, name)
        return path.read_text(encoding="utf-8")

    def model(
        self,
        name: str,
        schema: Optional[Schema] = None,
        script_text: Optional[str] = None,
    ) -> Type[KuzuModel]:
        """
        Compile a model against this context and keep it under ``name``.

        When ``script_text`` is None the script is loaded with :meth:`load_script`.
        """
        if script_text is None:
            script_text = self.load_script(name)
        model = self.compiler.compile(name, schema, script_text)
        self.models[name] = model
        return model

    def get_model(self, name: str) -> Type[KuzuModel]:
        try:
            return self.models[name]
        except KeyError:
            raise KeyError(ErrorMessages.MODEL_NOT_FOUND.format(name=name)) from None

    def reconnect(self) -> None:
        self.connection.reconnect()

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "GraphContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb  # Mark as intentionally unused
        self.close()

    def __repr__(self) -> str:
        return f"<GraphContext(db_path={str(self.settings.db_path)!r}, models={sorted(self.models)})>"
