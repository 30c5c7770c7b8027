# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
kuzumodel: graph vertex models compiled from schemas and Cypher procedure scripts.
"""

from .client import ProcedureClient
from .compiler import ContextAccessor, ModelCompiler, ProcedureBinding
from .connection import KuzuConnection
from .context import GraphContext, GraphSettings
from .cypher_parser import CypherParser, CypherScript
from .model import (
    KuzuModel,
    ModelRegistry,
    clear_registry,
    get_model_by_type,
    get_registered_models,
)
from .schema import Schema

__version__ = "0.1.0"

__all__ = [
    "ContextAccessor",
    "CypherParser",
    "CypherScript",
    "GraphContext",
    "GraphSettings",
    "KuzuConnection",
    "KuzuModel",
    "ModelCompiler",
    "ModelRegistry",
    "ProcedureBinding",
    "ProcedureClient",
    "Schema",
    "clear_registry",
    "get_model_by_type",
    "get_registered_models",
]
