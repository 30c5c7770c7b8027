# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Constants module for kuzumodel.

This module centralizes constants, configuration defaults, and literal strings
used throughout the package.

:module: constants
:synopsis: Centralized constants and configuration for kuzumodel
"""

from __future__ import annotations

from typing import Final, FrozenSet


# ============================================================================
# MODEL METADATA
# ============================================================================

class ModelMetadataConstants:
    """Attribute names stamped on every compiled model."""

    # @@ STEP 1: Identity / context attributes
    BASE: Final[str] = "base"
    TYPE_TAG: Final[str] = "type_tag"
    GRAPH_SCHEMA: Final[str] = "graph_schema"
    PROCEDURE_NAMES: Final[str] = "procedure_names"

    # @@ STEP 2: Computed accessors
    GRAPH_ACCESSOR: Final[str] = "g"
    EXECUTE_ACCESSOR: Final[str] = "cypher"

    # @@ STEP 3: Discriminant property written on every vertex
    TYPE_PROPERTY: Final[str] = "_type"

    # @@ STEP 4: Marker set by KuzuModel.init()
    INITIALIZED_FLAG: Final[str] = "__kuzumodel_initialized__"

    # @@ STEP 5: Names a procedure may not take
    RESERVED_NAMES: Final[FrozenSet[str]] = frozenset({
        BASE, TYPE_TAG, GRAPH_SCHEMA, PROCEDURE_NAMES, GRAPH_ACCESSOR, EXECUTE_ACCESSOR, "init",
    })


# ============================================================================
# SCRIPT FILES
# ============================================================================

class ScriptConstants:
    """Lexical constants of the Cypher procedure script format."""

    BLOCK_OPEN: Final[str] = "{"
    BLOCK_CLOSE: Final[str] = "}"
    LINE_COMMENT: Final[str] = "//"
    BLOCK_COMMENT_OPEN: Final[str] = "/*"
    BLOCK_COMMENT_CLOSE: Final[str] = "*/"
    QUOTES: Final[FrozenSet[str]] = frozenset({"'", '"', "`"})
    ESCAPE: Final[str] = "\\"
    PARAM_SEPARATOR: Final[str] = ","

    DEFAULT_SUFFIX: Final[str] = ".cypher"

    # Updating clauses; a procedure containing one of them is a write procedure
    WRITE_KEYWORDS: Final[FrozenSet[str]] = frozenset({
        "create", "merge", "set", "delete", "remove", "detach", "drop", "alter", "copy",
    })


# ============================================================================
# DATABASE
# ============================================================================

class DatabaseConstants:
    """Database defaults."""

    # 0 lets Kuzu pick the buffer pool size
    DEFAULT_BUFFER_POOL_SIZE: Final[int] = 0
    MAX_BUFFER_POOL_SIZE: Final[int] = 2**63
    ARROW_CHUNK_SIZE: Final[int] = 10000


# ============================================================================
# LOGGING
# ============================================================================

class LoggingConstants:
    """Log message templates."""

    MODEL_COMPILED: Final[str] = "Compiled model %s (type_tag=%s, %d schema functions, %d procedures)"
    MODEL_REGISTERED: Final[str] = "Registered model %s under type tag %r"
    MODEL_REPLACED: Final[str] = "Type tag %r was registered by %s; replacing it with %s"
    PROCEDURE_EXECUTE: Final[str] = "Executing procedure %s with %d parameter(s)"
    SCRIPT_SCANNED: Final[str] = "Scanned %d procedure(s) from script text"
    SCRIPT_LOADED: Final[str] = "Loaded procedure script %s for model %s"
    CONNECTION_OPENED: Final[str] = "Opened Kuzu connection to %s (read_only=%s)"
    CONNECTION_CLOSED: Final[str] = "Closed Kuzu connection to %s"


# ============================================================================
# ERROR MESSAGES
# ============================================================================

class ErrorMessages:
    """Error message constants."""

    # @@ STEP 1: Connection errors
    CONNECTION_CLOSED: Final[str] = "Database connection is closed"
    READ_ONLY_WRITE: Final[str] = (
        "Procedure '{name}' updates the graph but the connection is read-only"
    )

    # @@ STEP 2: Model errors
    INVALID_MODEL_NAME: Final[str] = "Model name must be a non-empty string, got {name!r}"
    MODEL_NOT_FOUND: Final[str] = "Model {name} has not been compiled in this context"
    RESERVED_PROCEDURE_NAME: Final[str] = (
        "Procedure '{name}' of model {model} uses a reserved model attribute name"
    )

    # @@ STEP 3: Script errors
    SCRIPT_UNEXPECTED: Final[str] = "Unexpected content at line {line}: {snippet!r}"
    SCRIPT_BAD_PARAMETER: Final[str] = "Invalid parameter {param!r} in procedure '{name}' at line {line}"
    SCRIPT_DUPLICATE_PARAMETER: Final[str] = "Duplicate parameter {param!r} in procedure '{name}' at line {line}"
    SCRIPT_DUPLICATE_PROCEDURE: Final[str] = "Procedure '{name}' is defined twice (second definition at line {line})"
    SCRIPT_UNTERMINATED_BODY: Final[str] = "Procedure '{name}' starting at line {line} is missing its closing brace"
    SCRIPT_UNTERMINATED_STRING: Final[str] = "Unterminated string literal at line {line}"
    SCRIPT_UNTERMINATED_COMMENT: Final[str] = "Unterminated block comment at line {line}"
    SCRIPT_EMPTY_BODY: Final[str] = "Procedure '{name}' at line {line} has an empty body"

    # @@ STEP 4: Execution errors
    PROCEDURE_ARITY: Final[str] = (
        "Procedure '{name}' takes {expected} parameter(s) ({params}), got {actual}"
    )
