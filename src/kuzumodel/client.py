# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Execution client for named Cypher procedures.

Every procedure binding on a compiled model ends up in
:meth:`ProcedureClient.execute`, which is the only place procedures reach the
database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence

import pyarrow as pa

from .constants import ErrorMessages, LoggingConstants
from .cypher_parser import CypherScript

if TYPE_CHECKING:
    from .connection import KuzuConnection
    from .context import GraphContext

logger = logging.getLogger(__name__)


class ProcedureClient:
    """
    Runs procedures against the current connection of a context.

    The connection is looked up on the context at every call, so a context
    that reconnects is picked up without rebuilding the client.
    """

    def __init__(self, context: "GraphContext"):
        self.context = context

    @property
    def connection(self) -> "KuzuConnection":
        return self.context.connection

    def _prepare(self, script: CypherScript, params: Sequence[Any]) -> Dict[str, Any]:
        bound = script.bind(params)
        if script.is_write and self.connection.read_only:
            raise RuntimeError(ErrorMessages.READ_ONLY_WRITE.format(name=script.name))
        logger.debug(LoggingConstants.PROCEDURE_EXECUTE, script.name, len(bound))
        return bound

    def execute(
        self,
        script: CypherScript,
        params: Sequence[Any] = (),
        callback: Optional[Callable[[List[Dict[str, Any]]], Any]] = None,
    ) -> Any:
        """
        Execute a procedure.

        Args:
            script: Procedure to run
            params: Positional values, bound to the procedure's declared parameters
            callback: Optional callable receiving the result rows

        Returns:
            The result rows, or the callback's return value when a callback is given

        Raises:
            ValueError: If the parameter count does not match the procedure
            RuntimeError: If a write procedure runs on a read-only connection
        """
        rows = self.connection.execute(script.body, self._prepare(script, params))
        if callback is not None:
            return callback(rows)
        return rows

    def fetch_table(self, script: CypherScript, params: Sequence[Any] = ()) -> pa.Table:
        """Execute a procedure and return its result as a ``pyarrow.Table``."""
        return self.connection.execute_arrow(script.body, self._prepare(script, params))

    def __repr__(self) -> str:
        return f"<ProcedureClient(context={self.context!r})>"
