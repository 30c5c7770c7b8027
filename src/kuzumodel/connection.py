# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Kuzu database connection used by the runtime context.

:class:`KuzuConnection` owns a ``kuzu.Database`` and the live ``kuzu.Connection``
exposed to compiled models as their graph handle.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional, Union

import kuzu
import pyarrow as pa

from .constants import DatabaseConstants, ErrorMessages, LoggingConstants

logger = logging.getLogger(__name__)


class KuzuConnection:
    """Wrapper for a Kuzu database and its connection."""

    def __init__(
        self,
        db_path: Union[str, Path],
        read_only: bool = False,
        buffer_pool_size: int = DatabaseConstants.DEFAULT_BUFFER_POOL_SIZE,
    ):
        """
        Open a Kuzu database.

        Args:
            db_path: Path to the Kuzu database
            read_only: Whether to open the database in read-only mode
            buffer_pool_size: Size of buffer pool in bytes. When 0, Kuzu auto-selects.
        """
        self.db_path = Path(db_path)
        self.read_only = read_only

        # Normalize buffer_pool_size: 0 delegates sizing to Kuzu
        if buffer_pool_size is None or buffer_pool_size < 0 or buffer_pool_size > DatabaseConstants.MAX_BUFFER_POOL_SIZE:
            buffer_pool_size = DatabaseConstants.DEFAULT_BUFFER_POOL_SIZE
        self.buffer_pool_size = buffer_pool_size

        self._lock = RLock()
        self._database = kuzu.Database(
            str(self.db_path),
            buffer_pool_size=self.buffer_pool_size,
            read_only=self.read_only,
        )
        self._conn: Optional[kuzu.Connection] = kuzu.Connection(self._database)
        self._closed = False
        logger.debug(LoggingConstants.CONNECTION_OPENED, self.db_path, self.read_only)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def graph(self) -> kuzu.Connection:
        """The live ``kuzu.Connection``; replaced by :meth:`reconnect`."""
        if self._closed or self._conn is None:
            raise RuntimeError(ErrorMessages.CONNECTION_CLOSED)
        return self._conn

    def _run(self, query: str, parameters: Optional[Dict[str, Any]]) -> Any:
        if parameters:
            result = self.graph.execute(query, parameters)
        else:
            result = self.graph.execute(query)
        # Multi-statement queries return one result per statement; keep the last
        if isinstance(result, list):
            for earlier in result[:-1]:
                earlier.close()
            result = result[-1]
        return result

    def execute(self, query: str, parameters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Execute a Cypher query and return its rows as dicts keyed by column name."""
        with self._lock:
            result = self._run(query, parameters)
            try:
                columns = result.get_column_names()
                rows = []
                while result.has_next():
                    rows.append(dict(zip(columns, result.get_next())))
            finally:
                result.close()
        return rows

    def execute_arrow(self, query: str, parameters: Optional[Dict[str, Any]] = None) -> pa.Table:
        """Execute a Cypher query and return its result as a ``pyarrow.Table``."""
        with self._lock:
            result = self._run(query, parameters)
            try:
                return result.get_as_arrow(DatabaseConstants.ARROW_CHUNK_SIZE)
            finally:
                result.close()

    def reconnect(self) -> None:
        """Replace the live connection with a fresh one on the same database."""
        with self._lock:
            if self._closed:
                raise RuntimeError(ErrorMessages.CONNECTION_CLOSED)
            old = self._conn
            self._conn = kuzu.Connection(self._database)
            if old is not None:
                old.close()

    def close(self) -> None:
        """Close the connection and the database. Safe to call twice."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._conn is not None:
                self._conn.close()
                self._conn = None
            self._database.close()
        logger.debug(LoggingConstants.CONNECTION_CLOSED, self.db_path)

    def __repr__(self) -> str:
        return f"<KuzuConnection(db_path={str(self.db_path)!r}, read_only={self.read_only})>"
