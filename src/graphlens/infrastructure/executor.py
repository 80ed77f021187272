"""QueryExecutor — one short-lived engine handle per call.

Every call resolves the database id against the registry's current listing,
opens a fresh database handle and a fresh connection, runs its queries, and
releases both on every exit path. No shared lock is taken: concurrent calls,
even against the same database, use separate engine resources.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from graphlens.errors import ConnectionOpenError, DatabaseOpenError, QueryExecutionError

if TYPE_CHECKING:
    from graphlens.domain.values import Row
    from graphlens.infrastructure.engine import GraphEngine
    from graphlens.infrastructure.registry import DatabaseRegistry

logger = logging.getLogger(__name__)


class QueryExecutor:
    """Runs queries against registry databases through a :class:`GraphEngine`."""

    def __init__(self, registry: DatabaseRegistry, engine: GraphEngine) -> None:
        self._registry = registry
        self._engine = engine

    def run(self, database_id: int, query: str) -> list[Row]:
        """Execute *query* against *database_id* and return its rows.

        Raises:
            NotFoundError: unknown *database_id*.
            DatabaseOpenError: the engine could not open the database.
            ConnectionOpenError: the engine could not open a connection.
            QueryExecutionError: the engine rejected or failed the query.
        """
        return self.run_batch(database_id, [query])[0]

    def run_batch(self, database_id: int, queries: Sequence[str]) -> list[list[Row]]:
        """Execute *queries* in order on one handle and connection.

        Returns one row list per query. Raises like :meth:`run`; the first
        failing query aborts the batch.
        """
        info = self._registry.resolve(database_id)
        logger.debug("Opening database %s (%s)", info.id, info.path)

        try:
            handle = self._engine.open(info.path)
        except Exception as exc:
            raise DatabaseOpenError(str(exc), id=info.id, path=info.path) from exc

        try:
            try:
                connection = self._engine.connect(handle)
            except Exception as exc:
                raise ConnectionOpenError(str(exc), id=info.id, path=info.path) from exc

            try:
                results: list[list[Row]] = []
                for query in queries:
                    try:
                        rows = self._engine.execute(connection, query)
                    except Exception as exc:
                        raise QueryExecutionError(str(exc), id=info.id, query=query) from exc
                    logger.debug("Query returned %d rows", len(rows))
                    results.append(rows)
                return results
            finally:
                self._engine.close_connection(connection)
        finally:
            self._engine.close_database(handle)
