"""BaseService — foundation for all graphlens services.

Every service receives a :class:`Workspace` at construction time. The
Workspace provides the database registry and the query executor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphlens.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from graphlens.errors import GraphlensError
    from graphlens.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Subclasses catch :class:`~graphlens.errors.GraphlensError` at the
    operation boundary and hand it to :meth:`_failure`::

        class GraphService(BaseService):
            def run_query(self, database_id: int, query: str) -> ServiceResult:
                try:
                    rows = self._workspace.executor.run(database_id, query)
                except GraphlensError as exc:
                    return self._failure("run_query", exc)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @staticmethod
    def _failure(op: str, exc: GraphlensError) -> ServiceResult:
        """Convert a raised error into a failed ServiceResult."""
        logger.debug("%s failed: %s", op, exc.message)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=exc.message, detail=exc.detail),
        )
