from types import TracebackType

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...application.ports.outbound import UnitOfWork
from ...domain.errors import PersistenceFailure

logger = structlog.get_logger()


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Transaction boundary over the request's (or pass's) session.

    All repositories of one adapter bundle share the session, so an approval's
    queue removal, history append and instance update land in one commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            logger.debug("Rolling back unit of work", error_type=exc_type.__name__)
            await self.rollback()

    async def commit(self) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            await self.rollback()
            raise PersistenceFailure(f"Commit failed: {e}") from e

    async def rollback(self) -> None:
        try:
            await self._session.rollback()
        except SQLAlchemyError as e:
            # The original error is what the caller needs to see.
            logger.error("Rollback failed", error=str(e))
