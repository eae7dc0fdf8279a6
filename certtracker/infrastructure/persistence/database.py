import structlog
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..logging import current_trace_id
from .models import Base

logger = structlog.get_logger()


class Database:
    """Async engine and session factory for the certification store.

    PostgreSQL (asyncpg) in deployment; tests pass an aiosqlite URL with a
    ``StaticPool`` so one in-memory database is shared across sessions.
    """

    def __init__(self, url: str, **engine_kwargs) -> None:
        engine_kwargs.setdefault("echo", False)
        if url.startswith("postgresql"):
            engine_kwargs.setdefault("pool_pre_ping", True)
            engine_kwargs.setdefault("pool_size", 5)
        self._engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self._sessions = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )
        event.listen(
            self._engine.sync_engine, "before_cursor_execute", _tag_statement, retval=True
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    def session(self) -> AsyncSession:
        return self._sessions()

    async def create_tables(self) -> None:
        """Create the schema in place; there is no migration history."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Certification schema ready", tables=len(Base.metadata.tables))

    async def ping(self) -> None:
        async with self.session() as session:
            await session.execute(text("SELECT 1"))

    async def close(self) -> None:
        await self._engine.dispose()


def _tag_statement(conn, cursor, statement, parameters, context, executemany):
    # Lets slow-query logs be matched to the request or scheduler pass.
    trace_id = current_trace_id()
    if trace_id:
        statement = f"/* trace_id={trace_id} */ {statement}"
    return statement, parameters
