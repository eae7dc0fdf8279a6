"""Wiring of outbound adapters, shared by the API and the scheduler."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ..application.ports.outbound import (
    ApprovalHistoryLog,
    BountyRepository,
    CatalogRepository,
    CertificationRepository,
    PendingSubmissionQueue,
    ReminderLedger,
    UnitOfWork,
    UserDirectory,
)
from .persistence import (
    Database,
    InMemoryApprovalHistoryLog,
    InMemoryBountyRepository,
    InMemoryCatalogRepository,
    InMemoryCertificationRepository,
    InMemoryPendingSubmissionQueue,
    InMemoryReminderLedger,
    InMemoryStore,
    InMemoryUnitOfWork,
    InMemoryUserDirectory,
    SqlAlchemyApprovalHistoryLog,
    SqlAlchemyBountyRepository,
    SqlAlchemyCatalogRepository,
    SqlAlchemyCertificationRepository,
    SqlAlchemyPendingSubmissionQueue,
    SqlAlchemyReminderLedger,
    SqlAlchemyUnitOfWork,
    SqlAlchemyUserDirectory,
)


@dataclass
class Adapters:
    """Outbound adapters bound to one session (or one in-memory store)."""

    certifications: CertificationRepository
    catalog: CatalogRepository
    pending: PendingSubmissionQueue
    history: ApprovalHistoryLog
    ledger: ReminderLedger
    users: UserDirectory
    bounties: BountyRepository
    unit_of_work: UnitOfWork


def sqlalchemy_adapters(session: AsyncSession) -> Adapters:
    return Adapters(
        certifications=SqlAlchemyCertificationRepository(session),
        catalog=SqlAlchemyCatalogRepository(session),
        pending=SqlAlchemyPendingSubmissionQueue(session),
        history=SqlAlchemyApprovalHistoryLog(session),
        ledger=SqlAlchemyReminderLedger(session),
        users=SqlAlchemyUserDirectory(session),
        bounties=SqlAlchemyBountyRepository(session),
        unit_of_work=SqlAlchemyUnitOfWork(session),
    )


def in_memory_adapters(store: InMemoryStore) -> Adapters:
    return Adapters(
        certifications=InMemoryCertificationRepository(store),
        catalog=InMemoryCatalogRepository(store),
        pending=InMemoryPendingSubmissionQueue(store),
        history=InMemoryApprovalHistoryLog(store),
        ledger=InMemoryReminderLedger(store),
        users=InMemoryUserDirectory(store),
        bounties=InMemoryBountyRepository(store),
        unit_of_work=InMemoryUnitOfWork(store),
    )


class AdapterProvider:
    """Opens an adapter bundle per request or per job run."""

    def __init__(self, database: Database | None = None, store: InMemoryStore | None = None):
        if (database is None) == (store is None):
            raise ValueError("Provide exactly one of database or store")
        self._database = database
        self._store = store

    @property
    def database(self) -> Database | None:
        return self._database

    @property
    def store(self) -> InMemoryStore | None:
        return self._store

    @asynccontextmanager
    async def open(self) -> AsyncIterator[Adapters]:
        if self._store is not None:
            yield in_memory_adapters(self._store)
            return

        session = self._database.session()
        try:
            yield sqlalchemy_adapters(session)
        finally:
            await session.close()

    async def close(self) -> None:
        if self._database is not None:
            await self._database.close()
