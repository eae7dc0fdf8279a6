from .database import Database
from .memory import (
    InMemoryApprovalHistoryLog,
    InMemoryBountyRepository,
    InMemoryCatalogRepository,
    InMemoryCertificationRepository,
    InMemoryPendingSubmissionQueue,
    InMemoryReminderLedger,
    InMemoryStore,
    InMemoryUnitOfWork,
    InMemoryUserDirectory,
    create_seeded_store,
    seed_catalog,
)
from .repositories import (
    SqlAlchemyApprovalHistoryLog,
    SqlAlchemyBountyRepository,
    SqlAlchemyCatalogRepository,
    SqlAlchemyCertificationRepository,
    SqlAlchemyPendingSubmissionQueue,
    SqlAlchemyReminderLedger,
    SqlAlchemyUserDirectory,
)
from .unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "Database",
    "InMemoryApprovalHistoryLog",
    "InMemoryBountyRepository",
    "InMemoryCatalogRepository",
    "InMemoryCertificationRepository",
    "InMemoryPendingSubmissionQueue",
    "InMemoryReminderLedger",
    "InMemoryStore",
    "InMemoryUnitOfWork",
    "InMemoryUserDirectory",
    "SqlAlchemyApprovalHistoryLog",
    "SqlAlchemyBountyRepository",
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyCertificationRepository",
    "SqlAlchemyPendingSubmissionQueue",
    "SqlAlchemyReminderLedger",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUserDirectory",
    "create_seeded_store",
    "seed_catalog",
]
