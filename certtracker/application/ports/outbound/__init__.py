from .approval_store import ApprovalHistoryLog, PendingSubmissionQueue
from .bounty_repository import BountyRepository
from .catalog_repository import CatalogRepository
from .certification_repository import CertificationRepository
from .clock import Clock
from .notification_dispatcher import NotificationDispatcher
from .reminder_ledger import ReminderLedger
from .unit_of_work import UnitOfWork
from .user_directory import UserDirectory

__all__ = [
    "ApprovalHistoryLog",
    "BountyRepository",
    "CatalogRepository",
    "CertificationRepository",
    "Clock",
    "NotificationDispatcher",
    "PendingSubmissionQueue",
    "ReminderLedger",
    "UnitOfWork",
    "UserDirectory",
]
