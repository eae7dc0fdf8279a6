from abc import ABC, abstractmethod
from uuid import UUID

from ....domain.entities import ApprovalHistoryEntry, PendingSubmission


class PendingSubmissionQueue(ABC):
    """Submissions awaiting an admin decision."""

    @abstractmethod
    async def add(self, submission: PendingSubmission) -> None:
        pass

    @abstractmethod
    async def get(self, submission_id: UUID) -> PendingSubmission | None:
        pass

    @abstractmethod
    async def remove(self, submission_id: UUID) -> bool:
        pass

    @abstractmethod
    async def list_all(self) -> list[PendingSubmission]:
        pass


class ApprovalHistoryLog(ABC):
    """Append-only log of processed submissions."""

    @abstractmethod
    async def append(self, entry: ApprovalHistoryEntry) -> None:
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 100) -> list[ApprovalHistoryEntry]:
        """Most recent first."""
        pass
