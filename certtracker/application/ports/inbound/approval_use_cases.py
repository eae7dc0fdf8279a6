from abc import ABC, abstractmethod
from uuid import UUID

from ...dtos import (
    ApprovalDecisionDTO,
    ApprovalHistoryDTO,
    ApprovalResultDTO,
    PendingSubmissionDTO,
)


class DecideApprovalUseCase(ABC):
    """Inbound port for approving or rejecting a pending submission."""

    @abstractmethod
    async def execute(self, submission_id: UUID, dto: ApprovalDecisionDTO) -> ApprovalResultDTO:
        pass


class ApprovalQueryUseCase(ABC):
    @abstractmethod
    async def list_pending(self) -> list[PendingSubmissionDTO]:
        pass

    @abstractmethod
    async def list_history(self, limit: int = 100) -> list[ApprovalHistoryDTO]:
        pass
