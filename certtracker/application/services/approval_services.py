from uuid import UUID

import structlog

from ...domain.errors import NotFound
from ...domain.services import decide_approval
from ..dtos import (
    ApprovalDecisionDTO,
    ApprovalHistoryDTO,
    ApprovalResultDTO,
    CertificationResponseDTO,
    PendingSubmissionDTO,
)
from ..ports.inbound import ApprovalQueryUseCase, DecideApprovalUseCase
from ..ports.outbound import (
    ApprovalHistoryLog,
    CatalogRepository,
    CertificationRepository,
    Clock,
    PendingSubmissionQueue,
    UnitOfWork,
)

logger = structlog.get_logger()


class DecideApprovalService(DecideApprovalUseCase):
    """Approve or reject a pending submission.

    Instance update, queue removal and history append share one unit of work.
    """

    def __init__(
        self,
        repository: CertificationRepository,
        catalog: CatalogRepository,
        pending_queue: PendingSubmissionQueue,
        history_log: ApprovalHistoryLog,
        unit_of_work: UnitOfWork,
        clock: Clock,
    ):
        self._repository = repository
        self._catalog = catalog
        self._pending = pending_queue
        self._history = history_log
        self._uow = unit_of_work
        self._clock = clock

    async def execute(self, submission_id: UUID, dto: ApprovalDecisionDTO) -> ApprovalResultDTO:
        async with self._uow:
            submission = await self._pending.get(submission_id)
            if submission is None:
                raise NotFound("Pending submission", submission_id)

            target_id = (
                submission.original_instance_id
                if submission.is_traced
                else submission.instance_id
            )
            instance = await self._repository.get(target_id)
            definition = None
            if instance is None:
                definition = await self._catalog.get(submission.master_definition_id)

            outcome = decide_approval(
                submission,
                instance,
                definition,
                dto.decision,
                admin_id=dto.admin_id or "system",
                comments=dto.comments,
                now=self._clock.now(),
            )

            await self._repository.save(outcome.instance)
            await self._pending.remove(submission.id)
            await self._history.append(outcome.history_entry)
            await self._uow.commit()

        logger.info(
            "Submission processed",
            submission_id=str(submission_id),
            instance_id=str(outcome.instance.id),
            action=outcome.history_entry.action.value,
            traced=submission.is_traced,
        )
        return ApprovalResultDTO(
            certification=CertificationResponseDTO.from_entity(outcome.instance),
            history=ApprovalHistoryDTO.from_entity(outcome.history_entry),
        )


class ApprovalQueryService(ApprovalQueryUseCase):
    def __init__(self, pending_queue: PendingSubmissionQueue, history_log: ApprovalHistoryLog):
        self._pending = pending_queue
        self._history = history_log

    async def list_pending(self) -> list[PendingSubmissionDTO]:
        submissions = await self._pending.list_all()
        return [PendingSubmissionDTO.from_entity(s) for s in submissions]

    async def list_history(self, limit: int = 100) -> list[ApprovalHistoryDTO]:
        entries = await self._history.list_recent(limit)
        return [ApprovalHistoryDTO.from_entity(e) for e in entries]
