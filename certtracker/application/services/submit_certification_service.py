import structlog

from ...domain.services import (
    SubmissionData,
    build_pending_submission,
    find_held_assignment,
    submit_for_approval,
    validate_assignment,
)
from ..dtos import CertificationResponseDTO, SubmitCertificationDTO
from ..ports.inbound import SubmitCertificationUseCase
from ..ports.outbound import (
    CatalogRepository,
    CertificationRepository,
    Clock,
    PendingSubmissionQueue,
    UnitOfWork,
)

logger = structlog.get_logger()


class SubmitCertificationService(SubmitCertificationUseCase):
    """Application service implementing the submit certification use case.

    An existing ADMIN_ASSIGNED instance for the same catalog entry is moved
    to PENDING_APPROVAL in place; otherwise a new instance is created. Either
    way exactly one entry is queued for review.
    """

    def __init__(
        self,
        repository: CertificationRepository,
        catalog: CatalogRepository,
        pending_queue: PendingSubmissionQueue,
        unit_of_work: UnitOfWork,
        clock: Clock,
    ):
        self._repository = repository
        self._catalog = catalog
        self._pending = pending_queue
        self._uow = unit_of_work
        self._clock = clock

    async def execute(self, dto: SubmitCertificationDTO) -> CertificationResponseDTO:
        user_id = dto.user_id or "anonymous"

        async with self._uow:
            definition = await self._catalog.get(dto.master_definition_id)
            existing = await self._repository.list_for_user(user_id)
            definition = validate_assignment(
                definition, dto.master_definition_id, user_id, existing
            )

            assigned = find_held_assignment(existing, definition.id)
            data = SubmissionData(
                obtained_date=dto.obtained_date,
                certificate_number=dto.certificate_number,
                verification_url=str(dto.verification_url) if dto.verification_url else None,
                certificate_file_url=(
                    str(dto.certificate_file_url) if dto.certificate_file_url else None
                ),
                notes=dto.notes,
            )
            instance = submit_for_approval(
                assigned, definition, user_id, data, now=self._clock.now()
            )
            submission = build_pending_submission(instance)

            await self._repository.save(instance)
            await self._pending.add(submission)
            await self._uow.commit()

        logger.info(
            "Certification submitted for approval",
            instance_id=str(instance.id),
            submission_id=str(submission.id),
            traced=submission.is_traced,
        )
        return CertificationResponseDTO.from_entity(instance)
