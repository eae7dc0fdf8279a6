import structlog

from ...domain.errors import DuplicateClaim
from ...domain.services import create_from_assignment, find_held_assignment, validate_assignment
from ..dtos import AssignCertificationDTO, CertificationResponseDTO
from ..ports.inbound import AssignCertificationUseCase
from ..ports.outbound import CatalogRepository, CertificationRepository, Clock, UnitOfWork

logger = structlog.get_logger()


class AssignCertificationService(AssignCertificationUseCase):
    """Application service implementing the admin assignment use case."""

    def __init__(
        self,
        repository: CertificationRepository,
        catalog: CatalogRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
    ):
        self._repository = repository
        self._catalog = catalog
        self._uow = unit_of_work
        self._clock = clock

    async def execute(self, dto: AssignCertificationDTO) -> CertificationResponseDTO:
        async with self._uow:
            definition = await self._catalog.get(dto.master_definition_id)
            existing = await self._repository.list_for_user(dto.user_id)
            definition = validate_assignment(
                definition, dto.master_definition_id, dto.user_id, existing
            )
            # Submissions exempt a held assignment; a second assignment must not.
            if find_held_assignment(existing, definition.id) is not None:
                raise DuplicateClaim(dto.user_id, definition.id)

            instance = create_from_assignment(
                definition,
                user_id=dto.user_id,
                assigned_by=dto.assigned_by or "system",
                deadline=dto.deadline,
                bonus_eligible=dto.bonus_eligible,
                bonus_amount=dto.bonus_amount,
                admin_notes=dto.admin_notes,
                now=self._clock.now(),
            )
            await self._repository.save(instance)
            await self._uow.commit()

        logger.info(
            "Certification assigned",
            instance_id=str(instance.id),
            assignment_id=instance.assignment_id,
            master_definition_id=definition.id,
        )
        return CertificationResponseDTO.from_entity(instance)
