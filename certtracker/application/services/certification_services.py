from uuid import UUID

import structlog

from ...domain.entities import UserCertificationInstance
from ...domain.errors import NotFound
from ...domain.services import list_expiring, summarize_competency
from ..dtos import CertificationResponseDTO, CompetencyDTO, RenewCertificationDTO
from ..ports.inbound import CertificationQueryUseCase, ManageCertificationUseCase
from ..ports.outbound import CatalogRepository, CertificationRepository, Clock, UnitOfWork

logger = structlog.get_logger()


class ManageCertificationService(ManageCertificationUseCase):
    """Manual renewals, deactivation, deletion and bonus claims."""

    def __init__(
        self,
        repository: CertificationRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
    ):
        self._repository = repository
        self._uow = unit_of_work
        self._clock = clock

    async def _load(
        self, instance_id: UUID, user_id: str | None = None
    ) -> UserCertificationInstance:
        instance = await self._repository.get(instance_id)
        # Other users' certifications are reported as missing
        if instance is None or (user_id is not None and instance.user_id != user_id):
            raise NotFound("Certification", instance_id)
        return instance

    async def renew(
        self, instance_id: UUID, dto: RenewCertificationDTO, user_id: str | None = None
    ) -> CertificationResponseDTO:
        async with self._uow:
            instance = await self._load(instance_id, user_id)
            instance.renew(
                dto.new_expiration_date,
                certificate_number=dto.certificate_number,
                verification_url=str(dto.verification_url) if dto.verification_url else None,
                now=self._clock.now(),
            )
            await self._repository.save(instance)
            await self._uow.commit()

        logger.info("Certification renewed", instance_id=str(instance_id))
        return CertificationResponseDTO.from_entity(instance)

    async def deactivate(self, instance_id: UUID) -> CertificationResponseDTO:
        async with self._uow:
            instance = await self._load(instance_id)
            instance.deactivate(self._clock.now())
            await self._repository.save(instance)
            await self._uow.commit()

        logger.info("Certification deactivated", instance_id=str(instance_id))
        return CertificationResponseDTO.from_entity(instance)

    async def delete(self, instance_id: UUID) -> None:
        async with self._uow:
            if not await self._repository.delete(instance_id):
                raise NotFound("Certification", instance_id)
            await self._uow.commit()

        logger.info("Certification deleted", instance_id=str(instance_id))

    async def claim_bonus(self, instance_id: UUID, user_id: str) -> CertificationResponseDTO:
        async with self._uow:
            instance = await self._load(instance_id, user_id)
            instance.claim_bonus(self._clock.now())
            await self._repository.save(instance)
            await self._uow.commit()

        logger.info("Certification bonus claimed", instance_id=str(instance_id))
        return CertificationResponseDTO.from_entity(instance)


class CertificationQueryService(CertificationQueryUseCase):
    def __init__(
        self,
        repository: CertificationRepository,
        catalog: CatalogRepository,
        clock: Clock,
    ):
        self._repository = repository
        self._catalog = catalog
        self._clock = clock

    async def get(self, instance_id: UUID) -> CertificationResponseDTO | None:
        instance = await self._repository.get(instance_id)
        if not instance:
            return None
        return CertificationResponseDTO.from_entity(instance)

    async def list_for_user(self, user_id: str) -> list[CertificationResponseDTO]:
        instances = await self._repository.list_for_user(user_id)
        return [CertificationResponseDTO.from_entity(i) for i in instances]

    async def list_expiring(
        self, user_id: str, within_days: int = 90
    ) -> list[CertificationResponseDTO]:
        instances = await self._repository.list_for_user(user_id)
        expiring = list_expiring(instances, self._clock.today(), within_days)
        return [CertificationResponseDTO.from_entity(i) for i in expiring]

    async def competency(self, user_id: str) -> CompetencyDTO:
        instances = await self._repository.list_for_user(user_id)
        definitions = {d.id: d for d in await self._catalog.list_all()}
        summary = summarize_competency(instances, definitions)
        return CompetencyDTO(
            user_id=user_id,
            tier=summary.tier,
            total_points=summary.total_points,
            vendor_scores=summary.vendor_scores,
        )
