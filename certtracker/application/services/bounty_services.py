import structlog

from ...domain.entities import Bounty, BountyStatus
from ...domain.errors import NotFound
from ..dtos import BountyClaimDTO, BountyDTO, CreateBountyDTO
from ..ports.inbound import ClaimBountyUseCase, ManageBountiesUseCase
from ..ports.outbound import BountyRepository, Clock, UnitOfWork

logger = structlog.get_logger()


class ClaimBountyService(ClaimBountyUseCase):
    def __init__(self, repository: BountyRepository, unit_of_work: UnitOfWork, clock: Clock):
        self._repository = repository
        self._uow = unit_of_work
        self._clock = clock

    async def execute(self, bounty_id: str, user_id: str) -> BountyClaimDTO:
        async with self._uow:
            bounty = await self._repository.get(bounty_id)
            if bounty is None:
                raise NotFound("Bounty", bounty_id)

            claim = bounty.claim(user_id, self._clock.now())
            await self._repository.save(bounty)
            await self._repository.add_claim(claim)
            await self._uow.commit()

        logger.info(
            "Bounty claimed",
            bounty_id=bounty_id,
            claims=bounty.current_claims,
            max_claims=bounty.max_claims,
        )
        return BountyClaimDTO.from_entity(claim)


class BountyService(ManageBountiesUseCase):
    def __init__(self, repository: BountyRepository, unit_of_work: UnitOfWork, clock: Clock):
        self._repository = repository
        self._uow = unit_of_work
        self._clock = clock

    async def create(self, dto: CreateBountyDTO) -> BountyDTO:
        bounty = Bounty.create(
            title=dto.title,
            description=dto.description,
            certification_ids=dto.certification_ids,
            bounty_amount=dto.bounty_amount,
            base_bonus_amount=dto.base_bonus_amount,
            deadline=dto.deadline,
            max_claims=dto.max_claims,
            created_by=dto.created_by or "system",
            priority=dto.priority,
            requirements=dto.requirements,
            tags=dto.tags,
            today=self._clock.today(),
        )
        async with self._uow:
            await self._repository.save(bounty)
            await self._uow.commit()

        logger.info("Bounty created", bounty_id=bounty.id)
        return BountyDTO.from_entity(bounty)

    async def list_active(self) -> list[BountyDTO]:
        bounties = await self._repository.list_all(BountyStatus.ACTIVE)
        today = self._clock.today()
        return [BountyDTO.from_entity(b) for b in bounties if not b.is_past_deadline(today)]

    async def list_claims_for_user(self, user_id: str) -> list[BountyClaimDTO]:
        claims = await self._repository.list_claims_for_user(user_id)
        return [BountyClaimDTO.from_entity(c) for c in claims]
