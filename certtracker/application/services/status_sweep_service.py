import structlog

from ...domain.entities import BountyStatus
from ...domain.services import EXPIRING_SOON_WINDOW_DAYS, sweep_statuses
from ...domain.value_objects import CertificationStatus
from ..dtos import StatusSweepResultDTO
from ..ports.inbound import SweepStatusesUseCase
from ..ports.outbound import BountyRepository, CertificationRepository, Clock, UnitOfWork

logger = structlog.get_logger()


class StatusSweepService(SweepStatusesUseCase):
    """Weekly pass moving certifications and bounties along by date."""

    def __init__(
        self,
        repository: CertificationRepository,
        bounties: BountyRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
        window_days: int = EXPIRING_SOON_WINDOW_DAYS,
    ):
        self._repository = repository
        self._bounties = bounties
        self._uow = unit_of_work
        self._clock = clock
        self._window_days = window_days

    async def execute(self) -> StatusSweepResultDTO:
        now = self._clock.now()
        today = now.date()
        result = StatusSweepResultDTO()

        async with self._uow:
            instances = await self._repository.list_by_statuses(
                (CertificationStatus.ACTIVE, CertificationStatus.EXPIRING_SOON)
            )
            transitions = sweep_statuses(instances, today, self._window_days, now)
            for transition in transitions:
                await self._repository.save(transition.instance)
                if transition.target == CertificationStatus.EXPIRED:
                    result.expired += 1
                else:
                    result.expiring_soon += 1

            for bounty in await self._bounties.list_all(BountyStatus.ACTIVE):
                if bounty.expire_if_past_deadline(today):
                    await self._bounties.save(bounty)
                    result.bounties_expired += 1

            await self._uow.commit()

        logger.info(
            "Status sweep completed",
            expiring_soon=result.expiring_soon,
            expired=result.expired,
            bounties_expired=result.bounties_expired,
        )
        return result
