from collections import Counter
from datetime import timedelta
from uuid import UUID

from ..dtos import ReminderRecordDTO, ReminderStatsDTO
from ..ports.inbound import ReminderReportUseCase
from ..ports.outbound import Clock, ReminderLedger


class ReminderReportService(ReminderReportUseCase):
    """Read side of the notification ledger."""

    def __init__(self, ledger: ReminderLedger, clock: Clock):
        self._ledger = ledger
        self._clock = clock

    async def stats(self, days: int = 30) -> ReminderStatsDTO:
        since = self._clock.now() - timedelta(days=days)
        records = await self._ledger.list_since(since)

        delivered = sum(1 for r in records if r.delivered)
        by_type = Counter(
            f"{r.tier.value}:{'delivered' if r.delivered else 'failed'}" for r in records
        )
        return ReminderStatsDTO(
            period_days=days,
            total=len(records),
            delivered=delivered,
            failed=len(records) - delivered,
            by_type=dict(by_type),
        )

    async def log_for_instance(self, instance_id: UUID) -> list[ReminderRecordDTO]:
        records = await self._ledger.list_for_instance(instance_id)
        return [ReminderRecordDTO.from_entity(r) for r in records]

    async def log_for_user(self, user_id: str, limit: int = 50) -> list[ReminderRecordDTO]:
        records = await self._ledger.list_for_user(user_id, limit)
        return [ReminderRecordDTO.from_entity(r) for r in records]
