from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ...domain.entities import NotificationChannel, ReminderRecord
from ...domain.value_objects import UrgencyTier


class ReminderRunResultDTO(BaseModel):
    """Outcome counts of one daily reminder pass."""

    sent: int = 0
    skipped: int = 0
    failed: int = 0


class StatusSweepResultDTO(BaseModel):
    expiring_soon: int = 0
    expired: int = 0
    bounties_expired: int = 0


class ReminderRecordDTO(BaseModel):
    id: UUID
    instance_id: UUID
    user_id: str
    tier: UrgencyTier
    channel: NotificationChannel
    sent_at: datetime
    delivered: bool
    message_summary: str = ""

    @classmethod
    def from_entity(cls, record: ReminderRecord) -> "ReminderRecordDTO":
        return cls(
            id=record.id,
            instance_id=record.instance_id,
            user_id=record.user_id,
            tier=record.tier,
            channel=record.channel,
            sent_at=record.sent_at,
            delivered=record.delivered,
            message_summary=record.message_summary,
        )


class ReminderStatsDTO(BaseModel):
    period_days: int
    total: int
    delivered: int
    failed: int
    by_type: dict[str, int] = {}


class JobInfoDTO(BaseModel):
    id: str
    next_run_time: datetime | None = None


class JobStatusDTO(BaseModel):
    scheduler_running: bool
    pass_in_progress: bool
    jobs: list[JobInfoDTO] = []
