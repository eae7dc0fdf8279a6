from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import Enum
from uuid import UUID, uuid4

from ..value_objects import UrgencyTier


class NotificationChannel(str, Enum):
    EMAIL = "EMAIL"
    TEAMS = "TEAMS"
    LOG = "LOG"


@dataclass(frozen=True)
class Recipient:
    """Contact details and alert preferences of a certification holder."""

    user_id: str
    email: str
    first_name: str
    last_name: str
    email_enabled: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ReminderPayload:
    """Everything the dispatcher needs to format and send one reminder."""

    instance_id: UUID
    recipient_email: str
    recipient_name: str
    certification_name: str
    vendor: str
    expiration_date: date
    days_until_expiration: int
    urgency_tier: UrgencyTier
    renewal_url: str | None = None
    certificate_number: str | None = None


@dataclass
class ReminderRecord:
    """Notification ledger entry, written for every attempt."""

    id: UUID
    instance_id: UUID
    user_id: str
    tier: UrgencyTier
    channel: NotificationChannel
    sent_at: datetime
    delivered: bool
    message_summary: str = ""

    @classmethod
    def create(
        cls,
        instance_id: UUID,
        user_id: str,
        tier: UrgencyTier,
        channel: NotificationChannel,
        delivered: bool,
        message_summary: str = "",
        sent_at: datetime | None = None,
    ) -> "ReminderRecord":
        return cls(
            id=uuid4(),
            instance_id=instance_id,
            user_id=user_id,
            tier=tier,
            channel=channel,
            sent_at=sent_at or datetime.now(UTC),
            delivered=delivered,
            message_summary=message_summary,
        )


@dataclass
class ReminderStats:
    total: int = 0
    delivered: int = 0
    failed: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
