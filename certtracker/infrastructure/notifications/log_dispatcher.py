import structlog

from ...application.ports.outbound import NotificationDispatcher
from ...domain.entities import NotificationChannel, ReminderPayload
from .templates import render_subject

logger = structlog.get_logger()


class LogDispatcher(NotificationDispatcher):
    """Writes reminders to the log instead of sending them. For development."""

    @property
    def channel(self) -> NotificationChannel:
        return NotificationChannel.LOG

    async def send(self, payload: ReminderPayload) -> bool:
        logger.info(
            "Reminder (log only)",
            subject=render_subject(payload),
            instance_id=str(payload.instance_id),
            tier=payload.urgency_tier.value,
            days_until_expiration=payload.days_until_expiration,
        )
        return True
