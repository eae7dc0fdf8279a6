import structlog
from aiobotocore.session import get_session
from botocore.exceptions import BotoCoreError, ClientError

from ...application.ports.outbound import NotificationDispatcher
from ...domain.entities import NotificationChannel, ReminderPayload
from .templates import render_reminder

logger = structlog.get_logger()

CHARSET = "UTF-8"


class SesEmailDispatcher(NotificationDispatcher):
    """Renewal reminders as multipart (HTML + text) SES e-mails."""

    def __init__(
        self,
        sender_email: str,
        frontend_url: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
    ) -> None:
        self._sender_email = sender_email
        self._frontend_url = frontend_url
        self._client_kwargs = {"region_name": region, "endpoint_url": endpoint_url}
        self._session = get_session()

    @property
    def channel(self) -> NotificationChannel:
        return NotificationChannel.EMAIL

    def _message(self, payload: ReminderPayload) -> dict:
        rendered = render_reminder(payload, self._frontend_url)
        return {
            "Subject": {"Data": rendered.subject, "Charset": CHARSET},
            "Body": {
                "Html": {"Data": rendered.html, "Charset": CHARSET},
                "Text": {"Data": rendered.text, "Charset": CHARSET},
            },
        }

    async def send(self, payload: ReminderPayload) -> bool:
        log = logger.bind(
            instance_id=str(payload.instance_id),
            tier=payload.urgency_tier.value,
            days_left=payload.days_until_expiration,
        )
        try:
            async with self._session.create_client("ses", **self._client_kwargs) as client:
                response = await client.send_email(
                    Source=self._sender_email,
                    Destination={"ToAddresses": [payload.recipient_email]},
                    Message=self._message(payload),
                )
        except (ClientError, BotoCoreError) as e:
            log.error("Reminder email delivery failed", error=str(e))
            return False

        log.info("Reminder email sent", message_id=response.get("MessageId"))
        return True
