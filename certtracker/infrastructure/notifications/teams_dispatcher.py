import httpx
import structlog

from ...application.ports.outbound import NotificationDispatcher
from ...domain.entities import NotificationChannel, ReminderPayload
from .templates import TIER_STYLES, remaining_label, render_subject

logger = structlog.get_logger()


class TeamsWebhookDispatcher(NotificationDispatcher):
    """Microsoft Teams incoming-webhook dispatcher."""

    def __init__(self, webhook_url: str, frontend_url: str, timeout: float = 10.0) -> None:
        self._webhook_url = webhook_url
        self._frontend_url = frontend_url
        self._timeout = timeout

    @property
    def channel(self) -> NotificationChannel:
        return NotificationChannel.TEAMS

    def build_card(self, payload: ReminderPayload) -> dict:
        style = TIER_STYLES[payload.urgency_tier]
        actions = [
            {
                "@type": "OpenUri",
                "name": "View My Certifications",
                "targets": [
                    {"os": "default", "uri": f"{self._frontend_url.rstrip('/')}/certifications"}
                ],
            }
        ]
        if payload.renewal_url:
            actions.append(
                {
                    "@type": "OpenUri",
                    "name": "Renewal Information",
                    "targets": [{"os": "default", "uri": payload.renewal_url}],
                }
            )

        return {
            "@type": "MessageCard",
            "@context": "https://schema.org/extensions",
            "themeColor": style.color.lstrip("#"),
            "summary": render_subject(payload),
            "sections": [
                {
                    "activityTitle": render_subject(payload),
                    "activitySubtitle": f"For {payload.recipient_name} ({payload.recipient_email})",
                    "facts": [
                        {"name": "Vendor", "value": payload.vendor},
                        {"name": "Expiration Date", "value": payload.expiration_date.isoformat()},
                        {"name": "Status", "value": remaining_label(payload.days_until_expiration)},
                    ],
                    "text": style.headline,
                }
            ],
            "potentialAction": actions,
        }

    async def send(self, payload: ReminderPayload) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._webhook_url, json=self.build_card(payload))
                response.raise_for_status()

            logger.info(
                "Reminder posted to Teams",
                instance_id=str(payload.instance_id),
                tier=payload.urgency_tier.value,
            )
            return True

        except httpx.HTTPStatusError as e:
            logger.error(
                "Teams delivery failed",
                error=f"Teams webhook error: {e.response.status_code}",
                instance_id=str(payload.instance_id),
            )
            return False
        except httpx.HTTPError as e:
            logger.error(
                "Teams delivery failed",
                error=str(e),
                instance_id=str(payload.instance_id),
            )
            return False
