"""Builds the notification dispatcher selected by configuration."""

from ...application.ports.outbound import NotificationDispatcher
from ...config import Settings
from .email_dispatcher import SesEmailDispatcher
from .log_dispatcher import LogDispatcher
from .teams_dispatcher import TeamsWebhookDispatcher


def create_dispatcher(settings: Settings) -> NotificationDispatcher:
    match settings.notification_channel.lower():
        case "email":
            return SesEmailDispatcher(
                sender_email=settings.ses_sender_email,
                frontend_url=settings.frontend_url,
                region=settings.aws_region,
                endpoint_url=settings.aws_endpoint_url,
            )
        case "teams":
            if not settings.teams_webhook_url:
                raise ValueError("TEAMS_WEBHOOK_URL is required for the teams channel")
            return TeamsWebhookDispatcher(
                webhook_url=settings.teams_webhook_url,
                frontend_url=settings.frontend_url,
            )
        case "log":
            return LogDispatcher()
        case _:
            raise ValueError(
                f"Unsupported notification channel: {settings.notification_channel}"
            )
