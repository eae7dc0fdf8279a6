from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import httpx
import pytest
from botocore.exceptions import ClientError

from certtracker.config import Settings
from certtracker.domain.entities import NotificationChannel, ReminderPayload
from certtracker.domain.value_objects import UrgencyTier
from certtracker.infrastructure.notifications import (
    LogDispatcher,
    SesEmailDispatcher,
    TeamsWebhookDispatcher,
    create_dispatcher,
    render_reminder,
)
from certtracker.infrastructure.notifications.templates import render_subject


def make_payload(tier: UrgencyTier = UrgencyTier.CRITICAL, days: int = 5) -> ReminderPayload:
    return ReminderPayload(
        instance_id=uuid4(),
        recipient_email="alice@example.com",
        recipient_name="Alice <Smith>",
        certification_name="AWS Solutions Architect Professional (SAP-C02)",
        vendor="AWS",
        expiration_date=date(2024, 6, 6),
        days_until_expiration=days,
        urgency_tier=tier,
        renewal_url="https://aws.amazon.com/certification/recertification/",
        certificate_number="AWS-123",
    )


class TestTemplates:
    def test_subject_per_tier(self):
        assert render_subject(make_payload()) == (
            "🔥 CRITICAL: AWS Solutions Architect Professional (SAP-C02) expires in 5 days"
        )
        assert render_subject(make_payload(UrgencyTier.PLANNING, 360)).endswith(
            "expires in 1 year"
        )
        assert render_subject(make_payload(UrgencyTier.EXPIRED, -2)).endswith("has expired")

    def test_html_is_escaped_and_links_present(self):
        rendered = render_reminder(make_payload(), "https://certs.example.com/")

        assert "Alice &lt;Smith&gt;" in rendered.html
        assert "https://certs.example.com/certifications" in rendered.html
        assert "https://certs.example.com/settings" in rendered.html
        assert "Renewal Information" in rendered.html
        assert "5 days remaining" in rendered.html

    def test_text_body(self):
        rendered = render_reminder(make_payload(UrgencyTier.EXPIRED, 0), "http://localhost:3000")

        assert "has expired on June 6, 2024" in rendered.text
        assert "Renewal information: https://aws.amazon.com" in rendered.text


class TestSesEmailDispatcher:
    @pytest.fixture
    def dispatcher(self):
        return SesEmailDispatcher(
            sender_email="noreply@example.com",
            frontend_url="http://localhost:3000",
            region="us-east-1",
        )

    @pytest.mark.asyncio
    async def test_send_success(self, dispatcher):
        with patch.object(dispatcher, "_session") as mock_session:
            mock_client = AsyncMock()
            mock_client.send_email = AsyncMock(return_value={"MessageId": "ses-msg-123"})
            mock_session.create_client.return_value.__aenter__.return_value = mock_client

            result = await dispatcher.send(make_payload())

        assert result is True
        kwargs = mock_client.send_email.call_args.kwargs
        assert kwargs["Source"] == "noreply@example.com"
        assert kwargs["Destination"] == {"ToAddresses": ["alice@example.com"]}
        assert "CRITICAL" in kwargs["Message"]["Subject"]["Data"]

    @pytest.mark.asyncio
    async def test_send_failure_returns_false(self, dispatcher):
        with patch.object(dispatcher, "_session") as mock_session:
            mock_client = AsyncMock()
            mock_client.send_email = AsyncMock(
                side_effect=ClientError(
                    {"Error": {"Code": "Throttling", "Message": "Rate exceeded"}}, "SendEmail"
                )
            )
            mock_session.create_client.return_value.__aenter__.return_value = mock_client

            result = await dispatcher.send(make_payload())

        assert result is False

    def test_channel(self, dispatcher):
        assert dispatcher.channel == NotificationChannel.EMAIL


class TestTeamsWebhookDispatcher:
    @pytest.fixture
    def dispatcher(self):
        return TeamsWebhookDispatcher(
            webhook_url="https://example.webhook.office.com/hook",
            frontend_url="http://localhost:3000",
        )

    def test_card(self, dispatcher):
        card = dispatcher.build_card(make_payload())

        assert card["@type"] == "MessageCard"
        assert card["themeColor"] == "dc3545"
        assert len(card["potentialAction"]) == 2

    @pytest.mark.asyncio
    async def test_send_success(self, dispatcher):
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(return_value=mock_response)
            mock_client.return_value.__aenter__.return_value.post = post

            result = await dispatcher.send(make_payload())

        assert result is True
        assert post.call_args.args[0] == "https://example.webhook.office.com/hook"

    @pytest.mark.asyncio
    async def test_send_http_error(self, dispatcher):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                side_effect=httpx.HTTPStatusError(
                    "Error",
                    request=MagicMock(),
                    response=MagicMock(status_code=400),
                )
            )

            result = await dispatcher.send(make_payload())

        assert result is False

    @pytest.mark.asyncio
    async def test_send_connection_error(self, dispatcher):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                side_effect=httpx.ConnectError("refused")
            )

            result = await dispatcher.send(make_payload())

        assert result is False


class TestDispatcherFactory:
    def test_log_default(self):
        dispatcher = create_dispatcher(Settings(notification_channel="log"))

        assert isinstance(dispatcher, LogDispatcher)

    def test_email(self):
        dispatcher = create_dispatcher(Settings(notification_channel="email"))

        assert dispatcher.channel == NotificationChannel.EMAIL

    def test_teams_requires_url(self):
        with pytest.raises(ValueError):
            create_dispatcher(Settings(notification_channel="teams", teams_webhook_url=None))

    def test_unknown_channel(self):
        with pytest.raises(ValueError):
            create_dispatcher(Settings(notification_channel="pager"))

    @pytest.mark.asyncio
    async def test_log_dispatcher_always_delivers(self):
        assert await LogDispatcher().send(make_payload()) is True
