"""Tests for the account notification service and templates."""

import pytest

from fakes import FakeMailTransport
from modules.notifications.models import Recipient
from modules.notifications.service import NotificationService
from modules.notifications.templates import render_verification_email
from shared.config import Settings


@pytest.fixture
def transport():
    return FakeMailTransport()


@pytest.fixture
def service(transport):
    settings = Settings(_env_file=None, frontend_url="https://app.example.com/")
    return NotificationService(transport, settings)


@pytest.fixture
def recipient():
    return Recipient(email="jane@example.com", first_name="Jane", last_name="Doe")


class TestNotificationService:
    @pytest.mark.asyncio
    async def test_verification_email_links_to_frontend(self, service, transport, recipient):
        await service.send_verification_email(recipient, "abc123")

        message = transport.sent[-1]
        assert message["to"] == "jane@example.com"
        assert message["subject"] == "Verify Your W.E.T Account Email"
        assert "https://app.example.com/verify-email?token=abc123" in message["text"]
        assert "24 hours" in message["text"]

    @pytest.mark.asyncio
    async def test_password_reset_email(self, service, transport, recipient):
        await service.send_password_reset_email(recipient, "def456")

        message = transport.sent[-1]
        assert message["subject"] == "Reset Your W.E.T Account Password"
        assert "https://app.example.com/reset-password?token=def456" in message["text"]
        assert "1 hour" in message["text"]

    @pytest.mark.asyncio
    async def test_welcome_email(self, service, transport, recipient):
        message_id = await service.send_welcome_email(recipient)

        assert transport.sent[-1]["message_id"] == message_id
        assert "https://app.example.com/login" in transport.sent[-1]["text"]


class TestTemplates:
    def test_html_escapes_names(self):
        recipient = Recipient(email="x@example.com", first_name="<script>")
        content = render_verification_email(recipient, "https://app.example.com/v?token=t", 24)

        assert "<script>" not in content.html_body
        assert "&lt;script&gt;" in content.html_body
