"""Tests for the SMTP mail transport."""

import smtplib

import pytest
from unittest.mock import MagicMock, patch

from modules.notifications.exceptions import MailDeliveryError
from modules.notifications.transport import SmtpMailTransport
from shared.config import Settings
from shared.exceptions import ExternalServiceError


def _transport(**overrides) -> SmtpMailTransport:
    values = {
        "smtp_host": "smtp.example.com",
        "smtp_port": 587,
        "smtp_user": "mailer",
        "smtp_password": "secret",
        "from_email": "noreply@example.com",
        "timeout": 1.0,
    }
    values.update(overrides)
    return SmtpMailTransport(**values)


class TestSmtpMailTransport:
    def test_from_settings(self):
        settings = Settings(
            _env_file=None,
            smtp_host="smtp.example.com",
            smtp_user="mailer",
            email_from="noreply@example.com",
        )
        transport = SmtpMailTransport.from_settings(settings)

        assert transport.is_configured is True
        assert transport.from_name == "W.E.T Team"

    def test_from_email_defaults_to_smtp_user(self):
        transport = _transport(from_email=None, smtp_user="mailer@example.com")
        assert transport.from_email == "mailer@example.com"

    @pytest.mark.asyncio
    async def test_dev_mode_logs_instead_of_sending(self, caplog):
        transport = SmtpMailTransport()
        token = "ab" * 32
        link = f"https://app.example.com/reset-password?token={token}"

        with patch("modules.notifications.transport.smtplib.SMTP") as mock_smtp:
            with caplog.at_level("INFO"):
                message_id = await transport.send(
                    "jane@example.com",
                    "Reset your password",
                    f"<a href=\"{link}\">Reset</a>",
                    f"Reset here:\n{link}\n",
                )

        mock_smtp.assert_not_called()
        assert message_id.startswith("<dev-")
        assert "ja***@example.com" in caplog.text
        assert "Reset your password" in caplog.text
        assert "jane@example.com" not in caplog.text
        assert token not in caplog.text

    @pytest.mark.asyncio
    async def test_send_uses_starttls_and_login(self):
        transport = _transport()

        with patch("modules.notifications.transport.smtplib.SMTP") as mock_smtp:
            server = mock_smtp.return_value
            server.__enter__.return_value = server
            message_id = await transport.send("jane@example.com", "Hi", "<p>Hi</p>", "Hi")

        mock_smtp.assert_called_once_with("smtp.example.com", 587, timeout=1.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "secret")
        from_addr, to_addr, body = server.sendmail.call_args[0]
        assert from_addr == "noreply@example.com"
        assert to_addr == "jane@example.com"
        assert "Subject: Hi" in body
        assert message_id

    @pytest.mark.asyncio
    async def test_ssl_when_tls_disabled(self):
        transport = _transport(smtp_use_tls=False, smtp_port=465)

        with patch("modules.notifications.transport.smtplib.SMTP_SSL") as mock_ssl:
            mock_ssl.return_value.__enter__.return_value = mock_ssl.return_value
            await transport.send("jane@example.com", "Hi", "<p>Hi</p>", "Hi")

        assert mock_ssl.call_args[0] == ("smtp.example.com", 465)

    @pytest.mark.asyncio
    async def test_refused_recipient(self):
        transport = _transport()

        with patch("modules.notifications.transport.smtplib.SMTP") as mock_smtp:
            server = mock_smtp.return_value
            server.__enter__.return_value = server
            server.sendmail.side_effect = smtplib.SMTPRecipientsRefused({})

            with pytest.raises(MailDeliveryError) as exc_info:
                await transport.send("jane@example.com", "Hi", "<p>Hi</p>", "Hi")

        assert exc_info.value.details["reason"] == "recipient_refused"
        assert exc_info.value.details["service"] == "mail"

    @pytest.mark.asyncio
    async def test_connection_failure_is_service_unavailable(self):
        transport = _transport()

        with patch(
            "modules.notifications.transport.smtplib.SMTP",
            side_effect=OSError("connection refused"),
        ):
            with pytest.raises(ExternalServiceError) as exc_info:
                await transport.send("jane@example.com", "Hi", "<p>Hi</p>", "Hi")

        assert exc_info.value.code == "SERVICE_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_health_check_unconfigured(self):
        assert await SmtpMailTransport().health_check() is True

    @pytest.mark.asyncio
    async def test_connection_closed_when_starttls_fails(self):
        transport = _transport()

        with patch("modules.notifications.transport.smtplib.SMTP") as mock_smtp:
            server = mock_smtp.return_value
            server.starttls.side_effect = smtplib.SMTPNotSupportedError("no STARTTLS")

            with pytest.raises(MailDeliveryError):
                await transport.send("jane@example.com", "Hi", "<p>Hi</p>", "Hi")

        server.__exit__.assert_called_once()
        server.sendmail.assert_not_called()
