"""
Account notification service.

Renders the account emails and hands them to the mail transport.
"""

from urllib.parse import urlencode

from shared.config import Settings

from .interfaces import IMailTransport, INotificationService
from .models import EmailContent, Recipient
from .templates import (
    render_password_reset_email,
    render_verification_email,
    render_welcome_email,
)


class NotificationService(INotificationService):
    """
    Implementation of the account notification service.

    Links point at the frontend, which posts the token back to the API.
    """

    def __init__(self, transport: IMailTransport, settings: Settings):
        self._transport = transport
        self._settings = settings

    def _frontend_link(self, path: str, **params: str) -> str:
        base = self._settings.frontend_url.rstrip("/")
        query = f"?{urlencode(params)}" if params else ""
        return f"{base}/{path}{query}"

    async def _deliver(self, recipient: Recipient, content: EmailContent) -> str:
        return await self._transport.send(
            recipient.email, content.subject, content.html_body, content.text_body
        )

    async def send_verification_email(self, recipient: Recipient, token: str) -> str:
        content = render_verification_email(
            recipient,
            self._frontend_link("verify-email", token=token),
            self._settings.verification_token_ttl_hours,
        )
        return await self._deliver(recipient, content)

    async def send_password_reset_email(self, recipient: Recipient, token: str) -> str:
        content = render_password_reset_email(
            recipient,
            self._frontend_link("reset-password", token=token),
            self._settings.password_reset_token_ttl_hours,
        )
        return await self._deliver(recipient, content)

    async def send_welcome_email(self, recipient: Recipient) -> str:
        content = render_welcome_email(recipient, self._frontend_link("login"))
        return await self._deliver(recipient, content)
