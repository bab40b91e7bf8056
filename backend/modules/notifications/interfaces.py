"""
Notifications module interfaces.
"""

from typing import Protocol, runtime_checkable

from .models import Recipient


@runtime_checkable
class IMailTransport(Protocol):
    """Contract for the outbound mail collaborator."""

    async def send(
        self, to_address: str, subject: str, html_body: str, text_body: str
    ) -> str:
        """
        Deliver one email.

        Returns:
            The message ID

        Raises:
            MailDeliveryError: If the message was rejected
            ExternalServiceError: If the transport is unreachable or timed out
        """
        ...

    async def health_check(self) -> bool:
        """Return True if the transport is usable."""
        ...


@runtime_checkable
class INotificationService(Protocol):
    """
    Account emails.

    These methods propagate delivery failures; callers decide whether a
    failure is swallowed or surfaced.
    """

    async def send_verification_email(self, recipient: Recipient, token: str) -> str:
        ...

    async def send_password_reset_email(self, recipient: Recipient, token: str) -> str:
        ...

    async def send_welcome_email(self, recipient: Recipient) -> str:
        ...
