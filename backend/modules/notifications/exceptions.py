"""
Notifications module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class MailDeliveryError(ExternalServiceError):
    """Raised when the mail transport fails to deliver a message."""

    def __init__(self, message: str = "Failed to send email", reason: Optional[str] = None):
        super().__init__(
            message,
            service="mail",
            code="MAIL_DELIVERY_FAILED",
            details={"reason": reason} if reason else {},
        )
