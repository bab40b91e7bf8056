"""
Notifications module.

Outbound transactional email: the mail transport and the verification,
password-reset and welcome messages.

Public API:
- IMailTransport: Interface for delivering one email
- INotificationService: Interface for the account emails
- EmailContent: Rendered subject and bodies
- MailDeliveryError: Raised when an email could not be delivered
"""

from .interfaces import IMailTransport, INotificationService
from .models import EmailContent, Recipient
from .exceptions import MailDeliveryError

__all__ = [
    # Interfaces
    "IMailTransport",
    "INotificationService",
    # Models
    "EmailContent",
    "Recipient",
    # Exceptions
    "MailDeliveryError",
]
