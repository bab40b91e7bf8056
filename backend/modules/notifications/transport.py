"""
SMTP mail transport.

Supports SMTP with STARTTLS or implicit SSL. When no SMTP host is
configured (local development) messages are logged instead of sent.
"""

import logging
import smtplib
import ssl
import uuid
from contextlib import contextmanager
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Iterator, Optional

from shared.config import Settings
from shared.external import call_external
from shared.logging_config import redact_email

from .interfaces import IMailTransport
from .exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


class SmtpMailTransport(IMailTransport):
    """Deliver email over SMTP, bounded by the external-call timeout."""

    SERVICE_NAME = "smtp"

    def __init__(
        self,
        *,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        smtp_use_tls: bool = True,
        from_email: Optional[str] = None,
        from_name: str = "W.E.T Team",
        timeout: float = 10.0,
    ) -> None:
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.from_email = from_email or smtp_user
        self.from_name = from_name
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailTransport":
        return cls(
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            smtp_user=settings.smtp_user,
            smtp_password=settings.smtp_password,
            smtp_use_tls=settings.smtp_use_tls,
            from_email=settings.email_from,
            from_name=settings.email_from_name,
            timeout=settings.external_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        """Check if email sending is properly configured."""
        return bool(self.smtp_host and self.from_email)

    async def send(
        self, to_address: str, subject: str, html_body: str, text_body: str
    ) -> str:
        if not self.is_configured:
            # Dev mode: log the email instead of sending
            message_id = f"<dev-{uuid.uuid4().hex}@localhost>"
            logger.warning(
                f"Email not sent (SMTP not configured) to={redact_email(to_address)} "
                f"subject={subject!r}"
            )
            return message_id

        message = self._build_message(to_address, subject, html_body, text_body)
        await call_external(
            self.SERVICE_NAME,
            "sendmail",
            self._deliver,
            to_address,
            message,
            timeout=self.timeout,
        )
        logger.info(f"Email sent to={redact_email(to_address)} subject={subject!r}")
        return message["Message-ID"]

    async def health_check(self) -> bool:
        if not self.is_configured:
            return True

        def _noop() -> bool:
            with self._connect() as server:
                server.noop()
            return True

        return await call_external(
            self.SERVICE_NAME, "noop", _noop, timeout=self.timeout
        )

    def _build_message(
        self, to_address: str, subject: str, html_body: str, text_body: str
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.from_name, self.from_email))
        msg["To"] = to_address
        msg["Message-ID"] = make_msgid()
        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))
        return msg

    @contextmanager
    def _connect(self) -> Iterator[smtplib.SMTP]:
        """Open an authenticated session; the socket is closed on any error."""
        context = ssl.create_default_context()
        if self.smtp_use_tls:
            server = smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout)
        else:
            server = smtplib.SMTP_SSL(
                self.smtp_host, self.smtp_port, context=context, timeout=self.timeout
            )
        with server:
            if self.smtp_use_tls:
                server.starttls(context=context)
            if self.smtp_user and self.smtp_password:
                server.login(self.smtp_user, self.smtp_password)
            yield server

    def _deliver(self, to_address: str, message: MIMEMultipart) -> None:
        try:
            with self._connect() as server:
                server.sendmail(self.from_email, to_address, message.as_string())
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP authentication failed: {e}")
            raise MailDeliveryError(reason="authentication_failed")
        except smtplib.SMTPRecipientsRefused:
            logger.warning(f"SMTP refused recipient {redact_email(to_address)}")
            raise MailDeliveryError(reason="recipient_refused")
        except smtplib.SMTPException as e:
            logger.error(f"SMTP error: {e}")
            raise MailDeliveryError(reason="smtp_error")
