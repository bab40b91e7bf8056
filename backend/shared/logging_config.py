"""
Logging setup.

Modules log through logging.getLogger(__name__); the entry point calls
configure_logging() once.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single stream handler."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def redact_email(email: str) -> str:
    """Redact an email address for logging to avoid PII leakage."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"
