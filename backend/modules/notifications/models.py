"""
Notifications module data models.
"""

from pydantic import BaseModel


class Recipient(BaseModel):
    """Who an account email is addressed to."""

    email: str
    first_name: str
    last_name: str = ""

    model_config = {"frozen": True}


class EmailContent(BaseModel):
    """A rendered email, ready for the transport."""

    subject: str
    html_body: str
    text_body: str
