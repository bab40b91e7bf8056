"""
Email templates for account notifications.

Each render function returns the subject plus HTML and plain-text bodies.
User-supplied values are HTML-escaped in the HTML body.
"""

from html import escape

from .models import EmailContent, Recipient

PRODUCT_NAME = "W.E.T"
PRODUCT_TAGLINE = "Webcam Eye Tracking"
SIGNATURE = "Best regards,\nThe W.E.T Team"


def _layout(title: str, body_html: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)}</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #0c0f17; color: #ffffff;">
  <div style="max-width: 600px; margin: 0 auto; padding: 40px 20px;">
    <div style="text-align: center; margin-bottom: 40px;">
      <div style="font-size: 32px; font-weight: 700;">{PRODUCT_NAME}</div>
      <div style="color: #8b949e; font-size: 14px;">{PRODUCT_TAGLINE}</div>
    </div>
    <div style="border: 1px solid rgba(255,255,255,0.1); border-radius: 20px; padding: 40px;">
{body_html}
    </div>
  </div>
</body>
</html>"""


def _button(url: str, label: str) -> str:
    return (
        '<div style="text-align: center; margin: 32px 0;">'
        f'<a href="{escape(url, quote=True)}" style="display: inline-block; background: #5865f2; '
        'color: #ffffff; text-decoration: none; padding: 16px 32px; border-radius: 12px; '
        f'font-weight: 600;">{escape(label)}</a></div>'
    )


def render_verification_email(recipient: Recipient, verification_url: str, ttl_hours: int) -> EmailContent:
    name = recipient.first_name
    html_body = _layout(
        f"Verify Your {PRODUCT_NAME} Account",
        f"""      <h1>Verify Your Email Address</h1>
      <p>Hello {escape(name)},</p>
      <p>Welcome to {PRODUCT_NAME}! Please verify your email address to complete your account setup.</p>
      {_button(verification_url, "Verify Email Address")}
      <p>This link will expire in {ttl_hours} hours.</p>
      <p>If you didn't create an account with us, please ignore this email.</p>""",
    )
    text_body = (
        f"Hello {name},\n\n"
        f"Welcome to {PRODUCT_NAME} ({PRODUCT_TAGLINE})!\n\n"
        "Please verify your email address by clicking the link below:\n"
        f"{verification_url}\n\n"
        f"This link will expire in {ttl_hours} hours.\n\n"
        "If you didn't create an account with us, please ignore this email.\n\n"
        f"{SIGNATURE}"
    )
    return EmailContent(
        subject=f"Verify Your {PRODUCT_NAME} Account Email",
        html_body=html_body,
        text_body=text_body,
    )


def render_password_reset_email(recipient: Recipient, reset_url: str, ttl_hours: int) -> EmailContent:
    name = recipient.first_name
    expiry = "1 hour" if ttl_hours == 1 else f"{ttl_hours} hours"
    html_body = _layout(
        f"Reset Your {PRODUCT_NAME} Password",
        f"""      <h1>Reset Your Password</h1>
      <p>Hello {escape(name)},</p>
      <p>You requested to reset your password for your {PRODUCT_NAME} account.</p>
      {_button(reset_url, "Reset Password")}
      <p>This link will expire in {expiry}.</p>
      <p>If you didn't request this password reset, please ignore this email and your password will remain unchanged.</p>""",
    )
    text_body = (
        f"Hello {name},\n\n"
        f"You requested to reset your password for your {PRODUCT_NAME} account.\n\n"
        "Click the link below to reset your password:\n"
        f"{reset_url}\n\n"
        f"This link will expire in {expiry}.\n\n"
        "If you didn't request this password reset, please ignore this email "
        "and your password will remain unchanged.\n\n"
        f"{SIGNATURE}"
    )
    return EmailContent(
        subject=f"Reset Your {PRODUCT_NAME} Account Password",
        html_body=html_body,
        text_body=text_body,
    )


def render_welcome_email(recipient: Recipient, login_url: str) -> EmailContent:
    name = recipient.first_name
    html_body = _layout(
        f"Welcome to {PRODUCT_NAME}",
        f"""      <h1>Your Account is Ready</h1>
      <p>Hello {escape(name)},</p>
      <p>Your account has been successfully verified and is now ready to use.</p>
      {_button(login_url, "Get Started")}
      <p>If you have any questions, don't hesitate to contact our support team.</p>""",
    )
    text_body = (
        f"Hello {name},\n\n"
        f"Welcome to {PRODUCT_NAME} ({PRODUCT_TAGLINE})!\n\n"
        "Your account has been successfully verified and is now ready to use.\n\n"
        f"Get started: {login_url}\n\n"
        "If you have any questions, don't hesitate to contact our support team.\n\n"
        f"{SIGNATURE}"
    )
    return EmailContent(
        subject=f"Welcome to {PRODUCT_NAME} - Your Account is Ready!",
        html_body=html_body,
        text_body=text_body,
    )
