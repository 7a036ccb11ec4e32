"""MailerSend client for contact-form notifications."""

import logging
from typing import Any

import httpx

from reelfolio.config import settings
from reelfolio.utils.markup import escape_html

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; color: #333;">
  <h2 style="color: #d4af37; margin-bottom: 20px;">New Contact Form Submission</h2>
  <div style="background-color: #f5f5f5; padding: 20px; border-radius: 8px; margin-bottom: 20px;">
    <p style="margin: 10px 0;"><strong>Name:</strong> {name}</p>
    <p style="margin: 10px 0;"><strong>Email:</strong> {email}</p>
    <p style="margin: 10px 0;"><strong>Message:</strong></p>
    <p style="white-space: pre-wrap; word-wrap: break-word;">{message}</p>
  </div>
  <p style="color: #666; font-size: 12px; margin-top: 20px;">
    This is an automated notification from your portfolio website.
  </p>
</div>
"""

TEXT_TEMPLATE = "New Contact Form Submission\n\nName: {name}\nEmail: {email}\n\nMessage:\n{message}"


class EmailDeliveryError(Exception):
    """The email provider refused or failed to accept the message."""


def build_contact_email(name: str, email: str, message: str) -> dict[str, Any]:
    """
    Build the MailerSend request body for a contact submission.

    All submitter values are HTML-escaped before going into the HTML part.
    The plain-text part carries them verbatim. Replies go to the submitter.
    """
    return {
        "from": {"email": settings.mail_from_email, "name": settings.mail_from_name},
        "to": [{"email": settings.mail_to_email, "name": settings.mail_to_name}],
        "subject": f"New Contact Form Submission from {name}",
        "html": HTML_TEMPLATE.format(
            name=escape_html(name),
            email=escape_html(email),
            message=escape_html(message),
        ),
        "text": TEXT_TEMPLATE.format(name=name, email=email, message=message),
        "reply_to": {"email": email, "name": name},
    }


class MailerSendClient:
    """Client for the MailerSend email API."""

    API_URL = "https://api.mailersend.com/v1/email"

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key or settings.mailersend_api_key

    async def send_contact_notification(self, name: str, email: str, message: str) -> None:
        """
        Relay a contact submission to the site owner.

        A single attempt is made; there is no retry.

        Raises:
            EmailDeliveryError: If the request fails or MailerSend answers
                with a non-2xx status. The upstream error message is kept.
        """
        payload = build_contact_email(name, email, message)

        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
                response = await client.post(
                    self.API_URL,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            logger.error(f"MailerSend request failed: {e}")
            raise EmailDeliveryError(str(e) or "Failed to reach MailerSend") from e

        if response.status_code >= 400:
            detail = _error_message(response)
            logger.error(f"MailerSend API error ({response.status_code}): {detail}")
            raise EmailDeliveryError(detail)

        logger.info("Contact notification sent via MailerSend")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Failed to send email via MailerSend"
