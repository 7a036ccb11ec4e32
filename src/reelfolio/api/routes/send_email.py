"""Email relay endpoint used by the contact page."""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from reelfolio.api.deps import get_mailer
from reelfolio.services.mailer import EmailDeliveryError, MailerSendClient

logger = logging.getLogger(__name__)
router = APIRouter()

REQUIRED_FIELDS = ("name", "email", "message")


@router.post("/send-email")
async def send_email(
    request: Request,
    mailer: MailerSendClient = Depends(get_mailer),
) -> JSONResponse:
    """
    Relay a contact submission through MailerSend.

    Body: ``{"name", "email", "message"}``, all non-empty strings.

    Returns:
        200 ``{"success": true, "message"}`` on delivery,
        400 ``{"error": "Missing required fields"}`` for an incomplete body,
        500 ``{"error", "details"}`` when MailerSend fails
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None

    if not isinstance(body, dict) or not all(
        isinstance(body.get(field), str) and body.get(field) for field in REQUIRED_FIELDS
    ):
        return JSONResponse(status_code=400, content={"error": "Missing required fields"})

    try:
        await mailer.send_contact_notification(body["name"], body["email"], body["message"])
    except EmailDeliveryError as e:
        logger.error(f"Error sending email: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to send email", "details": str(e) or "Unknown error"},
        )

    return JSONResponse(content={"success": True, "message": "Email sent successfully"})


@router.api_route(
    "/send-email",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def send_email_wrong_method() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})
