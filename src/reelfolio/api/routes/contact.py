"""Public contact form endpoint."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.api.deps import get_mailer
from reelfolio.database import get_db
from reelfolio.schemas.contact import ContactCreate, ContactSubmitResponse
from reelfolio.services.contact import notify_owner, save_message
from reelfolio.services.mailer import MailerSendClient

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/contact",
    response_model=ContactSubmitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_contact(
    data: ContactCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    mailer: MailerSendClient = Depends(get_mailer),
) -> ContactSubmitResponse:
    """
    Store a contact message, then notify the owner by email.

    The message is committed before the response is built. The email is a
    background task after the response; if it fails the submitter still
    gets a success response because their message is saved.
    """
    message = await save_message(db, data)
    background_tasks.add_task(notify_owner, message.name, message.email, message.message, mailer)
    return ContactSubmitResponse(success=True, message="Thank you! Your message has been sent.")
