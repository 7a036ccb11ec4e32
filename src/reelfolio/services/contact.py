"""Contact form persistence and the follow-up email notification."""

import logging
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.models.contact_message import ContactMessage
from reelfolio.schemas.contact import ContactCreate
from reelfolio.services.mailer import EmailDeliveryError, MailerSendClient

logger = logging.getLogger(__name__)


async def save_message(db: AsyncSession, data: ContactCreate) -> ContactMessage:
    """
    Store a contact message and commit straight away.

    The stored row is the authoritative record of the submission; the
    email notification is only attempted after this commit succeeds.
    """
    message = ContactMessage(name=data.name, email=str(data.email), message=data.message)
    db.add(message)
    await db.commit()
    await db.refresh(message)
    logger.info(f"Stored contact message {message.id} from {message.email}")
    return message


async def notify_owner(name: str, email: str, message: str, mailer: MailerSendClient | None = None) -> bool:
    """
    Send the owner notification for a stored message.

    Runs as a background task after the response is sent. At most one
    attempt is made and failures are only logged.

    Returns:
        True if MailerSend accepted the email
    """
    mailer = mailer or MailerSendClient()
    try:
        await mailer.send_contact_notification(name, email, message)
    except EmailDeliveryError as e:
        logger.error(f"Contact notification for {email} not sent: {e}")
        return False
    return True


async def list_messages(db: AsyncSession) -> list[ContactMessage]:
    stmt = select(ContactMessage).order_by(ContactMessage.created_at.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_messages(db: AsyncSession) -> tuple[int, datetime | None]:
    """Number of stored messages and the timestamp of the newest one."""
    stmt = select(func.count(ContactMessage.id), func.max(ContactMessage.created_at))
    result = await db.execute(stmt)
    count, latest = result.one()
    return count, latest


async def delete_message(db: AsyncSession, message_id: str) -> bool:
    result = await db.execute(delete(ContactMessage).where(ContactMessage.id == message_id))
    deleted = result.rowcount > 0
    if deleted:
        logger.info(f"Deleted contact message {message_id}")
    return deleted
