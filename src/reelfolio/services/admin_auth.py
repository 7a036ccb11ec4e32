"""Admin credential checks and server-validated admin sessions."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.config import settings
from reelfolio.models.admin_user import AdminUser
from reelfolio.schemas.admin import AdminIdentity

logger = logging.getLogger(__name__)

SESSION_KEY = "admin"

# Compared against when the email is unknown so both failure paths cost a hash check
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt()).decode()


class InvalidCredentialsError(Exception):
    def __init__(self) -> None:
        super().__init__("Invalid credentials")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        logger.warning("Stored admin password hash is malformed")
        return False


async def verify_credentials(db: AsyncSession, email: str, password: str) -> AdminUser:
    """
    Look up an admin by email and check the password.

    Unknown email and wrong password raise the same error so the login
    form can't be used to discover admin accounts.

    Raises:
        InvalidCredentialsError: If the email/password pair doesn't match
    """
    stmt = select(AdminUser).where(func.lower(AdminUser.email) == email.strip().lower())
    result = await db.execute(stmt)
    admin = result.scalar_one_or_none()

    if admin is None:
        check_password(password, _DUMMY_HASH)
        logger.info("Admin login failed: unknown email")
        raise InvalidCredentialsError()

    if not check_password(password, admin.password_hash):
        logger.info(f"Admin login failed for {admin.id}: wrong password")
        raise InvalidCredentialsError()

    return admin


def issue_session(session: dict[str, Any], admin: AdminUser) -> AdminIdentity:
    """Record a fresh login in the signed session cookie."""
    identity = AdminIdentity(
        id=admin.id,
        email=admin.email,
        name=admin.name,
        logged_in_at=datetime.now(timezone.utc),
    )
    session[SESSION_KEY] = identity.model_dump(mode="json")
    logger.info(f"Admin {admin.id} logged in")
    return identity


def clear_session(session: dict[str, Any]) -> None:
    session.pop(SESSION_KEY, None)


async def validate_session(
    db: AsyncSession,
    session: dict[str, Any],
    max_age: int | None = None,
) -> AdminIdentity | None:
    """
    Return the admin behind a session, or None if it shouldn't be trusted.

    The cookie signature is checked by ``SessionMiddleware`` before this
    runs. Here the session must also be well-formed, younger than
    ``max_age`` seconds and belong to an admin that still exists with the
    same email. Rejected sessions are cleared.
    """
    raw = session.get(SESSION_KEY)
    if not raw:
        return None

    try:
        identity = AdminIdentity.model_validate(raw)
    except ValidationError:
        logger.warning("Discarding malformed admin session")
        clear_session(session)
        return None

    max_age = settings.admin_session_max_age if max_age is None else max_age
    logged_in_at = identity.logged_in_at
    if logged_in_at.tzinfo is None:
        logged_in_at = logged_in_at.replace(tzinfo=timezone.utc)
    if datetime.now(timezone.utc) - logged_in_at > timedelta(seconds=max_age):
        logger.info(f"Admin session for {identity.id} expired")
        clear_session(session)
        return None

    admin = await db.get(AdminUser, identity.id)
    if admin is None or admin.email != identity.email:
        logger.warning(f"Admin session for {identity.id} no longer matches an admin")
        clear_session(session)
        return None

    return identity
