"""Admin login, logout and session endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.api.deps import require_admin
from reelfolio.database import get_db
from reelfolio.schemas.admin import AdminIdentity, LoginRequest
from reelfolio.services.admin_auth import (
    InvalidCredentialsError,
    clear_session,
    issue_session,
    verify_credentials,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/admin/login", response_model=AdminIdentity)
async def login(
    credentials: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AdminIdentity:
    """Check email/password and start a signed, expiring admin session."""
    try:
        admin = await verify_credentials(db, credentials.email, credentials.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials. Please try again.",
        )
    return issue_session(request.session, admin)


@router.post("/admin/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request) -> None:
    clear_session(request.session)


@router.get("/admin/session", response_model=AdminIdentity)
async def current_session(admin: AdminIdentity = Depends(require_admin)) -> AdminIdentity:
    """The admin behind the current session; 401 if there isn't a valid one."""
    return admin
