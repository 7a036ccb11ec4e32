"""Shared FastAPI dependencies for the API routers."""

from fastapi import Depends, HTTPException, Request, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.database import get_db
from reelfolio.schemas.admin import AdminIdentity
from reelfolio.services.admin_auth import validate_session
from reelfolio.services.film_editor import IncomingFile
from reelfolio.services.film_repository import FilmRepository
from reelfolio.services.mailer import MailerSendClient
from reelfolio.services.storage import StorageClient


def get_film_repository(db: AsyncSession = Depends(get_db)) -> FilmRepository:
    return FilmRepository(db)


def get_storage() -> StorageClient:
    return StorageClient()


def get_mailer() -> MailerSendClient:
    return MailerSendClient()


async def require_admin(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AdminIdentity:
    """Reject the request unless it carries a valid, unexpired admin session."""
    identity = await validate_session(db, request.session)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin session missing or expired",
        )
    return identity


async def read_upload(upload: UploadFile) -> IncomingFile:
    content = await upload.read()
    return IncomingFile(
        filename=upload.filename or "upload",
        content=content,
        content_type=upload.content_type,
    )


def validation_error(exc: ValidationError) -> HTTPException:
    """422 with a JSON-safe summary of pydantic errors."""
    detail = [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)
