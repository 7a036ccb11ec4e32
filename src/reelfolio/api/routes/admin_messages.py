"""Admin inbox and dashboard endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.api.deps import get_film_repository, require_admin
from reelfolio.database import get_db
from reelfolio.models.contact_message import ContactMessage
from reelfolio.schemas.admin import DashboardResponse
from reelfolio.schemas.contact import ContactMessageResponse
from reelfolio.services.contact import count_messages, delete_message, list_messages
from reelfolio.services.film_repository import FilmRepository

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/admin/messages", response_model=list[ContactMessageResponse])
async def inbox(db: AsyncSession = Depends(get_db)) -> list[ContactMessage]:
    """Contact messages, newest first."""
    return await list_messages(db)


@router.delete("/admin/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_message(message_id: str, db: AsyncSession = Depends(get_db)) -> None:
    if not await delete_message(db, message_id):
        raise HTTPException(status_code=404, detail="Message not found")


@router.get("/admin/dashboard", response_model=DashboardResponse)
async def dashboard(
    db: AsyncSession = Depends(get_db),
    repo: FilmRepository = Depends(get_film_repository),
) -> DashboardResponse:
    messages, latest = await count_messages(db)
    return DashboardResponse(
        films=await repo.count(),
        featured_films=await repo.count(featured_only=True),
        messages=messages,
        latest_message_at=latest,
    )
