"""Public film endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.api.deps import get_film_repository
from reelfolio.database import get_db
from reelfolio.models.film import Film
from reelfolio.schemas.film import FilmPage, FilmSummary
from reelfolio.services.film_presenter import present_film
from reelfolio.services.film_repository import FilmRepository
from reelfolio.services.site_settings import SettingsMissingError, get_settings

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/films", response_model=list[FilmSummary])
async def list_films(repo: FilmRepository = Depends(get_film_repository)) -> list[Film]:
    """All films for the filmography page, newest release first."""
    return await repo.list_films()


@router.get("/films/featured", response_model=list[FilmSummary])
async def list_featured_films(
    db: AsyncSession = Depends(get_db),
    repo: FilmRepository = Depends(get_film_repository),
) -> list[Film]:
    """
    Featured films for the homepage.

    Empty when the featured section is switched off in site settings.
    """
    try:
        site = await get_settings(db)
    except SettingsMissingError:
        logger.warning("Site settings not seeded; showing featured films by default")
    else:
        if not site.show_featured_section:
            return []
    return await repo.list_featured()


@router.get("/films/{slug}", response_model=FilmPage)
async def get_film_page(
    slug: str,
    repo: FilmRepository = Depends(get_film_repository),
) -> FilmPage:
    """Everything shown on a film's detail page. 404 if the slug is unknown."""
    film = await repo.get_by_slug(slug)
    if film is None:
        raise HTTPException(status_code=404, detail="Film not found")
    return present_film(film)
