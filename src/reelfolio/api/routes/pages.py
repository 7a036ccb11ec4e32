"""Server-rendered public film page."""

from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from reelfolio.api.deps import get_film_repository
from reelfolio.config import settings
from reelfolio.services.film_presenter import Lightbox, present_film
from reelfolio.services.film_repository import FilmRepository

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


@router.get("/films/{slug}", response_class=HTMLResponse, include_in_schema=False)
async def film_page(
    request: Request,
    slug: str,
    still: int | None = Query(default=None, description="Gallery image to open in the lightbox"),
    repo: FilmRepository = Depends(get_film_repository),
) -> HTMLResponse:
    """
    Render a film's detail page.

    ``?still=N`` opens the lightbox on gallery image N, with previous/next
    links that wrap around the ends of the gallery.
    """
    film = await repo.get_by_slug(slug)
    if film is None:
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"site_name": settings.site_name},
            status_code=404,
        )

    page = present_film(film)
    lightbox = Lightbox(page.gallery)
    if still is not None and page.gallery:
        lightbox.open(still)

    return templates.TemplateResponse(
        request,
        "film_detail.html",
        {
            "page": page,
            "lightbox": lightbox,
            "neighbours": lightbox.neighbours() if lightbox.is_open else None,
            "site_name": settings.site_name,
        },
    )
