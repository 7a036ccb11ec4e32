"""Admin film management: CRUD, uploads and review/article entries."""

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel, ValidationError

from reelfolio.api.deps import (
    get_film_repository,
    get_storage,
    read_upload,
    require_admin,
    validation_error,
)
from reelfolio.models.film import Film
from reelfolio.schemas.admin import GalleryUploadResponse, UploadFailure
from reelfolio.schemas.film import FilmResponse, FilmWrite
from reelfolio.services.film_editor import FilmEditor, UploadInProgressError
from reelfolio.services.film_repository import (
    FilmNotFoundError,
    FilmRepository,
    SlugConflictError,
)
from reelfolio.services.storage import StorageClient, UploadError

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


class ReviewFields(BaseModel):
    review_title: str | None = None
    reviewer_name: str | None = None
    publication: str | None = None
    review_text: str | None = None
    review_link: str | None = None


class ArticleFields(BaseModel):
    article_title: str | None = None
    source: str | None = None
    date: str | None = None
    article_link: str | None = None


async def _load_editor(repo: FilmRepository, film_id: str, storage: StorageClient | None = None) -> FilmEditor:
    film = await repo.get_by_id(film_id)
    if film is None:
        raise HTTPException(status_code=404, detail="Film not found")
    return FilmEditor.from_record(film, storage)


async def _save(editor: FilmEditor, repo: FilmRepository) -> Film:
    try:
        return await editor.save(repo)
    except ValidationError as e:
        raise validation_error(e)
    except SlugConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UploadInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))


async def _edit(repo: FilmRepository, film_id: str, change: Callable[[FilmEditor], object]) -> Film:
    """Apply one change to a film's working copy and save the whole record."""
    editor = await _load_editor(repo, film_id)
    try:
        change(editor)
    except (KeyError, IndexError) as e:
        raise HTTPException(status_code=404, detail=str(e).strip("'\""))
    return await _save(editor, repo)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@router.get("/admin/films", response_model=list[FilmResponse])
async def list_films(repo: FilmRepository = Depends(get_film_repository)) -> list[Film]:
    return await repo.list_films()


@router.get("/admin/films/{film_id}", response_model=FilmResponse)
async def get_film(film_id: str, repo: FilmRepository = Depends(get_film_repository)) -> Film:
    film = await repo.get_by_id(film_id)
    if film is None:
        raise HTTPException(status_code=404, detail="Film not found")
    return film


@router.post("/admin/films", response_model=FilmResponse, status_code=status.HTTP_201_CREATED)
async def create_film(data: FilmWrite, repo: FilmRepository = Depends(get_film_repository)) -> Film:
    """Create a film. The slug is derived from the title when left blank."""
    try:
        return await repo.save(data)
    except SlugConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/admin/films/{film_id}", response_model=FilmResponse)
async def replace_film(
    film_id: str,
    data: FilmWrite,
    repo: FilmRepository = Depends(get_film_repository),
) -> Film:
    """Replace the whole record. Concurrent edits: the last write wins."""
    try:
        return await repo.save(data, film_id)
    except FilmNotFoundError:
        raise HTTPException(status_code=404, detail="Film not found")
    except SlugConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/admin/films/{film_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_film(film_id: str, repo: FilmRepository = Depends(get_film_repository)) -> None:
    try:
        await repo.delete(film_id)
    except FilmNotFoundError:
        raise HTTPException(status_code=404, detail="Film not found")


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------


@router.post("/admin/films/{film_id}/thumbnail", response_model=FilmResponse)
async def upload_thumbnail(
    film_id: str,
    file: UploadFile = File(...),
    repo: FilmRepository = Depends(get_film_repository),
    storage: StorageClient = Depends(get_storage),
) -> Film:
    editor = await _load_editor(repo, film_id, storage)
    try:
        await editor.upload_thumbnail(await read_upload(file))
    except UploadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await _save(editor, repo)


@router.post("/admin/films/{film_id}/pitch-deck", response_model=FilmResponse)
async def upload_pitch_deck(
    film_id: str,
    file: UploadFile = File(...),
    repo: FilmRepository = Depends(get_film_repository),
    storage: StorageClient = Depends(get_storage),
) -> Film:
    editor = await _load_editor(repo, film_id, storage)
    try:
        await editor.upload_pitch_deck(await read_upload(file))
    except UploadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await _save(editor, repo)


@router.post("/admin/films/{film_id}/gallery", response_model=GalleryUploadResponse)
async def upload_gallery(
    film_id: str,
    files: list[UploadFile] = File(...),
    repo: FilmRepository = Depends(get_film_repository),
    storage: StorageClient = Depends(get_storage),
) -> GalleryUploadResponse:
    """
    Append several stills to the gallery.

    Files that fail are reported under ``failed``; the ones that uploaded
    are kept and saved.
    """
    editor = await _load_editor(repo, film_id, storage)
    incoming = [await read_upload(f) for f in files]
    result = await editor.upload_gallery(incoming)
    if result.uploaded:
        film = await _save(editor, repo)
    else:
        film = await repo.get_by_id(film_id)

    return GalleryUploadResponse(
        uploaded=result.uploaded,
        failed=[UploadFailure(filename=e.filename, error=e.reason) for e in result.failed],
        film=FilmResponse.model_validate(film),
    )


@router.delete("/admin/films/{film_id}/gallery/{index}", response_model=FilmResponse)
async def remove_gallery_image(
    film_id: str,
    index: int,
    repo: FilmRepository = Depends(get_film_repository),
) -> Film:
    return await _edit(repo, film_id, lambda editor: editor.remove_gallery_image(index))


# ---------------------------------------------------------------------------
# Reviews and articles, addressed by their stable entry id
# ---------------------------------------------------------------------------


@router.post(
    "/admin/films/{film_id}/reviews",
    response_model=FilmResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_review(
    film_id: str,
    fields: ReviewFields,
    repo: FilmRepository = Depends(get_film_repository),
) -> Film:
    values = fields.model_dump(exclude_none=True)
    return await _edit(repo, film_id, lambda editor: editor.add_review(**values))


@router.patch("/admin/films/{film_id}/reviews/{entry_id}", response_model=FilmResponse)
async def update_review(
    film_id: str,
    entry_id: str,
    fields: ReviewFields,
    repo: FilmRepository = Depends(get_film_repository),
) -> Film:
    def change(editor: FilmEditor) -> None:
        for name, value in fields.model_dump(exclude_unset=True).items():
            editor.update_review_by_id(entry_id, name, value or "")

    return await _edit(repo, film_id, change)


@router.delete("/admin/films/{film_id}/reviews/{entry_id}", response_model=FilmResponse)
async def remove_review(
    film_id: str,
    entry_id: str,
    repo: FilmRepository = Depends(get_film_repository),
) -> Film:
    return await _edit(repo, film_id, lambda editor: editor.remove_review_by_id(entry_id))


@router.post(
    "/admin/films/{film_id}/articles",
    response_model=FilmResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_article(
    film_id: str,
    fields: ArticleFields,
    repo: FilmRepository = Depends(get_film_repository),
) -> Film:
    values = fields.model_dump(exclude_none=True)
    return await _edit(repo, film_id, lambda editor: editor.add_article(**values))


@router.patch("/admin/films/{film_id}/articles/{entry_id}", response_model=FilmResponse)
async def update_article(
    film_id: str,
    entry_id: str,
    fields: ArticleFields,
    repo: FilmRepository = Depends(get_film_repository),
) -> Film:
    def change(editor: FilmEditor) -> None:
        for name, value in fields.model_dump(exclude_unset=True).items():
            editor.update_article_by_id(entry_id, name, value or "")

    return await _edit(repo, film_id, change)


@router.delete("/admin/films/{film_id}/articles/{entry_id}", response_model=FilmResponse)
async def remove_article(
    film_id: str,
    entry_id: str,
    repo: FilmRepository = Depends(get_film_repository),
) -> Film:
    return await _edit(repo, film_id, lambda editor: editor.remove_article_by_id(entry_id))
