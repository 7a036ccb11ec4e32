"""In-place editing of a complete film record."""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, NamedTuple

from reelfolio.models.film import Film
from reelfolio.schemas.film import CREDIT_LABELS, FilmResponse, FilmWrite, new_entry_id
from reelfolio.services import storage
from reelfolio.services.film_repository import FilmRepository
from reelfolio.services.storage import StorageClient, UploadError
from reelfolio.utils.text import slugify

logger = logging.getLogger(__name__)

SCALAR_FIELDS = frozenset(
    {
        "title", "slug", "short_description", "full_description", "release_year",
        "is_featured", "thumbnail_url", "trailer_url", "pitch_deck_url",
        "festival_awards",
    }
)
REVIEW_FIELDS = ("review_title", "reviewer_name", "publication", "review_text", "review_link")
ARTICLE_FIELDS = ("article_title", "source", "date", "article_link")


class UploadInProgressError(RuntimeError):
    """Raised when saving while an upload slot is still busy."""


class IncomingFile(NamedTuple):
    filename: str
    content: bytes
    content_type: str | None


@dataclass
class GalleryUploadResult:
    uploaded: list[str] = field(default_factory=list)
    failed: list[UploadError] = field(default_factory=list)


def blank_values() -> dict[str, Any]:
    return {
        "title": "",
        "slug": "",
        "short_description": "",
        "full_description": "",
        "release_year": datetime.now().year,
        "is_featured": False,
        "thumbnail_url": None,
        "trailer_url": "",
        "pitch_deck_url": None,
        "festival_awards": "",
        "gallery_images": [],
        "credits": {key: "" for key in CREDIT_LABELS},
        "reviews": [],
        "articles": [],
    }


class FilmEditor:
    """
    Working copy of one film, edited field by field and saved whole.

    - While the film has no id, changing the title regenerates the slug;
      once saved, the slug is only changed explicitly
    - Reviews and articles are positional lists, addressable by index or by
      their stable entry ``id``
    - Uploads run per slot (thumbnail, gallery, pitch deck); ``save`` refuses
      to run while any slot is busy
    - ``save`` validates the whole record through ``FilmWrite`` and submits
      it as a single create-or-replace
    """

    def __init__(
        self,
        values: dict[str, Any],
        film_id: str | None = None,
        storage_client: StorageClient | None = None,
    ) -> None:
        self.values = values
        self.film_id = film_id
        self._storage = storage_client
        self._uploading: set[str] = set()

    @classmethod
    def blank(cls, storage_client: StorageClient | None = None) -> "FilmEditor":
        return cls(blank_values(), storage_client=storage_client)

    @classmethod
    def from_record(cls, film: Film, storage_client: StorageClient | None = None) -> "FilmEditor":
        return cls(_values_from(film), film_id=film.id, storage_client=storage_client)

    @property
    def storage(self) -> StorageClient:
        if self._storage is None:
            self._storage = StorageClient()
        return self._storage

    # -- scalar fields ---------------------------------------------------

    def set_title(self, title: str) -> None:
        self.values["title"] = title
        if self.film_id is None:
            self.values["slug"] = slugify(title)

    def set_slug(self, slug: str) -> None:
        self.values["slug"] = slug

    def set_field(self, name: str, value: Any) -> None:
        if name == "title":
            self.set_title(value)
            return
        if name not in SCALAR_FIELDS:
            raise KeyError(f"Unknown film field: {name}")
        self.values[name] = value

    def set_credit(self, key: str, value: str) -> None:
        if key not in CREDIT_LABELS:
            raise KeyError(f"Unknown credit: {key}")
        self.values["credits"][key] = value

    # -- reviews ---------------------------------------------------------

    @property
    def reviews(self) -> list[dict[str, Any]]:
        return self.values["reviews"]

    def add_review(self, **fields: str) -> str:
        return self._add_entry("reviews", REVIEW_FIELDS, fields)

    def remove_review(self, index: int) -> None:
        del self.reviews[_position(self.reviews, index)]

    def update_review(self, index: int, field_name: str, value: str) -> None:
        self._update_entry(self.reviews[_position(self.reviews, index)], REVIEW_FIELDS, field_name, value)

    def remove_review_by_id(self, entry_id: str) -> None:
        self.remove_review(self._index_of("reviews", entry_id))

    def update_review_by_id(self, entry_id: str, field_name: str, value: str) -> None:
        self.update_review(self._index_of("reviews", entry_id), field_name, value)

    # -- articles --------------------------------------------------------

    @property
    def articles(self) -> list[dict[str, Any]]:
        return self.values["articles"]

    def add_article(self, **fields: str) -> str:
        return self._add_entry("articles", ARTICLE_FIELDS, fields)

    def remove_article(self, index: int) -> None:
        del self.articles[_position(self.articles, index)]

    def update_article(self, index: int, field_name: str, value: str) -> None:
        self._update_entry(self.articles[_position(self.articles, index)], ARTICLE_FIELDS, field_name, value)

    def remove_article_by_id(self, entry_id: str) -> None:
        self.remove_article(self._index_of("articles", entry_id))

    def update_article_by_id(self, entry_id: str, field_name: str, value: str) -> None:
        self.update_article(self._index_of("articles", entry_id), field_name, value)

    # -- gallery and uploads ---------------------------------------------

    @property
    def gallery_images(self) -> list[str]:
        return self.values["gallery_images"]

    def remove_gallery_image(self, index: int) -> str:
        return self.gallery_images.pop(_position(self.gallery_images, index))

    @property
    def is_uploading(self) -> bool:
        return bool(self._uploading)

    @property
    def can_submit(self) -> bool:
        return not self._uploading

    async def upload_thumbnail(self, file: IncomingFile) -> str:
        async with self._upload_slot("thumbnail"):
            url = await self.storage.upload(storage.THUMBNAILS, *file)
        self.values["thumbnail_url"] = url
        return url

    async def upload_pitch_deck(self, file: IncomingFile) -> str:
        async with self._upload_slot("pitch_deck"):
            url = await self.storage.upload(storage.DOCUMENTS, *file)
        self.values["pitch_deck_url"] = url
        return url

    async def upload_gallery(self, files: Sequence[IncomingFile]) -> GalleryUploadResult:
        """
        Upload several stills in one go.

        Files are sent one after another. Each success is appended to the
        gallery; a failed file is recorded and skipped so the rest of the
        batch still goes through.
        """
        result = GalleryUploadResult()
        async with self._upload_slot("gallery"):
            for file in files:
                try:
                    url = await self.storage.upload(storage.GALLERY, *file)
                except UploadError as e:
                    logger.warning(f"Gallery upload skipped: {e}")
                    result.failed.append(e)
                    continue
                self.gallery_images.append(url)
                result.uploaded.append(url)
        return result

    # -- saving ----------------------------------------------------------

    def to_payload(self) -> FilmWrite:
        """Validate and serialise the whole working copy."""
        return FilmWrite.model_validate(self.values)

    async def save(self, repository: FilmRepository) -> Film:
        if self.is_uploading:
            raise UploadInProgressError(
                f"Upload still running: {', '.join(sorted(self._uploading))}"
            )
        payload = self.to_payload()
        film = await repository.save(payload, self.film_id)
        self.film_id = film.id
        self.values = _values_from(film)
        return film

    # -- helpers ---------------------------------------------------------

    @asynccontextmanager
    async def _upload_slot(self, slot: str) -> AsyncIterator[None]:
        if slot in self._uploading:
            raise UploadInProgressError(f"{slot} upload already running")
        self._uploading.add(slot)
        try:
            yield
        finally:
            self._uploading.discard(slot)

    def _add_entry(self, key: str, allowed: tuple[str, ...], fields: dict[str, str]) -> str:
        unknown = set(fields) - set(allowed)
        if unknown:
            raise KeyError(f"Unknown {key} fields: {', '.join(sorted(unknown))}")
        entry: dict[str, Any] = {"id": new_entry_id(), **{name: "" for name in allowed}}
        entry.update(fields)
        self.values[key].append(entry)
        return entry["id"]

    @staticmethod
    def _update_entry(entry: dict[str, Any], allowed: tuple[str, ...], field_name: str, value: str) -> None:
        if field_name not in allowed:
            raise KeyError(f"Unknown field: {field_name}")
        entry[field_name] = value

    def _index_of(self, key: str, entry_id: str) -> int:
        for index, entry in enumerate(self.values[key]):
            if entry.get("id") == entry_id:
                return index
        raise KeyError(f"No {key[:-1]} with id {entry_id!r}")


def _values_from(film: Film) -> dict[str, Any]:
    record = FilmResponse.model_validate(film)
    values = record.model_dump(mode="json", exclude={"id", "created_at", "updated_at"})
    values["credits"] = {key: values["credits"].get(key) or "" for key in CREDIT_LABELS}
    return values


def _position(items: Sequence[Any], index: int) -> int:
    """Positions count from the start only; negative indexes are not aliases."""
    if not 0 <= index < len(items):
        raise IndexError(f"No entry at position {index}")
    return index
