"""Read/write access to the ``films`` table."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.models.film import Film
from reelfolio.schemas.film import FilmWrite

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 6


class FilmNotFoundError(LookupError):
    pass


class SlugConflictError(ValueError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"A film with slug {slug!r} already exists")
        self.slug = slug


class FilmRepository:
    """
    Film store.

    Writes are whole-record replacements: callers always pass a complete
    ``FilmWrite`` and the last write wins. Nothing here commits; the
    request-scoped session does that.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_films(self) -> list[Film]:
        """All films, newest release first. Films without a year sort last."""
        stmt = select(Film).order_by(Film.release_year.desc().nulls_last(), Film.title)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_featured(self, limit: int = FEATURED_LIMIT) -> list[Film]:
        stmt = (
            select(Film)
            .where(Film.is_featured.is_(True))
            .order_by(Film.release_year.desc().nulls_last(), Film.title)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(self, featured_only: bool = False) -> int:
        stmt = select(func.count()).select_from(Film)
        if featured_only:
            stmt = stmt.where(Film.is_featured.is_(True))
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def get_by_slug(self, slug: str) -> Film | None:
        result = await self.db.execute(select(Film).where(Film.slug == slug))
        return result.scalar_one_or_none()

    async def get_by_id(self, film_id: str) -> Film | None:
        result = await self.db.execute(select(Film).where(Film.id == film_id))
        return result.scalar_one_or_none()

    async def create(self, data: FilmWrite) -> Film:
        film = Film(**data.to_record())
        await self._flush(film, data.slug)
        logger.info(f"Created film {film.slug!r} ({film.id})")
        return film

    async def replace(self, film_id: str, data: FilmWrite) -> Film:
        """
        Overwrite every column of an existing film.

        A blank slug in ``data`` keeps the stored one; only an explicit slug
        renames the film.
        """
        film = await self.get_by_id(film_id)
        if film is None:
            raise FilmNotFoundError(film_id)

        record = data.to_record()
        if data.slug_derived:
            record["slug"] = film.slug

        for column, value in record.items():
            setattr(film, column, value)

        await self._flush(film, record["slug"])
        logger.info(f"Replaced film {film.slug!r} ({film.id})")
        return film

    async def save(self, data: FilmWrite, film_id: str | None = None) -> Film:
        """Create or replace, keyed by whether the record already has an id."""
        if film_id:
            return await self.replace(film_id, data)
        return await self.create(data)

    async def delete(self, film_id: str) -> None:
        film = await self.get_by_id(film_id)
        if film is None:
            raise FilmNotFoundError(film_id)
        await self.db.delete(film)
        await self.db.flush()
        logger.info(f"Deleted film {film.slug!r} ({film_id})")

    async def _flush(self, film: Film, slug: str) -> None:
        clash = select(Film.id).where(Film.slug == slug)
        if film.id is not None:
            clash = clash.where(Film.id != film.id)
        if (await self.db.execute(clash)).first() is not None:
            raise SlugConflictError(slug)

        self.db.add(film)
        try:
            await self.db.flush()
        except IntegrityError as e:
            # Lost a race with another writer using the same slug
            logger.warning(f"Slug conflict saving film {slug!r}: {e.orig}")
            raise SlugConflictError(slug) from e
        await self.db.refresh(film)
