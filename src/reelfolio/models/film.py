"""Film model: the portfolio's central record."""

from typing import Any

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reelfolio.models.base import Base, JSONType, TimestampMixin, new_id


class Film(Base, TimestampMixin):
    """
    Film model.

    Scalar descriptive fields live in ordinary columns. The structured
    sub-records (credits, reviews, articles) and the ordered gallery are
    stored as JSON documents; their shape is enforced by
    ``reelfolio.schemas.film.FilmWrite`` before anything is written.
    """

    __tablename__ = "films"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    short_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    full_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    release_year: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Media
    thumbnail_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    trailer_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    pitch_deck_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    gallery_images: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)

    festival_awards: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Structured content
    credits: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict, nullable=False)
    reviews: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list, nullable=False)
    articles: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<Film(id={self.id!r}, slug={self.slug!r}, release_year={self.release_year})>"

    def __str__(self) -> str:
        return self.title
