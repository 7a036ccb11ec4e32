"""Turns a stored film record into the public film page."""

import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from reelfolio.models.film import Film
from reelfolio.schemas.film import (
    Article,
    CreditRow,
    Credits,
    FilmPage,
    Review,
    TrailerEmbed,
)
from reelfolio.utils.markup import sanitize_html

logger = logging.getLogger(__name__)

YOUTUBE_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]+)")
VIMEO_PATTERN = re.compile(r"vimeo\.com/(\d+)")

YOUTUBE_EMBED = "https://www.youtube.com/embed/{id}?autoplay=0&rel=0&modestbranding=1"
VIMEO_EMBED = "https://player.vimeo.com/video/{id}?color=c9a84c&title=0&byline=0&portrait=0"

# Display order of the page sections
SECTION_ORDER = ("synopsis", "credits", "gallery", "reviews", "press", "festival_awards")


def resolve_trailer(url: str) -> TrailerEmbed:
    """
    Work out how to embed a trailer.

    YouTube is checked first, then Vimeo; anything else is treated as a
    direct video file for a native player.

    Examples:
        "https://youtu.be/abc123"          → youtube, id "abc123"
        "https://vimeo.com/987654"         → vimeo, id "987654"
        "https://cdn.example.com/x.mp4"    → video, src unchanged
    """
    match = YOUTUBE_PATTERN.search(url)
    if match:
        video_id = match.group(1)
        return TrailerEmbed(kind="youtube", video_id=video_id, src=YOUTUBE_EMBED.format(id=video_id))

    match = VIMEO_PATTERN.search(url)
    if match:
        video_id = match.group(1)
        return TrailerEmbed(kind="vimeo", video_id=video_id, src=VIMEO_EMBED.format(id=video_id))

    return TrailerEmbed(kind="video", src=url)


def gallery_for(gallery_images: list[str] | None, thumbnail_url: str | None) -> list[str]:
    """Explicit gallery, else the thumbnail on its own, else nothing."""
    if gallery_images:
        return list(gallery_images)
    if thumbnail_url:
        return [thumbnail_url]
    return []


@dataclass
class Lightbox:
    """
    Full-screen viewer over the gallery.

    Navigation wraps around in both directions. ``index`` is None while the
    lightbox is closed.
    """

    images: list[str]
    index: int | None = None

    @property
    def is_open(self) -> bool:
        return self.index is not None

    @property
    def current(self) -> str | None:
        return None if self.index is None else self.images[self.index]

    def open(self, index: int) -> None:
        if not self.images:
            raise IndexError("gallery is empty")
        self.index = index % len(self.images)

    def close(self) -> None:
        self.index = None

    def move(self, step: int) -> int | None:
        if self.index is not None:
            self.index = (self.index + step) % len(self.images)
        return self.index

    def next(self) -> int | None:
        return self.move(1)

    def previous(self) -> int | None:
        return self.move(-1)

    def neighbours(self) -> tuple[int, int]:
        """Indices reached by moving back and forward from the current image."""
        if self.index is None:
            raise ValueError("lightbox is closed")
        count = len(self.images)
        return (self.index - 1) % count, (self.index + 1) % count

    def handle_key(self, key: str) -> None:
        """Keyboard handling: Escape closes, arrow keys step one image."""
        if key == "Escape":
            self.close()
        elif key == "ArrowRight":
            self.next()
        elif key == "ArrowLeft":
            self.previous()


def _load_entries(model: type[Review] | type[Article], raw: list[dict[str, Any]] | None, film: Film):
    entries = []
    for item in raw or []:
        try:
            entries.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {model.__name__.lower()} on film {film.slug!r}: {e}")
    return entries


def present_film(film: Film) -> FilmPage:
    """
    Build the public page for a film.

    Rich text is sanitised again here even though writes are sanitised,
    and every section without content is left out of ``sections``.
    """
    try:
        credits = Credits.model_validate(film.credits or {})
    except ValidationError as e:
        logger.warning(f"Ignoring malformed credits on film {film.slug!r}: {e}")
        credits = Credits()

    reviews = _load_entries(Review, film.reviews, film)
    articles = _load_entries(Article, film.articles, film)
    synopsis = sanitize_html(film.full_description) or None
    awards = sanitize_html(film.festival_awards) or None
    gallery = gallery_for(film.gallery_images, film.thumbnail_url)
    credit_rows = [CreditRow(label=label, value=value) for label, value in credits.rows()]

    populated = {
        "synopsis": bool(synopsis),
        "credits": bool(credit_rows),
        "gallery": bool(gallery),
        "reviews": bool(reviews),
        "press": bool(articles),
        "festival_awards": bool(awards),
    }

    return FilmPage(
        id=film.id,
        slug=film.slug,
        title=film.title,
        short_description=film.short_description,
        release_year=film.release_year,
        thumbnail_url=film.thumbnail_url,
        pitch_deck_url=film.pitch_deck_url,
        trailer=resolve_trailer(film.trailer_url) if film.trailer_url else None,
        synopsis=synopsis,
        festival_awards=awards,
        credits=credit_rows,
        gallery=gallery,
        reviews=reviews,
        articles=articles,
        sections=[name for name in SECTION_ORDER if populated[name]],
    )
