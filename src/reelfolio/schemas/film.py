"""Pydantic schemas for film records and their structured content."""

import uuid
from datetime import datetime
from typing import Any, Literal
from urllib.parse import urlparse

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationInfo,
    field_validator,
    model_validator,
)

from reelfolio.utils.markup import sanitize_html
from reelfolio.utils.text import MAX_SLUG_LENGTH, blank_to_none, is_valid_slug, slugify

EARLIEST_RELEASE_YEAR = 1888

# Taken by fixed routes under /api/films
RESERVED_SLUGS = frozenset({"featured"})

# Display order and labels for the credits block
CREDIT_LABELS: dict[str, str] = {
    "writer": "Writer",
    "director": "Director",
    "producer": "Producer",
    "production_company": "Production Company",
    "cast": "Cast",
    "dop_colourist": "Director of Photography & Colourist",
    "editor": "Editor",
    "production_designer": "Production Designer",
    "gaffer": "Gaffer",
    "grip": "Grip",
    "script_overview": "Script Overview",
    "music_composer": "Music Composer",
    "sound_designer": "Sound Designer",
    "assistant_director": "Assistant Director",
    "bts": "BTS",
    "drone_shots": "Drone Shots",
    "catering": "Catering",
}


def new_entry_id() -> str:
    return uuid.uuid4().hex


def http_url(value: str | None) -> str | None:
    """Validate an optional absolute http(s) URL; blank values become None."""
    value = blank_to_none(value)
    if value is None:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"not an absolute http(s) URL: {value!r}")
    return value


def rich_text(value: str | None) -> str | None:
    """Sanitise rich text on the way in; empty markup becomes None."""
    return sanitize_html(value) or None


class Credits(BaseModel):
    """Fixed set of optional crew/cast credits. Blank entries are dropped."""

    model_config = ConfigDict(extra="forbid")

    writer: str | None = None
    director: str | None = None
    producer: str | None = None
    production_company: str | None = None
    cast: str | None = None
    dop_colourist: str | None = None
    editor: str | None = None
    production_designer: str | None = None
    gaffer: str | None = None
    grip: str | None = None
    script_overview: str | None = None
    music_composer: str | None = None
    sound_designer: str | None = None
    assistant_director: str | None = None
    bts: str | None = None
    drone_shots: str | None = None
    catering: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        return blank_to_none(value) if isinstance(value, str) else value

    def rows(self) -> list[tuple[str, str]]:
        """Populated credits as ``(label, value)`` pairs in display order."""
        return [
            (label, value)
            for field, label in CREDIT_LABELS.items()
            if (value := getattr(self, field))
        ]


class Review(BaseModel):
    """A press review quoted on the film page."""

    id: str = Field(default_factory=new_entry_id)
    review_title: str = ""
    reviewer_name: str = ""
    publication: str = ""
    review_text: str
    review_link: str | None = None

    @field_validator("review_title", "reviewer_name", "publication", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return (value or "").strip() if isinstance(value, str) or value is None else value

    @field_validator("review_text")
    @classmethod
    def _sanitize_text(cls, value: str) -> str:
        cleaned = sanitize_html(value)
        if not cleaned:
            raise ValueError("review text is required")
        return cleaned

    @field_validator("review_link")
    @classmethod
    def _check_link(cls, value: str | None) -> str | None:
        return http_url(value)


class Article(BaseModel):
    """A press article or mention linked from the film page."""

    id: str = Field(default_factory=new_entry_id)
    article_title: str
    source: str = ""
    date: str | None = None
    article_link: str | None = None

    @field_validator("article_title")
    @classmethod
    def _require_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("article title is required")
        return value

    @field_validator("source", mode="before")
    @classmethod
    def _strip_source(cls, value: Any) -> Any:
        return (value or "").strip() if isinstance(value, str) or value is None else value

    @field_validator("date", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        return blank_to_none(value) if isinstance(value, str) else value

    @field_validator("article_link")
    @classmethod
    def _check_link(cls, value: str | None) -> str | None:
        return http_url(value)


class FilmWrite(BaseModel):
    """
    Complete replacement record for a film.

    Every write to the ``films`` table goes through this schema: rich text
    is sanitised, URLs are checked and the slug is derived from the title
    when left blank. ``slug_derived`` tells a replacement apart from an
    explicit rename, so an existing film keeps its stored slug.
    """

    title: str = Field(max_length=500)
    slug: str = Field(default="", max_length=MAX_SLUG_LENGTH)
    short_description: str | None = Field(default=None, max_length=500)
    full_description: str | None = None
    release_year: int | None = None
    is_featured: bool = False
    thumbnail_url: str | None = None
    trailer_url: str | None = None
    pitch_deck_url: str | None = None
    gallery_images: list[str] = Field(default_factory=list)
    festival_awards: str | None = None
    credits: Credits = Field(default_factory=Credits)
    reviews: list[Review] = Field(default_factory=list)
    articles: list[Article] = Field(default_factory=list)

    _slug_derived: bool = PrivateAttr(default=False)

    @field_validator("title")
    @classmethod
    def _require_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is required")
        return value

    @field_validator("slug", mode="before")
    @classmethod
    def _strip_slug(cls, value: Any) -> Any:
        return (value or "").strip() if isinstance(value, str) or value is None else value

    @field_validator("short_description", mode="before")
    @classmethod
    def _blank_short_description(cls, value: Any) -> Any:
        return blank_to_none(value) if isinstance(value, str) else value

    @field_validator("full_description", "festival_awards")
    @classmethod
    def _sanitize_rich_text(cls, value: str | None) -> str | None:
        return rich_text(value)

    @field_validator("release_year")
    @classmethod
    def _plausible_year(cls, value: int | None) -> int | None:
        if value is None:
            return None
        latest = datetime.now().year + 10
        if not EARLIEST_RELEASE_YEAR <= value <= latest:
            raise ValueError(f"release year must be between {EARLIEST_RELEASE_YEAR} and {latest}")
        return value

    @field_validator("thumbnail_url", "trailer_url", "pitch_deck_url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        return http_url(value)

    @field_validator("gallery_images")
    @classmethod
    def _check_gallery(cls, value: list[str]) -> list[str]:
        images = []
        for url in value:
            checked = http_url(url)
            if checked is None:
                raise ValueError("gallery entries must be image URLs")
            images.append(checked)
        return images

    @field_validator("credits", "reviews", "articles", "gallery_images", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return {} if info.field_name == "credits" else []
        return value

    @model_validator(mode="after")
    def _derive_slug(self) -> "FilmWrite":
        if not self.slug:
            self.slug = slugify(self.title)
            self._slug_derived = True
        if not is_valid_slug(self.slug):
            raise ValueError(
                "slug must contain only lowercase letters, digits and single hyphens"
            )
        if self.slug in RESERVED_SLUGS:
            raise ValueError(f"slug {self.slug!r} is reserved")
        return self

    @property
    def slug_derived(self) -> bool:
        """True when the slug was generated from the title, not supplied."""
        return self._slug_derived

    def to_record(self) -> dict[str, Any]:
        """Column values for the ``films`` table."""
        record = self.model_dump(mode="json", exclude={"credits"})
        record["credits"] = self.credits.model_dump(exclude_none=True)
        return record


class FilmSummary(BaseModel):
    """Film card used on the films listing and the homepage."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    short_description: str | None = None
    thumbnail_url: str | None = None
    release_year: int | None = None
    is_featured: bool = False


class FilmResponse(BaseModel):
    """Full film record as stored, for the admin editor."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    short_description: str | None = None
    full_description: str | None = None
    release_year: int | None = None
    is_featured: bool = False
    thumbnail_url: str | None = None
    trailer_url: str | None = None
    pitch_deck_url: str | None = None
    gallery_images: list[str] = Field(default_factory=list)
    festival_awards: str | None = None
    credits: Credits = Field(default_factory=Credits)
    reviews: list[Review] = Field(default_factory=list)
    articles: list[Article] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("credits", "reviews", "articles", "gallery_images", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return {} if info.field_name == "credits" else []
        return value


class TrailerEmbed(BaseModel):
    """How a trailer URL is embedded: an iframe player or a native video."""

    kind: Literal["youtube", "vimeo", "video"]
    src: str
    video_id: str | None = None

    @property
    def uses_iframe(self) -> bool:
        return self.kind != "video"


class CreditRow(BaseModel):
    label: str
    value: str


class FilmPage(BaseModel):
    """Everything the public film page shows. Empty sections are omitted."""

    id: str
    slug: str
    title: str
    short_description: str | None = None
    release_year: int | None = None
    thumbnail_url: str | None = None
    pitch_deck_url: str | None = None
    trailer: TrailerEmbed | None = None
    synopsis: str | None = None
    festival_awards: str | None = None
    credits: list[CreditRow] = Field(default_factory=list)
    gallery: list[str] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    articles: list[Article] = Field(default_factory=list)
    sections: list[str] = Field(default_factory=list)
