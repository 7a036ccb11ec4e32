"""Pydantic schemas for the site settings singleton."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from reelfolio.schemas.film import http_url, rich_text
from reelfolio.utils.text import blank_to_none

THEME_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


class SiteSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    director_name: str
    tagline: str | None = None
    bio: str | None = None
    profile_image_url: str | None = None
    hero_video_url: str | None = None
    theme_color: str | None = None
    show_featured_section: bool = True


class SiteSettingsUpdate(BaseModel):
    """Full replacement of the editable settings."""

    director_name: str
    tagline: str | None = None
    bio: str | None = None
    profile_image_url: str | None = None
    hero_video_url: str | None = None
    theme_color: str | None = None
    show_featured_section: bool = True

    @field_validator("director_name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("director name is required")
        return value

    @field_validator("tagline", mode="before")
    @classmethod
    def _blank_tagline(cls, value: Any) -> Any:
        return blank_to_none(value) if isinstance(value, str) else value

    @field_validator("bio")
    @classmethod
    def _sanitize_bio(cls, value: str | None) -> str | None:
        return rich_text(value)

    @field_validator("profile_image_url", "hero_video_url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        return http_url(value)

    @field_validator("theme_color")
    @classmethod
    def _check_color(cls, value: str | None) -> str | None:
        value = blank_to_none(value)
        if value is not None and not THEME_COLOR_PATTERN.match(value):
            raise ValueError("theme colour must look like #c9a84c")
        return value
