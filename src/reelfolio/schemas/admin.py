"""Pydantic schemas for admin authentication, uploads and the dashboard."""

from datetime import datetime

from pydantic import BaseModel

from reelfolio.schemas.film import FilmResponse


class LoginRequest(BaseModel):
    email: str
    password: str


class AdminIdentity(BaseModel):
    """The admin a validated session belongs to."""

    id: str
    email: str
    name: str | None = None
    logged_in_at: datetime


class UploadResponse(BaseModel):
    url: str


class UploadFailure(BaseModel):
    filename: str
    error: str


class GalleryUploadResponse(BaseModel):
    """Result of a multi-file gallery upload. Partial success is allowed."""

    uploaded: list[str]
    failed: list[UploadFailure]
    film: FilmResponse


class DashboardResponse(BaseModel):
    films: int
    featured_films: int
    messages: int
    latest_message_at: datetime | None = None
