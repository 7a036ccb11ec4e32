"""Pydantic schemas for API requests and responses."""

from reelfolio.schemas.admin import (
    AdminIdentity,
    DashboardResponse,
    GalleryUploadResponse,
    LoginRequest,
    UploadFailure,
    UploadResponse,
)
from reelfolio.schemas.contact import (
    ContactCreate,
    ContactMessageResponse,
    ContactSubmitResponse,
)
from reelfolio.schemas.film import (
    Article,
    Credits,
    CreditRow,
    FilmPage,
    FilmResponse,
    FilmSummary,
    FilmWrite,
    Review,
    TrailerEmbed,
)
from reelfolio.schemas.site_settings import SiteSettingsResponse, SiteSettingsUpdate

__all__ = [
    "AdminIdentity",
    "Article",
    "ContactCreate",
    "ContactMessageResponse",
    "ContactSubmitResponse",
    "CreditRow",
    "Credits",
    "DashboardResponse",
    "FilmPage",
    "FilmResponse",
    "FilmSummary",
    "FilmWrite",
    "GalleryUploadResponse",
    "LoginRequest",
    "Review",
    "SiteSettingsResponse",
    "SiteSettingsUpdate",
    "TrailerEmbed",
    "UploadFailure",
    "UploadResponse",
]
