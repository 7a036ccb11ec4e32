"""Singleton row holding site-wide presentation settings."""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reelfolio.models.base import Base, TimestampMixin


class SiteSettings(Base, TimestampMixin):
    """
    Site settings.

    Exactly one row exists. It is created by the seed script and only ever
    read or updated in place by the application.
    """

    __tablename__ = "site_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    director_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    tagline: Mapped[str | None] = mapped_column(String(500), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    hero_video_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    theme_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    show_featured_section: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<SiteSettings(id={self.id}, director_name={self.director_name!r})>"
