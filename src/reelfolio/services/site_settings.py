"""Access to the site settings singleton."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.models.site_settings import SiteSettings
from reelfolio.schemas.site_settings import SiteSettingsUpdate

logger = logging.getLogger(__name__)


class SettingsMissingError(LookupError):
    """The singleton row hasn't been seeded."""


async def get_settings(db: AsyncSession) -> SiteSettings:
    result = await db.execute(select(SiteSettings).order_by(SiteSettings.id).limit(1))
    row = result.scalar_one_or_none()
    if row is None:
        raise SettingsMissingError("site_settings has no row; run the seed script")
    return row


async def update_settings(db: AsyncSession, data: SiteSettingsUpdate) -> SiteSettings:
    """Overwrite the editable fields of the singleton in place."""
    row = await get_settings(db)
    for column, value in data.model_dump().items():
        setattr(row, column, value)
    await db.flush()
    await db.refresh(row)
    logger.info("Site settings updated")
    return row


async def set_media_url(db: AsyncSession, column: str, url: str) -> SiteSettings:
    """Point ``profile_image_url`` or ``hero_video_url`` at a new upload."""
    if column not in ("profile_image_url", "hero_video_url"):
        raise KeyError(column)
    row = await get_settings(db)
    setattr(row, column, url)
    await db.flush()
    return row
