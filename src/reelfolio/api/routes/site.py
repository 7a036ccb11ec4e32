"""Public site settings endpoint."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.database import get_db
from reelfolio.models.site_settings import SiteSettings
from reelfolio.schemas.site_settings import SiteSettingsResponse
from reelfolio.services.site_settings import SettingsMissingError, get_settings

router = APIRouter()


@router.get("/settings", response_model=SiteSettingsResponse)
async def get_site_settings(db: AsyncSession = Depends(get_db)) -> SiteSettings:
    """Director name, tagline, bio and media used by the home and about pages."""
    try:
        return await get_settings(db)
    except SettingsMissingError:
        raise HTTPException(status_code=404, detail="Site settings not configured")
