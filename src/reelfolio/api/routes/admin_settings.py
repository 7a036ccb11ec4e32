"""Admin endpoints for site settings and their media uploads."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from reelfolio.api.deps import get_storage, read_upload, require_admin
from reelfolio.database import get_db
from reelfolio.models.site_settings import SiteSettings
from reelfolio.schemas.admin import UploadResponse
from reelfolio.schemas.site_settings import SiteSettingsResponse, SiteSettingsUpdate
from reelfolio.services import storage as buckets
from reelfolio.services.site_settings import (
    SettingsMissingError,
    get_settings,
    set_media_url,
    update_settings,
)
from reelfolio.services.storage import StorageClient, UploadError

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/admin/settings", response_model=SiteSettingsResponse)
async def read_settings(db: AsyncSession = Depends(get_db)) -> SiteSettings:
    try:
        return await get_settings(db)
    except SettingsMissingError:
        raise HTTPException(status_code=404, detail="Site settings not configured")


@router.put("/admin/settings", response_model=SiteSettingsResponse)
async def save_settings(
    data: SiteSettingsUpdate,
    db: AsyncSession = Depends(get_db),
) -> SiteSettings:
    try:
        return await update_settings(db, data)
    except SettingsMissingError:
        raise HTTPException(status_code=404, detail="Site settings not configured")


async def _upload_setting_media(
    db: AsyncSession,
    storage: StorageClient,
    file: UploadFile,
    bucket: str,
    column: str,
) -> UploadResponse:
    incoming = await read_upload(file)
    try:
        url = await storage.upload(bucket, *incoming)
    except UploadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        await set_media_url(db, column, url)
    except SettingsMissingError:
        raise HTTPException(status_code=404, detail="Site settings not configured")
    return UploadResponse(url=url)


@router.post("/admin/settings/profile-image", response_model=UploadResponse)
async def upload_profile_image(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
) -> UploadResponse:
    return await _upload_setting_media(db, storage, file, buckets.PROFILE_IMAGES, "profile_image_url")


@router.post("/admin/settings/hero-video", response_model=UploadResponse)
async def upload_hero_video(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
) -> UploadResponse:
    return await _upload_setting_media(db, storage, file, buckets.HERO_VIDEOS, "hero_video_url")


@router.post("/admin/uploads/{bucket}", response_model=UploadResponse)
async def upload_to_bucket(
    bucket: str,
    file: UploadFile = File(...),
    storage: StorageClient = Depends(get_storage),
) -> UploadResponse:
    """Upload a file before its record exists, e.g. a thumbnail for a new film."""
    if bucket not in buckets.BUCKET_CONTENT_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown bucket: {bucket}")
    incoming = await read_upload(file)
    try:
        url = await storage.upload(bucket, *incoming)
    except UploadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return UploadResponse(url=url)
