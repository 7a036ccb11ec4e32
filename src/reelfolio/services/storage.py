"""Client for the hosted object-storage bucket API."""

import logging
import secrets
import time
from pathlib import PurePath

import httpx

from reelfolio.config import settings

logger = logging.getLogger(__name__)

THUMBNAILS = "film-thumbnails"
GALLERY = "film-gallery"
DOCUMENTS = "film-documents"
PROFILE_IMAGES = "profile-images"
HERO_VIDEOS = "hero-videos"

# Accepted content-type prefixes per bucket
BUCKET_CONTENT_TYPES: dict[str, tuple[str, ...]] = {
    THUMBNAILS: ("image/",),
    GALLERY: ("image/",),
    DOCUMENTS: ("application/pdf",),
    PROFILE_IMAGES: ("image/",),
    HERO_VIDEOS: ("video/",),
}


class UploadError(Exception):
    """An upload was rejected locally or by the storage service."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"Upload failed for {filename!r}: {reason}")
        self.filename = filename
        self.reason = reason


def object_path(filename: str) -> str:
    """
    Unique object name for an upload, keeping the original extension.

    Examples:
        "still.JPG"  →  "1718000000000-k3j9x2a1.jpg"
    """
    suffix = PurePath(filename).suffix.lower()
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}{suffix}"


class StorageClient:
    """Uploads files to public buckets and returns their public URLs."""

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        max_bytes: int | None = None,
    ) -> None:
        self.base_url = (base_url or settings.storage_url).rstrip("/")
        self.service_key = service_key or settings.storage_service_key
        self.max_bytes = max_bytes or settings.max_upload_bytes

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"

    def check(self, bucket: str, filename: str, content: bytes, content_type: str | None) -> None:
        """Reject uploads the bucket won't serve before sending anything."""
        allowed = BUCKET_CONTENT_TYPES.get(bucket)
        if allowed is None:
            raise UploadError(filename, f"unknown bucket {bucket!r}")
        if not content:
            raise UploadError(filename, "file is empty")
        if len(content) > self.max_bytes:
            raise UploadError(filename, f"file exceeds {self.max_bytes} bytes")
        if not content_type or not content_type.startswith(allowed):
            raise UploadError(filename, f"{content_type or 'unknown type'} not accepted for {bucket}")

    async def upload(
        self,
        bucket: str,
        filename: str,
        content: bytes,
        content_type: str | None,
    ) -> str:
        """
        Upload one file.

        Args:
            bucket: Target bucket name
            filename: Original filename (only its extension is kept)
            content: File bytes
            content_type: MIME type reported by the client

        Returns:
            Publicly resolvable URL of the stored object

        Raises:
            UploadError: If the file is rejected or the storage call fails
        """
        self.check(bucket, filename, content, content_type)
        path = object_path(filename)

        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
                response = await client.post(
                    f"{self.base_url}/storage/v1/object/{bucket}/{path}",
                    content=content,
                    headers={
                        "Authorization": f"Bearer {self.service_key}",
                        "Content-Type": content_type,
                        "x-upsert": "true",
                    },
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Storage rejected {filename!r} for {bucket}: {e.response.status_code}")
            raise UploadError(filename, f"storage returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Storage request failed for {filename!r}: {e}")
            raise UploadError(filename, str(e) or type(e).__name__) from e

        url = self.public_url(bucket, path)
        logger.info(f"Uploaded {filename!r} to {bucket} as {path}")
        return url
