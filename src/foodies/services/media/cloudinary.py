"""Cloudinary media storage.

Wraps the official Cloudinary SDK. Its calls are blocking, so each one
runs in a worker thread. Uploaded images are limited to 800x800 (aspect
preserved), auto quality, and converted to WebP.
"""

from __future__ import annotations

import asyncio
import io
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from foodies.core.config import Settings, get_settings
from foodies.observability.logging import get_logger
from foodies.services.media.exceptions import (
    MediaNotConfiguredError,
    MediaUploadError,
)


if TYPE_CHECKING:
    from foodies.services.media.protocol import ImageFile


logger = get_logger(__name__)


def public_id_from_url(url: str) -> str:
    """Derive the public id (``folder/name``) from a delivery URL.

    ``https://res.cloudinary.com/demo/image/upload/v1/avatars/abc123.webp``
    yields ``avatars/abc123``.
    """
    path = urlparse(url).path.rstrip("/")
    folder_and_file = "/".join(path.split("/")[-2:])
    stem, dot, _ext = folder_and_file.rpartition(".")
    return stem if dot and "/" not in _ext else folder_and_file


class CloudinaryClient:
    """Async Cloudinary client implementing ``MediaStorage``.

    Credentials are passed with every call instead of through the SDK's
    global ``cloudinary.config()``.

    Example:
        ```python
        client = CloudinaryClient()
        await client.initialize()
        url = await client.upload(image, folder="avatars")
        await client.delete(url)
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    @property
    def configured(self) -> bool:
        return self._settings.media_configured

    def _credentials(self) -> dict[str, Any]:
        media = self._settings.media
        return {
            "cloud_name": media.cloud_name,
            "api_key": media.api_key,
            "api_secret": self._settings.CLOUDINARY_API_SECRET,
            "timeout": media.timeout,
        }

    def upload_options(self, folder: str) -> dict[str, Any]:
        """SDK options for an image stored under ``folder``."""
        media = self._settings.media
        return {
            "folder": folder,
            "resource_type": "image",
            "transformation": [
                {"width": media.max_width, "height": media.max_height, "crop": "limit"},
                {"quality": media.quality},
            ],
            "format": media.format,
            **self._credentials(),
        }

    async def initialize(self) -> None:
        if not self.configured:
            logger.warning("Cloudinary credentials missing - uploads will fail")
        else:
            logger.info("CloudinaryClient initialized", cloud=self._settings.media.cloud_name)

    async def shutdown(self) -> None:
        logger.debug("CloudinaryClient shutdown")

    async def upload(self, image: ImageFile, folder: str) -> str:
        """Upload ``image`` into ``folder`` and return its secure URL.

        Raises:
            MediaNotConfiguredError: If credentials are missing.
            MediaUploadError: If Cloudinary rejects the upload or is unreachable.
        """
        if not self.configured:
            msg = "Media storage is not configured"
            raise MediaNotConfiguredError(msg)

        stream = io.BytesIO(image.content)
        stream.name = image.filename or "upload"
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.upload, stream, **self.upload_options(folder)
            )
        except CloudinaryError as e:
            logger.warning("Cloudinary upload failed", error=str(e), folder=folder)
            msg = f"Image upload failed: {e}"
            raise MediaUploadError(msg) from e

        url: str = result["secure_url"]
        logger.info("Image uploaded", folder=folder, public_id=result.get("public_id"))
        return url

    async def delete(self, url: str) -> None:
        """Destroy the image behind ``url``; failures are only logged."""
        if not self.configured:
            logger.warning("Skipping media delete - storage not configured", url=url)
            return

        public_id = public_id_from_url(url)
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.destroy, public_id, **self._credentials()
            )
        except CloudinaryError:
            logger.opt(exception=True).warning("Cloudinary delete failed", public_id=public_id)
            return

        if result.get("result") != "ok":
            logger.warning(
                "Cloudinary delete failed", public_id=public_id, result=result.get("result")
            )
            return
        logger.info("Image deleted", public_id=public_id)
