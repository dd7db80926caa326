"""Multipart upload helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.services.media.protocol import ImageFile


if TYPE_CHECKING:
    from fastapi import UploadFile


async def read_image(upload: UploadFile | None, max_size: int) -> ImageFile | None:
    """Buffer an uploaded file in memory.

    At most ``max_size + 1`` bytes are read so oversized files are detected
    without holding them entirely. Returns None when no file part was sent.
    """
    if upload is None or not upload.filename:
        return None
    content = await upload.read(max_size + 1)
    return ImageFile(
        content=content,
        content_type=upload.content_type or "application/octet-stream",
        filename=upload.filename,
    )
