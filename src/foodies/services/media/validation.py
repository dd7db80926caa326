"""Upload validation shared by the recipe and avatar endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.core.exceptions import BadRequestException


if TYPE_CHECKING:
    from foodies.core.config.settings import MediaSettings
    from foodies.services.media.protocol import ImageFile


def validate_image(image: ImageFile, media: MediaSettings) -> None:
    """Reject files with a disallowed MIME type or above the size limit.

    Raises:
        BadRequestException: 400 with a human readable reason.
    """
    if image.content_type not in media.allowed_types:
        allowed = ", ".join(media.allowed_types)
        msg = f"Invalid file type. Allowed types: {allowed}"
        raise BadRequestException(msg)

    if image.size > media.max_file_size:
        limit_mb = media.max_file_size // (1024 * 1024)
        msg = f"File too large. Maximum size is {limit_mb}MB"
        raise BadRequestException(msg)
