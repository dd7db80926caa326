"""Image storage: Cloudinary client, storage protocol and upload validation."""

from foodies.services.media.cloudinary import CloudinaryClient
from foodies.services.media.exceptions import (
    MediaNotConfiguredError,
    MediaStorageError,
    MediaUploadError,
)
from foodies.services.media.protocol import ImageFile, MediaStorage
from foodies.services.media.validation import validate_image


__all__ = [
    "CloudinaryClient",
    "ImageFile",
    "MediaNotConfiguredError",
    "MediaStorage",
    "MediaStorageError",
    "MediaUploadError",
    "validate_image",
]
