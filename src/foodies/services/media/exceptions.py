"""Media storage exceptions.

Upload failures propagate to the caller and surface as a 500; delete
failures are logged by the client and never raised.
"""

from __future__ import annotations


class MediaStorageError(Exception):
    """Base exception for media storage failures."""


class MediaNotConfiguredError(MediaStorageError):
    """Raised when an upload is attempted without Cloudinary credentials."""


class MediaUploadError(MediaStorageError):
    """Raised when the storage backend rejects or fails an upload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
