"""Media storage protocol.

Services depend on this interface rather than on the Cloudinary client so
tests (and alternative backends) can substitute their own storage.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class ImageFile(BaseModel):
    """An uploaded image held in memory."""

    content: bytes
    content_type: str
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


@runtime_checkable
class MediaStorage(Protocol):
    """Folder-based image storage returning public URLs."""

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connections, etc.)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def upload(self, image: ImageFile, folder: str) -> str:
        """Store ``image`` under ``folder`` and return its public URL.

        Raises:
            MediaStorageError: If the image could not be stored.
        """
        ...

    async def delete(self, url: str) -> None:
        """Best-effort removal of a previously uploaded image."""
        ...
