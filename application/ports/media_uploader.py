"""
Media Uploader Interface (Port).

Exercise images and clips are hosted elsewhere; the session composer only
stores the URL it gets back.
"""
from typing import Protocol


class MediaUploader(Protocol):
    """Uploads a media blob and returns its public URL."""

    async def upload(self, data: bytes, filename: str) -> str:
        """
        Upload ``data``.

        Returns:
            Public URL of the stored media
        """
        ...
