"""
Media storage interface.
The core only ever stores the URL a store hands back.
"""

from abc import ABC, abstractmethod


class MediaStore(ABC):
    """
    Implementations:
    - LocalMediaStore: files on local disk served from MEDIA_BASE_URL
    """

    @abstractmethod
    async def upload(self, content: bytes, filename: str, content_type: str) -> str:
        """
        Persist an uploaded file.

        Args:
            content: Raw bytes, never inspected
            filename: Client-supplied name, used only for its extension
            content_type: MIME type reported by the client

        Returns:
            Public URL for the stored file
        """
        pass
