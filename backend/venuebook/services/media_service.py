"""
Local-disk media store.
Files are written under MEDIA_ROOT with a generated name and served by
whatever fronts MEDIA_BASE_URL (the app mounts it in development).
"""

import asyncio
import os
import uuid
from pathlib import Path

from venuebook.core.config import get_settings
from venuebook.core.errors import ValidationError
from venuebook.core.logging import get_logger
from venuebook.services.interfaces.media import MediaStore

logger = get_logger(__name__)
settings = get_settings()

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class LocalMediaStore(MediaStore):
    def __init__(self, root: str = None, base_url: str = None, max_bytes: int = None):
        self.root = Path(root or settings.MEDIA_ROOT)
        self.base_url = (base_url or settings.MEDIA_BASE_URL).rstrip("/")
        self.max_bytes = max_bytes or settings.MEDIA_MAX_BYTES

    async def upload(self, content: bytes, filename: str, content_type: str) -> str:
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError("file", f"Unsupported image type: {content_type}")
        if not content:
            raise ValidationError("file", "file is empty")
        if len(content) > self.max_bytes:
            raise ValidationError("file", f"file exceeds {self.max_bytes} bytes")

        extension = os.path.splitext(filename or "")[1].lower() or ALLOWED_CONTENT_TYPES[content_type]
        name = f"{uuid.uuid4().hex}{extension}"
        path = self.root / name

        await asyncio.to_thread(self._write, path, content)
        logger.info("media_stored", name=name, size=len(content), content_type=content_type)
        return f"{self.base_url}/{name}"

    def _write(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
