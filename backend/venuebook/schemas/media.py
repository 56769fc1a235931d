from pydantic import BaseModel


class MediaUploadResponse(BaseModel):
    """Public URL of a stored image, ready to put on an event or profile."""

    url: str
