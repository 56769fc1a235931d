"""
Image upload endpoint. Returns the URL to store on an event or profile.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status

from venuebook.api.deps import get_current_principal, get_media_store
from venuebook.core.identity import Capability, Principal, ensure_capability
from venuebook.schemas.media import MediaUploadResponse
from venuebook.services.interfaces.media import MediaStore

router = APIRouter(prefix="/media", tags=["Media"])


@router.post("/", response_model=MediaUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    file: UploadFile = File(...),
    principal: Principal = Depends(get_current_principal),
    store: MediaStore = Depends(get_media_store),
):
    ensure_capability(principal, Capability.UPLOAD_MEDIA)
    content = await file.read()
    url = await store.upload(content, file.filename or "", file.content_type or "")
    return MediaUploadResponse(url=url)
