from fastapi import APIRouter, Depends, File, UploadFile
from typing import List, Optional

from lovejourney.schemas.media import UploadedMedia
from lovejourney.services.media_service import CloudinaryMediaStore, get_media_store, upload_photos

router = APIRouter(prefix="/media", tags=["media"])


@router.post("/upload", response_model=List[UploadedMedia])
def upload_media(
    photos: Optional[List[UploadFile]] = File(None),
    media_store: CloudinaryMediaStore = Depends(get_media_store)
):
    """Upload des photos vers Cloudinary (champ multipart "photos")"""
    files = [(photo.filename, photo.file.read()) for photo in photos or []]
    return upload_photos(media_store, files)
