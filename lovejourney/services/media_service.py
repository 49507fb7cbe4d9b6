"""
Service Cloudinary - upload et suppression des photos
"""

import io
import logging
from functools import lru_cache
from typing import List, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from lovejourney.core.config import settings
from lovejourney.core.errors import MediaStorageError, ValidationError

logger = logging.getLogger(__name__)


class CloudinaryMediaStore:
    def __init__(self, cloud_name: str, api_key: str, api_secret: str, folder: str):
        cloudinary.config(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret, secure=True)
        self.folder = folder

    def upload(self, data: bytes, filename: Optional[str] = None) -> dict:
        try:
            result = cloudinary.uploader.upload(io.BytesIO(data), folder=self.folder, resource_type="image")
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload failed for {filename}: {e}")
            raise MediaStorageError("Image upload failed") from e
        return {"url": result["secure_url"], "id": result["public_id"]}

    def delete(self, remote_id: str) -> None:
        try:
            result = cloudinary.uploader.destroy(remote_id)
        except CloudinaryError as e:
            raise MediaStorageError(f"Could not delete {remote_id}") from e
        # "not found" : déjà supprimée, ok
        if result.get("result") not in ("ok", "not found"):
            raise MediaStorageError(f"Could not delete {remote_id}: {result.get('result')}")


@lru_cache()
def get_media_store() -> CloudinaryMediaStore:
    return CloudinaryMediaStore(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        folder=settings.CLOUDINARY_FOLDER,
    )


def upload_photos(media_store, files: List[tuple]) -> List[dict]:
    """
    Upload une liste de (filename, bytes).

    Si un upload échoue, les images déjà envoyées pour cette requête sont supprimées.
    """
    if not files:
        raise ValidationError("No files uploaded")
    if len(files) > settings.MAX_UPLOAD_FILES:
        raise ValidationError(f"Too many files (max {settings.MAX_UPLOAD_FILES})")

    uploaded = []
    try:
        for filename, data in files:
            uploaded.append(media_store.upload(data, filename))
    except MediaStorageError:
        for media in uploaded:
            try:
                media_store.delete(media["id"])
            except MediaStorageError as e:
                logger.warning(f"Orphan image {media['id']} after failed upload: {e}")
        raise

    logger.info(f"{len(uploaded)} photo(s) uploaded")
    return uploaded
