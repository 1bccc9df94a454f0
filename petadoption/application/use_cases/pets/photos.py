from __future__ import annotations

import logging
import mimetypes
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID, uuid4

from petadoption.application.errors import ValidationError
from petadoption.domain.models.pet import PetPhoto
from petadoption.infrastructure.storage.ports import StorageService

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}


@dataclass(slots=True)
class PhotoUpload:
    filename: str
    content_type: str
    data: bytes


@dataclass(slots=True, frozen=True)
class UploadLimits:
    max_files: int = 5
    max_bytes: int = 5 * 1024 * 1024


def validate_uploads(uploads: Sequence[PhotoUpload], limits: UploadLimits) -> None:
    if len(uploads) > limits.max_files:
        raise ValidationError(f"A maximum of {limits.max_files} photos can be uploaded at once")
    for upload in uploads:
        content_type = (upload.content_type or "").lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError(
                f"Unsupported image type for {upload.filename}",
                details={"allowed": sorted(ALLOWED_CONTENT_TYPES)},
            )
        if not upload.data:
            raise ValidationError(f"Uploaded file {upload.filename} is empty")
        if len(upload.data) > limits.max_bytes:
            raise ValidationError(
                f"Uploaded file {upload.filename} exceeds {limits.max_bytes} bytes"
            )


async def store_photos(
    storage: StorageService,
    pet_id: UUID,
    uploads: Sequence[PhotoUpload],
    *,
    first_is_main: bool,
) -> list[PetPhoto]:
    photos: list[PetPhoto] = []
    for index, upload in enumerate(uploads):
        extension = mimetypes.guess_extension(upload.content_type.lower()) or ""
        key = f"pets/{pet_id}/{uuid4().hex}{extension}"
        try:
            await storage.put_object(key, upload.data, upload.content_type)
        except Exception:
            await discard_photos(storage, photos)
            raise
        url = await storage.get_public_url(key)
        photos.append(PetPhoto(url=url, public_id=key, is_main=first_is_main and index == 0))
    return photos


async def discard_photos(storage: StorageService, photos: Sequence[PetPhoto]) -> None:
    """Remove stored files for photos whose pet record was never saved."""
    for photo in photos:
        if not photo.public_id:
            continue
        try:
            await storage.delete_object(photo.public_id)
        except Exception:
            logger.warning("Could not remove orphaned upload %s", photo.public_id, exc_info=True)
