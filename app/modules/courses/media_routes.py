# app/modules/courses/media_routes.py
"""Course media uploads: thumbnails and overview videos."""

import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.core.config import settings
from app.core.exceptions import AppError
from app.core.logging import get_logger
from app.db.deps import get_current_active_user
from app.integrations.storage import MediaStorage, get_media_storage
from app.schemas.media import MediaKind, MediaUploadRead

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = {
    MediaKind.thumbnail: {"jpg", "jpeg", "png", "gif", "webp"},
    MediaKind.overview_video: {"mp4", "mov", "webm", "mkv"},
}

router = APIRouter(
    prefix="/courses",
    tags=["upload"],
    dependencies=[Depends(get_current_active_user)],
)


def build_media_key(kind: MediaKind, extension: str) -> str:
    return f"{settings.MEDIA_FOLDER}/{kind.value}/{uuid.uuid4().hex}.{extension}"


@router.post(
    "/media",
    response_model=MediaUploadRead,
    status_code=status.HTTP_201_CREATED,
)
async def upload_media(
    kind: MediaKind = Form(...),
    file: UploadFile = File(...),
    storage: MediaStorage = Depends(get_media_storage),
):
    """
    Store a thumbnail or overview video and return its media reference pair.

    The returned ``url`` / ``publicId`` go into the course payload as
    ``thumbnail`` / ``thumbnailPublicId`` or ``overviewVideo`` /
    ``overviewVideoPublicId``.
    """
    extension = Path(file.filename or "").suffix.lower().lstrip(".")
    if extension not in ALLOWED_EXTENSIONS[kind]:
        allowed = ", ".join(sorted(ALLOWED_EXTENSIONS[kind]))
        raise AppError(f"Unsupported {kind.value} format. Allowed: {allowed}")

    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    body = await file.read(max_bytes + 1)
    if not body:
        raise AppError("Uploaded file is empty")
    if len(body) > max_bytes:
        raise AppError(f"File exceeds the {settings.MAX_UPLOAD_SIZE_MB} MB upload limit")

    key = build_media_key(kind, extension)
    storage.put_object(key, body, file.content_type)

    logger.info("media uploaded", kind=kind.value, key=key, size=len(body))
    return MediaUploadRead(url=storage.public_url(key), public_id=key)
