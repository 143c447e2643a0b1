"""Media storage client - switches between local filesystem and AWS S3."""

from typing import Optional

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class MediaStorage:
    """
    Stores uploaded course media and builds their public URLs.
    Selects the backend from the USE_LOCAL_STORAGE setting.
    """

    def __init__(self):
        if settings.USE_LOCAL_STORAGE:
            from .local_storage import LocalMediaStorage
            self._client = LocalMediaStorage(settings.MEDIA_STORAGE_PATH)
            self._mode = "local"
            logger.info("MediaStorage initialized in LOCAL mode")
        else:
            try:
                import boto3
            except ImportError:
                raise ImportError(
                    "boto3 is required for S3 media storage. "
                    "Install it with: pip install boto3"
                )
            self._client = boto3.client(
                "s3",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=settings.AWS_REGION,
            )
            self._bucket = settings.AWS_S3_BUCKET
            self._mode = "s3"
            logger.info("MediaStorage initialized in S3 mode", bucket=self._bucket)

    @property
    def mode(self) -> str:
        return self._mode

    def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> None:
        """Store bytes under ``key``."""
        if self._mode == "local":
            self._client.put_object(key, body, content_type)
            return
        params = {"Bucket": self._bucket, "Key": key, "Body": body}
        if content_type:
            params["ContentType"] = content_type
        self._client.put_object(**params)

    def delete_object(self, key: str) -> None:
        """Remove the object stored under ``key``."""
        if self._mode == "local":
            self._client.delete_object(key)
        else:
            self._client.delete_object(Bucket=self._bucket, Key=key)

    def public_url(self, key: str) -> str:
        """Public URL of a stored object."""
        if self._mode == "local":
            return f"{settings.MEDIA_BASE_URL.rstrip('/')}/{key}"
        return f"https://{self._bucket}.s3.{settings.AWS_REGION}.amazonaws.com/{key}"


# Singleton instance
_media_storage = None


def get_media_storage() -> MediaStorage:
    """Get singleton media storage instance."""
    global _media_storage
    if _media_storage is None:
        _media_storage = MediaStorage()
    return _media_storage
