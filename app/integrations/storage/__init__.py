"""Media storage integration - local filesystem or AWS S3."""

from .client import get_media_storage, MediaStorage

__all__ = ["get_media_storage", "MediaStorage"]
