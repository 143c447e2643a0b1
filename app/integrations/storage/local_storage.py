"""Local filesystem media storage used in development and tests."""

from pathlib import Path
from typing import Optional

from app.core.logging import get_logger

logger = get_logger(__name__)


class LocalMediaStorage:
    """Stores objects under a root directory, keyed like S3 object keys."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info("initialized local media storage", root=str(self.root))

    def _get_full_path(self, key: str) -> Path:
        return self.root / key.lstrip("/")

    def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> None:
        destination = self._get_full_path(key)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(body)
        logger.info("object stored", key=key, size=len(body), content_type=content_type)

    def delete_object(self, key: str) -> None:
        path = self._get_full_path(key)
        if path.exists():
            path.unlink()
            logger.info("object deleted", key=key)
        else:
            logger.warning("object not found for deletion", key=key)
