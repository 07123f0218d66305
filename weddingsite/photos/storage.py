"""Photo asset store.

Keys look like `photos/YYYY/MM/DD/<32 hex chars><ext>`; a thumbnail lives next
to its original as `<base>_thumb.jpg`.
"""

import asyncio
import logging
import os
import secrets
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path, PurePosixPath

from weddingsite.config.settings import settings
from weddingsite.exceptions import StorageError
from weddingsite.models.base import utcnow

logger = logging.getLogger(__name__)


def generate_photo_key(file_name: str, now: datetime | None = None) -> str:
    now = now or utcnow()
    ext = os.path.splitext(file_name)[1].lower()
    return f"photos/{now:%Y/%m/%d}/{secrets.token_hex(16)}{ext}"


def safe_file_name(file_name: str) -> str:
    """Last path component of a client-supplied name, never a path."""
    name = PurePosixPath(file_name.replace("\\", "/")).name
    return name if name not in ("", ".", "..") else "photo"


def thumbnail_key_for(key: str) -> str:
    base, _ = os.path.splitext(key)
    return f"{base}_thumb.jpg"


class PhotoStorage(ABC):
    @abstractmethod
    async def save(self, key: str, content: bytes) -> None:
        raise NotImplementedError

    @abstractmethod
    async def read(self, key: str) -> bytes:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove an asset; a missing asset is not an error."""
        raise NotImplementedError

    @abstractmethod
    def public_url(self, key: str) -> str:
        raise NotImplementedError


class LocalPhotoStorage(PhotoStorage):
    """Stores assets on disk below `root`, served by the /media static mount."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _path(self, key: str) -> Path:
        relative = PurePosixPath(key)
        if relative.is_absolute() or ".." in relative.parts:
            raise StorageError(f"Invalid storage key: {key}")
        return self.root.joinpath(*relative.parts)

    async def save(self, key: str, content: bytes) -> None:
        path = self._path(key)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            logger.error("Failed to store %s: %s", key, e)
            raise StorageError(f"Failed to store {key}") from e

    async def read(self, key: str) -> bytes:
        path = self._path(key)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            logger.error("Failed to read %s: %s", key, e)
            raise StorageError(f"Failed to read {key}") from e

    async def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            logger.error("Failed to delete %s: %s", key, e)
            raise StorageError(f"Failed to delete {key}") from e

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/{key}"


def get_photo_storage() -> PhotoStorage:
    """Dependency to get the photo storage instance."""
    return LocalPhotoStorage(root=settings.media_root, base_url=settings.media_url)
