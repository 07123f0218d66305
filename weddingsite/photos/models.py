"""Photo read/write models - they return DTOs, never ORM models."""

import asyncio
import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from weddingsite.config.database import async_session_manager
from weddingsite.config.settings import settings
from weddingsite.exceptions import InvalidTokenError, NotFoundError, StorageError, WorkflowValidationError
from weddingsite.guests.dtos import RegistrationStatus
from weddingsite.guests.repository.orm_models import Guest
from weddingsite.models.base import utcnow
from weddingsite.photos.archive import build_zip
from weddingsite.photos.dtos import (
    BulkResultDTO,
    PhotoArchiveDTO,
    PhotoDTO,
    PhotoStatus,
    PhotoUploadDTO,
)
from weddingsite.photos.images import make_thumbnail
from weddingsite.photos.orm_models import Photo
from weddingsite.photos.storage import (
    PhotoStorage,
    generate_photo_key,
    safe_file_name,
    thumbnail_key_for,
)
from weddingsite.workflow import Action, SideEffect, initial_photo_status, photo_transition

logger = logging.getLogger(__name__)


def to_photo_dto(photo: Photo, storage: PhotoStorage) -> PhotoDTO:
    return PhotoDTO(
        id=photo.uuid,
        file_name=photo.file_name,
        content_type=photo.content_type,
        file_size=photo.file_size,
        status=PhotoStatus(photo.status),
        uploaded_by=photo.uploaded_by,
        uploaded_at=photo.uploaded_at,
        thumbnail_url=storage.public_url(photo.thumbnail_key),
        full_url=storage.public_url(photo.storage_key),
        width=photo.width,
        height=photo.height,
        guest_token=photo.guest_token,
        moderated_at=photo.moderated_at,
    )


class PhotoReadModel(ABC):
    @abstractmethod
    async def list_photos(self, status: PhotoStatus | None = None) -> list[PhotoDTO]:
        """Photos newest first, optionally only those in one moderation status."""
        raise NotImplementedError


class PhotoWriteModel(ABC):
    @abstractmethod
    async def upload_photo(self, upload: PhotoUploadDTO, auto_approve: bool) -> PhotoDTO:
        """Validate, store and record an upload.

        Raises:
            WorkflowValidationError: wrong content type, too large, or not an image
            InvalidTokenError: the guest token does not belong to an approved guest
        """
        raise NotImplementedError

    @abstractmethod
    async def approve_photo(self, photo_id: UUID) -> PhotoDTO:
        raise NotImplementedError

    @abstractmethod
    async def reject_photo(self, photo_id: UUID) -> PhotoDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_photo(self, photo_id: UUID) -> None:
        raise NotImplementedError

    @abstractmethod
    async def bulk_approve(self, photo_ids: list[UUID]) -> BulkResultDTO:
        """Approve every pending photo among the ids; the rest are skipped."""
        raise NotImplementedError

    @abstractmethod
    async def bulk_delete(self, photo_ids: list[UUID]) -> BulkResultDTO:
        """Delete every existing photo among the ids; unknown ids are skipped."""
        raise NotImplementedError

    @abstractmethod
    async def build_archive(self, photo_ids: list[UUID]) -> PhotoArchiveDTO:
        """Zip the full-size assets of the existing photos among the ids."""
        raise NotImplementedError


class SqlPhotoReadModel(PhotoReadModel):
    def __init__(self, storage: PhotoStorage) -> None:
        self.storage = storage

    async def list_photos(self, status: PhotoStatus | None = None) -> list[PhotoDTO]:
        async with async_session_manager() as session:
            stmt = select(Photo).order_by(Photo.uploaded_at.desc())
            if status is not None:
                stmt = stmt.where(Photo.status == status)
            result = await session.execute(stmt)
            return [to_photo_dto(photo, self.storage) for photo in result.scalars().all()]


class SqlPhotoWriteModel(PhotoWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        storage: PhotoStorage,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.storage = storage
        self.session_overwrite = session_overwrite

    def _validate_upload(self, upload: PhotoUploadDTO) -> None:
        if upload.content_type not in settings.allowed_image_types:
            raise WorkflowValidationError("file", "Invalid file type. Only images are allowed.")
        if not upload.content:
            raise WorkflowValidationError("file", "File is empty.")
        if len(upload.content) > settings.max_photo_size_bytes:
            max_mb = settings.max_photo_size_bytes // (1024 * 1024)
            raise WorkflowValidationError(
                "file", f"File size too large. Maximum {max_mb}MB allowed."
            )

    async def _get_guest(self, session, guest_token: str) -> Guest:
        result = await session.execute(
            select(Guest).where(
                Guest.guest_portal_token == guest_token,
                Guest.registration_status == RegistrationStatus.APPROVED,
            )
        )
        guest = result.scalar_one_or_none()
        if guest is None:
            raise InvalidTokenError("Invalid guest portal link")
        return guest

    async def upload_photo(self, upload: PhotoUploadDTO, auto_approve: bool) -> PhotoDTO:
        self._validate_upload(upload)
        processed = await asyncio.to_thread(
            make_thumbnail, upload.content, settings.thumbnail_max_width
        )
        file_name = safe_file_name(upload.file_name)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await self._get_guest(session, upload.guest_token) if upload.guest_token else None
            uploaded_by = upload.guest_name or (
                f"{guest.first_name} {guest.last_name}" if guest else "Guest"
            )

            storage_key = generate_photo_key(file_name)
            thumbnail_key = thumbnail_key_for(storage_key)
            saved = []
            try:
                await self.storage.save(storage_key, upload.content)
                saved.append(storage_key)
                await self.storage.save(thumbnail_key, processed.thumbnail)
                saved.append(thumbnail_key)

                now = utcnow()
                status = initial_photo_status(auto_approve)
                photo = Photo(
                    file_name=file_name,
                    storage_key=storage_key,
                    thumbnail_key=thumbnail_key,
                    content_type=upload.content_type,
                    file_size=len(upload.content),
                    width=processed.width,
                    height=processed.height,
                    status=status,
                    uploaded_by=uploaded_by,
                    uploaded_at=now,
                    moderated_at=now if status == PhotoStatus.APPROVED else None,
                    guest_id=guest.uuid if guest else None,
                    guest_token=upload.guest_token if guest else None,
                )
                session.add(photo)
                await session.flush()
            except Exception:
                # no row, no files
                await self._delete_assets(saved)
                raise

            logger.info(
                "Photo %s uploaded by %s (%s bytes), status %s",
                photo.uuid,
                uploaded_by,
                photo.file_size,
                status.value,
            )
            return to_photo_dto(photo, self.storage)

    async def approve_photo(self, photo_id: UUID) -> PhotoDTO:
        return await self._moderate(photo_id, Action.APPROVE)

    async def reject_photo(self, photo_id: UUID) -> PhotoDTO:
        return await self._moderate(photo_id, Action.REJECT)

    async def _moderate(self, photo_id: UUID, action: Action) -> PhotoDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            photo = await session.get(Photo, photo_id)
            if photo is None:
                raise NotFoundError(f"Photo {photo_id} not found")
            self._apply(photo, action)
            await session.flush()
            return to_photo_dto(photo, self.storage)

    def _apply(self, photo: Photo, action: Action) -> None:
        transition = photo_transition(photo.status, action)
        photo.status = transition.next_status
        photo.moderated_at = utcnow()
        if SideEffect.PUBLISH_PHOTO in transition.side_effects:
            logger.info("Photo %s published to the gallery", photo.uuid)
        if SideEffect.UNPUBLISH_PHOTO in transition.side_effects:
            logger.info("Photo %s removed from the moderation queue", photo.uuid)

    async def delete_photo(self, photo_id: UUID) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            photo = await session.get(Photo, photo_id)
            if photo is None:
                raise NotFoundError(f"Photo {photo_id} not found")
            keys = [photo.storage_key, photo.thumbnail_key]
            await session.delete(photo)
            await session.flush()

        await self._delete_assets(keys)
        logger.info("Photo %s deleted", photo_id)

    async def _load(self, session, photo_ids: list[UUID]) -> list[Photo]:
        wanted = list(dict.fromkeys(photo_ids))
        result = await session.execute(select(Photo).where(Photo.uuid.in_(wanted)))
        by_id = {photo.uuid: photo for photo in result.scalars().all()}
        # keep the caller's order
        return [by_id[photo_id] for photo_id in wanted if photo_id in by_id]

    async def bulk_approve(self, photo_ids: list[UUID]) -> BulkResultDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            photos = await self._load(session, photo_ids)
            processed = []
            for photo in photos:
                if photo.status != PhotoStatus.PENDING:
                    continue
                self._apply(photo, Action.APPROVE)
                processed.append(photo.uuid)
            await session.flush()

        skipped = [photo_id for photo_id in dict.fromkeys(photo_ids) if photo_id not in processed]
        logger.info("Bulk approved %s photos, skipped %s", len(processed), len(skipped))
        return BulkResultDTO(processed=processed, skipped=skipped)

    async def bulk_delete(self, photo_ids: list[UUID]) -> BulkResultDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            photos = await self._load(session, photo_ids)
            processed = [photo.uuid for photo in photos]
            keys = [key for photo in photos for key in (photo.storage_key, photo.thumbnail_key)]
            for photo in photos:
                await session.delete(photo)
            await session.flush()

        await self._delete_assets(keys)
        skipped = [photo_id for photo_id in dict.fromkeys(photo_ids) if photo_id not in processed]
        logger.info("Bulk deleted %s photos, skipped %s", len(processed), len(skipped))
        return BulkResultDTO(processed=processed, skipped=skipped)

    async def build_archive(self, photo_ids: list[UUID]) -> PhotoArchiveDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            photos = await self._load(session, photo_ids)
            found = [(photo.uuid, photo.file_name, photo.storage_key) for photo in photos]

        entries = []
        archived = set()
        for photo_id, file_name, storage_key in found:
            try:
                content = await self.storage.read(storage_key)
            except StorageError:
                logger.exception("Leaving photo %s out of the archive", photo_id)
                continue
            entries.append((f"{photo_id.hex[:8]}_{safe_file_name(file_name)}", content))
            archived.add(photo_id)

        skipped = [photo_id for photo_id in dict.fromkeys(photo_ids) if photo_id not in archived]
        logger.info("Built archive of %s photos, skipped %s", len(entries), len(skipped))
        return PhotoArchiveDTO(content=build_zip(entries), file_count=len(entries), skipped=skipped)

    async def _delete_assets(self, keys: list[str]) -> None:
        for key in keys:
            try:
                await self.storage.delete(key)
            except StorageError:
                logger.exception("Could not remove photo asset %s", key)
