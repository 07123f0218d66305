"""Delete guests together with everything that hangs off them.

A guest owns its RSVP row, the messages it sent and the photos uploaded
through its portal link; all of them go, and so do the photo assets.
"""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from weddingsite.config.database import async_session_manager
from weddingsite.exceptions import NotFoundError, StorageError
from weddingsite.guests.dtos import DeleteGuestsResultDTO
from weddingsite.guests.repository.orm_models import RSVP, Guest
from weddingsite.messages.orm_models import Message
from weddingsite.photos.orm_models import Photo
from weddingsite.photos.storage import PhotoStorage

logger = logging.getLogger(__name__)


class DeleteGuestsWriteModel(ABC):
    @abstractmethod
    async def delete_guests(self, guest_ids: list[UUID]) -> DeleteGuestsResultDTO:
        """Delete the given guests. All ids must exist or nothing is deleted.

        Raises:
            NotFoundError: at least one id does not resolve
        """
        raise NotImplementedError

    @abstractmethod
    async def delete_all_guests(self) -> DeleteGuestsResultDTO:
        raise NotImplementedError


class SqlDeleteGuestsWriteModel(DeleteGuestsWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        storage: PhotoStorage | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.storage = storage

    async def delete_guests(self, guest_ids: list[UUID]) -> DeleteGuestsResultDTO:
        wanted = list(dict.fromkeys(guest_ids))
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(Guest).where(Guest.uuid.in_(wanted)))
            guests = result.scalars().all()

            missing = set(wanted) - {guest.uuid for guest in guests}
            if missing:
                raise NotFoundError(
                    "Guests not found: " + ", ".join(sorted(str(guest_id) for guest_id in missing))
                )

            deleted, asset_keys = await self._cascade(session, guests)

        await self._delete_assets(asset_keys)
        return deleted

    async def delete_all_guests(self) -> DeleteGuestsResultDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(Guest))
            deleted, asset_keys = await self._cascade(session, result.scalars().all())

        await self._delete_assets(asset_keys)
        return deleted

    async def _cascade(
        self, session: AsyncSession, guests: list[Guest]
    ) -> tuple[DeleteGuestsResultDTO, list[str]]:
        guest_ids = [guest.uuid for guest in guests]
        portal_tokens = [guest.guest_portal_token for guest in guests if guest.guest_portal_token]

        photo_filter = or_(Photo.guest_id.in_(guest_ids), Photo.guest_token.in_(portal_tokens))
        photos = (await session.execute(select(Photo).where(photo_filter))).scalars().all()
        asset_keys = [
            key for photo in photos for key in (photo.storage_key, photo.thumbnail_key) if key
        ]

        rsvps = await session.execute(delete(RSVP).where(RSVP.guest_id.in_(guest_ids)))
        messages = await session.execute(
            delete(Message).where(
                or_(Message.guest_id.in_(guest_ids), Message.guest_token.in_(portal_tokens))
            )
        )
        photos_deleted = await session.execute(delete(Photo).where(photo_filter))
        guests_deleted = await session.execute(delete(Guest).where(Guest.uuid.in_(guest_ids)))

        deleted = DeleteGuestsResultDTO(
            deleted_guests=guests_deleted.rowcount,
            deleted_rsvps=rsvps.rowcount,
            deleted_messages=messages.rowcount,
            deleted_photos=photos_deleted.rowcount,
        )
        logger.info(
            "Deleted %s guests, %s RSVPs, %s messages and %s photos",
            deleted.deleted_guests,
            deleted.deleted_rsvps,
            deleted.deleted_messages,
            deleted.deleted_photos,
        )
        return deleted, asset_keys

    async def _delete_assets(self, keys: list[str]) -> None:
        """Runs after the rows are gone; a leftover file is only logged."""
        if self.storage is None:
            return
        for key in keys:
            try:
                await self.storage.delete(key)
            except StorageError:
                logger.exception("Could not remove photo asset %s", key)
