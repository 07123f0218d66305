import abc

from sqlalchemy import select

from weddingsite.config.database import async_session_manager
from weddingsite.guests.dtos import GuestDTO, RegistrationStatus
from weddingsite.guests.repository.orm_models import Guest


class GuestReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_guests(
        self, registration_status: RegistrationStatus | None = None
    ) -> list[GuestDTO]:
        """All guests, newest first, optionally filtered by registration status."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_by_invite_token(self, token: str) -> GuestDTO | None:
        """Resolve an RSVP link. Only approved guests resolve."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_by_portal_token(self, token: str) -> GuestDTO | None:
        """Resolve a guest portal link. Only approved guests resolve."""
        raise NotImplementedError


class SqlGuestReadModel(GuestReadModel):
    """SQL implementation of guest read model."""

    async def list_guests(
        self, registration_status: RegistrationStatus | None = None
    ) -> list[GuestDTO]:
        async with async_session_manager() as session:
            stmt = select(Guest).order_by(Guest.created_at.desc())
            if registration_status is not None:
                stmt = stmt.where(Guest.registration_status == registration_status)
            result = await session.execute(stmt)
            return [GuestDTO.from_guest(guest) for guest in result.scalars().all()]

    async def get_by_invite_token(self, token: str) -> GuestDTO | None:
        return await self._get_approved_guest(Guest.invite_token == token)

    async def get_by_portal_token(self, token: str) -> GuestDTO | None:
        return await self._get_approved_guest(Guest.guest_portal_token == token)

    async def _get_approved_guest(self, criterion) -> GuestDTO | None:
        async with async_session_manager() as session:
            stmt = select(Guest).where(
                criterion,
                Guest.registration_status == RegistrationStatus.APPROVED,
            )
            result = await session.execute(stmt)
            guest = result.scalar_one_or_none()
            return GuestDTO.from_guest(guest) if guest else None
