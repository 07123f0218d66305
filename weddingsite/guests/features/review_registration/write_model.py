"""Approve or reject a pending registration."""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from weddingsite.config.database import async_session_manager
from weddingsite.config.settings import settings
from weddingsite.email_service.base import EmailServiceBase
from weddingsite.exceptions import NotFoundError
from weddingsite.guests.dtos import GuestDTO, RegistrationStatus
from weddingsite.guests.repository.orm_models import Guest
from weddingsite.guests.urls import guest_portal_link, rsvp_link
from weddingsite.models.base import utcnow
from weddingsite.workflow import Action, SideEffect, generate_token, registration_transition

logger = logging.getLogger(__name__)


class ReviewRegistrationWriteModel(ABC):
    @abstractmethod
    async def approve_guest(self, guest_id: UUID) -> GuestDTO:
        """Approve a pending guest, issue both capability tokens and send the RSVP invitation.

        Raises:
            NotFoundError: no guest with this id
            StateConflictError: the guest is not pending
        """
        raise NotImplementedError

    @abstractmethod
    async def reject_guest(self, guest_id: UUID) -> GuestDTO:
        """Reject a pending guest. No tokens are issued.

        Raises:
            NotFoundError: no guest with this id
            StateConflictError: the guest is not pending
        """
        raise NotImplementedError


class SqlReviewRegistrationWriteModel(ReviewRegistrationWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        email_service: EmailServiceBase | None = None,
        frontend_url: str | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.email_service = email_service
        self.frontend_url = frontend_url or settings.frontend_url

    async def approve_guest(self, guest_id: UUID) -> GuestDTO:
        return await self._review(guest_id, Action.APPROVE)

    async def reject_guest(self, guest_id: UUID) -> GuestDTO:
        return await self._review(guest_id, Action.REJECT)

    async def _review(self, guest_id: UUID, action: Action) -> GuestDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                raise NotFoundError(f"Guest {guest_id} not found")

            previous = guest.registration_status
            transition = registration_transition(previous, action)
            guest.registration_status = transition.next_status
            if SideEffect.ISSUE_TOKENS in transition.side_effects:
                guest.invite_token = generate_token()
                guest.guest_portal_token = generate_token()
                guest.approved_at = utcnow()
            await session.flush()
            guest_dto = GuestDTO.from_guest(guest)

        logger.info(
            "Registration of %s (%s) moved %s -> %s",
            guest_dto.full_name,
            guest_dto.id,
            RegistrationStatus(previous).value,
            guest_dto.registration_status.value,
        )
        if SideEffect.SEND_RSVP_INVITATION in transition.side_effects:
            await self._send_invitation(guest_dto)
        return guest_dto

    async def _send_invitation(self, guest: GuestDTO) -> None:
        """The approval stands even when the notification cannot be delivered."""
        if not self.email_service or not guest.email:
            return
        try:
            await self.email_service.send_rsvp_invitation(
                to_address=guest.email,
                guest_name=guest.first_name or guest.full_name,
                rsvp_url=rsvp_link(self.frontend_url, guest.invite_token),
                portal_url=guest_portal_link(self.frontend_url, guest.guest_portal_token),
            )
        except Exception:
            logger.exception("Failed to send RSVP invitation to %s", guest.email)
