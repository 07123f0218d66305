"""Write model for public guest registration."""

import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy.ext.asyncio import AsyncSession

from weddingsite.config.database import async_session_manager
from weddingsite.config.settings import settings
from weddingsite.guests.dtos import GuestDTO, GuestRegistrationDTO, RegistrationStatus, RSVPStatus
from weddingsite.guests.repository.orm_models import Guest
from weddingsite.guests.repository.write_models import apply_questionnaire
from weddingsite.workflow import normalize_questionnaire

logger = logging.getLogger(__name__)

DEFAULT_MAX_PARTY_SIZE = 2


class RegisterGuestWriteModel(ABC):
    @abstractmethod
    async def register_guest(self, registration: GuestRegistrationDTO) -> GuestDTO:
        """Create a pending guest. No tokens are issued until approval.

        Raises:
            WorkflowValidationError: the questionnaire breaks a party/attendance rule
        """
        raise NotImplementedError


class SqlRegisterGuestWriteModel(RegisterGuestWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def register_guest(self, registration: GuestRegistrationDTO) -> GuestDTO:
        questionnaire = normalize_questionnaire(
            registration.questionnaire,
            current_members=[],
            max_party_size=settings.max_party_size,
        )

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = Guest(
                first_name=registration.first_name,
                last_name=registration.last_name,
                email=registration.email,
                phone=registration.phone,
                registration_status=RegistrationStatus.PENDING,
                rsvp_status=RSVPStatus.PENDING,
                party_size=1,
                max_party_size=DEFAULT_MAX_PARTY_SIZE,
                party_members=[],
            )
            apply_questionnaire(guest, questionnaire)
            session.add(guest)
            await session.flush()

            logger.info(
                "Registration received from %s %s <%s> (party of %s)",
                guest.first_name,
                guest.last_name,
                guest.email,
                guest.party_size,
            )
            return GuestDTO.from_guest(guest)
