"""RSVP write model - returns DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from weddingsite.config.database import async_session_manager
from weddingsite.config.settings import settings
from weddingsite.email_service.base import EmailServiceBase
from weddingsite.exceptions import InvalidTokenError
from weddingsite.guests.dtos import (
    GuestDTO,
    PartyMemberDTO,
    QuestionnaireDTO,
    RegistrationStatus,
    RSVPAnswer,
    RSVPResponseDTO,
    RSVPSubmissionDTO,
)
from weddingsite.guests.repository.orm_models import RSVP, Guest
from weddingsite.models.base import utcnow
from weddingsite.workflow import normalize_questionnaire, rsvp_status_for

logger = logging.getLogger(__name__)

RSVP_SUBMITTED_MESSAGE = "RSVP submitted successfully"


def apply_questionnaire(guest: Guest, questionnaire: QuestionnaireDTO) -> None:
    """Copy every provided questionnaire field onto the guest row."""
    if questionnaire.party_size is not None:
        guest.party_size = questionnaire.party_size
        # The guest's own cap grows with what they actually bring
        guest.max_party_size = max(guest.max_party_size or 0, questionnaire.party_size)
    if questionnaire.party_members is not None:
        guest.party_members = [member.to_dict() for member in questionnaire.party_members]
    if questionnaire.main_person_dietary_preference is not None:
        guest.main_person_dietary_preference = questionnaire.main_person_dietary_preference.value

    for name in (
        "dec24_attendance",
        "dec25_attendance",
        "accommodation_dec23",
        "accommodation_dec24",
        "accommodation_dec25",
    ):
        value = getattr(questionnaire, name)
        if value is not None:
            setattr(guest, name, value)

    if questionnaire.has_attendance:
        # Attendance is one answer: a flag left out of it means "not attending"
        guest.dec24_attendance = bool(questionnaire.dec24_attendance)
        guest.dec25_attendance = bool(questionnaire.dec25_attendance)
    if questionnaire.concerns is not None:
        guest.concerns = questionnaire.concerns


class RSVPWriteModel(ABC):
    @abstractmethod
    async def submit_rsvp(
        self,
        token: str,
        submission: RSVPSubmissionDTO,
    ) -> RSVPResponseDTO:
        """
        Submit RSVP response for the guest holding the invite token.
        Resubmitting overwrites the previous answer.
        """
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    """Write operations for RSVP. Returns DTOs, never ORM models."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        email_service: EmailServiceBase | None = None,
    ):
        self.session_overwrite = session_overwrite
        self.email_service = email_service

    async def _get_guest_by_token(self, session, token: str) -> Guest | None:
        stmt = select(Guest).where(
            Guest.invite_token == token,
            Guest.registration_status == RegistrationStatus.APPROVED,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def _get_rsvp(self, session, guest: Guest) -> RSVP | None:
        result = await session.execute(select(RSVP).where(RSVP.guest_id == guest.uuid))
        return result.scalar_one_or_none()

    async def submit_rsvp(
        self,
        token: str,
        submission: RSVPSubmissionDTO,
    ) -> RSVPResponseDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await self._get_guest_by_token(session, token)
            if guest is None:
                raise InvalidTokenError("Invalid RSVP link")

            if submission.updated_details is not None:
                # Validate before touching the row so a rejected submission changes nothing
                questionnaire = normalize_questionnaire(
                    submission.updated_details,
                    current_members=[PartyMemberDTO.from_dict(m) for m in guest.party_members or []],
                    max_party_size=settings.max_party_size,
                )
                apply_questionnaire(guest, questionnaire)

            guest.rsvp_status = rsvp_status_for(submission.response)

            responded_at = utcnow()
            rsvp = await self._get_rsvp(session, guest)
            if rsvp is None:
                rsvp = RSVP(guest_id=guest.uuid)
                session.add(rsvp)
            rsvp.response = submission.response
            rsvp.party_size = guest.party_size
            rsvp.message = submission.message or ""
            rsvp.responded_at = responded_at
            await session.flush()

            guest_dto = GuestDTO.from_guest(guest)

        logger.info(
            "RSVP submitted: guest=%s response=%s party_size=%s",
            guest_dto.full_name,
            submission.response.value,
            guest_dto.party_size,
        )
        await self._send_confirmation(guest_dto, submission)

        return RSVPResponseDTO(
            message=RSVP_SUBMITTED_MESSAGE,
            response=submission.response,
            rsvp_status=guest_dto.rsvp_status,
            responded_at=responded_at,
        )

    async def _send_confirmation(self, guest: GuestDTO, submission: RSVPSubmissionDTO) -> None:
        if not self.email_service or not guest.email:
            return
        try:
            await self.email_service.send_rsvp_confirmation(
                to_address=guest.email,
                guest_name=guest.full_name,
                attending="Yes" if submission.response == RSVPAnswer.YES else "No",
                party_size=guest.party_size,
                message=submission.message,
            )
        except Exception:
            logger.exception("Failed to send RSVP confirmation to %s", guest.email)
