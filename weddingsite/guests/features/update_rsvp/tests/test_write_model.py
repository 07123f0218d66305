import pytest
from sqlalchemy import select

from weddingsite.config.database import async_session_maker
from weddingsite.email_service.tests.inmemory_email_service import InMemoryEmailService
from weddingsite.exceptions import InvalidTokenError, WorkflowValidationError
from weddingsite.guests.dtos import (
    DietaryPreference,
    PartyMemberDTO,
    QuestionnaireDTO,
    RegistrationStatus,
    RSVPAnswer,
    RSVPStatus,
    RSVPSubmissionDTO,
)
from weddingsite.guests.repository.orm_models import RSVP
from weddingsite.guests.repository.write_models import SqlRSVPWriteModel
from weddingsite.guests.tests.factories import add_guest

BEN = PartyMemberDTO("Ben", "Lee", DietaryPreference.VEG)
CAT = PartyMemberDTO("Cat", "Lee", DietaryPreference.NON_VEG)


async def _rsvps(session, guest) -> list[RSVP]:
    result = await session.execute(select(RSVP).where(RSVP.guest_id == guest.uuid))
    return list(result.scalars().all())


async def test_submit_rsvp_stores_answer_and_sends_confirmation():
    email_service = InMemoryEmailService()
    async with async_session_maker() as db_session:
        guest = await add_guest(db_session, registration_status=RegistrationStatus.APPROVED)
        write_model = SqlRSVPWriteModel(session_overwrite=db_session, email_service=email_service)

        result = await write_model.submit_rsvp(
            guest.invite_token,
            RSVPSubmissionDTO(response=RSVPAnswer.YES, message="See you there"),
        )

        assert result.rsvp_status == RSVPStatus.YES
        assert guest.rsvp_status == RSVPStatus.YES
        rsvps = await _rsvps(db_session, guest)
        assert len(rsvps) == 1
        assert rsvps[0].message == "See you there"
        assert rsvps[0].responded_at is not None

        assert email_service.sent_emails[0]["type"] == "confirmation"
        assert email_service.sent_emails[0]["attending"] == "Yes"
        assert email_service.sent_emails[0]["party_size"] == 1

        await db_session.rollback()


async def test_resubmitting_overwrites_single_rsvp():
    async with async_session_maker() as db_session:
        guest = await add_guest(db_session, registration_status=RegistrationStatus.APPROVED)
        write_model = SqlRSVPWriteModel(session_overwrite=db_session)

        await write_model.submit_rsvp(guest.invite_token, RSVPSubmissionDTO(RSVPAnswer.YES))
        result = await write_model.submit_rsvp(
            guest.invite_token, RSVPSubmissionDTO(RSVPAnswer.NO, message="Sorry")
        )

        assert result.rsvp_status == RSVPStatus.NO
        rsvps = await _rsvps(db_session, guest)
        assert len(rsvps) == 1
        assert rsvps[0].response == RSVPAnswer.NO
        assert rsvps[0].message == "Sorry"

        await db_session.rollback()


async def test_updated_details_shrink_party_and_apply_fields():
    async with async_session_maker() as db_session:
        guest = await add_guest(
            db_session,
            registration_status=RegistrationStatus.APPROVED,
            party_size=3,
            max_party_size=3,
            party_members=[BEN.to_dict(), CAT.to_dict()],
        )
        write_model = SqlRSVPWriteModel(session_overwrite=db_session)

        await write_model.submit_rsvp(
            guest.invite_token,
            RSVPSubmissionDTO(
                RSVPAnswer.YES,
                updated_details=QuestionnaireDTO(party_size=2, dec25_attendance=True),
            ),
        )

        assert guest.party_size == 2
        assert guest.party_members == [BEN.to_dict()]
        assert guest.dec25_attendance is True
        assert guest.dec24_attendance is False
        rsvps = await _rsvps(db_session, guest)
        assert rsvps[0].party_size == 2

        await db_session.rollback()


async def test_invalid_details_change_nothing():
    async with async_session_maker() as db_session:
        guest = await add_guest(
            db_session,
            registration_status=RegistrationStatus.APPROVED,
            dec24_attendance=True,
        )
        write_model = SqlRSVPWriteModel(session_overwrite=db_session)

        with pytest.raises(WorkflowValidationError):
            await write_model.submit_rsvp(
                guest.invite_token,
                RSVPSubmissionDTO(
                    RSVPAnswer.YES,
                    updated_details=QuestionnaireDTO(
                        party_size=2, dec24_attendance=False, dec25_attendance=False
                    ),
                ),
            )

        assert guest.party_size == 1
        assert guest.dec24_attendance is True
        assert guest.rsvp_status == RSVPStatus.PENDING
        assert await _rsvps(db_session, guest) == []

        await db_session.rollback()


async def test_confirmation_failure_does_not_fail_rsvp():
    async with async_session_maker() as db_session:
        guest = await add_guest(db_session, registration_status=RegistrationStatus.APPROVED)
        write_model = SqlRSVPWriteModel(
            session_overwrite=db_session, email_service=InMemoryEmailService(fail=True)
        )

        result = await write_model.submit_rsvp(guest.invite_token, RSVPSubmissionDTO(RSVPAnswer.NO))

        assert result.rsvp_status == RSVPStatus.NO
        assert len(await _rsvps(db_session, guest)) == 1

        await db_session.rollback()


@pytest.mark.parametrize(
    "registration_status", [RegistrationStatus.PENDING, RegistrationStatus.REJECTED]
)
async def test_unapproved_or_unknown_token_is_rejected(registration_status):
    async with async_session_maker() as db_session:
        guest = await add_guest(
            db_session, registration_status=registration_status, invite_token="stale-token"
        )
        write_model = SqlRSVPWriteModel(session_overwrite=db_session)

        with pytest.raises(InvalidTokenError):
            await write_model.submit_rsvp("stale-token", RSVPSubmissionDTO(RSVPAnswer.YES))
        with pytest.raises(InvalidTokenError):
            await write_model.submit_rsvp("unknown", RSVPSubmissionDTO(RSVPAnswer.YES))

        assert guest.rsvp_status == RSVPStatus.PENDING

        await db_session.rollback()
