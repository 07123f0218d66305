from uuid import uuid4

import pytest

from weddingsite.config.database import async_session_maker
from weddingsite.exceptions import InvalidTokenError, NotFoundError
from weddingsite.guests.dtos import RegistrationStatus
from weddingsite.guests.tests.factories import add_guest
from weddingsite.messages.dtos import MessageStatus
from weddingsite.messages.models import SqlMessageReadModel, SqlMessageWriteModel
from weddingsite.messages.tests.factories import add_message


async def test_send_message_links_guest():
    async with async_session_maker() as db_session:
        guest = await add_guest(db_session, registration_status=RegistrationStatus.APPROVED)
        write_model = SqlMessageWriteModel(session_overwrite=db_session)

        message = await write_model.send_message(guest.guest_portal_token, "", "Congrats!")

        assert message.guest_name == "Ann Lee"
        assert message.status == MessageStatus.UNREAD
        assert message.guest_token == guest.guest_portal_token

        await db_session.rollback()


async def test_send_message_with_invite_token_or_pending_guest_fails():
    async with async_session_maker() as db_session:
        approved = await add_guest(db_session, registration_status=RegistrationStatus.APPROVED)
        await add_guest(
            db_session,
            email="p@example.com",
            guest_portal_token="pending-portal",
        )
        write_model = SqlMessageWriteModel(session_overwrite=db_session)

        with pytest.raises(InvalidTokenError):
            await write_model.send_message(approved.invite_token, "Ann", "Hi")
        with pytest.raises(InvalidTokenError):
            await write_model.send_message("pending-portal", "Pat", "Hi")

        await db_session.rollback()


async def test_mark_as_read():
    async with async_session_maker() as db_session:
        guest = await add_guest(db_session, registration_status=RegistrationStatus.APPROVED)
        stored = await add_message(db_session, guest)
        write_model = SqlMessageWriteModel(session_overwrite=db_session)

        message = await write_model.mark_as_read(stored.uuid)

        assert message.status == MessageStatus.READ
        with pytest.raises(NotFoundError):
            await write_model.mark_as_read(uuid4())

        await db_session.rollback()


async def test_list_messages_newest_first_with_unread_count(clean_database):
    async with async_session_maker() as db_session:
        guest = await add_guest(db_session, registration_status=RegistrationStatus.APPROVED)
        await add_message(db_session, guest, content="first", status=MessageStatus.READ)
        await add_message(db_session, guest, content="second")
        await db_session.commit()

    result = await SqlMessageReadModel().list_messages()

    assert [m.content for m in result.messages] == ["second", "first"]
    assert result.unread_count == 1
