"""Message read/write models - they return DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from weddingsite.config.database import async_session_manager
from weddingsite.exceptions import InvalidTokenError, NotFoundError
from weddingsite.guests.dtos import RegistrationStatus
from weddingsite.guests.repository.orm_models import Guest
from weddingsite.messages.dtos import MessageDTO, MessageListDTO, MessageStatus
from weddingsite.messages.orm_models import Message

logger = logging.getLogger(__name__)


def _to_dto(message: Message) -> MessageDTO:
    return MessageDTO(
        id=message.uuid,
        guest_token=message.guest_token,
        guest_name=message.guest_name,
        content=message.content,
        status=MessageStatus(message.status),
        created_at=message.created_at,
    )


class MessageReadModel(ABC):
    @abstractmethod
    async def list_messages(self) -> MessageListDTO:
        """Every message, newest first, with the number still unread."""
        raise NotImplementedError


class MessageWriteModel(ABC):
    @abstractmethod
    async def send_message(self, guest_token: str, guest_name: str, content: str) -> MessageDTO:
        """Store a guest's message as unread.

        Raises:
            InvalidTokenError: the portal token does not belong to an approved guest
        """
        raise NotImplementedError

    @abstractmethod
    async def mark_as_read(self, message_id: UUID) -> MessageDTO:
        """Raises NotFoundError for an unknown id."""
        raise NotImplementedError


class SqlMessageReadModel(MessageReadModel):
    async def list_messages(self) -> MessageListDTO:
        async with async_session_manager() as session:
            result = await session.execute(select(Message).order_by(Message.created_at.desc()))
            messages = [_to_dto(message) for message in result.scalars().all()]
            unread_count = await session.scalar(
                select(func.count()).select_from(Message).where(
                    Message.status == MessageStatus.UNREAD
                )
            )
            return MessageListDTO(messages=messages, unread_count=unread_count or 0)


class SqlMessageWriteModel(MessageWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def send_message(self, guest_token: str, guest_name: str, content: str) -> MessageDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(
                select(Guest).where(
                    Guest.guest_portal_token == guest_token,
                    Guest.registration_status == RegistrationStatus.APPROVED,
                )
            )
            guest = result.scalar_one_or_none()
            if guest is None:
                raise InvalidTokenError("Invalid guest portal link")

            message = Message(
                guest_id=guest.uuid,
                guest_token=guest_token,
                guest_name=guest_name or f"{guest.first_name} {guest.last_name}",
                content=content,
                status=MessageStatus.UNREAD,
            )
            session.add(message)
            await session.flush()
            logger.info("Message received from %s", message.guest_name)
            return _to_dto(message)

    async def mark_as_read(self, message_id: UUID) -> MessageDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            message = await session.get(Message, message_id)
            if message is None:
                raise NotFoundError(f"Message {message_id} not found")
            message.status = MessageStatus.READ
            await session.flush()
            return _to_dto(message)
