from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field, field_validator

from weddingsite.auth.dependencies import require_admin
from weddingsite.exceptions import InvalidTokenError, NotFoundError
from weddingsite.messages.dtos import MessageDTO, MessageStatus
from weddingsite.messages.models import (
    MessageReadModel,
    MessageWriteModel,
    SqlMessageReadModel,
    SqlMessageWriteModel,
)
from weddingsite.messages.urls import MARK_MESSAGE_READ_URL, MESSAGES_URL
from weddingsite.schemas import CamelModel

router = APIRouter()


class SendMessageRequest(CamelModel):
    guest_token: str = Field(min_length=1)
    guest_name: str = ""
    message: str

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be empty")
        return value.strip()


class MessageResponse(CamelModel):
    id: UUID
    guest_token: str
    guest_name: str
    content: str
    status: MessageStatus
    created_at: datetime

    @classmethod
    def from_dto(cls, message: MessageDTO) -> "MessageResponse":
        return cls(
            id=message.id,
            guest_token=message.guest_token,
            guest_name=message.guest_name,
            content=message.content,
            status=message.status,
            created_at=message.created_at,
        )


class SendMessageResponse(CamelModel):
    message: str
    id: UUID


class MessageListResponse(CamelModel):
    messages: list[MessageResponse]
    unread_count: int


def get_message_read_model() -> MessageReadModel:
    """Dependency to get message read model instance."""
    return SqlMessageReadModel()


def get_message_write_model() -> MessageWriteModel:
    """Dependency to get message write model instance."""
    return SqlMessageWriteModel()


@router.post(MESSAGES_URL, response_model=SendMessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    request: SendMessageRequest,
    write_model: MessageWriteModel = Depends(get_message_write_model),
) -> SendMessageResponse:
    """A guest writes to the couple from their portal."""
    try:
        message = await write_model.send_message(
            guest_token=request.guest_token,
            guest_name=request.guest_name.strip(),
            content=request.message,
        )
    except InvalidTokenError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return SendMessageResponse(message="Message sent successfully", id=message.id)


@router.get(
    MESSAGES_URL,
    response_model=MessageListResponse,
    dependencies=[Depends(require_admin)],
)
async def list_messages(
    read_model: MessageReadModel = Depends(get_message_read_model),
) -> MessageListResponse:
    result = await read_model.list_messages()
    return MessageListResponse(
        messages=[MessageResponse.from_dto(message) for message in result.messages],
        unread_count=result.unread_count,
    )


@router.patch(
    MARK_MESSAGE_READ_URL,
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def mark_message_read(
    message_id: UUID,
    write_model: MessageWriteModel = Depends(get_message_write_model),
) -> MessageResponse:
    try:
        message = await write_model.mark_as_read(message_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return MessageResponse.from_dto(message)
