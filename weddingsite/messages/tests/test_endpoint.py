from dataclasses import replace
from uuid import UUID, uuid4

from weddingsite.exceptions import InvalidTokenError, NotFoundError
from weddingsite.messages.dtos import MessageDTO, MessageListDTO, MessageStatus
from weddingsite.messages.models import MessageReadModel, MessageWriteModel
from weddingsite.messages.router import get_message_read_model, get_message_write_model
from weddingsite.messages.urls import MARK_MESSAGE_READ_URL, MESSAGES_URL
from weddingsite.models.base import utcnow


class InMemoryMessageModel(MessageReadModel, MessageWriteModel):
    """In-memory read and write model for testing."""

    def __init__(self, valid_tokens: set[str] | None = None):
        self.valid_tokens = valid_tokens or {"portal-token-123"}
        self.messages: dict[UUID, MessageDTO] = {}

    async def list_messages(self) -> MessageListDTO:
        messages = sorted(self.messages.values(), key=lambda m: m.created_at, reverse=True)
        unread = sum(1 for m in messages if m.status == MessageStatus.UNREAD)
        return MessageListDTO(messages=messages, unread_count=unread)

    async def send_message(self, guest_token: str, guest_name: str, content: str) -> MessageDTO:
        if guest_token not in self.valid_tokens:
            raise InvalidTokenError("Invalid guest portal link")
        message = MessageDTO(
            id=uuid4(),
            guest_token=guest_token,
            guest_name=guest_name or "Ann Lee",
            content=content,
            status=MessageStatus.UNREAD,
            created_at=utcnow(),
        )
        self.messages[message.id] = message
        return message

    async def mark_as_read(self, message_id: UUID) -> MessageDTO:
        if message_id not in self.messages:
            raise NotFoundError(f"Message {message_id} not found")
        self.messages[message_id] = replace(self.messages[message_id], status=MessageStatus.READ)
        return self.messages[message_id]


async def test_send_message(client_factory):
    model = InMemoryMessageModel()

    async with client_factory({get_message_write_model: lambda: model}, as_admin=False) as client:
        response = await client.post(
            MESSAGES_URL,
            json={"guestToken": "portal-token-123", "guestName": "Ann", "message": "  Hello!  "},
        )

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Message sent successfully"
    stored = model.messages[UUID(data["id"])]
    assert stored.content == "Hello!"
    assert stored.status == MessageStatus.UNREAD


async def test_send_blank_message_is_422(client_factory):
    model = InMemoryMessageModel()

    async with client_factory({get_message_write_model: lambda: model}, as_admin=False) as client:
        response = await client.post(
            MESSAGES_URL, json={"guestToken": "portal-token-123", "message": "   "}
        )

    assert response.status_code == 422
    assert model.messages == {}


async def test_send_message_unknown_token_is_404(client_factory):
    model = InMemoryMessageModel()

    async with client_factory({get_message_write_model: lambda: model}, as_admin=False) as client:
        response = await client.post(MESSAGES_URL, json={"guestToken": "nope", "message": "Hi"})

    assert response.status_code == 404


async def test_list_messages_counts_unread(client_factory):
    model = InMemoryMessageModel()
    first = await model.send_message("portal-token-123", "Ann", "one")
    await model.send_message("portal-token-123", "Ann", "two")
    await model.mark_as_read(first.id)

    async with client_factory({get_message_read_model: lambda: model}) as client:
        response = await client.get(MESSAGES_URL)

    assert response.status_code == 200
    data = response.json()
    assert data["unreadCount"] == 1
    assert len(data["messages"]) == 2
    assert {m["status"] for m in data["messages"]} == {"read", "unread"}


async def test_list_messages_requires_admin(client_factory):
    model = InMemoryMessageModel()

    async with client_factory({get_message_read_model: lambda: model}, as_admin=False) as client:
        response = await client.get(MESSAGES_URL)

    assert response.status_code == 401


async def test_mark_message_read(client_factory):
    model = InMemoryMessageModel()
    message = await model.send_message("portal-token-123", "Ann", "Hello")

    async with client_factory({get_message_write_model: lambda: model}) as client:
        response = await client.patch(MARK_MESSAGE_READ_URL.format(message_id=message.id))

    assert response.status_code == 200
    assert response.json()["status"] == "read"
    assert model.messages[message.id].status == MessageStatus.READ


async def test_mark_unknown_message_read_is_404(client_factory):
    model = InMemoryMessageModel()

    async with client_factory({get_message_write_model: lambda: model}) as client:
        response = await client.patch(MARK_MESSAGE_READ_URL.format(message_id=uuid4()))

    assert response.status_code == 404
